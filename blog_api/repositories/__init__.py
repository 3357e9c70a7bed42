# Repositories package.
#
# One class per aggregate, constructed with the request's AsyncSession:
#
#   UserRepository          users, lookup by email
#   TagRepository           tags, lookup by name and by id set
#   ArticleRepository       articles, search, articles of a tag
#   ArticleTagRepository    article <-> tag links (sync, attach, detach)
#   CommentRepository       comments, replies, threads of an article
#
# Repositories flush but never commit and never build Results; they return
# ORM instances (or None) and let persistence errors propagate to the
# service layer.
from blog_api.repositories.article_repository import ArticleRepository
from blog_api.repositories.article_tag_repository import ArticleTagRepository
from blog_api.repositories.comment_repository import CommentRepository
from blog_api.repositories.tag_repository import TagRepository
from blog_api.repositories.user_repository import UserRepository

__all__ = [
    "ArticleRepository",
    "ArticleTagRepository",
    "CommentRepository",
    "TagRepository",
    "UserRepository",
]
