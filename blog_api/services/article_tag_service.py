"""
Article tag service: the article <-> tag relation.

Design notes
------------
- ``sync_article_tags`` replaces the whole tag set of an article.  Every id
  is checked before anything is written; the delete and the insert then run
  in the request's single transaction (``get_db`` commits once), so no
  reader ever sees the article with zero tags.  On any failure the session
  is rolled back.
- Tags of many articles are loaded with one query
  (``ArticleTagRepository.find_tags_for_articles``) to avoid N+1 on lists.
"""
import logging
import uuid
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import Article, Tag, User
from blog_api.repositories import ArticleRepository, ArticleTagRepository, TagRepository
from blog_api.result import Result, conflict, internal, not_found, ok
from blog_api.schemas import (
    ARTICLE_MAX_TAGS,
    ARTICLE_MIN_TAGS,
    ArticleResponse,
    TagResponse,
    UserSummary,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def article_response(article: Article, tags: Sequence[Tag], author: User | None = None) -> ArticleResponse:
    response = ArticleResponse.model_validate(article)
    response.tags = [TagResponse.model_validate(t) for t in tags]
    if author is not None:
        response.author = UserSummary.model_validate(author)
    return response


async def article_responses(db: AsyncSession, articles: Sequence[Article]) -> list[ArticleResponse]:
    tags = await ArticleTagRepository(db).find_tags_for_articles([a.id for a in articles])
    return [article_response(a, tags.get(a.id, [])) for a in articles]


def _unique(ids: Sequence[uuid.UUID]) -> list[uuid.UUID]:
    return list(dict.fromkeys(ids))


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def sync_article_tags(db: AsyncSession, article_id: uuid.UUID, tag_ids: Sequence[uuid.UUID]) -> Result:
    """
    Make *tag_ids* the exact tag set of the article.

    Returns ``Ok`` with the new tags, or ``Err`` NotFound naming the first
    id that is not an active tag.
    """
    try:
        ids = _unique(tag_ids)
        found = {t.id: t for t in await TagRepository(db).find_active_by_ids(ids)}
        for tag_id in ids:
            if tag_id not in found:
                await db.rollback()
                return not_found(f"Tag com ID {tag_id} não encontrada")

        await ArticleTagRepository(db).replace(article_id, ids)
        tags = sorted(found.values(), key=lambda t: t.name)
        return ok([TagResponse.model_validate(t) for t in tags], "Tags sincronizadas com sucesso")
    except Exception:
        logger.exception("Failed to sync tags of article %s", article_id)
        await db.rollback()
        return internal("Erro ao sincronizar tags do artigo")


async def replace_article_tags(db: AsyncSession, article_id: uuid.UUID, tag_ids: Sequence[uuid.UUID]) -> Result:
    try:
        if await ArticleRepository(db).find_by_id(article_id) is None:
            return not_found("Artigo não encontrado")
    except Exception:
        logger.exception("Failed to fetch article %s", article_id)
        await db.rollback()
        return internal("Erro ao sincronizar tags do artigo")
    return await sync_article_tags(db, article_id, tag_ids)


async def get_article_tags(db: AsyncSession, article_id: uuid.UUID) -> Result:
    try:
        if await ArticleRepository(db).find_by_id(article_id) is None:
            return not_found("Artigo não encontrado")
        tags = await ArticleTagRepository(db).find_tags(article_id)
        return ok(
            [TagResponse.model_validate(t) for t in tags],
            "Tags do artigo encontradas com sucesso",
        )
    except Exception:
        logger.exception("Failed to fetch tags of article %s", article_id)
        await db.rollback()
        return internal("Erro ao buscar tags do artigo")


async def get_tag_articles(db: AsyncSession, tag_id: uuid.UUID) -> Result:
    try:
        if await TagRepository(db).find_by_id(tag_id) is None:
            return not_found("Tag não encontrada")
        articles = await ArticleRepository(db).find_by_tag(tag_id)
        return ok(await article_responses(db, articles), "Artigos da tag encontrados com sucesso")
    except Exception:
        logger.exception("Failed to fetch articles of tag %s", tag_id)
        await db.rollback()
        return internal("Erro ao buscar artigos da tag")


async def attach_tag(db: AsyncSession, article_id: uuid.UUID, tag_id: uuid.UUID) -> Result:
    try:
        if await ArticleRepository(db).find_by_id(article_id) is None:
            return not_found("Artigo não encontrado")
        if await TagRepository(db).find_by_id(tag_id) is None:
            return not_found("Tag não encontrada")

        links = ArticleTagRepository(db)
        link = await links.find_link(article_id, tag_id)
        if link is not None and link.deleted_at is None:
            return conflict("Tag já vinculada ao artigo")
        if await links.count_for_article(article_id) >= ARTICLE_MAX_TAGS:
            return conflict(f"Um artigo pode ter no máximo {ARTICLE_MAX_TAGS} tags")

        await links.attach(article_id, tag_id)
        tags = await links.find_tags(article_id)
        return ok([TagResponse.model_validate(t) for t in tags], "Tag vinculada ao artigo com sucesso")
    except Exception:
        logger.exception("Failed to attach tag %s to article %s", tag_id, article_id)
        await db.rollback()
        return internal("Erro ao vincular tag ao artigo")


async def detach_tag(db: AsyncSession, article_id: uuid.UUID, tag_id: uuid.UUID) -> Result:
    try:
        if await ArticleRepository(db).find_by_id(article_id) is None:
            return not_found("Artigo não encontrado")

        links = ArticleTagRepository(db)
        link = await links.find_link(article_id, tag_id)
        if link is None or link.deleted_at is not None:
            return not_found("Tag não vinculada ao artigo")

        if await links.count_for_article(article_id) <= ARTICLE_MIN_TAGS:
            return conflict(f"Um artigo deve ter no mínimo {ARTICLE_MIN_TAGS} tags")

        await links.detach(link)
        tags = await links.find_tags(article_id)
        return ok([TagResponse.model_validate(t) for t in tags], "Tag desvinculada do artigo com sucesso")
    except Exception:
        logger.exception("Failed to detach tag %s from article %s", tag_id, article_id)
        await db.rollback()
        return internal("Erro ao desvincular tag do artigo")
