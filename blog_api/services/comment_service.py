"""
Comment service: comments and threaded replies.

A reply is a comment whose ``parent_id`` points at another comment of the
same article.  Root listings are newest first; replies read as a
conversation, oldest first.
"""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import Comment, User
from blog_api.repositories import ArticleRepository, CommentRepository, UserRepository
from blog_api.result import Result, conflict, created, internal, invalid_field, not_found, ok
from blog_api.schemas import (
    CommentCreate,
    CommentReply,
    CommentThread,
    CommentUpdate,
    PaginatedResponse,
    UserSummary,
)

logger = logging.getLogger(__name__)


def _reply(comment: Comment, user: User | None = None) -> CommentReply:
    response = CommentReply.model_validate(comment)
    if user is not None:
        response.user = UserSummary.model_validate(user)
    return response


def _thread(comment: Comment) -> CommentThread:
    thread = CommentThread.model_validate(comment)
    thread.replies = [_reply(r) for r in comment.replies if r.deleted_at is None]
    return thread


async def create_comment(db: AsyncSession, data: CommentCreate) -> Result:
    try:
        user = await UserRepository(db).find_by_id(data.user_id)
        if user is None:
            return not_found("Usuário não encontrado")
        if await ArticleRepository(db).find_by_id(data.article_id) is None:
            return not_found("Artigo não encontrado")

        repo = CommentRepository(db)
        if data.parent_id is not None:
            parent = await repo.find_by_id(data.parent_id)
            if parent is None:
                return not_found("Comentário pai não encontrado")
            if parent.article_id != data.article_id:
                return invalid_field("Comentário pai pertence a outro artigo")

        comment = await repo.create(
            content=data.content,
            article_id=data.article_id,
            user_id=user.id,
            parent_id=data.parent_id,
        )
        return created(_reply(comment, user), "Comentário registrado com sucesso")
    except Exception:
        logger.exception("Failed to create comment on article %s", data.article_id)
        await db.rollback()
        return internal("Erro ao registrar comentário")


async def get_comment(db: AsyncSession, comment_id: uuid.UUID) -> Result:
    try:
        comment = await CommentRepository(db).find_by_id(comment_id)
        if comment is None:
            return not_found("Comentário não encontrado")
        return ok(_reply(comment), "Comentário encontrado com sucesso")
    except Exception:
        logger.exception("Failed to fetch comment %s", comment_id)
        await db.rollback()
        return internal("Erro ao buscar comentário")


async def list_comments(db: AsyncSession, page: int, limit: int) -> Result:
    try:
        repo = CommentRepository(db)
        total = await repo.count_roots()
        comments = await repo.find_roots(page, limit)
        response = PaginatedResponse.build([_reply(c) for c in comments], total, page, limit)
        return ok(response, "Comentários buscados com sucesso")
    except Exception:
        logger.exception("Failed to list comments")
        await db.rollback()
        return internal("Erro ao buscar comentários")


async def list_replies(db: AsyncSession, comment_id: uuid.UUID, page: int, limit: int) -> Result:
    try:
        repo = CommentRepository(db)
        if await repo.find_by_id(comment_id) is None:
            return not_found("Comentário não encontrado")
        total = await repo.count_replies(comment_id)
        replies = await repo.find_replies(comment_id, page, limit)
        response = PaginatedResponse.build([_reply(r) for r in replies], total, page, limit)
        return ok(response, "Respostas buscadas com sucesso")
    except Exception:
        logger.exception("Failed to list replies of comment %s", comment_id)
        await db.rollback()
        return internal("Erro ao buscar respostas")


async def get_article_comments(db: AsyncSession, article_id: uuid.UUID) -> Result:
    try:
        if await ArticleRepository(db).find_by_id(article_id) is None:
            return not_found("Artigo não encontrado")
        comments = await CommentRepository(db).find_by_article(article_id)
        return ok(
            [_thread(c) for c in comments],
            "Comentários do artigo buscados com sucesso",
        )
    except Exception:
        logger.exception("Failed to fetch comments of article %s", article_id)
        await db.rollback()
        return internal("Erro ao buscar comentários do artigo")


async def update_comment(db: AsyncSession, comment_id: uuid.UUID, data: CommentUpdate) -> Result:
    try:
        repo = CommentRepository(db)
        comment = await repo.find_by_id(comment_id)
        if comment is None:
            return not_found("Comentário não encontrado")

        comment = await repo.update(comment, {"content": data.content})
        return ok(_reply(comment), "Comentário atualizado com sucesso")
    except Exception:
        logger.exception("Failed to update comment %s", comment_id)
        await db.rollback()
        return internal("Erro ao atualizar comentário")


async def delete_comment(db: AsyncSession, comment_id: uuid.UUID) -> Result:
    try:
        repo = CommentRepository(db)
        comment = await repo.find_by_id(comment_id, include_deleted=True)
        if comment is None:
            return not_found("Comentário não encontrado")
        if comment.deleted_at is not None:
            return conflict("Comentário já está desativado")

        comment = await repo.soft_delete(comment)
        return ok(_reply(comment), "Comentário desativado com sucesso")
    except Exception:
        logger.exception("Failed to deactivate comment %s", comment_id)
        await db.rollback()
        return internal("Erro ao desativar comentário")
