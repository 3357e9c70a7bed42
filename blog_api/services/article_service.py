"""
Article service: business logic for the Article aggregate.

Design notes
------------
- The author is eager-loaded by the repository (``selectinload``); tags are
  attached from one extra query per page through
  ``article_tag_service.article_responses``.
- Tag changes always go through ``article_tag_service.sync_article_tags``
  inside the caller's transaction.  If the sync reports an error the whole
  operation is rolled back, so an article is never created or left without
  its tags.
- Service functions flush but do not commit; the transaction boundary is
  owned by the ``get_db`` dependency in the router layer.
"""
import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.repositories import ArticleRepository, ArticleTagRepository, UserRepository
from blog_api.result import Err, Result, conflict, created, internal, not_found, ok
from blog_api.schemas import ArticleCreate, ArticleUpdate, PaginatedResponse
from blog_api.services.article_tag_service import (
    article_response,
    article_responses,
    sync_article_tags,
)

logger = logging.getLogger(__name__)


async def create_article(db: AsyncSession, data: ArticleCreate) -> Result:
    try:
        author = await UserRepository(db).find_by_id(data.author_id)
        if author is None:
            return not_found("Autor não encontrado")

        article = await ArticleRepository(db).create(
            title=data.title,
            content=data.content,
            image=data.image,
            author_id=author.id,
        )
        synced = await sync_article_tags(db, article.id, data.tag_ids)
        if isinstance(synced, Err):
            await db.rollback()
            return synced

        return created(
            article_response(article, [], author).model_copy(update={"tags": synced.data}),
            "Artigo registrado com sucesso",
        )
    except Exception:
        logger.exception("Failed to create article for author %s", data.author_id)
        await db.rollback()
        return internal("Erro ao registrar artigo")


async def get_article(db: AsyncSession, article_id: uuid.UUID) -> Result:
    try:
        article = await ArticleRepository(db).find_by_id(article_id)
        if article is None:
            return not_found("Artigo não encontrado")
        tags = await ArticleTagRepository(db).find_tags(article.id)
        return ok(article_response(article, tags), "Artigo encontrado com sucesso")
    except Exception:
        logger.exception("Failed to fetch article %s", article_id)
        await db.rollback()
        return internal("Erro ao buscar artigo")


async def list_articles(db: AsyncSession, page: int, limit: int) -> Result:
    """
    Return a page of active articles, newest first.

    Three SQL statements are issued: COUNT, the page itself (plus the
    author select-in load), and one query for the tags of the whole page.
    """
    try:
        repo = ArticleRepository(db)
        total = await repo.count()
        articles = await repo.find_all(page, limit)
        response = PaginatedResponse.build(
            await article_responses(db, articles), total, page, limit
        )
        return ok(response, "Artigos buscados com sucesso")
    except Exception:
        logger.exception("Failed to list articles")
        await db.rollback()
        return internal("Erro ao buscar artigos")


async def search_articles(db: AsyncSession, term: str, page: int, limit: int) -> Result:
    try:
        repo = ArticleRepository(db)
        total = await repo.count_search(term)
        articles = await repo.search(term, page, limit)
        response = PaginatedResponse.build(
            await article_responses(db, articles), total, page, limit
        )
        return ok(response, "Artigos buscados com sucesso")
    except Exception:
        logger.exception("Failed to search articles for %r", term)
        await db.rollback()
        return internal("Erro ao buscar artigos")


async def update_article(db: AsyncSession, article_id: uuid.UUID, data: ArticleUpdate) -> Result:
    """
    Partially update an article.  Only fields present in the payload are
    written; ``tag_ids``, when given, replaces the whole tag set.
    """
    try:
        repo = ArticleRepository(db)
        article = await repo.find_by_id(article_id)
        if article is None:
            return not_found("Artigo não encontrado")

        fields = data.model_dump(exclude_none=True)
        tag_ids = fields.pop("tag_ids", None)

        if tag_ids is not None:
            synced = await sync_article_tags(db, article.id, tag_ids)
            if isinstance(synced, Err):
                await db.rollback()
                return synced

        if fields:
            article = await repo.update(article, fields)

        tags = await ArticleTagRepository(db).find_tags(article.id)
        return ok(article_response(article, tags), "Artigo atualizado com sucesso")
    except Exception:
        logger.exception("Failed to update article %s", article_id)
        await db.rollback()
        return internal("Erro ao atualizar artigo")


async def delete_article(db: AsyncSession, article_id: uuid.UUID) -> Result:
    """Soft-delete an article together with its tag links."""
    try:
        repo = ArticleRepository(db)
        article = await repo.find_by_id(article_id, include_deleted=True)
        if article is None:
            return not_found("Artigo não encontrado")
        if article.deleted_at is not None:
            return conflict("Artigo já está desativado")

        await ArticleTagRepository(db).soft_delete_for_article(article.id)
        article = await repo.soft_delete(article)
        return ok(article_response(article, []), "Artigo desativado com sucesso")
    except Exception:
        logger.exception("Failed to deactivate article %s", article_id)
        await db.rollback()
        return internal("Erro ao desativar artigo")
