import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db
from blog_api.dependencies import PaginationParams
from blog_api.responses import log_outcome, render
from blog_api.schemas import (
    ArticleCreate,
    ArticleLookup,
    ArticleSearch,
    ArticleTagLookup,
    ArticleTagsUpdate,
    ArticleUpdate,
)
from blog_api.services import article_service, article_tag_service, comment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/articles", tags=["articles"])


@router.post("", status_code=201)
async def create_article(data: ArticleCreate, db: AsyncSession = Depends(get_db)):
    logger.info("Starting article registration for author %s", data.author_id)
    result = await article_service.create_article(db, data)
    log_outcome(logger, result, "Article registration")
    return render(result)


@router.get("")
async def list_articles(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    result = await article_service.list_articles(db, pagination.page, pagination.limit)
    log_outcome(logger, result, "Article listing")
    return render(result)


# Declared before "/{article_id}" so "search" is not taken for an id.
@router.get("/search")
async def search_articles(
    term: str | None = None,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    search = ArticleSearch(term=term)
    result = await article_service.search_articles(
        db, search.term, pagination.page, pagination.limit
    )
    log_outcome(logger, result, "Article search")
    return render(result)


@router.get("/{article_id}")
async def get_article(article_id: str, db: AsyncSession = Depends(get_db)):
    lookup = ArticleLookup(id=article_id)
    result = await article_service.get_article(db, lookup.id)
    log_outcome(logger, result, "Article lookup")
    return render(result)


@router.put("/{article_id}")
async def update_article(article_id: str, data: ArticleUpdate, db: AsyncSession = Depends(get_db)):
    lookup = ArticleLookup(id=article_id)
    logger.info("Starting update of article %s", lookup.id)
    result = await article_service.update_article(db, lookup.id, data)
    log_outcome(logger, result, "Article update")
    return render(result)


@router.delete("/{article_id}")
async def delete_article(article_id: str, db: AsyncSession = Depends(get_db)):
    lookup = ArticleLookup(id=article_id)
    logger.info("Starting deactivation of article %s", lookup.id)
    result = await article_service.delete_article(db, lookup.id)
    log_outcome(logger, result, "Article deactivation")
    return render(result)


# --- Tags of an article ---

@router.get("/{article_id}/tags")
async def get_article_tags(article_id: str, db: AsyncSession = Depends(get_db)):
    lookup = ArticleLookup(id=article_id)
    result = await article_tag_service.get_article_tags(db, lookup.id)
    log_outcome(logger, result, "Article tags lookup")
    return render(result)


@router.put("/{article_id}/tags")
async def sync_article_tags(article_id: str, data: ArticleTagsUpdate, db: AsyncSession = Depends(get_db)):
    lookup = ArticleLookup(id=article_id)
    logger.info("Starting tag sync of article %s", lookup.id)
    result = await article_tag_service.replace_article_tags(db, lookup.id, data.tag_ids)
    log_outcome(logger, result, "Article tag sync")
    return render(result)


@router.post("/{article_id}/tags/{tag_id}")
async def attach_tag(article_id: str, tag_id: str, db: AsyncSession = Depends(get_db)):
    lookup = ArticleTagLookup(article_id=article_id, tag_id=tag_id)
    result = await article_tag_service.attach_tag(db, lookup.article_id, lookup.tag_id)
    log_outcome(logger, result, "Tag attachment")
    return render(result)


@router.delete("/{article_id}/tags/{tag_id}")
async def detach_tag(article_id: str, tag_id: str, db: AsyncSession = Depends(get_db)):
    lookup = ArticleTagLookup(article_id=article_id, tag_id=tag_id)
    result = await article_tag_service.detach_tag(db, lookup.article_id, lookup.tag_id)
    log_outcome(logger, result, "Tag detachment")
    return render(result)


# --- Comments of an article ---

@router.get("/{article_id}/comments")
async def get_article_comments(article_id: str, db: AsyncSession = Depends(get_db)):
    lookup = ArticleLookup(id=article_id)
    result = await comment_service.get_article_comments(db, lookup.id)
    log_outcome(logger, result, "Article comments lookup")
    return render(result)
