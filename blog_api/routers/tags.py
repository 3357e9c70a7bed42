import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db
from blog_api.dependencies import PaginationParams
from blog_api.responses import log_outcome, render
from blog_api.schemas import TagCreate, TagLookup, TagUpdate
from blog_api.services import article_tag_service, tag_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


@router.post("", status_code=201)
async def create_tag(data: TagCreate, db: AsyncSession = Depends(get_db)):
    logger.info("Starting tag registration for %r", data.name)
    result = await tag_service.create_tag(db, data)
    log_outcome(logger, result, "Tag registration")
    return render(result)


@router.get("")
async def list_tags(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    result = await tag_service.list_tags(db, pagination.page, pagination.limit)
    log_outcome(logger, result, "Tag listing")
    return render(result)


@router.get("/{tag_id}")
async def get_tag(tag_id: str, db: AsyncSession = Depends(get_db)):
    lookup = TagLookup(id=tag_id)
    result = await tag_service.get_tag(db, lookup.id)
    log_outcome(logger, result, "Tag lookup")
    return render(result)


@router.get("/{tag_id}/articles")
async def get_tag_articles(tag_id: str, db: AsyncSession = Depends(get_db)):
    lookup = TagLookup(id=tag_id)
    result = await article_tag_service.get_tag_articles(db, lookup.id)
    log_outcome(logger, result, "Articles of tag lookup")
    return render(result)


@router.put("/{tag_id}")
async def update_tag(tag_id: str, data: TagUpdate, db: AsyncSession = Depends(get_db)):
    lookup = TagLookup(id=tag_id)
    logger.info("Starting update of tag %s", lookup.id)
    result = await tag_service.update_tag(db, lookup.id, data)
    log_outcome(logger, result, "Tag update")
    return render(result)


@router.delete("/{tag_id}")
async def delete_tag(tag_id: str, db: AsyncSession = Depends(get_db)):
    lookup = TagLookup(id=tag_id)
    logger.info("Starting deactivation of tag %s", lookup.id)
    result = await tag_service.delete_tag(db, lookup.id)
    log_outcome(logger, result, "Tag deactivation")
    return render(result)
