import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db
from blog_api.dependencies import PaginationParams
from blog_api.responses import log_outcome, render
from blog_api.schemas import CommentCreate, CommentLookup, CommentUpdate
from blog_api.services import comment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])


@router.post("", status_code=201)
async def create_comment(data: CommentCreate, db: AsyncSession = Depends(get_db)):
    logger.info("Starting comment registration on article %s", data.article_id)
    result = await comment_service.create_comment(db, data)
    log_outcome(logger, result, "Comment registration")
    return render(result)


@router.get("")
async def list_comments(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    result = await comment_service.list_comments(db, pagination.page, pagination.limit)
    log_outcome(logger, result, "Comment listing")
    return render(result)


@router.get("/{comment_id}")
async def get_comment(comment_id: str, db: AsyncSession = Depends(get_db)):
    lookup = CommentLookup(id=comment_id)
    result = await comment_service.get_comment(db, lookup.id)
    log_outcome(logger, result, "Comment lookup")
    return render(result)


@router.get("/{comment_id}/replies")
async def list_replies(
    comment_id: str,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    lookup = CommentLookup(id=comment_id)
    result = await comment_service.list_replies(db, lookup.id, pagination.page, pagination.limit)
    log_outcome(logger, result, "Reply listing")
    return render(result)


@router.put("/{comment_id}")
async def update_comment(comment_id: str, data: CommentUpdate, db: AsyncSession = Depends(get_db)):
    lookup = CommentLookup(id=comment_id)
    logger.info("Starting update of comment %s", lookup.id)
    result = await comment_service.update_comment(db, lookup.id, data)
    log_outcome(logger, result, "Comment update")
    return render(result)


@router.delete("/{comment_id}")
async def delete_comment(comment_id: str, db: AsyncSession = Depends(get_db)):
    lookup = CommentLookup(id=comment_id)
    logger.info("Starting deactivation of comment %s", lookup.id)
    result = await comment_service.delete_comment(db, lookup.id)
    log_outcome(logger, result, "Comment deactivation")
    return render(result)
