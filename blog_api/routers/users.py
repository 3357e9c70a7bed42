import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db
from blog_api.dependencies import PaginationParams
from blog_api.responses import log_outcome, render
from blog_api.schemas import UserCreate, UserLookup, UserUpdate
from blog_api.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", status_code=201)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    logger.info("Starting user registration for %s", data.email)
    result = await user_service.create_user(db, data)
    log_outcome(logger, result, "User registration")
    return render(result)


@router.get("")
async def list_users(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    result = await user_service.list_users(db, pagination.page, pagination.limit)
    log_outcome(logger, result, "User listing")
    return render(result)


@router.get("/{user_id}")
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    lookup = UserLookup(id=user_id)
    result = await user_service.get_user(db, lookup.id)
    log_outcome(logger, result, "User lookup")
    return render(result)


@router.put("/{user_id}")
async def update_user(user_id: str, data: UserUpdate, db: AsyncSession = Depends(get_db)):
    lookup = UserLookup(id=user_id)
    logger.info("Starting update of user %s", lookup.id)
    result = await user_service.update_user(db, lookup.id, data)
    log_outcome(logger, result, "User update")
    return render(result)


@router.delete("/{user_id}")
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db)):
    lookup = UserLookup(id=user_id)
    logger.info("Starting deactivation of user %s", lookup.id)
    result = await user_service.delete_user(db, lookup.id)
    log_outcome(logger, result, "User deactivation")
    return render(result)


@router.post("/{user_id}/reactivate")
async def reactivate_user(user_id: str, db: AsyncSession = Depends(get_db)):
    lookup = UserLookup(id=user_id)
    logger.info("Starting reactivation of user %s", lookup.id)
    result = await user_service.reactivate_user(db, lookup.id)
    log_outcome(logger, result, "User reactivation")
    return render(result)
