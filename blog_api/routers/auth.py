import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.database import get_db
from blog_api.responses import log_outcome, render
from blog_api.schemas import LoginRequest
from blog_api.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login")
async def login(data: LoginRequest, db: AsyncSession = Depends(get_db)):
    logger.info("Starting login for %s", data.email)
    result = await auth_service.login(db, data)
    log_outcome(logger, result, "Login")
    return render(result)
