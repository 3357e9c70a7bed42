"""
Login check.

There are no sessions or tokens: a successful login only confirms the
credentials and returns the user.  Unknown email and wrong password get the
same message so the response does not reveal which one was wrong.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.repositories import UserRepository
from blog_api.result import Result, forbidden, internal, ok, unauthorized
from blog_api.schemas import LoginRequest, UserResponse
from blog_api.security import verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Email ou Senha inválido"


async def login(db: AsyncSession, data: LoginRequest) -> Result:
    try:
        user = await UserRepository(db).find_by_email(data.email)
        if user is None:
            return unauthorized(INVALID_CREDENTIALS)
        if user.deleted_at is not None:
            return forbidden("Conta desativada")
        if not verify_password(data.password, user.password):
            return unauthorized(INVALID_CREDENTIALS)

        return ok(UserResponse.model_validate(user), "Login realizado com sucesso")
    except Exception:
        logger.exception("Login check failed for %s", data.email)
        await db.rollback()
        return internal("Erro ao realizar login")
