"""
User service: business logic for the User aggregate.

Every function returns a ``Result``.  Missing or conflicting rows are
reported as ``Err`` values; a persistence fault is logged, the session is
rolled back and a generic internal error is returned.  The password hash
never leaves this module: responses go through ``UserResponse``.
"""
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.repositories import UserRepository
from blog_api.result import Result, conflict, created, internal, not_found, ok
from blog_api.schemas import PaginatedResponse, UserCreate, UserResponse, UserUpdate
from blog_api.security import hash_password

logger = logging.getLogger(__name__)


async def create_user(db: AsyncSession, data: UserCreate) -> Result:
    try:
        repo = UserRepository(db)
        if await repo.find_by_email(data.email) is not None:
            return conflict("Usuário já cadastrado com esse email")

        user = await repo.create(
            name=data.name,
            email=data.email,
            password=hash_password(data.password),
            avatar=data.avatar,
        )
        return created(UserResponse.model_validate(user), "Usuário registrado com sucesso")
    except IntegrityError:
        logger.warning("Email %s already taken", data.email)
        await db.rollback()
        return conflict("Usuário já cadastrado com esse email")
    except Exception:
        logger.exception("Failed to create user %s", data.email)
        await db.rollback()
        return internal("Erro ao registrar usuário")


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> Result:
    try:
        user = await UserRepository(db).find_by_id(user_id)
        if user is None:
            return not_found("Usuário não encontrado")
        return ok(UserResponse.model_validate(user), "Usuário encontrado com sucesso")
    except Exception:
        logger.exception("Failed to fetch user %s", user_id)
        await db.rollback()
        return internal("Erro ao buscar usuário")


async def list_users(db: AsyncSession, page: int, limit: int) -> Result:
    try:
        repo = UserRepository(db)
        total = await repo.count()
        users = await repo.find_all(page, limit)
        response = PaginatedResponse.build(
            [UserResponse.model_validate(u) for u in users], total, page, limit
        )
        return ok(response, "Usuários buscados com sucesso")
    except Exception:
        logger.exception("Failed to list users")
        await db.rollback()
        return internal("Erro ao buscar usuários")


async def update_user(db: AsyncSession, user_id: uuid.UUID, data: UserUpdate) -> Result:
    try:
        repo = UserRepository(db)
        user = await repo.find_by_id(user_id)
        if user is None:
            return not_found("Usuário não encontrado")

        fields = data.model_dump(exclude_none=True)
        if "email" in fields and fields["email"] != user.email:
            owner = await repo.find_by_email(fields["email"])
            if owner is not None and owner.id != user.id:
                return conflict("Usuário já cadastrado com esse email")

        user = await repo.update(user, fields)
        return ok(UserResponse.model_validate(user), "Usuário atualizado com sucesso")
    except IntegrityError:
        logger.warning("Email of user %s already taken", user_id)
        await db.rollback()
        return conflict("Usuário já cadastrado com esse email")
    except Exception:
        logger.exception("Failed to update user %s", user_id)
        await db.rollback()
        return internal("Erro ao atualizar usuário")


async def delete_user(db: AsyncSession, user_id: uuid.UUID) -> Result:
    try:
        repo = UserRepository(db)
        user = await repo.find_by_id(user_id, include_deleted=True)
        if user is None:
            return not_found("Usuário não encontrado")
        if user.deleted_at is not None:
            return conflict("Usuário já está desativado")

        user = await repo.soft_delete(user)
        return ok(UserResponse.model_validate(user), "Usuário desativado com sucesso")
    except Exception:
        logger.exception("Failed to deactivate user %s", user_id)
        await db.rollback()
        return internal("Erro ao desativar usuário")


async def reactivate_user(db: AsyncSession, user_id: uuid.UUID) -> Result:
    try:
        repo = UserRepository(db)
        user = await repo.find_by_id(user_id, include_deleted=True)
        if user is None:
            return not_found("Usuário não encontrado")
        if user.deleted_at is None:
            return conflict("Usuário já está ativo")

        user = await repo.reactivate(user)
        return ok(UserResponse.model_validate(user), "Usuário reativado com sucesso")
    except Exception:
        logger.exception("Failed to reactivate user %s", user_id)
        await db.rollback()
        return internal("Erro ao reativar usuário")
