import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.repositories import TagRepository
from blog_api.result import Result, conflict, created, internal, not_found, ok
from blog_api.schemas import PaginatedResponse, TagCreate, TagResponse, TagUpdate

logger = logging.getLogger(__name__)


async def create_tag(db: AsyncSession, data: TagCreate) -> Result:
    try:
        repo = TagRepository(db)
        if await repo.find_by_name(data.name) is not None:
            return conflict("Tag já cadastrada com esse nome")

        tag = await repo.create(name=data.name)
        return created(TagResponse.model_validate(tag), "Tag registrada com sucesso")
    except IntegrityError:
        logger.warning("Tag name %r already taken", data.name)
        await db.rollback()
        return conflict("Tag já cadastrada com esse nome")
    except Exception:
        logger.exception("Failed to create tag %r", data.name)
        await db.rollback()
        return internal("Erro ao registrar tag")


async def get_tag(db: AsyncSession, tag_id: uuid.UUID) -> Result:
    try:
        tag = await TagRepository(db).find_by_id(tag_id)
        if tag is None:
            return not_found("Tag não encontrada")
        return ok(TagResponse.model_validate(tag), "Tag encontrada com sucesso")
    except Exception:
        logger.exception("Failed to fetch tag %s", tag_id)
        await db.rollback()
        return internal("Erro ao buscar tag")


async def list_tags(db: AsyncSession, page: int, limit: int) -> Result:
    try:
        repo = TagRepository(db)
        total = await repo.count()
        tags = await repo.find_all(page, limit)
        response = PaginatedResponse.build(
            [TagResponse.model_validate(t) for t in tags], total, page, limit
        )
        return ok(response, "Tags buscadas com sucesso")
    except Exception:
        logger.exception("Failed to list tags")
        await db.rollback()
        return internal("Erro ao buscar tags")


async def update_tag(db: AsyncSession, tag_id: uuid.UUID, data: TagUpdate) -> Result:
    try:
        repo = TagRepository(db)
        tag = await repo.find_by_id(tag_id)
        if tag is None:
            return not_found("Tag não encontrada")

        owner = await repo.find_by_name(data.name)
        if owner is not None and owner.id != tag.id:
            return conflict("Tag já cadastrada com esse nome")

        tag = await repo.update(tag, {"name": data.name})
        return ok(TagResponse.model_validate(tag), "Tag atualizada com sucesso")
    except IntegrityError:
        logger.warning("Tag name %r already taken", data.name)
        await db.rollback()
        return conflict("Tag já cadastrada com esse nome")
    except Exception:
        logger.exception("Failed to update tag %s", tag_id)
        await db.rollback()
        return internal("Erro ao atualizar tag")


async def delete_tag(db: AsyncSession, tag_id: uuid.UUID) -> Result:
    try:
        repo = TagRepository(db)
        tag = await repo.find_by_id(tag_id, include_deleted=True)
        if tag is None:
            return not_found("Tag não encontrada")
        if tag.deleted_at is not None:
            return conflict("Tag já está desativada")

        tag = await repo.soft_delete(tag)
        return ok(TagResponse.model_validate(tag), "Tag desativada com sucesso")
    except Exception:
        logger.exception("Failed to deactivate tag %s", tag_id)
        await db.rollback()
        return internal("Erro ao desativar tag")
