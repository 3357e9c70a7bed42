import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import Tag


class TagRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, *, name: str) -> Tag:
        tag = Tag(name=name)
        self.session.add(tag)
        await self.session.flush()
        return tag

    async def find_by_id(self, tag_id: uuid.UUID, include_deleted: bool = False) -> Tag | None:
        stmt = select(Tag).where(Tag.id == tag_id)
        if not include_deleted:
            stmt = stmt.where(Tag.deleted_at.is_(None))
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def find_by_name(self, name: str) -> Tag | None:
        """Exact-name lookup, soft-deleted tags included (names stay reserved)."""
        result = await self.session.execute(select(Tag).where(Tag.name == name))
        return result.scalar_one_or_none()

    async def find_active_by_ids(self, tag_ids: Iterable[uuid.UUID]) -> list[Tag]:
        ids = list(tag_ids)
        if not ids:
            return []
        stmt = select(Tag).where(Tag.id.in_(ids), Tag.deleted_at.is_(None))
        return list((await self.session.execute(stmt)).scalars().all())

    async def find_all(self, page: int, limit: int) -> list[Tag]:
        stmt = (
            select(Tag)
            .where(Tag.deleted_at.is_(None))
            .order_by(Tag.name)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        stmt = select(func.count()).select_from(Tag).where(Tag.deleted_at.is_(None))
        return (await self.session.execute(stmt)).scalar_one()

    async def update(self, tag: Tag, fields: dict[str, Any]) -> Tag:
        for name, value in fields.items():
            setattr(tag, name, value)
        await self.session.flush()
        await self.session.refresh(tag)
        return tag

    async def soft_delete(self, tag: Tag) -> Tag:
        return await self.update(tag, {"deleted_at": datetime.now(timezone.utc)})
