import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import User


class UserRepository:
    """
    Persistence for ``User``.

    Lookups skip soft-deleted users unless ``include_deleted`` is passed;
    ``find_by_email`` always sees them so a deactivated account still owns
    its address.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, *, name: str, email: str, password: str, avatar: str | None = None) -> User:
        user = User(name=name, email=email, password=password, avatar=avatar)
        self.session.add(user)
        await self.session.flush()
        return user

    async def find_by_id(self, user_id: uuid.UUID, include_deleted: bool = False) -> User | None:
        stmt = select(User).where(User.id == user_id)
        if not include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_all(self, page: int, limit: int) -> list[User]:
        stmt = (
            select(User)
            .where(User.deleted_at.is_(None))
            .order_by(User.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        stmt = select(func.count()).select_from(User).where(User.deleted_at.is_(None))
        return (await self.session.execute(stmt)).scalar_one()

    async def update(self, user: User, fields: dict[str, Any]) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def soft_delete(self, user: User) -> User:
        return await self.update(user, {"deleted_at": datetime.now(timezone.utc)})

    async def reactivate(self, user: User) -> User:
        return await self.update(user, {"deleted_at": None})
