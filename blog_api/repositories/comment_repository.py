import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blog_api.models import Comment


def _active():
    return Comment.deleted_at.is_(None)


class CommentRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        content: str,
        article_id: uuid.UUID,
        user_id: uuid.UUID,
        parent_id: uuid.UUID | None = None,
    ) -> Comment:
        comment = Comment(
            content=content, article_id=article_id, user_id=user_id, parent_id=parent_id
        )
        self.session.add(comment)
        await self.session.flush()
        return comment

    async def find_by_id(self, comment_id: uuid.UUID, include_deleted: bool = False) -> Comment | None:
        stmt = (
            select(Comment)
            .where(Comment.id == comment_id)
            .options(selectinload(Comment.user))
        )
        if not include_deleted:
            stmt = stmt.where(_active())
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def find_roots(self, page: int, limit: int) -> list[Comment]:
        stmt = (
            select(Comment)
            .where(_active(), Comment.parent_id.is_(None))
            .options(selectinload(Comment.user))
            .order_by(Comment.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def count_roots(self) -> int:
        stmt = (
            select(func.count())
            .select_from(Comment)
            .where(_active(), Comment.parent_id.is_(None))
        )
        return (await self.session.execute(stmt)).scalar_one()

    async def find_replies(self, parent_id: uuid.UUID, page: int, limit: int) -> list[Comment]:
        stmt = (
            select(Comment)
            .where(_active(), Comment.parent_id == parent_id)
            .options(selectinload(Comment.user))
            .order_by(Comment.created_at.asc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def count_replies(self, parent_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(Comment)
            .where(_active(), Comment.parent_id == parent_id)
        )
        return (await self.session.execute(stmt)).scalar_one()

    async def find_by_article(self, article_id: uuid.UUID) -> list[Comment]:
        """
        Active root comments of an article, newest first, with their authors
        and replies (oldest first) eager-loaded.  Replies are returned as
        stored; callers filter out soft-deleted ones.
        """
        stmt = (
            select(Comment)
            .where(
                Comment.article_id == article_id,
                Comment.parent_id.is_(None),
                _active(),
            )
            .options(
                selectinload(Comment.user),
                selectinload(Comment.replies).selectinload(Comment.user),
            )
            .order_by(Comment.created_at.desc())
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def update(self, comment: Comment, fields: dict[str, Any]) -> Comment:
        for name, value in fields.items():
            setattr(comment, name, value)
        await self.session.flush()
        await self.session.refresh(comment, ["content", "updated_at", "deleted_at"])
        return comment

    async def soft_delete(self, comment: Comment) -> Comment:
        return await self.update(comment, {"deleted_at": datetime.now(timezone.utc)})
