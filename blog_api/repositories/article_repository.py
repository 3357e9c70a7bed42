import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blog_api.models import Article, ArticleTag, User


def _active():
    return Article.deleted_at.is_(None)


def _matches(term: str):
    return or_(
        Article.title.icontains(term, autoescape=True),
        User.name.icontains(term, autoescape=True),
    )


class ArticleRepository:
    """
    Persistence for ``Article``.

    Every read eager-loads the author with ``selectinload`` (the relationship
    is ``noload`` by default).  Tags live in ``ArticleTagRepository`` and are
    attached by the service.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self, *, title: str, content: str, author_id: uuid.UUID, image: str | None = None
    ) -> Article:
        article = Article(title=title, content=content, image=image, author_id=author_id)
        self.session.add(article)
        await self.session.flush()
        return article

    async def find_by_id(self, article_id: uuid.UUID, include_deleted: bool = False) -> Article | None:
        stmt = (
            select(Article)
            .where(Article.id == article_id)
            .options(selectinload(Article.author))
        )
        if not include_deleted:
            stmt = stmt.where(_active())
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def find_all(self, page: int, limit: int) -> list[Article]:
        stmt = (
            select(Article)
            .where(_active())
            .options(selectinload(Article.author))
            .order_by(Article.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        stmt = select(func.count()).select_from(Article).where(_active())
        return (await self.session.execute(stmt)).scalar_one()

    async def search(self, term: str, page: int, limit: int) -> list[Article]:
        """Active articles whose title or author name contains *term* (case-insensitive)."""
        stmt = (
            select(Article)
            .join(User, Article.author_id == User.id)
            .where(_active(), _matches(term))
            .options(selectinload(Article.author))
            .order_by(Article.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def count_search(self, term: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Article)
            .join(User, Article.author_id == User.id)
            .where(_active(), _matches(term))
        )
        return (await self.session.execute(stmt)).scalar_one()

    async def find_by_tag(self, tag_id: uuid.UUID) -> list[Article]:
        stmt = (
            select(Article)
            .join(ArticleTag, ArticleTag.article_id == Article.id)
            .where(
                ArticleTag.tag_id == tag_id,
                ArticleTag.deleted_at.is_(None),
                _active(),
            )
            .options(selectinload(Article.author))
            .order_by(Article.created_at.desc())
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def update(self, article: Article, fields: dict[str, Any]) -> Article:
        for name, value in fields.items():
            setattr(article, name, value)
        await self.session.flush()
        await self.session.refresh(article, ["title", "content", "image", "updated_at", "deleted_at"])
        return article

    async def soft_delete(self, article: Article) -> Article:
        return await self.update(article, {"deleted_at": datetime.now(timezone.utc)})
