import uuid
from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.models import ArticleTag, Tag


def _linked_tags():
    return (
        select(ArticleTag.article_id, Tag)
        .join(Tag, Tag.id == ArticleTag.tag_id)
        .where(ArticleTag.deleted_at.is_(None), Tag.deleted_at.is_(None))
        .order_by(Tag.name)
    )


class ArticleTagRepository:
    """
    Links between articles and tags.

    ``replace`` is the write side of tag sync: it removes every link of the
    article and inserts the new set in the caller's transaction.  Nothing is
    committed here.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def replace(self, article_id: uuid.UUID, tag_ids: Sequence[uuid.UUID]) -> None:
        await self.session.execute(delete(ArticleTag).where(ArticleTag.article_id == article_id))
        if tag_ids:
            await self.session.execute(
                insert(ArticleTag),
                [{"article_id": article_id, "tag_id": tag_id} for tag_id in tag_ids],
            )

    async def find_tags(self, article_id: uuid.UUID) -> list[Tag]:
        stmt = _linked_tags().where(ArticleTag.article_id == article_id)
        result = await self.session.execute(stmt)
        return [tag for _, tag in result.all()]

    async def find_tags_for_articles(self, article_ids: Sequence[uuid.UUID]) -> dict[uuid.UUID, list[Tag]]:
        """Active tags of several articles in a single query, keyed by article id."""
        tags: dict[uuid.UUID, list[Tag]] = defaultdict(list)
        if not article_ids:
            return tags
        stmt = _linked_tags().where(ArticleTag.article_id.in_(article_ids))
        for article_id, tag in (await self.session.execute(stmt)).all():
            tags[article_id].append(tag)
        return tags

    async def find_link(self, article_id: uuid.UUID, tag_id: uuid.UUID) -> ArticleTag | None:
        """The link row, soft-deleted or not."""
        stmt = select(ArticleTag).where(
            ArticleTag.article_id == article_id, ArticleTag.tag_id == tag_id
        )
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def count_for_article(self, article_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(ArticleTag)
            .join(Tag, Tag.id == ArticleTag.tag_id)
            .where(
                ArticleTag.article_id == article_id,
                ArticleTag.deleted_at.is_(None),
                Tag.deleted_at.is_(None),
            )
        )
        return (await self.session.execute(stmt)).scalar_one()

    async def attach(self, article_id: uuid.UUID, tag_id: uuid.UUID) -> ArticleTag:
        link = await self.find_link(article_id, tag_id)
        if link is None:
            link = ArticleTag(article_id=article_id, tag_id=tag_id)
            self.session.add(link)
        else:
            link.deleted_at = None
        await self.session.flush()
        return link

    async def detach(self, link: ArticleTag) -> ArticleTag:
        link.deleted_at = datetime.now(timezone.utc)
        await self.session.flush()
        return link

    async def soft_delete_for_article(self, article_id: uuid.UUID) -> None:
        await self.session.execute(
            update(ArticleTag)
            .where(ArticleTag.article_id == article_id, ArticleTag.deleted_at.is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
        )
