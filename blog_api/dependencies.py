from fastapi import Query

from blog_api.config import settings

# Keeps the SQL OFFSET inside a 64-bit integer for any allowed limit.
MAX_PAGE = 1_000_000


class PaginationParams:
    """
    Reusable FastAPI dependency that parses pagination query parameters.

    Usage in a router::

        @router.get("")
        async def list_articles(pagination: PaginationParams = Depends()):
            ...

    Attributes
    ----------
    page:
        1-based page number, between 1 and ``MAX_PAGE``.
    limit:
        Items per page, clamped to ``settings.MAX_PAGE_SIZE`` regardless of
        the value supplied by the caller.
    offset:
        Computed SQL OFFSET derived from *page* and *limit*.
    """

    def __init__(
        self,
        page: int = Query(1, ge=1, le=MAX_PAGE, description="Page number (1-based)."),
        limit: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            ge=1,
            description="Number of items returned per page.",
        ),
    ) -> None:
        self.page = page
        self.limit = min(limit, settings.MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
