"""Paginated, filtered and searchable post listing."""

import logging
from typing import Optional

from blogcms.client.api import BlogApiClient
from blogcms.client.errors import ValidationError
from blogcms.config import settings
from blogcms.utils.validators import POST_STATUSES
from blogcms.schemas.post import PostPage

logger = logging.getLogger(__name__)

STATUS_FILTERS = ("all",) + POST_STATUSES


class PostCollectionQuery:
    """Holds the listing state. Changing a filter, search term or page size resets to page 1."""

    def __init__(self, api: BlogApiClient, page_size: Optional[int] = None):
        self.api = api
        self.page = 1
        self.page_size = page_size or settings.DEFAULT_PAGE_SIZE
        self.status_filter = "all"
        self.search_term = ""
        self.result: Optional[PostPage] = None
        self._generation = 0

    @staticmethod
    def _check(page: int, page_size: int, status_filter: str):
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if not 1 <= page_size <= settings.MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {settings.MAX_PAGE_SIZE}")
        if status_filter not in STATUS_FILTERS:
            raise ValidationError(f"Status filter must be one of: {', '.join(STATUS_FILTERS)}")

    def query(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        status_filter: str = "all",
        search_term: str = "",
    ) -> PostPage:
        page_size = page_size or settings.DEFAULT_PAGE_SIZE
        self._check(page, page_size, status_filter)
        return self.api.list_posts(
            page=page,
            page_size=page_size,
            status=status_filter,
            search=(search_term or "").strip() or None,
        )

    def refresh(self) -> PostPage:
        generation = self._generation
        result = self.query(self.page, self.page_size, self.status_filter, self.search_term)
        if generation == self._generation:
            self.result = result
        else:
            logger.debug("[client] discarding stale listing for page=%s", result.page)
        return result

    def go_to(self, page: int) -> PostPage:
        self._check(page, self.page_size, self.status_filter)
        self.page = page
        return self.refresh()

    def set_status_filter(self, status_filter: str) -> PostPage:
        self._check(1, self.page_size, status_filter)
        self.status_filter = status_filter
        self.page = 1
        return self.refresh()

    def set_search_term(self, search_term: str) -> PostPage:
        self.search_term = search_term or ""
        self.page = 1
        return self.refresh()

    def set_page_size(self, page_size: int) -> PostPage:
        self._check(1, page_size, self.status_filter)
        self.page_size = page_size
        self.page = 1
        return self.refresh()

    def abandon(self):
        self._generation += 1
        self.result = None
