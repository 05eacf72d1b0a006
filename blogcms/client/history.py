"""Read-only view over a post's revision history."""

from typing import List

from blogcms.client.api import BlogApiClient
from blogcms.schemas.history import PostHistoryOut

TRACKED_SECTIONS = ("title", "description", "content", "images")


class HistoryRecorder:
    def __init__(self, api: BlogApiClient):
        self.api = api

    def list(self, post_id: int, newest_first: bool = False) -> List[PostHistoryOut]:
        """Entries for ``post_id`` ordered by version number. Deleted posts keep theirs."""
        return self.api.list_history(post_id, newest_first=newest_first)

    @staticmethod
    def present_sections(entry: PostHistoryOut) -> List[str]:
        sections = []
        for name in TRACKED_SECTIONS:
            value = getattr(entry, name)
            if isinstance(value, str):
                value = value.strip()
            if value:
                sections.append(name)
        return sections
