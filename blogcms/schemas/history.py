"""Pydantic schemas for post revision history responses."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from blogcms.schemas.post import PostImageOut
from blogcms.schemas.user import UserBrief

ChangeType = Literal["created", "updated"]


class PostHistoryOut(BaseModel):
    history_id: int
    post_id: int
    version_no: int
    change_type: ChangeType
    title: str
    description: str = ""
    content: str = ""
    status: Optional[str] = None
    images: List[PostImageOut] = []
    changed_by: UserBrief
    changed_at: datetime
