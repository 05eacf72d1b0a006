"""Pydantic schemas for post and image request/response contracts."""

from pydantic import BaseModel, field_validator
from typing import List, Literal, Optional
from datetime import datetime

from blogcms.schemas.user import UserBrief
from blogcms.utils import validators

PostStatus = Literal["draft", "published"]
StatusFilter = Literal["all", "draft", "published"]


class PostImageOut(BaseModel):
    image_id: int
    name: str
    url: str
    public_id: str
    width: int
    height: int

    model_config = {"from_attributes": True}


class PostCreate(BaseModel):
    title: str
    description: str = ""
    content: str = ""

    @field_validator("title")
    @classmethod
    def _title(cls, v):
        return validators.clean_title(v)

    @field_validator("description")
    @classmethod
    def _description(cls, v):
        return validators.clean_description(v)

    @field_validator("content")
    @classmethod
    def _content(cls, v):
        return validators.clean_content(v)


class PostUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    status: Optional[PostStatus] = None

    @field_validator("title")
    @classmethod
    def _title(cls, v):
        return validators.clean_title(v)

    @field_validator("description")
    @classmethod
    def _description(cls, v):
        return validators.clean_description(v)

    @field_validator("content")
    @classmethod
    def _content(cls, v):
        return validators.clean_content(v)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v):
        if v is None:
            raise ValueError("Status must not be null")
        return v


class PostOut(BaseModel):
    post_id: int
    title: str
    description: str
    content: str
    status: PostStatus
    images: List[PostImageOut] = []
    author: UserBrief
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PostPage(BaseModel):
    items: List[PostOut]
    total: int
    page: int
    page_size: int
    total_pages: int


class ImageRenameRequest(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return validators.clean_image_name(v)
