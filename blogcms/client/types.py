"""Client-side value types: local image files, staged attachments and post patches."""

import mimetypes
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel


class ImageFile(BaseModel):
    filename: str
    content: bytes
    content_type: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(filename=path.name, content=path.read_bytes(), content_type=content_type)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def media_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or "application/octet-stream"


class PendingAttachment(BaseModel):
    """An image staged locally and not yet confirmed by the backend.

    ``pending_id`` is generated at stage time and is unrelated to the
    ``image_id`` the backend assigns on commit.
    """

    pending_id: str
    file: ImageFile
    name: str
    preview_ref: str


class StageRejection(BaseModel):
    filename: str
    reason: str

    model_config = {"frozen": True}


class PostPatch(BaseModel):
    """Partial post update. Only fields explicitly set are sent."""

    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    status: Optional[str] = None

    model_config = {"extra": "forbid"}

    def fields(self) -> dict:
        return self.model_dump(exclude_unset=True)
