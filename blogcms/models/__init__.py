"""SQLAlchemy model package initialization."""

from blogcms.models.user import User
from blogcms.models.post import Post, PostImage
from blogcms.models.post_history import PostHistory

__all__ = [
    "User",
    "Post", "PostImage",
    "PostHistory",
]
