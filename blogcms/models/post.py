"""SQLAlchemy models for posts and their attached images."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from blogcms.config import settings
from blogcms.database import Base
from blogcms.utils.validators import POST_STATUSES  # noqa: F401 - re-exported


class Post(Base):
    __tablename__ = "post"

    post_id = Column(Integer, primary_key=True, autoincrement=True)
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    title = Column(String(settings.TITLE_MAX_LENGTH), nullable=False)  # sized with the title rule
    description = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="draft")  # draft/published
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    author = relationship("User", back_populates="posts")
    images = relationship(
        "PostImage",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostImage.position",
    )

    __table_args__ = (
        Index("idx_post_status_created", "status", "created_at"),
        # ids are never reused, history rows of deleted posts keep pointing at them
        {"sqlite_autoincrement": True},
    )


class PostImage(Base):
    __tablename__ = "post_image"

    image_id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("post.post_id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    url = Column(String(500), nullable=False)
    public_id = Column(String(500), nullable=False)  # storage key relative to UPLOAD_DIR
    width = Column(Integer, nullable=False)
    height = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())

    post = relationship("Post", back_populates="images")

    __table_args__ = (
        Index("idx_post_image_post", "post_id", "position"),
    )
