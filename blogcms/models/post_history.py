"""SQLAlchemy model for the append-only post revision log."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index

from blogcms.database import Base
from blogcms.utils.helpers import utcnow


class PostHistory(Base):
    __tablename__ = "post_history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    # Plain column, not a foreign key: entries outlive the post they describe.
    post_id = Column(Integer, nullable=False)
    version_no = Column(Integer, nullable=False)
    change_type = Column(String(20), nullable=False)  # created/updated
    snapshot = Column(Text, nullable=False)  # JSON string
    changed_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    changed_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_post_history_post", "post_id", "version_no", unique=True),
    )
