from sqlalchemy import Column, ForeignKey, Index, Integer, String

from ..database import Base
from ..utils import iso_now


class ViewLog(Base):
    """One row per counted view; feeds the per-day dashboard numbers."""

    __tablename__ = "views_log"
    __table_args__ = (Index("ix_views_log_created", "createdAt"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column("postId", String, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column("createdAt", String, nullable=False, default=iso_now)
