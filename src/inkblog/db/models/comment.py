from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text

from ..database import Base
from ..utils import iso_now, new_id

COMMENT_INDEXES = (
    Index("ix_comments_post_created", "postId", "createdAt"),
    # Daily per-device rate limit lookups
    Index("ix_comments_device_created", "deviceId", "createdAt"),
)


class Comment(Base):
    """A reader comment. ``floor`` is its 1-based position in the post's thread."""

    __tablename__ = "comments"
    __table_args__ = COMMENT_INDEXES

    id = Column(String, primary_key=True, default=new_id)
    post_id = Column("postId", String, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    floor = Column(Integer, nullable=False)
    device_id = Column("deviceId", String, nullable=False)
    created_at = Column("createdAt", String, nullable=False, default=iso_now)

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id}, floor={self.floor})>"
