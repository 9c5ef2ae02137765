from sqlalchemy import Column, ForeignKey, String

from ..database import Base
from ..utils import iso_now


class Like(Base):
    """One like per (post, device); the row's existence is the liked state."""

    __tablename__ = "likes"

    post_id = Column("postId", String, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    device_id = Column("deviceId", String, primary_key=True)
    created_at = Column("createdAt", String, nullable=False, default=iso_now)

    def __repr__(self) -> str:
        return f"<Like(post_id={self.post_id}, device_id={self.device_id})>"
