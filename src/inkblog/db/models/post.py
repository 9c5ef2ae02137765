from sqlalchemy import Boolean, Column, Index, Integer, String, Text, text

from ..database import Base
from ..utils import iso_now, new_id

POST_INDEXES = (
    # Public listing: published posts by recency
    Index("ix_posts_published_created", "published", "createdAt"),
    # Category pages and category-scoped navigation
    Index("ix_posts_category_created", "category", "createdAt"),
)


class Post(Base):
    """SQLAlchemy model representing a blog post.

    Column names match the database files written by earlier versions of the
    blog (camelCase), so an existing ``blog.db`` keeps working.

    Attributes:
        id (str): Opaque unique identifier (UUID hex).
        title (str): Post title.
        content (str): Markdown body.
        category (str): Free-text label, empty string means uncategorized.
        keywords (str): Comma-separated free-text tags.
        published (bool): True if visible on the public site, False for drafts.
        views (int): View counter, only ever incremented.
        created_at (str): ISO-8601 creation timestamp (UTC), immutable.
        updated_at (str): ISO-8601 timestamp of the last admin edit (UTC).
    """

    __tablename__ = "posts"
    __table_args__ = POST_INDEXES

    id = Column(String, primary_key=True, default=new_id, doc="Unique post identifier")
    title = Column(Text, nullable=False, doc="Post title")
    content = Column(Text, nullable=False, doc="Markdown post content")
    category = Column(Text, nullable=False, default="", server_default="", doc="Category label")
    keywords = Column(Text, nullable=False, default="", server_default="", doc="Comma-separated keywords")
    published = Column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("1"),
        doc="Whether the post is visible on the public site",
    )
    views = Column(Integer, nullable=False, default=0, server_default=text("0"), doc="View counter")
    created_at = Column("createdAt", String, nullable=False, default=iso_now, doc="Creation timestamp")
    updated_at = Column(
        "updatedAt",
        String,
        nullable=False,
        default=iso_now,
        onupdate=iso_now,
        doc="Last modification timestamp",
    )

    def __repr__(self) -> str:
        title_value = getattr(self, "title", None) or ""
        title_repr = title_value[:30] + "..." if len(title_value) > 30 else title_value
        return f"<Post(id={self.id}, title={title_repr!r}, published={self.published})>"

