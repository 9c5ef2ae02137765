from pydantic import Field

from .base import CamelModel


class PostOut(CamelModel):
    id: str
    title: str
    content: str
    category: str = ""
    keywords: str = ""
    published: bool = True
    views: int = 0
    created_at: str
    updated_at: str


class PostSummary(CamelModel):
    """Minimal reference used for previous/next navigation."""

    id: str
    title: str
    category: str = ""
    created_at: str


class PostCreate(CamelModel):
    # Field rules are enforced by core.validation in the service layer
    title: str | None = None
    content: str | None = None
    category: str | None = None
    keywords: str | None = None
    published: bool = True


class PostUpdate(CamelModel):
    """Partial update: only the fields present in the request body are applied."""

    title: str | None = None
    content: str | None = None
    category: str | None = None
    keywords: str | None = None
    published: bool | None = None


class PostEnvelope(CamelModel):
    post: PostOut


class PostListResponse(CamelModel):
    posts: list[PostOut]
    total: int = Field(..., ge=0)
    page: int | None = None
    page_size: int | None = None


class AdjacentPostsResponse(CamelModel):
    prev: PostSummary | None = None
    next: PostSummary | None = None


class SearchResponse(CamelModel):
    posts: list[PostOut]


class CategoriesResponse(CamelModel):
    categories: list[str]
