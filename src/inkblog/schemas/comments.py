from .base import CamelModel


class CommentOut(CamelModel):
    id: str
    post_id: str
    content: str
    floor: int
    device_id: str
    created_at: str


class CommentCreate(CamelModel):
    content: str | None = None
    device_id: str | None = None


class CommentEnvelope(CamelModel):
    comment: CommentOut


class CommentListResponse(CamelModel):
    comments: list[CommentOut]
    count: int
