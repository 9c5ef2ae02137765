from .base import CamelModel


class LikeToggle(CamelModel):
    device_id: str | None = None


class LikeStatus(CamelModel):
    count: int
    liked: bool
