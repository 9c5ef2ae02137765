from .base import CamelModel
from .comments import CommentOut


class AdminCommentOut(CommentOut):
    post_title: str


class AdminCommentListResponse(CamelModel):
    comments: list[AdminCommentOut]
    total: int
    page: int
    page_size: int


class LikedPostOut(CamelModel):
    post_id: str
    title: str
    likes: int
    latest_like_at: str


class AdminLikeListResponse(CamelModel):
    items: list[LikedPostOut]
    total: int
    page: int
    page_size: int


class StatsOverview(CamelModel):
    posts: int
    views: int
    likes: int
    comments: int


class DayStats(StatsOverview):
    date: str


class TopViewedPost(CamelModel):
    post_id: str
    title: str
    views: int
    latest_view_at: str


class StatsResponse(CamelModel):
    overview: StatsOverview
    day: DayStats
    views_top: list[TopViewedPost]
    recent_comments: list[AdminCommentOut]
