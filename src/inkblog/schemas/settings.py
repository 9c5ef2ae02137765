from pydantic import field_validator

from .base import CamelModel


class SettingsOut(CamelModel):
    blog_title: str
    blog_subtitle: str
    author_name: str
    author_bio: str
    author_email: str
    author_avatar: str
    language: str
    enable_comments: str
    enable_likes: str
    enable_views: str


class SettingsUpdate(CamelModel):
    blog_title: str | None = None
    blog_subtitle: str | None = None
    author_name: str | None = None
    author_bio: str | None = None
    author_email: str | None = None
    author_avatar: str | None = None
    language: str | None = None
    enable_comments: str | None = None
    enable_likes: str | None = None
    enable_views: str | None = None

    @field_validator("enable_comments", "enable_likes", "enable_views", mode="before")
    @classmethod
    def _flag_to_text(cls, value: object) -> object:
        # Flags are stored as the strings "true"/"false"
        if isinstance(value, bool):
            return "true" if value else "false"
        return value
