from .admin import AdminUser
from .comment import Comment
from .like import Like
from .post import Post
from .setting import DEFAULT_SETTINGS, Setting
from .view_log import ViewLog

__all__ = ["AdminUser", "Comment", "DEFAULT_SETTINGS", "Like", "Post", "Setting", "ViewLog"]
