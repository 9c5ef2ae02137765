from sqlalchemy import Column, String, Text

from ..database import Base


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Setting(key={self.key!r})>"


# Known keys and the values substituted when a key is missing or empty
DEFAULT_SETTINGS: dict[str, str] = {
    "blogTitle": "Blog",
    "blogSubtitle": "",
    "authorName": "",
    "authorBio": "",
    "authorEmail": "",
    "authorAvatar": "",
    "language": "en",
    "enableComments": "true",
    "enableLikes": "true",
    "enableViews": "true",
}
