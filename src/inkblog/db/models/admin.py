from sqlalchemy import Column, Integer, String

from ..database import Base
from ..utils import iso_now

USERNAME_MAX_LENGTH = 50


class AdminUser(Base):
    """The single admin account.

    Attributes:
        id (int): Row identifier.
        username (str): Login name, unique.
        password_hash (str): Werkzeug scrypt hash (or a legacy SHA-256 digest).
        created_at (str): ISO-8601 creation timestamp (UTC).
        updated_at (str): ISO-8601 timestamp of the last credentials change.
    """

    __tablename__ = "admin"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(USERNAME_MAX_LENGTH), unique=True, nullable=False)
    password_hash = Column("passwordHash", String, nullable=False)
    created_at = Column("createdAt", String, nullable=False, default=iso_now)
    updated_at = Column("updatedAt", String, nullable=False, default=iso_now, onupdate=iso_now)

    def __repr__(self) -> str:
        return f"<AdminUser(id={self.id}, username={self.username!r})>"
