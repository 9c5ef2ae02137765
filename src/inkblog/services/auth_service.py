import logging

from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.config_models import SecurityConfig
from inkblog.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from inkblog.core.jwt import decode_session_token, encode_session_token
from inkblog.core.security import get_password_hash, needs_rehash, verify_password
from inkblog.db.models import AdminUser
from inkblog.db.repositories import admin_repository
from inkblog.schemas.auth import CredentialsOut, CredentialsUpdate, LoginRequest

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 100


async def verify_credentials(db: AsyncSession, username: str, password: str) -> AdminUser | None:
    """Return the admin when the pair matches, upgrading a legacy hash on the way."""
    admin = await admin_repository.get_admin_by_username(db, username)
    if admin is None or not verify_password(password, admin.password_hash):
        return None

    if needs_rehash(admin.password_hash):
        await admin_repository.set_password_hash(db, admin, get_password_hash(password))
        await db.commit()
        logger.info("Upgraded legacy password hash for admin '%s'", admin.username)
    return admin


async def login(db: AsyncSession, payload: LoginRequest, security: SecurityConfig) -> str:
    """Check the credentials and return a signed session token."""
    if not payload.username or not payload.password:
        raise ValidationError("Username and password are required")

    admin = await verify_credentials(db, payload.username, payload.password)
    if admin is None:
        logger.warning("Failed admin login for username '%s'", payload.username)
        raise AuthenticationError("Invalid username or password")

    logger.info("Admin '%s' logged in", admin.username)
    return encode_session_token(admin.username, security)


async def authenticate_token(db: AsyncSession, token: str, security: SecurityConfig) -> str:
    """
    Validate a session token and return the admin username it belongs to.
    A token issued before the username changed no longer authenticates.
    """
    claims = decode_session_token(token, security)
    admin = await admin_repository.get_admin_user(db)
    if admin is None or admin.username != claims["sub"]:
        raise AuthenticationError("Invalid session")
    return admin.username


async def get_credentials(db: AsyncSession) -> CredentialsOut:
    admin = await admin_repository.get_admin_user(db)
    if admin is None:
        raise NotFoundError("Admin account not found")
    return CredentialsOut(username=admin.username)


def _validate_credentials(payload: CredentialsUpdate) -> tuple[str, str | None]:
    username = (payload.username or "").strip()
    if not MIN_USERNAME_LENGTH <= len(username) <= MAX_USERNAME_LENGTH:
        raise ValidationError(
            f"Username must be between {MIN_USERNAME_LENGTH} and {MAX_USERNAME_LENGTH} characters"
        )

    password = payload.password or None
    if password is not None and not MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be between {MIN_PASSWORD_LENGTH} and {MAX_PASSWORD_LENGTH} characters"
        )
    return username, password


async def update_credentials(db: AsyncSession, payload: CredentialsUpdate) -> CredentialsOut:
    """
    Change the admin username and, when given, the password.
    With no admin row yet a password is mandatory and the account is created.
    """
    username, password = _validate_credentials(payload)
    password_hash = get_password_hash(password) if password else None

    admin = await admin_repository.get_admin_user(db)
    if admin is None:
        if password_hash is None:
            raise ValidationError("Password is required")
        admin = await admin_repository.create_admin(db, username, password_hash)
    else:
        admin = await admin_repository.update_admin(db, admin, username, password_hash)

    await db.commit()
    return CredentialsOut(username=admin.username)
