import hashlib

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.core.config_models import SecurityConfig
from inkblog.core.exceptions import AuthenticationError, ValidationError
from inkblog.core.security import is_legacy_hash
from inkblog.db.models import DEFAULT_SETTINGS
from inkblog.db.repositories import admin_repository, settings_repository
from inkblog.schemas.auth import CredentialsUpdate, LoginRequest
from inkblog.services import auth_service
from tests.factories.auth import ADMIN_PASSWORD, ADMIN_USERNAME, TEST_SECRET_KEY


@pytest.mark.unit
@pytest.mark.anyio
async def test_settings_are_seeded_with_defaults(db_session: AsyncSession):
    assert await settings_repository.get_settings(db_session) == DEFAULT_SETTINGS


@pytest.mark.unit
@pytest.mark.anyio
async def test_update_settings_ignores_unknown_keys_and_defaults_empty_values(db_session: AsyncSession):
    updated = await settings_repository.update_settings(
        db_session, {"blogTitle": "My Blog", "authorName": "Sam", "favouriteColour": "blue"}
    )
    assert updated["blogTitle"] == "My Blog"
    assert updated["authorName"] == "Sam"
    assert "favouriteColour" not in updated

    updated = await settings_repository.update_settings(db_session, {"blogTitle": None, "language": ""})
    assert updated["blogTitle"] == DEFAULT_SETTINGS["blogTitle"]
    assert updated["language"] == DEFAULT_SETTINGS["language"]
    assert updated["authorName"] == "Sam"


@pytest.mark.unit
@pytest.mark.anyio
async def test_default_admin_is_seeded_with_salted_hash(db_session: AsyncSession):
    admin = await admin_repository.get_admin_user(db_session)

    assert admin is not None
    assert admin.username == ADMIN_USERNAME
    assert not is_legacy_hash(admin.password_hash)
    assert await auth_service.verify_credentials(db_session, ADMIN_USERNAME, ADMIN_PASSWORD) is not None
    assert await auth_service.verify_credentials(db_session, ADMIN_USERNAME, "wrong") is None
    assert await auth_service.verify_credentials(db_session, "nobody", ADMIN_PASSWORD) is None


@pytest.mark.unit
@pytest.mark.anyio
async def test_legacy_hash_is_upgraded_on_login(db_session: AsyncSession):
    admin = await admin_repository.get_admin_user(db_session)
    await admin_repository.set_password_hash(db_session, admin, hashlib.sha256(b"legacy-pass").hexdigest())
    await db_session.commit()

    assert await auth_service.verify_credentials(db_session, ADMIN_USERNAME, "legacy-pass") is not None

    admin = await admin_repository.get_admin_user(db_session)
    assert not is_legacy_hash(admin.password_hash)
    assert await auth_service.verify_credentials(db_session, ADMIN_USERNAME, "legacy-pass") is not None


@pytest.mark.unit
@pytest.mark.anyio
async def test_login_and_token_bound_to_current_username(db_session: AsyncSession):
    security = SecurityConfig(secret_key=TEST_SECRET_KEY)

    with pytest.raises(ValidationError):
        await auth_service.login(db_session, LoginRequest(username="", password=""), security)
    with pytest.raises(AuthenticationError):
        await auth_service.login(db_session, LoginRequest(username=ADMIN_USERNAME, password="bad"), security)

    token = await auth_service.login(
        db_session, LoginRequest(username=ADMIN_USERNAME, password=ADMIN_PASSWORD), security
    )
    assert await auth_service.authenticate_token(db_session, token, security) == ADMIN_USERNAME

    await auth_service.update_credentials(db_session, CredentialsUpdate(username="editor"))
    with pytest.raises(AuthenticationError):
        await auth_service.authenticate_token(db_session, token, security)


@pytest.mark.unit
@pytest.mark.anyio
async def test_update_credentials_rules(db_session: AsyncSession):
    with pytest.raises(ValidationError):
        await auth_service.update_credentials(db_session, CredentialsUpdate(username="ab"))
    with pytest.raises(ValidationError):
        await auth_service.update_credentials(db_session, CredentialsUpdate(username="valid", password="123"))

    # Username only: password unchanged
    out = await auth_service.update_credentials(db_session, CredentialsUpdate(username="writer"))
    assert out.username == "writer"
    assert await auth_service.verify_credentials(db_session, "writer", ADMIN_PASSWORD) is not None

    out = await auth_service.update_credentials(db_session, CredentialsUpdate(username="writer", password="newpass1"))
    assert await auth_service.verify_credentials(db_session, "writer", "newpass1") is not None
    assert await auth_service.verify_credentials(db_session, "writer", ADMIN_PASSWORD) is None


@pytest.mark.unit
@pytest.mark.anyio
async def test_update_credentials_without_admin_requires_password(db_session: AsyncSession):
    admin = await admin_repository.get_admin_user(db_session)
    await db_session.delete(admin)
    await db_session.commit()

    with pytest.raises(ValidationError):
        await auth_service.update_credentials(db_session, CredentialsUpdate(username="fresh"))

    out = await auth_service.update_credentials(db_session, CredentialsUpdate(username="fresh", password="secret1"))
    assert out.username == "fresh"
    assert await auth_service.verify_credentials(db_session, "fresh", "secret1") is not None
