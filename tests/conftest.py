from collections.abc import AsyncGenerator

from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from inkblog.app import create_app
from inkblog.core.config import Settings
from inkblog.core.config_models import BlogConfig, DatabaseConfig, SecurityConfig
from inkblog.db.database import Database
from tests.factories.auth import ADMIN_PASSWORD, ADMIN_USERNAME, TEST_SECRET_KEY, login

TEST_BASE_URL = "http://testserver"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Align anyio_backend scope with anyio plugin expectations."""
    return "asyncio"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database file in tmp_path."""
    return Settings(
        environment="development",
        database=DatabaseConfig(path=str(tmp_path / "blog.db")),
        security=SecurityConfig(secret_key=TEST_SECRET_KEY, cookie_secure=False),
        blog=BlogConfig(
            base_url=TEST_BASE_URL,
            default_admin_username=ADMIN_USERNAME,
            default_admin_password=ADMIN_PASSWORD,
        ),
    )


@pytest.fixture
async def database(settings: Settings) -> AsyncGenerator[Database]:
    db = Database(settings.database, settings.blog)
    await db.open()
    yield db
    await db.close()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession]:
    """A session on a freshly migrated and seeded database."""
    async with database.session() as session:
        yield session


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    async with LifespanManager(app) as manager:
        transport = ASGITransport(app=manager.app)
        async with AsyncClient(transport=transport, base_url=TEST_BASE_URL) as ac:
            yield ac


@pytest.fixture
async def admin_client(client: AsyncClient) -> AsyncClient:
    """Client holding a valid admin session cookie."""
    resp = await login(client)
    assert resp.status_code == 200, resp.text
    return client
