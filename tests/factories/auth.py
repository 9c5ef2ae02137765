from httpx import AsyncClient

TEST_SECRET_KEY = "test-secret-key-for-inkblog-suite-0123456789"
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "123456"


async def login(client: AsyncClient, username: str = ADMIN_USERNAME, password: str = ADMIN_PASSWORD):
    return await client.post("/api/auth/login", json={"username": username, "password": password})
