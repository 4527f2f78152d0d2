import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend.main import create_app


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}"


@pytest_asyncio.fixture
async def app(database_url):
    """Application with its lifespan entered, so tables exist and are seeded."""
    application = create_app(database_url)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client
