import os

# Must be set before brandsite is imported: the engine is built at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_brandsite.db")
os.environ.setdefault("AUTH_MODE", "claims")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from brandsite.main import app
from brandsite.core.config import settings
from brandsite.core.database import Base, get_db
from brandsite.modules.config import models  # noqa: F401
from brandsite.modules.config.store import ConfigStore, UserStore
from brandsite.modules.site.client import SiteApiClient

BRAND_KEY = settings.BRAND_KEY

ADMIN_HEADERS = {
    settings.CLAIMS_SUBJECT_HEADER: "admin-sub",
    settings.CLAIMS_EMAIL_HEADER: "admin@example.com",
    settings.CLAIMS_GROUPS_HEADER: settings.ADMIN_GROUP,
}

USER_HEADERS = {
    settings.CLAIMS_SUBJECT_HEADER: "user-sub",
    settings.CLAIMS_EMAIL_HEADER: "user@example.com",
}


def claims_headers(subject: str, email: str | None = None, groups: str | None = None) -> dict:
    """Gateway claim headers for an arbitrary caller."""
    headers = {settings.CLAIMS_SUBJECT_HEADER: subject}
    if email:
        headers[settings.CLAIMS_EMAIL_HEADER] = email
    if groups:
        headers[settings.CLAIMS_GROUPS_HEADER] = groups
    return headers


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Fresh SQLite database per test; one connection per session."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path}/brandsite.db",
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(session_factory):
    """A session for seeding and inspecting the database directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def config_store(test_db: AsyncSession) -> ConfigStore:
    return ConfigStore(test_db)


@pytest_asyncio.fixture
async def user_store(test_db: AsyncSession) -> UserStore:
    return UserStore(test_db)


@pytest_asyncio.fixture
async def client(session_factory):
    """Create test client with overridden database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient):
    client.headers.update(ADMIN_HEADERS)
    return client


@pytest_asyncio.fixture
async def user_client(client: AsyncClient):
    client.headers.update(USER_HEADERS)
    return client


@pytest_asyncio.fixture
async def site_client_factory(client):
    """Build site API clients that talk to the test app in-process."""
    created = []

    def factory(headers: dict | None = None) -> SiteApiClient:
        site_client = SiteApiClient(
            base_url="http://test",
            headers=headers,
            transport=ASGITransport(app=app),
        )
        created.append(site_client)
        return site_client

    yield factory

    for site_client in created:
        await site_client.close()


@pytest_asyncio.fixture
async def seeded(config_store: ConfigStore):
    """Brand, one project with two pages, and a second project."""
    await config_store.put_item({
        "ProjectKey": BRAND_KEY,
        "PageKey": "Config",
        "Parent": "SirSluginston Co",
        "BrandColor": "#D2691E",
        "ProjectColor": "#4B3A78",
        "AccentColor": "#FFD700",
        "LightColor": "#FFFFF0",
        "DarkColor": "#2F2F2F",
        "FontSans": "Roboto",
        "FontSerif": "Lora",
        "DefaultTheme": "dark",
        "Links": [{"name": "GitHub", "url": "https://github.com/sirsluginston", "type": "social"}],
    })
    await config_store.put_item({
        "ProjectKey": "Alpha",
        "PageKey": "Config",
        "ProjectID": "2",
        "ProjectTitle": "Alpha",
        "ProjectStatus": "Active",
        "ProjectColor": "#123456",
        "ProjectTags": ["web"],
    })
    await config_store.put_item({
        "ProjectKey": "Alpha",
        "PageKey": "Home",
        "PageTitle": "Alpha Home",
        "Route": "/",
        "NavbarOrder": 2,
        "ContentLayout": {
            "type": "PageContainer",
            "children": [
                {"type": "Card", "props": {"title": "Welcome"},
                 "children": [{"type": "text", "content": "hi"}]},
                {"type": "Bogus"},
            ],
        },
    })
    await config_store.put_item({
        "ProjectKey": "Alpha",
        "PageKey": "About",
        "PageTitle": "About",
        "Route": "/about",
        "NavbarOrder": 1,
        "NavbarLabel": "About us",
    })
    await config_store.put_item({
        "ProjectKey": "Beta",
        "PageKey": "Config",
        "ProjectID": "1",
        "ProjectTitle": "Beta",
        "ProjectStatus": "Coming Soon",
        "ProjectTags": "not-a-list",
    })
