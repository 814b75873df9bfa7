import pytest_asyncio
from datetime import datetime, timezone
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.change_feed import InMemoryChangeFeed
from src.adapter.services.clock import FixedClock
from src.adapter.services.notification_service import LoggingNotificationService
from src.depends import get_change_feed, get_clock, get_notification_service, get_session

# 2024-03-15 12:00 in Manila
NOW = datetime(2024, 3, 15, 4, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create a fresh in-memory database per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def clock():
    return FixedClock(NOW)


@pytest_asyncio.fixture
def change_feed():
    return InMemoryChangeFeed()


@pytest_asyncio.fixture
async def client(db_session, clock, change_feed):
    """Create test client with session, clock and change feed overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_change_feed] = lambda: change_feed
    app.dependency_overrides[get_notification_service] = LoggingNotificationService

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
