from datetime import timedelta
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.change_feed import InMemoryChangeFeed
from src.adapter.services.clock import SystemClock
from src.adapter.services.notification_service import create_notification_service
from src.app.services.change_feed import ChangeFeed
from src.app.services.clock import Clock
from src.app.services.notification_service import NotificationService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# One feed per process; account watchers and write use cases share it
change_feed = InMemoryChangeFeed()

calendar_offset = timedelta(hours=ApplicationConfig.PH_UTC_OFFSET_HOURS)
credited_statuses = tuple(s.lower() for s in ApplicationConfig.LEDGER_CREDIT_STATUSES)


async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory() -> sessionmaker:
    """Sessions for long-lived consumers that reload more than once"""
    return AsyncSessionLocal


def get_change_feed() -> ChangeFeed:
    return change_feed


def get_clock() -> Clock:
    return SystemClock()


def get_notification_service() -> NotificationService:
    return create_notification_service(ApplicationConfig.PAYMENT_NOTIFICATION_WEBHOOK)
