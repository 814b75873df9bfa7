from .unit_of_work import SqlAlchemyUnitOfWork
from .clock import SystemClock, FixedClock
from .change_feed import InMemoryChangeFeed
from .notification_service import (
    LoggingNotificationService,
    WebhookNotificationService,
    CompositeNotificationService,
    create_notification_service,
)
from .pdf_service import ReportLabPdfService
from .spreadsheet_service import OpenpyxlSpreadsheetService

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SystemClock",
    "FixedClock",
    "InMemoryChangeFeed",
    "LoggingNotificationService",
    "WebhookNotificationService",
    "CompositeNotificationService",
    "create_notification_service",
    "ReportLabPdfService",
    "OpenpyxlSpreadsheetService",
]
