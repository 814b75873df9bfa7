from .unit_of_work import UnitOfWork
from .clock import Clock
from .change_feed import ChangeFeed, ChangeEvent, ChangeType, Subscription
from .notification_service import NotificationService
from .pdf_service import PdfService
from .spreadsheet_service import SpreadsheetService

__all__ = [
    "UnitOfWork",
    "Clock",
    "ChangeFeed",
    "ChangeEvent",
    "ChangeType",
    "Subscription",
    "NotificationService",
    "PdfService",
    "SpreadsheetService",
]
