"""Notification Service Interface

Defines the contract for telling customers about payment reviews.
"""

from abc import ABC, abstractmethod
from src.domain.payment import Payment


class NotificationService(ABC):
    """
    Abstract notification service for customer messages

    Implementations can send notifications via:
    - Webhook (HTTP POST to the mailer)
    - Email
    - SMS
    - etc.
    """

    @abstractmethod
    async def send_payment_reviewed(self, payment: Payment) -> bool:
        """
        Notify the paying customer that a payment was received or rejected

        Args:
            payment: Reviewed payment (status is received or rejected)

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
