"""Customer notifications for reviewed payments

The message text is built once (build_review_message) and delivered by one
or more channels: the application log and an HTTP mailer webhook.
"""

import logging
from dataclasses import dataclass
from typing import Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.domain.payment import Payment, PaymentStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentReviewMessage:
    """Subject and body sent to the paying customer"""

    payment_id: str
    customer_id: Optional[str]
    status: str
    subject: str
    body: str


def build_review_message(payment: Payment) -> PaymentReviewMessage:
    status = getattr(payment.status, "value", payment.status)
    amount = f"PHP {payment.amount:,.2f}"
    reference = payment.order_id.split("-")[0].upper()

    if status == PaymentStatus.RECEIVED.value:
        subject = f"Payment received for order {reference}"
        body = (
            f"We received your {payment.method or 'cash'} payment of {amount}. "
            f"It now appears on the ledger of order {reference}."
        )
    else:
        subject = f"Payment for order {reference} was not accepted"
        body = (
            f"Your {payment.method or 'cash'} payment of {amount} could not be confirmed. "
            f"Please contact us or submit a new payment slip."
        )

    return PaymentReviewMessage(
        payment_id=payment.id,
        customer_id=payment.customer_id,
        status=status,
        subject=subject,
        body=body,
    )


class LoggingNotificationService(NotificationService):
    """
    Writes the customer message to the log

    Used in development and alongside real channels. Nothing reaches the
    customer, so it always reports False.
    """

    async def send_payment_reviewed(self, payment: Payment) -> bool:
        message = build_review_message(payment)
        logger.info(
            f"[{message.status.upper()}] payment={message.payment_id} "
            f"customer={message.customer_id}: {message.subject}"
        )
        return False


class WebhookNotificationService(NotificationService):
    """
    Posts the customer message to a mailer webhook

    The mailer resolves the customer's e-mail address from customer_id.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Args:
            webhook_url: Mailer endpoint receiving the JSON message
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_payment_reviewed(self, payment: Payment) -> bool:
        """
        POST the message for a reviewed payment

        Returns:
            True on a 2xx answer, False on any HTTP or transport failure
        """
        message = build_review_message(payment)
        payload = {
            "type": f"payment_{message.status}",
            "payment_id": message.payment_id,
            "order_id": payment.order_id,
            "customer_id": message.customer_id,
            "amount": str(payment.amount),
            "received_at": payment.received_at.isoformat() if payment.received_at else None,
            "received_by": payment.received_by,
            "subject": message.subject,
            "body": message.body,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Mailer webhook failed for payment {payment.id}: {e}")
            return False

        logger.info(f"Mailer notified about payment {payment.id}")
        return True


class CompositeNotificationService(NotificationService):
    """Fans a message out to several channels; True if any channel reached the customer"""

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_payment_reviewed(self, payment: Payment) -> bool:
        delivered = False
        for service in self.services:
            try:
                delivered = await service.send_payment_reviewed(payment) or delivered
            except Exception as e:
                logger.error(f"{type(service).__name__} could not notify about payment {payment.id}: {e}")
        return delivered


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """
    Log-only service, or log + mailer webhook when a URL is configured

    Args:
        webhook_url: PAYMENT_NOTIFICATION_WEBHOOK from config
    """
    if not webhook_url:
        return LoggingNotificationService()
    return CompositeNotificationService(
        [LoggingNotificationService(), WebhookNotificationService(webhook_url)]
    )
