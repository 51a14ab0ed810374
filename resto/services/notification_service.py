# resto/services/notification_service.py
from resto.celery_worker import celery_app
from resto.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_PLACED = "ORDER_PLACED"
ORDER_PAID = "ORDER_PAID"


class NotificationService:
    """
    Pushes order events to the celery worker (kitchen display / customer screen).
    Publishing is best effort: the order is already committed when we get here.
    """

    def notify(self, event: str, customer_id: str, code: str, queue_number: str | None = None):
        try:
            send_order_notification_task.delay(event, customer_id, code, queue_number)
        except Exception as e:
            logger.warning(f"Failed to publish {event} for order {code}: {e}")

    def order_placed(self, customer_id: str, code: str, queue_number: str):
        self.notify(ORDER_PLACED, customer_id, code, queue_number)

    def order_paid(self, customer_id: str, code: str, queue_number: str):
        self.notify(ORDER_PAID, customer_id, code, queue_number)


@celery_app.task(name="resto.services.notification_service.send_order_notification_task")
def send_order_notification_task(event: str, customer_id: str, code: str, queue_number: str | None = None):
    """
    In a real deployment this feeds the kitchen display and the customer's
    queue screen. For now it only logs.
    """
    logger.info(f"[NOTIFICATION] {event} customer={customer_id} order={code} queue={queue_number}")

    return {"event": event, "customer_id": customer_id, "code": code, "queue_number": queue_number, "status": "sent"}
