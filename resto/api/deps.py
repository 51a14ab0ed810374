# resto/api/deps.py
from dataclasses import dataclass
import hmac

from fastapi import Header

from resto.domain.errors import ConfirmationForbidden, Unauthenticated
from resto.services.notification_service import NotificationService
from resto.services.payment_gateway import MidtransSnapGateway
from resto.utils.settings import PAYMENT_CONFIRM_TOKEN


@dataclass(frozen=True)
class CurrentUser:
    id: str


def get_current_user(x_customer_id: str | None = Header(default=None)) -> CurrentUser:
    """
    Identity comes from the auth proxy in front of the api as an opaque id.
    Swap this dependency to plug in another session mechanism.
    """
    if not x_customer_id or not x_customer_id.strip():
        raise Unauthenticated()
    return CurrentUser(id=x_customer_id.strip())


def get_gateway() -> MidtransSnapGateway:
    return MidtransSnapGateway()


def get_notifier() -> NotificationService:
    return NotificationService()


def require_confirm_token(x_confirm_token: str | None = Header(default=None)) -> None:
    # unset token keeps the endpoint open (cash register on the local network)
    if not PAYMENT_CONFIRM_TOKEN:
        return
    if not x_confirm_token or not hmac.compare_digest(x_confirm_token, PAYMENT_CONFIRM_TOKEN):
        raise ConfirmationForbidden()
