# resto/api/routers/checkout.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from resto.api.deps import CurrentUser, get_current_user, get_gateway, get_notifier
from resto.data.database import get_db
from resto.domain.schemas import CheckoutIn, CheckoutOut
from resto.services.checkout_service import CheckoutResult, CheckoutService
from resto.services.notification_service import NotificationService
from resto.services.payment_gateway import MidtransSnapGateway

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_service(db: Session, gateway: MidtransSnapGateway, notifier: NotificationService):
    return CheckoutService(db=db, gateway=gateway, notifier=notifier)


def to_checkout_out(result: CheckoutResult) -> dict:
    return {
        "order_id": result.order_id,
        "code": result.code,
        "mid": result.mid,
        "total": result.total,
        "payment": {"method": result.payment_method, "snap_token": result.snap_token},
    }


@router.post("", response_model=CheckoutOut, response_model_exclude_none=True)
def checkout(
    payload: CheckoutIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: MidtransSnapGateway = Depends(get_gateway),
    notifier: NotificationService = Depends(get_notifier),
):
    """
    Turns the caller's cart into an order.
    CASH is paid at the register, CASHLESS returns a snap token for the payment popup.
    """
    svc = get_service(db, gateway, notifier)
    result = svc.checkout(user.id, payload.dining_type, payload.payment_choice)
    return to_checkout_out(result)
