# resto/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from resto.api.deps import CurrentUser, get_current_user, get_gateway, get_notifier, require_confirm_token
from resto.api.routers.checkout import to_checkout_out
from resto.data.database import get_db
from resto.domain.schemas import CheckoutOut, ConfirmOut, OrderOut
from resto.services.checkout_service import CheckoutService
from resto.services.notification_service import NotificationService
from resto.services.order_service import OrderService
from resto.services.payment_gateway import MidtransSnapGateway
from resto.services.payment_service import PaymentService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/{code}", response_model=OrderOut)
def get_order(
    code: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Receipt of one of the caller's orders.
    """
    svc = OrderService(db)
    return svc.get_order(code, user.id)


@router.post(
    "/{code}",
    response_model=ConfirmOut,
    response_model_exclude_none=True,
    dependencies=[Depends(require_confirm_token)],
)
def confirm_payment(
    code: str,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notifier),
):
    """
    Marks the order PAID and takes its items out of stock.
    Called by the cash register or the payment gateway callback; repeating it is harmless.
    """
    svc = PaymentService(db, notifier=notifier)
    result = svc.confirm_payment(code)
    if result.already:
        return {"ok": True, "already": True}
    return {"ok": True}


@router.post("/{code}/payment-token", response_model=CheckoutOut, response_model_exclude_none=True)
def resume_payment(
    code: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: MidtransSnapGateway = Depends(get_gateway),
    notifier: NotificationService = Depends(get_notifier),
):
    """
    New snap token for an order still AWAITING_PAYMENT.
    """
    svc = CheckoutService(db=db, gateway=gateway, notifier=notifier)
    return to_checkout_out(svc.resume_payment(user.id, code))
