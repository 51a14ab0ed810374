#resto/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from resto.api.deps import CurrentUser, get_current_user
from resto.data.database import get_db
from resto.domain.schemas import CartItemIn, CartOut, OkOut
from resto.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("", response_model=CartOut)
def get_cart(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.get_cart(user.id)


@router.post("", response_model=OkOut)
def add_item(
    payload: CartItemIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.add_item(user.id, payload.product_id, payload.qty)
    return {"ok": True}


@router.delete("", response_model=OkOut)
def clear_cart(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.clear(user.id)
    return {"ok": True}
