# resto/domain/errors.py
from typing import Any, Dict


class OrderingError(Exception):
    """
    Base class for every failure the api reports to the caller.
    status_code and message end up in the json body {"error": message, **extra}.
    """

    status_code = 500
    message = "Terjadi kesalahan pada server."

    def __init__(self, message: str | None = None, **extra: Any):
        self.message = message or self.message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)


class Unauthenticated(OrderingError):
    status_code = 401
    message = "Unauthorized"


class ConfirmationForbidden(OrderingError):
    status_code = 403
    message = "Forbidden"


class OrderNotFound(OrderingError):
    status_code = 404
    message = "Not found"


class InvalidPayload(OrderingError):
    status_code = 422
    message = "Payload tidak valid"


#business preconditions, always raised before any write
class EmptyCart(OrderingError):
    status_code = 409
    message = "Keranjang kosong."


class ProductUnavailable(OrderingError):
    status_code = 409
    message = "Produk tidak tersedia."

    def __init__(self, product_name: str | None = None, **extra: Any):
        if product_name:
            super().__init__(f"Produk {product_name} tidak tersedia.", **extra)
        else:
            super().__init__(**extra)


class InsufficientStock(OrderingError):
    status_code = 409
    message = "Stok tidak mencukupi."

    def __init__(self, product_name: str | None = None, **extra: Any):
        if product_name:
            super().__init__(f"Stok {product_name} tidak mencukupi.", **extra)
        else:
            super().__init__(**extra)


class OrderAlreadyPaid(OrderingError):
    status_code = 409
    message = "Pesanan sudah dibayar."


class CashOrder(OrderingError):
    """Online payment requested for an order placed to be paid at the register."""

    status_code = 409
    message = "Pesanan ini dibayar tunai di kasir."


class TransientConflict(OrderingError):
    """Concurrent write lost a race (order code taken, cart changed mid-checkout)."""

    status_code = 409
    message = "Pesanan sedang ramai, silakan coba lagi."


class GatewayMisconfigured(OrderingError):
    status_code = 500
    message = "MIDTRANS_SERVER_KEY tidak dikonfigurasi."


class GatewayUnavailable(OrderingError):
    status_code = 502
    message = "Gagal menghubungi payment gateway."


class InternalError(OrderingError):
    status_code = 500
    message = "Terjadi kesalahan pada server."
