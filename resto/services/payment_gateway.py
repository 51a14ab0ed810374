# resto/services/payment_gateway.py
import requests
from requests import RequestException

from resto.domain.errors import GatewayMisconfigured, GatewayUnavailable
from resto.utils.retry import gateway_retry
from resto.utils.settings import (
    MIDTRANS_SERVER_KEY,
    MIDTRANS_IS_PRODUCTION,
    MIDTRANS_BASE_URL,
    GATEWAY_TIMEOUT_SECONDS,
)
from resto.utils.logging import get_logger

logger = get_logger(__name__)

SANDBOX_URL = "https://app.sandbox.midtrans.com"
PRODUCTION_URL = "https://app.midtrans.com"


class MidtransSnapGateway:
    """
    Client for Midtrans Snap: creates a payment session and returns the snap
    token the browser uses to open the payment popup.
    """

    def __init__(
        self,
        server_key: str | None = None,
        is_production: bool | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        self.server_key = MIDTRANS_SERVER_KEY if server_key is None else server_key
        production = MIDTRANS_IS_PRODUCTION if is_production is None else is_production
        default_url = PRODUCTION_URL if production else SANDBOX_URL
        self.base_url = (base_url or MIDTRANS_BASE_URL or default_url).rstrip("/")
        self.timeout = GATEWAY_TIMEOUT_SECONDS if timeout is None else timeout

    def create_transaction_token(self, transaction_id: str, amount: int, order_id: str, code: str) -> str:
        if not self.server_key:
            raise GatewayMisconfigured(orderId=order_id, code=code)

        payload = {
            "transaction_details": {
                "order_id": transaction_id,
                "gross_amount": amount,
            },
            "credit_card": {"secure": True},
            "custom_field1": order_id,
            "custom_field2": code,
        }

        try:
            data = self._post_transaction(payload)
        except RequestException as e:
            logger.error(f"[Order: {code}] Midtrans request failed: {e}")
            raise GatewayUnavailable(orderId=order_id, code=code) from e

        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            logger.error(f"[Order: {code}] Midtrans returned no token: {data}")
            raise GatewayUnavailable(orderId=order_id, code=code)

        logger.info(f"[Order: {code}] Snap token created for {transaction_id}")
        return token

    @gateway_retry()
    def _post_transaction(self, payload: dict) -> dict:
        url = f"{self.base_url}/snap/v1/transactions"
        logger.info(f"MidtransSnapGateway POST {url}")

        # basic auth: server key as username, empty password
        resp = requests.post(
            url,
            json=payload,
            auth=(self.server_key, ""),
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        try:
            return resp.json()
        except ValueError as e:
            raise RequestException(f"invalid json from gateway: {e}") from e
