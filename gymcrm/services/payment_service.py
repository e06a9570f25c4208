"""
Razorpay integration for CRM subscription payments
"""
import asyncio
import hashlib
import hmac
import time
from typing import Optional

import requests

from gymcrm.core import settings
from gymcrm.core.logging_config import get_logger

logger = get_logger("services.payment")

REQUEST_TIMEOUT = 20


class PaymentGatewayError(Exception):
    pass


def to_minor_units(amount) -> int:
    """Rupees to paise."""
    return int(round(float(amount) * 100))


def expected_signature(order_id: str, payment_id: str, secret: str) -> str:
    message = f"{order_id}|{payment_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class PaymentGateway:
    """Thin client over the Razorpay orders API"""

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        api_url: Optional[str] = None,
    ):
        self.key_id = key_id if key_id is not None else settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret if key_secret is not None else settings.RAZORPAY_KEY_SECRET
        self.api_url = (api_url or settings.RAZORPAY_API_URL).rstrip("/")

    def _post_order(self, payload: dict) -> dict:
        try:
            r = requests.post(
                f"{self.api_url}/orders",
                auth=(self.key_id, self.key_secret),
                json=payload,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise PaymentGatewayError(f"request error: {e}") from e
        if not 200 <= r.status_code < 300:
            raise PaymentGatewayError(f"{r.status_code}: {r.text}")
        return r.json()

    async def create_order(
        self,
        amount,
        *,
        currency: Optional[str] = None,
        receipt: Optional[str] = None,
        notes: Optional[dict] = None,
    ) -> dict:
        payload = {
            "amount": to_minor_units(amount),
            "currency": currency or settings.PAYMENT_CURRENCY,
            "receipt": receipt or f"rcpt_{int(time.time() * 1000)}",
            "notes": notes or {},
        }
        logger.info(f"Creating Razorpay order amount={payload['amount']} currency={payload['currency']}")
        order = await asyncio.to_thread(self._post_order, payload)
        logger.info(f"Razorpay order created: {order.get('id')}")
        return order

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        if not (order_id and payment_id and signature and self.key_secret):
            return False
        return hmac.compare_digest(expected_signature(order_id, payment_id, self.key_secret), signature)


def get_payment_gateway() -> PaymentGateway:
    return PaymentGateway()
