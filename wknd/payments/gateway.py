import logging
from typing import Any, Dict, Optional

import httpx

from wknd.exceptions import GatewayError

logger = logging.getLogger(__name__)


class PaystackClient:
    """Thin async wrapper over the Paystack transaction API.

    Only two calls are used: initialize a transaction (returns the hosted
    checkout URL) and verify a transaction by reference. Both return the
    ``data`` object of the Paystack envelope and raise ``GatewayError`` when
    the provider cannot be reached, answers with an error status, or reports
    ``status: false``.
    """

    def __init__(
        self,
        secret_key: str,
        currency: str = "NGN",
        callback_url: Optional[str] = None,
        base_url: str = "https://api.paystack.co",
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.secret_key = secret_key
        self.currency = currency
        self.callback_url = callback_url
        self.base_url = base_url.rstrip("/")
        self._http = http or httpx.AsyncClient(timeout=timeout)

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    async def initialize_transaction(
        self,
        email: str,
        amount_minor: int,
        reference: str,
        metadata: Dict[str, Any],
    ) -> Dict[str, Any]:
        payload = {
            "email": email,
            "amount": amount_minor,
            "currency": self.currency,
            "reference": reference,
            "metadata": metadata,
        }
        if self.callback_url:
            payload["callback_url"] = self.callback_url

        body = await self._request("POST", "/transaction/initialize", json=payload)
        if not body.get("status"):
            raise GatewayError("Payment initialization failed")
        return body.get("data") or {}

    async def verify_transaction(self, reference: str) -> Dict[str, Any]:
        body = await self._request("GET", f"/transaction/verify/{reference}")
        if not body.get("status"):
            raise GatewayError("Payment verification failed")
        return body.get("data") or {}

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = await self._http.request(method, url, headers=self._headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Paystack %s %s unreachable: %s", method, path, exc)
            raise GatewayError("Payment gateway unreachable", status_code=500) from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error:
            logger.warning(
                "Paystack %s %s answered %s: %s",
                method, path, response.status_code, body.get("message"),
            )
            status_code = 400 if response.status_code < 500 else 500
            raise GatewayError(body.get("message") or "Payment gateway error", status_code=status_code)
        return body

    async def aclose(self) -> None:
        await self._http.aclose()
