"""
Gateway responses

Normalized wrappers around a parsed JSON body and the HTTP status code.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RestResponse:
    """
    Response to a single REST request.

    Attributes:
        request: The request that produced this response
        data: Parsed JSON body (empty dict when the body was empty)
        status_code: HTTP status code as received
    """
    request: Any
    data: Dict[str, Any] = field(default_factory=dict)
    status_code: int = 200

    def is_successful(self) -> bool:
        if self.status_code >= 400:
            return False
        return not self.data.get("ErrorCode")

    def is_redirect(self) -> bool:
        return False

    def get_transaction_reference(self) -> Optional[str]:
        """Gateway transaction id, falling back to the order code"""
        for key in ("TransactionId", "OrderCode"):
            value = self.data.get(key)
            if value not in (None, ""):
                return str(value)
        return None

    def get_message(self) -> Optional[str]:
        return self.data.get("ErrorText") or self.data.get("Message")

    def get_code(self) -> Optional[Any]:
        if self.data.get("ErrorCode"):
            return self.data["ErrorCode"]
        return self.data.get("StatusId")


@dataclass(frozen=True)
class RedirectResponse(RestResponse):
    """
    Response to an order creation.

    A created order is paid on the gateway's checkout page, so a
    successful reply is a redirect rather than a completed payment.
    """

    def _order_created(self) -> bool:
        return super().is_successful() and self.data.get("OrderCode") is not None

    def is_successful(self) -> bool:
        return False

    def is_redirect(self) -> bool:
        return self._order_created()

    def get_redirect_url(self) -> Optional[str]:
        if not self._order_created():
            return None
        return self.request.url_config.get_checkout_url(
            self.request.get_test_mode(), self.data["OrderCode"]
        )

    def get_redirect_method(self) -> str:
        return "GET"
