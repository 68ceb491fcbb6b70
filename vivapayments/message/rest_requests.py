"""
Concrete Viva Payments requests

Each request only picks its resource path, HTTP method, extra fields and
response type; sending is inherited from AbstractRestRequest.
"""

from typing import Any, Dict

from .base import AbstractRestRequest
from .response import RedirectResponse


class PurchaseRequest(AbstractRestRequest):
    """
    Create a payment order.

    The customer completes the order on the gateway's checkout page, so the
    response is a RedirectResponse carrying the OrderCode.
    """

    response_class = RedirectResponse
    is_pre_auth = False

    def get_customer_email(self):
        return self.get_parameter("customer_email")

    def set_customer_email(self, value):
        return self.set_parameter("customer_email", value)

    def get_full_name(self):
        return self.get_parameter("full_name")

    def set_full_name(self, value):
        return self.set_parameter("full_name", value)

    def get_allow_recurring(self):
        return self.get_parameter("allow_recurring")

    def set_allow_recurring(self, value):
        return self.set_parameter("allow_recurring", value)

    def get_endpoint(self) -> str:
        return super().get_endpoint() + "/orders"

    def get_data(self) -> Dict[str, Any]:
        self.validate("amount")
        data = super().get_data()
        data["Amount"] = self.get_amount_integer()
        data["IsPreAuth"] = self.is_pre_auth

        # Optional order fields are only sent when set
        optional = {
            "Email": self.get_customer_email(),
            "FullName": self.get_full_name(),
            "AllowRecurring": self.get_allow_recurring(),
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


class AuthorizeRequest(PurchaseRequest):
    """Create a pre-authorization order, captured later with CaptureRequest"""

    is_pre_auth = True


class CaptureRequest(AbstractRestRequest):
    """Capture a pre-authorized transaction"""

    def get_endpoint(self) -> str:
        return f"{super().get_endpoint()}/transactions/{self.get_transaction_reference()}"

    def get_data(self) -> Dict[str, Any]:
        self.validate("transaction_reference", "amount")
        data = super().get_data()
        data["Amount"] = self.get_amount_integer()
        return data


class RefundRequest(AbstractRestRequest):
    """Cancel or refund a transaction, fully or partially"""

    def get_http_method(self) -> str:
        return "DELETE"

    def get_endpoint(self) -> str:
        return f"{super().get_endpoint()}/transactions/{self.get_transaction_reference()}"

    def get_data(self) -> Dict[str, Any]:
        self.validate("transaction_reference", "amount")
        data = super().get_data()
        data["Amount"] = self.get_amount_integer()
        return data


class FetchTransactionRequest(AbstractRestRequest):
    """Look up a transaction by its gateway id"""

    def get_http_method(self) -> str:
        return "GET"

    def get_endpoint(self) -> str:
        return f"{super().get_endpoint()}/transactions/{self.get_transaction_reference()}"

    def get_data(self) -> Dict[str, Any]:
        self.validate("transaction_reference")
        return super().get_data()
