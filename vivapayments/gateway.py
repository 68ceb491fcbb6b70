"""
Viva Payments REST Gateway

Entry point that creates requests preloaded with the merchant's default
parameters and a shared transport.

Usage:
    gateway = RestGateway(merchant_id="...", api_key="...", test_mode=True)
    response = gateway.purchase(amount="10.00", description="Order 42").send()
    if response.is_redirect():
        redirect_to(response.get_redirect_url())
"""

from typing import Any, Dict, Optional, Type

from .config_manager import GatewayConfig, as_bool
from .gateway_logger import logger
from .message import (
    AbstractRestRequest, PurchaseRequest, AuthorizeRequest,
    CaptureRequest, RefundRequest, FetchTransactionRequest
)
from .network import RequestsTransport
from .url_config import DEFAULT_URL_CONFIG, URLConfig

DEFAULT_PARAMETERS = {
    "merchant_id": "",
    "api_key": "",
    "test_mode": False,
    "source_code": None,
    "request_lang": None,
}


class RestGateway:
    """Factory for Viva Payments REST requests"""

    name = "VivaPayments"

    def __init__(self, transport=None, url_config: Optional[URLConfig] = None,
                 **parameters):
        self.transport = transport or RequestsTransport()
        self.url_config = url_config or DEFAULT_URL_CONFIG
        self.parameters: Dict[str, Any] = dict(DEFAULT_PARAMETERS)
        self.parameters.update(parameters)

    @classmethod
    def from_config(cls, config: GatewayConfig, transport=None) -> "RestGateway":
        if transport is None:
            transport = RequestsTransport(timeout=config.timeout)
        return cls(transport=transport, url_config=config.url_config(),
                   **config.default_parameters())

    def get_parameters(self) -> Dict[str, Any]:
        return dict(self.parameters)

    def get_test_mode(self) -> bool:
        return as_bool(self.parameters.get("test_mode"))

    def set_test_mode(self, value: bool) -> "RestGateway":
        self.parameters["test_mode"] = value
        return self

    def create_request(self, request_class: Type[AbstractRestRequest],
                       **options) -> AbstractRestRequest:
        """Instantiate request_class with gateway defaults overlaid by options"""
        parameters = dict(self.parameters)
        parameters.update(options)
        request = request_class(self.transport, parameters)
        request.url_config = self.url_config
        logger.debug(f"Created {request_class.__name__}")
        return request

    def purchase(self, **options) -> PurchaseRequest:
        return self.create_request(PurchaseRequest, **options)

    def authorize(self, **options) -> AuthorizeRequest:
        return self.create_request(AuthorizeRequest, **options)

    def capture(self, **options) -> CaptureRequest:
        return self.create_request(CaptureRequest, **options)

    def refund(self, **options) -> RefundRequest:
        return self.create_request(RefundRequest, **options)

    def fetch_transaction(self, **options) -> FetchTransactionRequest:
        return self.create_request(FetchTransactionRequest, **options)
