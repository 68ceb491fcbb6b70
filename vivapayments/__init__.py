"""
Viva Payments REST gateway adapter

Maps payment operations onto the Viva Payments REST API:
- HTTP Basic authentication from merchant id and API key
- Sandbox/production endpoint selection
- JSON request serialization and response parsing
"""

from .errors import VivaPaymentsError, InvalidResponseError, InvalidRequestError, ConfigError
from .url_config import URLConfig, resolve_endpoint
from .network import RequestsTransport, get_session
from .config_manager import ConfigManager, GatewayConfig
from .message import (
    AbstractRestRequest, Credentials, RestResponse, RedirectResponse,
    PurchaseRequest, AuthorizeRequest, CaptureRequest,
    RefundRequest, FetchTransactionRequest
)
from .gateway import RestGateway

__version__ = "0.1.0"

__all__ = [
    'VivaPaymentsError',
    'InvalidResponseError',
    'InvalidRequestError',
    'ConfigError',
    'URLConfig',
    'resolve_endpoint',
    'RequestsTransport',
    'get_session',
    'ConfigManager',
    'GatewayConfig',
    'AbstractRestRequest',
    'Credentials',
    'RestResponse',
    'RedirectResponse',
    'PurchaseRequest',
    'AuthorizeRequest',
    'CaptureRequest',
    'RefundRequest',
    'FetchTransactionRequest',
    'RestGateway',
]
