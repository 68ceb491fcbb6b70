"""
Base REST Request

Parent class for all Viva Payments REST requests. Handles:
- Parameter storage with fluent setters
- Endpoint selection between sandbox and production
- Request serialization and HTTP Basic authentication
- Response deserialization into a RestResponse
"""

import json
import base64
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import urlencode

from ..config_manager import as_bool
from ..errors import InvalidRequestError, InvalidResponseError, error_code_of
from ..gateway_logger import logger, log_request, log_response, log_error, RequestTimer
from ..url_config import DEFAULT_URL_CONFIG, URLConfig
from .response import RestResponse

ResponseFactory = Callable[[Any, Dict[str, Any], int], RestResponse]


@dataclass(frozen=True)
class Credentials:
    """Merchant credentials used for HTTP Basic Auth"""
    merchant_id: str
    api_key: str

    def authorization_header(self) -> str:
        token = f"{self.merchant_id}:{self.api_key}".encode("utf-8")
        return "Basic " + base64.b64encode(token).decode("ascii")


def _query_value(value: Any) -> Any:
    # Booleans are sent as 1/0, the way form-encoded APIs expect them
    if isinstance(value, bool):
        return int(value)
    return value


def build_query_url(endpoint: str, payload: Dict[str, Any]) -> str:
    """Append payload fields to an endpoint as a query string, skipping None values"""
    fields = {k: _query_value(v) for k, v in payload.items() if v is not None}
    if not fields:
        return endpoint
    separator = "&" if "?" in endpoint else "?"
    return f"{endpoint}{separator}{urlencode(fields, doseq=True)}"


class AbstractRestRequest:
    """
    Base class for REST requests against the gateway.

    Subclasses override:
    - get_http_method() when the endpoint is not a POST
    - get_endpoint() to append the resource path
    - get_data() to add their own fields on top of the common ones
    - response_class to wrap replies differently
    """

    url_config: URLConfig = DEFAULT_URL_CONFIG
    response_class: ResponseFactory = RestResponse

    def __init__(self, transport, parameters: Optional[Dict] = None,
                 response_factory: Optional[ResponseFactory] = None):
        """
        Args:
            transport: Object with send(method, url, headers, body)
            parameters: Initial parameter values, see initialize()
            response_factory: Overrides response_class for this instance
        """
        self.transport = transport
        self.response_factory = response_factory or type(self).response_class
        self.response: Optional[RestResponse] = None
        self.parameters: Dict[str, Any] = {}
        if parameters:
            self.initialize(**parameters)

    # ==========================================
    # Parameters
    # ==========================================

    def initialize(self, **parameters) -> "AbstractRestRequest":
        """
        Replace all parameters.

        Keys with a matching set_<name> method go through it, so
        initialize(merchant_id="x") is the same as set_merchant_id("x").
        """
        self._ensure_not_sent()
        self.parameters = {}
        for name, value in parameters.items():
            setter = getattr(self, f"set_{name}", None)
            if callable(setter):
                setter(value)
            else:
                self.set_parameter(name, value)
        return self

    def get_parameters(self) -> Dict[str, Any]:
        return dict(self.parameters)

    def get_parameter(self, name: str, default: Any = None) -> Any:
        return self.parameters.get(name, default)

    def set_parameter(self, name: str, value: Any) -> "AbstractRestRequest":
        self._ensure_not_sent()
        self.parameters[name] = value
        return self

    def _ensure_not_sent(self):
        if self.response is not None:
            raise RuntimeError("Request cannot be modified after it has been sent.")

    def validate(self, *names: str):
        """Raise InvalidRequestError for the first missing parameter"""
        for name in names:
            if self.parameters.get(name) in (None, ""):
                raise InvalidRequestError(f"The {name} parameter is required", name)

    def get_merchant_id(self) -> Optional[str]:
        return self.get_parameter("merchant_id")

    def set_merchant_id(self, value: str) -> "AbstractRestRequest":
        return self.set_parameter("merchant_id", value)

    def get_api_key(self) -> Optional[str]:
        """The API key is the password half of HTTP Basic Auth"""
        return self.get_parameter("api_key")

    def set_api_key(self, value: str) -> "AbstractRestRequest":
        return self.set_parameter("api_key", value)

    def get_test_mode(self) -> bool:
        return as_bool(self.get_parameter("test_mode", False))

    def set_test_mode(self, value: bool) -> "AbstractRestRequest":
        return self.set_parameter("test_mode", value)

    def get_request_lang(self) -> Optional[str]:
        """
        ISO language of the payment form, e.g. "el-GR" or "en-US".

        The gateway assumes el-GR when none is sent and shows English for
        every other value.
        """
        return self.get_parameter("request_lang")

    def set_request_lang(self, value: str) -> "AbstractRestRequest":
        return self.set_parameter("request_lang", value)

    def get_source_code(self) -> Optional[str]:
        """Case-sensitive payment source used to group transactions"""
        return self.get_parameter("source_code")

    def set_source_code(self, value: str) -> "AbstractRestRequest":
        return self.set_parameter("source_code", value)

    def get_transaction_id(self) -> Optional[str]:
        return self.get_parameter("transaction_id")

    def set_transaction_id(self, value: str) -> "AbstractRestRequest":
        return self.set_parameter("transaction_id", value)

    def get_transaction_reference(self) -> Optional[str]:
        return self.get_parameter("transaction_reference")

    def set_transaction_reference(self, value: str) -> "AbstractRestRequest":
        return self.set_parameter("transaction_reference", value)

    def get_description(self) -> Optional[str]:
        return self.get_parameter("description")

    def set_description(self, value: str) -> "AbstractRestRequest":
        return self.set_parameter("description", value)

    def get_amount(self) -> Optional[str]:
        return self.get_parameter("amount")

    def set_amount(self, value) -> "AbstractRestRequest":
        return self.set_parameter("amount", None if value is None else str(value))

    def get_amount_integer(self) -> Optional[int]:
        """Amount in cents, or None when no amount is set"""
        amount = self.get_amount()
        if amount in (None, ""):
            return None
        try:
            value = Decimal(amount)
        except InvalidOperation:
            raise InvalidRequestError(f"Invalid amount: {amount!r}", "amount")
        if not value.is_finite() or value < 0:
            raise InvalidRequestError(f"Invalid amount: {amount!r}", "amount")
        cents = value * 100
        if cents != cents.to_integral_value():
            raise InvalidRequestError(
                f"Amount precision is too high: {amount!r}", "amount"
            )
        return int(cents)

    def get_credentials(self) -> Credentials:
        return Credentials(self.get_merchant_id() or "", self.get_api_key() or "")

    # ==========================================
    # Request building
    # ==========================================

    def get_http_method(self) -> str:
        """Nearly always POST, overridden by GET/DELETE resources"""
        return "POST"

    def get_endpoint(self) -> str:
        # Evaluated on every call so toggling test mode switches hosts
        return self.url_config.get_api_url(self.get_test_mode())

    def get_data(self) -> Dict[str, Any]:
        """
        Optional parameters shared by every request.

        All four keys are always present, with None for unset values.
        """
        return {
            "RequestLang": self.get_request_lang(),
            "MerchantTrns": self.get_transaction_id(),
            "CustomerTrns": self.get_description(),
            "SourceCode": self.get_source_code(),
        }

    def build_headers(self, method: str, credentials: Credentials) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Authorization": credentials.authorization_header(),
        }
        if method == "POST":
            headers["Content-Type"] = "application/json"
        return headers

    # ==========================================
    # Dispatch
    # ==========================================

    def dispatch(self, method: str, endpoint: str, payload: Dict[str, Any],
                 credentials: Credentials) -> Tuple[Dict[str, Any], int]:
        """
        Send one request and return (parsed_body, status_code).

        POST sends the payload as a JSON body, every other method sends it
        as a query string. Error statuses are returned like any other; only
        a failure to talk to the gateway raises InvalidResponseError.
        """
        method = method.upper()
        headers = self.build_headers(method, credentials)
        if method == "POST":
            url = endpoint
            body = json.dumps(payload)
        else:
            url = build_query_url(endpoint, payload)
            body = None

        log_request(method, url, headers, body)

        try:
            with RequestTimer(f"{method} {url}") as timer:
                http_response = self.transport.send(method, url, headers, body)
            status_code = int(http_response.status_code)
            text = http_response.text or ""
            parsed = self.parse_body(text)
        except Exception as e:
            log_error("Error communicating with payment gateway", e)
            raise InvalidResponseError(
                f"Error communicating with payment gateway: {e}",
                error_code_of(e)
            ) from e

        log_response(
            status_code=status_code,
            elapsed=timer.elapsed,
            response_text=text if status_code >= 400 else None,
            success=status_code < 400
        )
        return parsed, status_code

    @staticmethod
    def parse_body(text: str) -> Dict[str, Any]:
        """Decode a JSON object body; an empty body is an empty dict"""
        if not text.strip():
            return {}
        parsed = json.loads(text)
        if not isinstance(parsed, dict):
            raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
        return parsed

    def create_response(self, data: Dict[str, Any], status_code: int) -> RestResponse:
        self.response = self.response_factory(self, data, status_code)
        return self.response

    def send_data(self, data: Dict[str, Any]) -> RestResponse:
        if self.response is not None:
            raise RuntimeError("Request has already been sent.")
        parsed, status_code = self.dispatch(
            self.get_http_method(),
            self.get_endpoint(),
            data,
            self.get_credentials()
        )
        logger.debug(f"{type(self).__name__} completed with HTTP {status_code}")
        try:
            return self.create_response(parsed, status_code)
        except Exception as e:
            self.response = None
            log_error("Error building gateway response", e)
            raise InvalidResponseError(
                f"Error communicating with payment gateway: {e}",
                error_code_of(e)
            ) from e

    def send(self) -> RestResponse:
        return self.send_data(self.get_data())

    def get_response(self) -> Optional[RestResponse]:
        return self.response
