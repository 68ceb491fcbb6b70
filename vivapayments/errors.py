"""
Viva Payments error classes

Only InvalidResponseError comes out of sending a request. The others are
raised before anything is sent: InvalidRequestError for unusable payment
parameters, ConfigError for unusable gateway settings.
"""

from typing import Optional, Dict, Any

SECRET_FIELDS = ("api_key", "credentials")


class VivaPaymentsError(Exception):
    """Base exception for the adapter; details is safe to log"""

    def __init__(self, message: str, details: Optional[Dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict:
        """Structured form for log records and merchant-facing error payloads"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class InvalidResponseError(VivaPaymentsError):
    """
    Raised when the gateway could not be reached or its reply could not be read.

    Attributes:
        message: Human-readable error description
        code: Numeric code of the underlying failure (0 if it had none)
    """

    def __init__(self, message: str, code: int = 0):
        self.code = code
        super().__init__(message, {"code": code})

    def __str__(self):
        if self.code:
            return f"{self.message} (code {self.code})"
        return self.message


class InvalidRequestError(VivaPaymentsError):
    """A request is missing a parameter or holds an unusable value"""

    def __init__(self, message: str, parameter: Optional[str] = None):
        self.parameter = parameter
        details = {"parameter": parameter} if parameter else {}
        super().__init__(message, details)


class ConfigError(VivaPaymentsError):
    """
    Unusable gateway_config.yaml, secrets.yaml or VIVA_* settings.

    Values of secret fields are never copied into details.
    """

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, suggestion: Optional[str] = None):
        self.field = field
        self.value = value
        self.suggestion = suggestion

        details = {}
        if field:
            details["field"] = field
        if value is not None and field not in SECRET_FIELDS:
            details["value"] = str(value)[:100]
        if suggestion:
            details["suggestion"] = suggestion

        super().__init__(message, details)

    def __str__(self):
        parts = [self.message]
        if self.field:
            parts.append(f"Field: {self.field}")
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return " | ".join(parts)


def error_code_of(exc: BaseException) -> int:
    """Best-effort numeric code of an arbitrary exception (0 if none)"""
    for attr in ("code", "errno", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    # requests exceptions keep the low-level error in args[0]
    reason = exc.args[0] if exc.args else None
    if isinstance(reason, BaseException) and reason is not exc:
        return error_code_of(reason)
    return 0
