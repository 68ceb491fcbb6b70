"""
Logging for Viva Payments gateway calls

Every request sent to the gateway is logged with its method and URL, and
every reply with its HTTP status and round-trip time. At DEBUG level the
headers and bodies are logged too; the Basic Auth header carries the
merchant's API key, so it is always shortened first.
"""

import time
import logging
from typing import Optional

LOG_FORMAT = "[%(name)s] %(levelname)s - %(message)s"
TIMESTAMP_LOG_FORMAT = "%(asctime)s " + LOG_FORMAT
MAX_LOGGED_BODY = 500

logger = logging.getLogger("vivapayments")

# Console handler unless the host application configured one
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


def configure_logging(level: str = "INFO", include_timestamp: bool = False):
    """
    Set the gateway log level and line format.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        include_timestamp: Prefix each line with the local time
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if include_timestamp:
        formatter = logging.Formatter(TIMESTAMP_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter(LOG_FORMAT)
    for handler in logger.handlers:
        handler.setFormatter(formatter)


class RequestTimer:
    """Measures one round trip to the gateway"""

    def __init__(self, operation: str):
        self.operation = operation
        self.start_time = None
        self.elapsed = 0

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, *args):
        self.elapsed = time.time() - self.start_time
        logger.debug(f"Gateway call {self.operation} took {self.elapsed:.2f}s")


def _truncate(text: str) -> str:
    if len(text) > MAX_LOGGED_BODY:
        return text[:MAX_LOGGED_BODY] + "..."
    return text


def mask_headers(headers: Optional[dict]) -> dict:
    """Copy of headers with the Basic Auth credentials cut down to a prefix"""
    safe_headers = {}
    for k, v in (headers or {}).items():
        if k.lower() == "authorization":
            safe_headers[k] = v[:10] + "..." if len(v) > 10 else "***"
        else:
            safe_headers[k] = v
    return safe_headers


def log_request(method: str, url: str, headers: dict = None, body: str = None):
    """Log a request about to be sent to the gateway"""
    logger.info(f"Gateway request {method} {url}")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"   Headers: {mask_headers(headers)}")
        if body:
            logger.debug(f"   Payload: {_truncate(body)}")


def log_response(status_code: int, elapsed: float,
                 response_text: str = None, success: bool = True):
    """Log the gateway's reply; error bodies are only logged at DEBUG"""
    outcome = "accepted" if success else "rejected"
    logger.info(f"Gateway {outcome} with HTTP {status_code} ({elapsed:.2f}s)")

    if logger.isEnabledFor(logging.DEBUG) and response_text:
        logger.debug(f"   Reply: {_truncate(response_text)}")


def log_error(message: str, exception: Exception = None):
    """Log a failure to reach or understand the gateway"""
    if exception:
        logger.error(f"{message}: {type(exception).__name__} - {exception}")
    else:
        logger.error(message)
