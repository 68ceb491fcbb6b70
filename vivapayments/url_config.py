"""
URL configuration for the Viva Payments gateway.

Maps the test-mode flag onto the sandbox or production hosts and builds
the API and checkout URLs from them.
"""

from urllib.parse import urlencode

SANDBOX_BASE_URL = "https://demo.vivapayments.com"
PRODUCTION_BASE_URL = "https://www.vivapayments.com"
API_PATH = "/api"
CHECKOUT_PATH = "/web/checkout"


class URLConfig:
    """URL builder for one pair of sandbox/production hosts.

    Responsibilities:
    - Select the host from the test-mode flag
    - Provide URL construction methods
    """

    def __init__(self, sandbox_base_url: str = SANDBOX_BASE_URL,
                 production_base_url: str = PRODUCTION_BASE_URL):
        self.sandbox_base_url = sandbox_base_url.strip().rstrip("/")
        self.production_base_url = production_base_url.strip().rstrip("/")

    def get_base_url(self, test_mode: bool) -> str:
        if test_mode:
            return self.sandbox_base_url
        return self.production_base_url

    def get_api_url(self, test_mode: bool) -> str:
        return f"{self.get_base_url(test_mode)}{API_PATH}"

    def get_checkout_url(self, test_mode: bool, order_code) -> str:
        query = urlencode({"ref": order_code})
        return f"{self.get_base_url(test_mode)}{CHECKOUT_PATH}?{query}"


DEFAULT_URL_CONFIG = URLConfig()


def resolve_endpoint(test_mode: bool) -> str:
    """Return the API root for the sandbox (test_mode) or production host"""
    return DEFAULT_URL_CONFIG.get_api_url(test_mode)
