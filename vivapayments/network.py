"""
Network utilities for the gateway.

Provides the HTTP session factory and the default transport that
requests are dispatched through.
"""

from typing import Dict, Optional

import requests

DEFAULT_TIMEOUT = 60


def get_session() -> requests.Session:
    """
    HTTP Session factory.

    No retry adapter is mounted: a failed call surfaces once to the caller.
    """
    session = requests.Session()
    session.headers.update({"User-Agent": "vivapayments-python"})
    return session


class RequestsTransport:
    """
    Sends one HTTP request through a requests.Session.

    Any object with the same ``send(method, url, headers, body)`` signature
    returning something with ``status_code`` and ``text`` can be used in
    its place.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.session = session or get_session()
        self.timeout = timeout

    def send(self, method: str, url: str, headers: Dict[str, str],
             body: Optional[str] = None) -> requests.Response:
        data = body.encode("utf-8") if body is not None else None
        return self.session.request(
            method, url, headers=headers, data=data, timeout=self.timeout
        )

    def close(self):
        self.session.close()
