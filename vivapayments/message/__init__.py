"""
Request and response messages for the Viva Payments REST API.
"""

from .base import AbstractRestRequest, Credentials, build_query_url
from .response import RestResponse, RedirectResponse
from .rest_requests import (
    PurchaseRequest, AuthorizeRequest, CaptureRequest,
    RefundRequest, FetchTransactionRequest
)

__all__ = [
    'AbstractRestRequest',
    'Credentials',
    'build_query_url',
    'RestResponse',
    'RedirectResponse',
    'PurchaseRequest',
    'AuthorizeRequest',
    'CaptureRequest',
    'RefundRequest',
    'FetchTransactionRequest',
]
