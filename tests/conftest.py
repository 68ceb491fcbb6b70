"""
Shared fixtures for gateway tests
"""

import pytest
from unittest.mock import Mock


def make_http_response(status_code=200, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def transport():
    """Fake transport answering 200 with an empty JSON object"""
    fake = Mock()
    fake.send.return_value = make_http_response(200, "{}")
    return fake


@pytest.fixture
def credentials_params():
    return {
        "merchant_id": "TEST-MERCHANT-1",
        "api_key": "s3cret-key",
    }
