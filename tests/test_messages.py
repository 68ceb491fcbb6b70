"""
Tests for concrete Viva Payments requests
"""

import json

import pytest

from vivapayments.errors import InvalidRequestError
from vivapayments.message import (
    PurchaseRequest, AuthorizeRequest, CaptureRequest,
    RefundRequest, FetchTransactionRequest, RedirectResponse
)

from conftest import make_http_response


class TestPurchaseRequest:

    @pytest.fixture
    def purchase(self, transport, credentials_params):
        params = dict(credentials_params, amount="10.00", test_mode=True,
                      description="Order 42", source_code="Default")
        return PurchaseRequest(transport, params)

    def test_endpoint(self, purchase):
        assert purchase.get_endpoint() == "https://demo.vivapayments.com/api/orders"
        assert purchase.get_http_method() == "POST"

    def test_data(self, purchase):
        data = purchase.get_data()
        assert data["Amount"] == 1000
        assert data["IsPreAuth"] is False
        assert data["CustomerTrns"] == "Order 42"
        assert data["SourceCode"] == "Default"
        assert data["RequestLang"] is None
        assert "Email" not in data

    def test_optional_customer_fields(self, purchase):
        purchase.set_customer_email("buyer@example.com").set_full_name("Jane Doe")
        data = purchase.get_data()
        assert data["Email"] == "buyer@example.com"
        assert data["FullName"] == "Jane Doe"

    def test_amount_required(self, transport):
        with pytest.raises(InvalidRequestError) as exc_info:
            PurchaseRequest(transport).get_data()
        assert exc_info.value.parameter == "amount"

    def test_amount_precision(self, transport):
        request = PurchaseRequest(transport, {"amount": "10.005"})
        with pytest.raises(InvalidRequestError):
            request.get_data()

    def test_invalid_amount(self, transport):
        request = PurchaseRequest(transport, {"amount": "ten"})
        with pytest.raises(InvalidRequestError):
            request.get_data()

    def test_send_returns_redirect(self, purchase, transport):
        transport.send.return_value = make_http_response(
            200, '{"OrderCode": 175936509216, "ErrorCode": 0, "Success": true}'
        )
        response = purchase.send()

        _, url, _, body = transport.send.call_args[0]
        assert url == "https://demo.vivapayments.com/api/orders"
        assert json.loads(body)["Amount"] == 1000
        assert isinstance(response, RedirectResponse)
        assert response.is_redirect() is True
        assert response.get_redirect_url().endswith("/web/checkout?ref=175936509216")

    def test_invalid_request_is_not_sent(self, transport):
        with pytest.raises(InvalidRequestError):
            PurchaseRequest(transport).send()
        transport.send.assert_not_called()


class TestAuthorizeRequest:

    def test_pre_auth_flag(self, transport):
        data = AuthorizeRequest(transport, {"amount": "5"}).get_data()
        assert data["IsPreAuth"] is True
        assert data["Amount"] == 500


class TestCaptureRequest:

    def test_endpoint_and_data(self, transport):
        request = CaptureRequest(transport, {"transaction_reference": "abc-123", "amount": "7.50"})
        assert request.get_endpoint() == "https://www.vivapayments.com/api/transactions/abc-123"
        assert request.get_http_method() == "POST"
        assert request.get_data()["Amount"] == 750

    def test_reference_required(self, transport):
        with pytest.raises(InvalidRequestError) as exc_info:
            CaptureRequest(transport, {"amount": "1.00"}).get_data()
        assert exc_info.value.parameter == "transaction_reference"


class TestRefundRequest:

    def test_delete_with_query(self, transport, credentials_params):
        params = dict(credentials_params, transaction_reference="abc-123",
                      amount="5.00", transaction_id="TX1")
        RefundRequest(transport, params).send()

        method, url, headers, body = transport.send.call_args[0]
        assert method == "DELETE"
        assert url == ("https://www.vivapayments.com/api/transactions/abc-123"
                       "?MerchantTrns=TX1&Amount=500")
        assert body is None
        assert headers["Authorization"].startswith("Basic ")


class TestFetchTransactionRequest:

    def test_get_transaction(self, transport, credentials_params):
        transport.send.return_value = make_http_response(
            200, '{"Transactions": [{"StatusId": "F"}], "ErrorCode": 0}'
        )
        params = dict(credentials_params, transaction_reference="abc-123", test_mode=True)
        response = FetchTransactionRequest(transport, params).send()

        method, url, _, body = transport.send.call_args[0]
        assert method == "GET"
        assert url == "https://demo.vivapayments.com/api/transactions/abc-123"
        assert body is None
        assert response.is_successful() is True
        assert response.data["Transactions"][0]["StatusId"] == "F"

    def test_reference_required(self, transport):
        with pytest.raises(InvalidRequestError):
            FetchTransactionRequest(transport).send()
