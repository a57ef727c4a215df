"""Tests for the HTTP transport."""

from unittest.mock import Mock, patch

import pytest
import requests
from resendpager import RequestConfig, TransportError
from resendpager._core._request import request, request_json

URL = "https://api.resend.com/emails"


def mock_response(status_code=200, payload=None, invalid_json=False):
    resp = Mock()
    resp.status_code = status_code
    resp.text = "not json" if invalid_json else ""
    if invalid_json:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(response=resp)
    return resp


def config(**kwargs):
    kwargs.setdefault("url", URL)
    kwargs.setdefault("backoff_factor", 0)
    return RequestConfig(**kwargs)


class TestRequest:
    @patch("resendpager._core._request.requests.request")
    def test_success_adds_bearer_token(self, mock_request):
        mock_request.return_value = mock_response(payload={"data": []})
        headers = {"User-Agent": "tests"}

        resp = request(config(params={"limit": 5}, headers=headers), auth_token="re_1")

        assert resp is mock_request.return_value
        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == URL
        assert kwargs["params"] == {"limit": 5}
        assert kwargs["timeout"] == 30
        assert kwargs["headers"] == {"User-Agent": "tests", "Authorization": "Bearer re_1"}
        assert headers == {"User-Agent": "tests"}

    @patch("resendpager._core._request.requests.request")
    def test_server_error_is_retried(self, mock_request):
        mock_request.side_effect = [mock_response(503), mock_response(payload={})]

        request(config())

        assert mock_request.call_count == 2

    @patch("resendpager._core._request.requests.request")
    def test_rate_limit_exhausts_retries(self, mock_request):
        mock_request.return_value = mock_response(429, payload={"message": "slow down"})

        with pytest.raises(TransportError) as excinfo:
            request(config(max_retries=2))

        assert mock_request.call_count == 3
        assert excinfo.value.status_code == 429
        assert excinfo.value.body == {"message": "slow down"}

    @patch("resendpager._core._request.requests.request")
    def test_client_error_is_not_retried(self, mock_request):
        mock_request.return_value = mock_response(401, payload={"message": "bad key"})

        with pytest.raises(TransportError) as excinfo:
            request(config())

        assert mock_request.call_count == 1
        assert excinfo.value.status_code == 401
        assert excinfo.value.url == URL
        assert isinstance(excinfo.value.__cause__, requests.HTTPError)

    @patch("resendpager._core._request.requests.request")
    def test_connection_errors_are_retried_then_raised(self, mock_request):
        mock_request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError) as excinfo:
            request(config(max_retries=1))

        assert mock_request.call_count == 2
        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


class TestRequestJson:
    @patch("resendpager._core._request.requests.request")
    def test_decodes_body(self, mock_request):
        mock_request.return_value = mock_response(payload={"data": [1]})

        assert request_json(config()) == {"data": [1]}

    @patch("resendpager._core._request.requests.request")
    def test_invalid_json_is_a_transport_error(self, mock_request):
        mock_request.return_value = mock_response(invalid_json=True)

        with pytest.raises(TransportError) as excinfo:
            request_json(config())

        assert excinfo.value.body == "not json"


class TestRequestConfig:
    def test_defaults(self):
        cfg = RequestConfig()
        assert (cfg.method, cfg.timeout, cfg.max_retries) == ("GET", 30, 3)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("RESEND_TIMEOUT", "5")
        monkeypatch.setenv("RESEND_MAX_RETRIES", "0")

        cfg = RequestConfig.from_env()

        assert cfg.timeout == 5.0
        assert cfg.max_retries == 0

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setenv("RESEND_TIMEOUT", "5")

        assert RequestConfig.from_env(timeout=1).timeout == 1
