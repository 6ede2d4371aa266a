from collections.abc import Generator
from unittest.mock import patch

import pytest
import requests
import requests_mock

from poolform._internal import settings
from poolform._internal.core.errors import (
    APIError,
    ClientError,
    ConfigurationError,
    ResourceNotExistsError,
)
from poolform.api.server import APIClient

BASE_URL = "https://abc.cloud.databricks.com"


class BaseAPIClientTest:
    @pytest.fixture
    def adapter(self) -> Generator[requests_mock.Adapter, None, None]:
        adapter = requests_mock.Adapter()
        with requests_mock.Mocker(adapter=adapter):
            yield adapter
        return

    @pytest.fixture
    def client(self, adapter: requests_mock.Adapter) -> APIClient:
        return APIClient(base_url=f"{BASE_URL}/", token="token")


class TestAPIClientRequest(BaseAPIClientTest):
    def test_sends_auth_and_json_body(self, client: APIClient, adapter: requests_mock.Adapter):
        adapter.register_uri("POST", f"{BASE_URL}/api/test", json={"ok": True})

        resp = client._request("/api/test", body='{"a": 1}')

        assert resp.json() == {"ok": True}
        req = adapter.request_history[0]
        assert req.headers["Authorization"] == "Bearer token"
        assert req.headers["Content-Type"] == "application/json"
        assert req.headers["User-Agent"].startswith("poolform/")
        assert req.json() == {"a": 1}

    def test_raises_api_error_with_remote_message(
        self, client: APIClient, adapter: requests_mock.Adapter
    ):
        adapter.register_uri(
            "POST",
            f"{BASE_URL}/api/test",
            status_code=400,
            json={"error_code": "INVALID_REQUEST", "message": "Internal error happened"},
        )

        with pytest.raises(APIError) as excinfo:
            client._request("/api/test")

        exc = excinfo.value
        assert type(exc) is APIError
        assert str(exc) == "Internal error happened"
        assert exc.error_code == "INVALID_REQUEST"
        assert exc.status_code == 400
        assert exc.resource == "/api/test"
        assert not exc.is_missing()

    def test_raises_not_exists_error_on_404(
        self, client: APIClient, adapter: requests_mock.Adapter
    ):
        adapter.register_uri(
            "GET",
            f"{BASE_URL}/api/test",
            status_code=404,
            json={"error_code": "NOT_FOUND", "message": "Item not found"},
        )

        with pytest.raises(ResourceNotExistsError, match="^Item not found$") as excinfo:
            client._request("/api/test", method="GET")
        assert excinfo.value.is_missing()

    def test_falls_back_to_status_when_body_is_not_an_error(
        self, client: APIClient, adapter: requests_mock.Adapter
    ):
        adapter.register_uri(
            "POST", f"{BASE_URL}/api/test", status_code=502, reason="Bad Gateway", text="<html>"
        )

        with pytest.raises(APIError, match="^502 Bad Gateway when requesting /api/test$"):
            client._request("/api/test")

    def test_does_not_raise_if_asked(self, client: APIClient, adapter: requests_mock.Adapter):
        adapter.register_uri("POST", f"{BASE_URL}/api/test", status_code=500, json={})
        resp = client._request("/api/test", raise_for_status=False)
        assert resp.status_code == 500

    def test_retries_connection_errors(self, client: APIClient, adapter: requests_mock.Adapter):
        adapter.register_uri(
            "POST",
            f"{BASE_URL}/api/test",
            [{"exc": requests.exceptions.ConnectionError}, {"json": {"ok": True}}],
        )

        with patch("time.sleep") as sleep_mock:
            resp = client._request("/api/test")

        assert resp.json() == {"ok": True}
        assert adapter.call_count == 2
        sleep_mock.assert_called_once()

    def test_gives_up_after_max_retries(
        self, client: APIClient, adapter: requests_mock.Adapter, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(settings, "CLIENT_MAX_RETRIES", 2)
        adapter.register_uri(
            "POST", f"{BASE_URL}/api/test", exc=requests.exceptions.ConnectionError
        )

        with patch("time.sleep") as sleep_mock:
            with pytest.raises(ClientError, match="Failed to connect"):
                client._request("/api/test")
        assert adapter.call_count == 2
        # no sleep after the last attempt
        sleep_mock.assert_called_once()


class TestAPIClientCloud:
    @pytest.mark.parametrize(
        ["host", "cloud"],
        [
            ["https://abc.cloud.databricks.com", "aws"],
            ["https://adb-123.4.azuredatabricks.net", "azure"],
            ["https://123.4.gcp.databricks.com", "gcp"],
        ],
    )
    def test_detects_cloud_by_host(self, host: str, cloud: str):
        client = APIClient(host, "token")
        assert client.cloud == cloud
        assert client.is_aws() is (cloud == "aws")
        assert client.is_azure() is (cloud == "azure")
        assert client.is_gcp() is (cloud == "gcp")


class TestAPIClientFromEnv:
    def test_creates_client(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(settings, "POOLFORM_HOST", "https://abc.cloud.databricks.com/")
        monkeypatch.setattr(settings, "POOLFORM_TOKEN", "token")
        client = APIClient.from_env()
        assert client.base_url == "https://abc.cloud.databricks.com"

    @pytest.mark.parametrize(
        ["host", "token", "missing"],
        [
            [None, "token", "POOLFORM_HOST"],
            ["https://abc.cloud.databricks.com", None, "POOLFORM_TOKEN"],
        ],
    )
    def test_error_if_not_configured(
        self, monkeypatch: pytest.MonkeyPatch, host, token, missing: str
    ):
        monkeypatch.setattr(settings, "POOLFORM_HOST", host)
        monkeypatch.setattr(settings, "POOLFORM_TOKEN", token)
        with pytest.raises(ConfigurationError, match=missing):
            APIClient.from_env()
