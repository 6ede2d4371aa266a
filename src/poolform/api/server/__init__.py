import time
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from poolform import version
from poolform._internal import settings
from poolform._internal.core.errors import (
    APIError,
    ClientError,
    ConfigurationError,
    ResourceNotExistsError,
)
from poolform._internal.core.models.instance_pools import APIErrorBody
from poolform._internal.utils.logging import get_logger
from poolform.api.server._clusters import ClustersAPIClient
from poolform.api.server._instance_pools import InstancePoolsAPIClient

logger = get_logger(__name__)


class APIClient:
    """
    Low-level API client for interacting with the compute platform REST API.

    Attributes:
        instance_pools: operations with instance pools
        clusters: node types and runtime versions lookups
    """

    def __init__(self, base_url: str, token: str):
        """
        Args:
            base_url: The workspace URL, e.g. `https://abc.cloud.databricks.com`.
            token: The API token.
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._s = requests.session()
        self._s.headers.update({"Authorization": f"Bearer {token}"})
        self._s.headers.update({"User-Agent": f"poolform/{version.__version__}"})

    @classmethod
    def from_env(cls) -> "APIClient":
        """
        Creates a client from `POOLFORM_HOST` and `POOLFORM_TOKEN` environment variables.
        """
        if not settings.POOLFORM_HOST:
            raise ConfigurationError("POOLFORM_HOST is not set")
        if not settings.POOLFORM_TOKEN:
            raise ConfigurationError("POOLFORM_TOKEN is not set")
        return cls(settings.POOLFORM_HOST, settings.POOLFORM_TOKEN)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def cloud(self) -> str:
        if "azuredatabricks.net" in self._base_url:
            return "azure"
        if "gcp.databricks.com" in self._base_url:
            return "gcp"
        return "aws"

    def is_aws(self) -> bool:
        return self.cloud == "aws"

    def is_azure(self) -> bool:
        return self.cloud == "azure"

    def is_gcp(self) -> bool:
        return self.cloud == "gcp"

    @property
    def instance_pools(self) -> InstancePoolsAPIClient:
        return InstancePoolsAPIClient(self._request, logger)

    @property
    def clusters(self) -> ClustersAPIClient:
        return ClustersAPIClient(self._request, logger, cloud=self.cloud)

    def _request(
        self,
        path: str,
        body: Optional[str] = None,
        raise_for_status: bool = True,
        method: str = "POST",
        **kwargs,
    ) -> requests.Response:
        path = path.lstrip("/")
        if body is not None:
            kwargs.setdefault("headers", {})["Content-Type"] = "application/json"
            kwargs["data"] = body
        kwargs.setdefault("timeout", settings.CLIENT_REQUEST_TIMEOUT)

        logger.debug("%s /%s", method, path)
        for attempt in range(1, settings.CLIENT_MAX_RETRIES + 1):
            try:
                resp = self._s.request(method, f"{self._base_url}/{path}", **kwargs)
                break
            except requests.exceptions.ConnectionError as e:
                logger.debug("Could not connect to %s: %s", self._base_url, e)
                if attempt < settings.CLIENT_MAX_RETRIES:
                    time.sleep(settings.CLIENT_RETRY_INTERVAL)
        else:
            raise ClientError(f"Failed to connect to {self._base_url}")

        if 400 <= resp.status_code < 600:
            logger.debug(
                "Error requesting %s. Status: %s. Body: %s",
                resp.request.url,
                resp.status_code,
                resp.content,
            )

        if raise_for_status and not resp.ok:
            raise _make_api_error(resp, path)
        return resp


def _make_api_error(resp: requests.Response, path: str) -> APIError:
    error_body = _parse_error_body(resp)
    message = error_body.message or f"{resp.status_code} {resp.reason} when requesting /{path}"
    kwargs: Dict[str, Any] = {
        "error_code": error_body.error_code or None,
        "status_code": resp.status_code,
        "resource": f"/{path}",
    }
    if resp.status_code == 404:
        return ResourceNotExistsError(message, **kwargs)
    return APIError(message, **kwargs)


def _parse_error_body(resp: requests.Response) -> APIErrorBody:
    try:
        return APIErrorBody.__response__.parse_raw(resp.content)
    except (ValidationError, ValueError):
        return APIErrorBody.__response__()
