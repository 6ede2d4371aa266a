from logging import Logger
from typing import ClassVar, Optional

import requests
from typing_extensions import Protocol


class APIRequest(Protocol):
    def __call__(
        self,
        path: str,
        body: Optional[str] = None,
        raise_for_status: bool = True,
        method: str = "POST",
        **kwargs,
    ) -> requests.Response: ...


class APIClientGroup:
    """
    A set of endpoints sharing one path prefix, e.g. `/api/2.0/instance-pools`.
    """

    BASE_PATH: ClassVar[str] = "/api/2.0"

    def __init__(self, _request: APIRequest, _logger: Logger):
        self._request = _request
        self._logger = _logger

    def _path(self, endpoint: str) -> str:
        return f"{self.BASE_PATH}/{endpoint}"
