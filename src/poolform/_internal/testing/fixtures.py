from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List, Mapping, Optional
from urllib.parse import urlsplit

import orjson
import requests_mock
from pydantic import BaseModel

from poolform._internal.core.errors import PoolformError
from poolform._internal.provider.data import ResourceData
from poolform._internal.provider.resource import Resource
from poolform._internal.utils.json_utils import orjson_default
from poolform.api.server import APIClient

FIXTURE_HOST = "https://fixtures.poolform.test"
FIXTURE_TOKEN = "fixture-token"


@dataclass
class HTTPFixture:
    """
    A canned request/response pair of the remote API.

    `resource` is the request path with an optional query string,
    e.g. `/api/2.0/instance-pools/get?instance_pool_id=abc`.
    `response` and `expected_request` may be models or plain JSON-like values.
    """

    method: str
    resource: str
    response: Any = None
    status: int = 200
    expected_request: Any = None
    requests: List[Any] = field(default_factory=list, init=False, repr=False)

    def register(self, mocker: requests_mock.Mocker):
        mocker.register_uri(
            self.method,
            f"{FIXTURE_HOST}{self.resource}",
            text=self._respond,
            complete_qs=True,
        )

    def check_requests(self):
        if self.expected_request is None:
            return
        expected = to_json_value(self.expected_request)
        for request in self.requests:
            actual = request.json() if request.body else None
            assert actual == expected, (
                f"Unexpected request body for {self.method} {self.resource}:\n"
                f"expected: {expected}\n"
                f"actual:   {actual}"
            )

    def _respond(self, request, context) -> str:
        self.requests.append(request)
        context.status_code = self.status
        context.headers["Content-Type"] = "application/json"
        if self.response is None:
            return ""
        return orjson.dumps(to_json_value(self.response)).decode()


def to_json_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return orjson.loads(value.json(exclude_none=True))
    return orjson.loads(orjson.dumps(value, default=orjson_default))


def _no_fixture(request, context) -> str:
    url = urlsplit(request.url)
    resource = url.path if not url.query else f"{url.path}?{url.query}"
    raise AssertionError(
        f"No fixture for {request.method} {resource}. Add it to the fixtures:\n"
        f'HTTPFixture(method="{request.method}", resource="{resource}", response=...)'
    )


@contextmanager
def fixture_api_client(fixtures: List[HTTPFixture]) -> Generator[APIClient, None, None]:
    """
    Yields a client that can reach the given fixtures only.
    Request bodies are checked against the fixtures on exit.
    """
    with requests_mock.Mocker(case_sensitive=True) as mocker:
        mocker.register_uri(requests_mock.ANY, requests_mock.ANY, text=_no_fixture)
        for fixture in fixtures:
            fixture.requests.clear()
            fixture.register(mocker)
        yield APIClient(FIXTURE_HOST, FIXTURE_TOKEN)
    for fixture in fixtures:
        fixture.check_requests()


@dataclass
class ResourceFixture:
    """
    Runs one lifecycle step of a resource against canned HTTP fixtures.

    `state` is the declared configuration, `instance_state` the prior persisted state
    (string values are coerced by the schema). Exactly one of `create`, `read`,
    `update`, `delete` must be set.

    After `apply()` the resource data is available as `data` even if the step failed.
    """

    fixtures: List[HTTPFixture]
    resource: Resource
    state: Optional[Mapping[str, Any]] = None
    instance_state: Optional[Mapping[str, Any]] = None
    id: str = ""
    new: bool = False
    create: bool = False
    read: bool = False
    update: bool = False
    delete: bool = False
    removed: bool = False
    requires_new: bool = False
    data: Optional[ResourceData] = field(default=None, init=False)

    def apply(self) -> ResourceData:
        steps = {
            "create": self.create,
            "read": self.read,
            "update": self.update,
            "delete": self.delete,
        }
        selected = [name for name, enabled in steps.items() if enabled]
        assert len(selected) == 1, f"Exactly one step must be set, got: {selected}"
        step = selected[0]

        instance_state = self.instance_state
        if self.new:
            instance_state = None
        d = self.resource.data(config=self.state, state=instance_state, id=self.id)
        self.data = d

        if step == "update":
            diff = self.resource.diff(d)
            assert diff.requires_new == self.requires_new, (
                f"Expected requires_new={self.requires_new}, "
                f"changes: {sorted(diff.changes)}, replaced by: {diff.replaced_by}"
            )

        error: Optional[PoolformError] = None
        with fixture_api_client(self.fixtures) as client:
            try:
                getattr(self.resource, f"{step}_context")(d, client)
            except PoolformError as e:
                error = e

        if self.removed:
            assert d.id == "", f"Resource should be removed, but has id {d.id!r}"
        elif step == "read" and error is None:
            assert d.id != "", "Resource should not be removed"
        if error is not None:
            raise error
        return d

    def apply_no_error(self) -> ResourceData:
        try:
            return self.apply()
        except PoolformError as e:
            raise AssertionError(f"Unexpected error: {e}") from e

    def state_after(self) -> Dict[str, Any]:
        assert self.data is not None, "apply() was not called"
        return self.data.state()


def assert_error_starts_with(error: BaseException, prefix: str):
    assert str(error).startswith(prefix), f"Expected error starting with {prefix!r}, got {error!r}"
