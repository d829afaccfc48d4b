"""Pytest configuration for the SCM providers test suite.

Providers are exercised over ``httpx.MockTransport``: a :class:`Recorder`
answers canned responses per ``(method, path)`` and keeps every request so
tests can assert on exact URLs, query strings and bodies, or on the absence
of any HTTP traffic.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

import httpx
import pytest

from scm_providers.base.models import ConfigGroup
from scm_providers.bitbucket import BitbucketProvider
from scm_providers.config.schema import default_config_group
from scm_providers.github import GithubProvider
from scm_providers.persistence import InMemoryConfigStore

_ENV_VARS = (
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GITHUB_OWNER",
    "GITHUB_API_BASE_URL",
    "GITHUB_API_VERSION",
    "GITHUB_PAGE_SIZE",
    "BITBUCKET_USERNAME",
    "BITBUCKET_APP_PASSWORD",
    "BITBUCKET_WORKSPACE",
    "BITBUCKET_OWNER",
    "BITBUCKET_API_BASE_URL",
    "BITBUCKET_PAGE_SIZE",
    "SCM_PROVIDERS_CONFIG_FILE",
    "SCM_HTTP_TIMEOUT_SECONDS",
    "SCM_CONNECT_TIMEOUT_SECONDS",
)

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class Recorder:
    """In-process HTTP backend with per-route canned responses."""

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Route] = {}

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json: Any = None,
        text: Optional[str] = None,
    ) -> None:
        if text is not None:
            route: Route = httpx.Response(status, text=text)
        else:
            route = httpx.Response(status, json=json if json is not None else {})
        self._routes[(method.upper(), path)] = route

    def add_handler(self, method: str, path: str, fn: Callable[[httpx.Request], httpx.Response]) -> None:
        self._routes[(method.upper(), path)] = fn

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.prefix and path.startswith(self.prefix):
            path = path[len(self.prefix):]
        route = self._routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(route) and not isinstance(route, httpx.Response):
            return route(request)
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def paths(self) -> List[str]:
        out = []
        for r in self.requests:
            path = r.url.path
            out.append(path[len(self.prefix):] if self.prefix and path.startswith(self.prefix) else path)
        return out

    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last().content.decode("utf-8"))

    def reset(self) -> None:
        self.requests.clear()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host credentials and overrides out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def make_group() -> Callable[..., ConfigGroup]:
    """Return a builder for manifest groups with the given values filled in."""

    def _build(provider: str, **values: Any) -> ConfigGroup:
        group = default_config_group(provider)
        for param in group.params:
            if param.key in values:
                param.value = [values[param.key]]
        return group

    return _build


@pytest.fixture()
def opts() -> Callable[..., Dict[str, Any]]:
    """Return a builder for ``{"configs": {"params": [...]}}`` call options."""

    def _build(**values: Any) -> Dict[str, Any]:
        return {"configs": {"params": [{"key": k, "value": [v]} for k, v in values.items()]}}

    return _build


@pytest.fixture()
def github_http() -> Recorder:
    rec = Recorder()
    rec.add("GET", "/user", json={"login": "octo", "id": 1})
    return rec


@pytest.fixture()
def github_store(make_group) -> InMemoryConfigStore:
    return InMemoryConfigStore([make_group("github", token="ghp_secret", owner="octo")])


@pytest.fixture()
def github(github_store, github_http) -> Iterator[GithubProvider]:
    """Initialized GitHub provider; the recorder is reset after ``init()``."""
    provider = GithubProvider(github_store, transport=github_http.transport)
    provider.init()
    github_http.reset()
    yield provider
    provider.close()


@pytest.fixture()
def bitbucket_http() -> Recorder:
    rec = Recorder(prefix="/2.0")
    rec.add("GET", "/user", json={"username": "bb-user", "uuid": "{1}"})
    return rec


@pytest.fixture()
def bitbucket_store(make_group) -> InMemoryConfigStore:
    return InMemoryConfigStore(
        [make_group("bitbucket", username="bb-user", appPassword="app-pass", owner="acme")]
    )


@pytest.fixture()
def bitbucket(bitbucket_store, bitbucket_http) -> Iterator[BitbucketProvider]:
    """Initialized Bitbucket provider; the recorder is reset after ``init()``."""
    provider = BitbucketProvider(bitbucket_store, transport=bitbucket_http.transport)
    provider.init()
    bitbucket_http.reset()
    yield provider
    provider.close()
