"""Shared fixtures: a real CircleCIClient whose HTTP layer is replaced by an in-memory API."""

from urllib.parse import urlencode

import httpx
import pytest

from circleci_data_fetcher.client import API_BASE, PAGE_TOKEN_PARAM, CircleCIClient
from circleci_data_fetcher.settings import get_settings


class FakeCircleCI:
    """Answers GET requests from registered routes and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    @staticmethod
    def _key(path, params):
        scope = {k: v for k, v in (params or {}).items() if k != PAGE_TOKEN_PARAM}
        return f"{path}?{urlencode(sorted(scope.items()))}" if scope else path

    def add(self, path, body, status=200, params=None):
        """Register a single (non-paginated) response."""
        self.routes[self._key(path, params)] = (status, body)

    def add_pages(self, path, pages, params=None):
        """Register a paginated listing. ``pages`` is a list of item lists."""
        self.routes[self._key(path, params)] = pages

    def handle(self, method, url, params=None):
        assert method == "GET"
        path = url.removeprefix(API_BASE)
        self.calls.append((path, dict(params or {})))
        request = httpx.Request(method, url, params=params)

        route = self.routes.get(self._key(path, params))
        if route is None:
            return httpx.Response(404, json={"message": "Not found."}, request=request)
        if isinstance(route, tuple):
            status, body = route
            return httpx.Response(status, json=body, request=request)

        token = (params or {}).get(PAGE_TOKEN_PARAM)
        index = int(token.removeprefix("page-")) if token else 0
        next_token = f"page-{index + 1}" if index + 1 < len(route) else None
        return httpx.Response(
            200,
            json={"items": route[index], "next_page_token": next_token},
            request=request,
        )

    @property
    def paths(self):
        return [path for path, _ in self.calls]


@pytest.fixture
def fake_api():
    return FakeCircleCI()


@pytest.fixture
def make_client(fake_api):
    """Factory with CircleCIClient's signature, wired to ``fake_api``."""
    created = []

    def factory(token, base_url=API_BASE):
        client = CircleCIClient(token, base_url=base_url)
        client._client.request = fake_api.handle
        created.append(client)
        return client

    yield factory
    for client in created:
        client.close()


@pytest.fixture
def client(make_client):
    return make_client("test-token")


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run in an empty directory with no CIRCLE_TOKEN and fresh settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CIRCLE_TOKEN", raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def collaboration():
    """Build a /me/collaborations entry; defaults describe the GitHub org ``acme``."""

    def build(**overrides):
        data = {
            "id": "org-acme",
            "vcs-type": "github",
            "name": "acme",
            "avatar_url": "https://avatars.example.com/acme.png",
            "slug": "gh/acme",
        }
        data.update(overrides)
        return data

    return build


@pytest.fixture
def acme_api(fake_api, collaboration):
    """One account, two contexts (0 and 2 variables), one project (1 variable, 1 key)."""
    fake_api.add("/v2/me/collaborations", [collaboration()])
    fake_api.add_pages(
        "/v2/context",
        [[{"id": "ctx-empty", "name": "empty"}, {"id": "ctx-deploy", "name": "deploy"}]],
        params={"owner-id": "org-acme"},
    )
    fake_api.add_pages("/v2/context/ctx-empty/environment-variable", [[]])
    fake_api.add_pages(
        "/v2/context/ctx-deploy/environment-variable",
        [[{"variable": "AWS_ACCESS_KEY_ID", "context_id": "ctx-deploy"}],
         [{"variable": "AWS_SECRET_ACCESS_KEY", "context_id": "ctx-deploy"}]],
    )
    fake_api.add_pages(
        "/private/project",
        [[{"name": "web", "id": "proj-web"}]],
        params={"organization-id": "org-acme"},
    )
    fake_api.add_pages("/v2/project/gh/acme/web/envvar", [[{"name": "NPM_TOKEN", "value": "xxxx1234"}]])
    fake_api.add_pages(
        "/v2/project/gh/acme/web/checkout-key",
        [[{
            "public-key": "ssh-ed25519 AAAA...",
            "type": "deploy-key",
            "fingerprint": "SHA256:abc",
            "preferred": True,
            "created-at": "2024-03-01T10:00:00Z",
        }]],
    )
    return fake_api
