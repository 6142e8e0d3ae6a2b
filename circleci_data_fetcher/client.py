"""Thin CircleCI REST API client using httpx.

Every endpoint issues exactly one GET and hands back the parsed body together
with the raw response. Non-2xx responses are returned, not raised; callers
decide whether to abort.
"""

import httpx

from .models import ApiResponse

API_BASE = "https://circleci.com/api"
PAGE_TOKEN_PARAM = "page-token"


class CircleCIClient:
    """Authenticated client for the handful of CircleCI endpoints we read."""

    def __init__(self, token: str, base_url: str = API_BASE):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            headers={
                "Circle-Token": token,
                "Accept": "application/json",
            },
            timeout=30.0,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _get(self, path: str, params: dict | None = None) -> ApiResponse:
        url = f"{self.base_url}{path}"
        resp = self._client.request("GET", url, params=params)

        if not resp.content:
            body = {}
        else:
            try:
                body = resp.json()
            except ValueError:
                if 200 <= resp.status_code < 300:
                    raise
                # Error pages are not always JSON
                body = {"message": resp.text}

        return ApiResponse(status=resp.status_code, body=body, response=resp)

    @staticmethod
    def _page_params(page_token: str | None, **params) -> dict:
        if page_token:
            params[PAGE_TOKEN_PARAM] = page_token
        return params

    def list_collaborations(self) -> ApiResponse:
        """Accounts the token can see. Not paginated: the body is a plain list."""
        return self._get("/v2/me/collaborations")

    def list_contexts(self, owner_id: str, page_token: str | None = None) -> ApiResponse:
        return self._get("/v2/context", self._page_params(page_token, **{"owner-id": owner_id}))

    def list_context_variables(self, context_id: str, page_token: str | None = None) -> ApiResponse:
        return self._get(f"/v2/context/{context_id}/environment-variable", self._page_params(page_token))

    def list_projects(self, owner_id: str, page_token: str | None = None) -> ApiResponse:
        return self._get(
            "/private/project", self._page_params(page_token, **{"organization-id": owner_id})
        )

    def list_project_variables(self, project_slug: str, page_token: str | None = None) -> ApiResponse:
        return self._get(f"/v2/project/{project_slug}/envvar", self._page_params(page_token))

    def list_project_keys(self, project_slug: str, page_token: str | None = None) -> ApiResponse:
        return self._get(f"/v2/project/{project_slug}/checkout-key", self._page_params(page_token))

    def close(self):
        self._client.close()
