"""Cursor pagination over CircleCI list endpoints."""

from collections.abc import Callable, Iterator

from .models import ApiError, ApiResponse


def _error_message(body) -> str:
    if isinstance(body, dict):
        return str(body.get("message", body))
    return str(body)


def iter_items(fetch_page: Callable[[str | None], ApiResponse]) -> Iterator[dict]:
    """Yield every item across all pages, in the order the API returns them.

    ``fetch_page`` is called with ``None`` first, then with each
    ``next_page_token`` until the API stops returning one.
    """
    cursor = None
    while True:
        page = fetch_page(cursor)
        if not page.ok:
            url = str(page.response.request.url) if page.response is not None else None
            raise ApiError(page.status, _error_message(page.body), url)

        yield from page.body.get("items", [])

        cursor = page.body.get("next_page_token")
        if not cursor:
            return


def fetch_all(endpoint: Callable[..., ApiResponse], scope: str) -> list[dict]:
    """Drain a paginated endpoint for one scope (account id, context id or project slug)."""
    return list(iter_items(lambda cursor: endpoint(scope, page_token=cursor)))
