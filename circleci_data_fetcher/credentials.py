"""Resolve the CircleCI API token: environment first, then an interactive prompt."""

import getpass

from .models import FatalError
from .settings import get_settings

PROMPT = "CircleCI API token: "


def resolve_token(prompt=None) -> str:
    """Return the API token from CIRCLE_TOKEN, or ask for it once with masked input.

    ``prompt`` defaults to ``getpass.getpass``.
    """
    token = get_settings().circle_token
    if token:
        return token

    prompt = prompt or getpass.getpass
    token = prompt(PROMPT).strip()
    if not token:
        raise FatalError("No CircleCI API token provided (set CIRCLE_TOKEN or enter one at the prompt)")
    return token
