"""Formatting helpers for account labels and CircleCI web app URLs."""

from .models import Account, VcsProvider

APP_BASE = "https://app.circleci.com"


def format_account_label(vcs_type: str, name: str, index: int, total: int) -> str:
    """Label shown before an account's progress lines, e.g. ``[1/3] GitHub: acme``."""
    provider = VcsProvider.from_tag(vcs_type)
    return f"[{index}/{total}] {provider.label}: {name}"


def project_slug(account: Account, project_name: str) -> str:
    return f"{account.slug}/{project_name}"


def context_url(account: Account, context_id: str) -> str:
    return (
        f"{APP_BASE}/settings/organization/{account.provider.app_segment}/"
        f"{account.org_name}/contexts/{context_id}"
    )


def project_url(account: Account, project_name: str) -> str:
    return (
        f"{APP_BASE}/settings/project/{account.provider.app_segment}/"
        f"{account.org_name}/{project_name}/environment-variables"
    )
