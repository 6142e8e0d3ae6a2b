"""Walk every CircleCI account and collect its contexts, projects, variables and keys."""

import sys

from ..client import CircleCIClient
from ..models import (
    Account,
    AccountData,
    ContextData,
    FatalError,
    ProjectData,
    ProjectKey,
    Report,
    VcsProvider,
)
from ..paginate import fetch_all
from ..utils import context_url, format_account_label, project_slug, project_url


def _log(msg: str):
    sys.stderr.write(f"[accounts] {msg}\n")
    sys.stderr.flush()


def fetch_accounts(client: CircleCIClient) -> list[Account]:
    """Fetch the collaborations list, aborting on any error or unknown provider."""
    resp = client.list_collaborations()
    if not resp.ok:
        message = resp.body.get("message", "") if isinstance(resp.body, dict) else ""
        raise FatalError(f"Could not list collaborations (HTTP {resp.status}) {message}".rstrip())

    accounts = [Account.from_api(item) for item in resp.body]
    for account in accounts:
        # Fail before any account is fetched rather than mislabel one mid-run
        VcsProvider.from_tag(account.vcs_type)
    return accounts


def fetch_contexts(client: CircleCIClient, account: Account) -> list[ContextData]:
    contexts = []
    for item in fetch_all(client.list_contexts, account.id):
        variables = fetch_all(client.list_context_variables, item["id"])
        contexts.append(
            ContextData(
                id=item["id"],
                name=item["name"],
                url=context_url(account, item["id"]),
                variables=[v["variable"] for v in variables],
            )
        )
        print(f"    context {item['name']}: {len(variables)} variables", flush=True)
    return contexts


def fetch_projects(client: CircleCIClient, account: Account) -> list[ProjectData]:
    projects = []
    for item in fetch_all(client.list_projects, account.id):
        name = item["name"]
        slug = project_slug(account, name)
        variables = fetch_all(client.list_project_variables, slug)
        keys = fetch_all(client.list_project_keys, slug)
        projects.append(
            ProjectData(
                name=name,
                slug=slug,
                url=project_url(account, name),
                variables=[v["name"] for v in variables],
                keys=[ProjectKey.from_api(k) for k in keys],
            )
        )
        print(f"    project {name}: {len(variables)} variables, {len(keys)} keys", flush=True)
    return projects


def fetch_account_data(client: CircleCIClient, account: Account) -> AccountData:
    """Collect one account. Contexts first, then projects; nothing runs in parallel."""
    contexts = fetch_contexts(client, account)
    projects = fetch_projects(client, account)
    return AccountData(contexts=contexts, projects=projects)


def fetch_report(client: CircleCIClient, accounts: list[Account] | None = None) -> Report:
    """Build the full report, one ``{account name: AccountData}`` entry per account.

    API errors below the collaborations call are not caught: they abort the
    run before anything is written.
    """
    if accounts is None:
        accounts = fetch_accounts(client)

    print(f"Found {len(accounts)} accounts", flush=True)
    if not accounts:
        _log("Token has no collaborations; the report will be empty")

    report: Report = []
    for i, account in enumerate(accounts, start=1):
        print(format_account_label(account.vcs_type, account.name, i, len(accounts)), flush=True)
        report.append({account.name: fetch_account_data(client, account)})
    return report
