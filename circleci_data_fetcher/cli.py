"""CLI command for exporting CircleCI account data."""

import argparse
import sys

from .client import CircleCIClient
from .credentials import resolve_token
from .fetch_account_data import fetch_report
from .models import FatalError
from .report import OUTPUT_FILE, summarize, write_report

VERSION = "0.1.0"


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="circleci-fetch",
        description=(
            "Collect contexts, projects, environment variable names and checkout keys "
            f"for every CircleCI account the token can see, and write them to {OUTPUT_FILE}"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="The API token is read from CIRCLE_TOKEN (or .env); without it you are prompted.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.parse_args(argv)

    try:
        token = resolve_token()
        with CircleCIClient(token) as client:
            report = fetch_report(client)
    except FatalError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    path = write_report(report)
    stats = summarize(report)
    print(
        f"\nDone: {stats['accounts']} accounts, {stats['contexts']} contexts "
        f"({stats['context_variables']} variables), {stats['projects']} projects "
        f"({stats['project_variables']} variables, {stats['project_keys']} keys) -> {path}"
    )


if __name__ == "__main__":
    main()
