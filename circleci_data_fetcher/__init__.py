"""Export CircleCI contexts, projects, variable names and keys to JSON.

Walks every account the API token can see, one request at a time, and writes
the collected inventory to circleci-data.json.
"""

from .cli import main
from .client import CircleCIClient
from .models import ApiResponse
from .paginate import fetch_all, iter_items

__all__ = ["main", "CircleCIClient", "ApiResponse", "fetch_all", "iter_items"]

if __name__ == "__main__":
    main()
