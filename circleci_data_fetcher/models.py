"""Data models, provider tags and errors for the CircleCI export."""

from dataclasses import dataclass, field

import httpx


class FatalError(Exception):
    """Aborts the whole run before anything is written."""


class ApiError(Exception):
    """A CircleCI API call answered with a non-2xx status."""

    def __init__(self, status: int, message: str, url: str | None = None):
        super().__init__(f"CircleCI API error {status} for {url}: {message}")
        self.status = status
        self.message = message
        self.url = url


@dataclass
class ApiResponse:
    """Response from the CircleCI REST API client."""

    status: int
    body: dict | list
    response: httpx.Response | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True)
class VcsProvider:
    label: str
    app_segment: str  # as used in app.circleci.com settings URLs
    tags: tuple[str, ...]

    @classmethod
    def from_tag(cls, tag: str) -> "VcsProvider":
        for provider in PROVIDERS:
            if tag in provider.tags:
                return provider
        raise FatalError(f"Unrecognized version control provider: {tag!r}")


PROVIDERS = (
    VcsProvider(label="GitHub", app_segment="github", tags=("github", "gh")),
    VcsProvider(label="Bitbucket", app_segment="bitbucket", tags=("bitbucket", "bb")),
)


@dataclass(frozen=True)
class Account:
    """A collaboration: an organization or user namespace on one VCS provider."""

    id: str
    name: str
    slug: str
    vcs_type: str

    @classmethod
    def from_api(cls, data: dict) -> "Account":
        return cls(
            id=data["id"],
            name=data["name"],
            slug=data["slug"],
            vcs_type=data["vcs-type"],
        )

    @property
    def provider(self) -> VcsProvider:
        return VcsProvider.from_tag(self.vcs_type)

    @property
    def org_name(self) -> str:
        return self.slug.rsplit("/", 1)[-1]


@dataclass
class ContextData:
    id: str
    name: str
    url: str
    variables: list[str] = field(default_factory=list)


@dataclass
class ProjectKey:
    """Checkout key metadata. Key material is never stored."""

    type: str | None
    fingerprint: str | None
    preferred: bool | None = None
    created_at: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "ProjectKey":
        return cls(
            type=data.get("type"),
            fingerprint=data.get("fingerprint"),
            preferred=data.get("preferred"),
            created_at=data.get("created-at"),
        )


@dataclass
class ProjectData:
    name: str
    slug: str
    url: str
    variables: list[str] = field(default_factory=list)
    keys: list[ProjectKey] = field(default_factory=list)


@dataclass
class AccountData:
    """Everything collected for one account."""

    contexts: list[ContextData] = field(default_factory=list)
    projects: list[ProjectData] = field(default_factory=list)
    # Reserved for accounts whose data could not be fetched; nothing fills it yet.
    unavailable: list[str] = field(default_factory=list)


# One single-key {account name: AccountData} mapping per account, in collaboration order.
Report = list[dict[str, AccountData]]
