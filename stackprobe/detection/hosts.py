"""Repository URL routing.

`classify` maps a URL to a hosting-platform token by substring matching;
`extract_identifier` turns a URL for one of the fully supported hosts into
the identifier its API expects. Neither touches the network.
"""

import re
from dataclasses import dataclass
from typing import Optional

GITHUB = "github"
GITLAB = "gitlab"
OTHER = "other"

SUPPORTED_HOSTS: tuple[str, ...] = (GITHUB, GITLAB)

# Ordered by priority; first match wins.
HOST_SIGNATURES: list[tuple[str, tuple[str, ...]]] = [
    (GITHUB, ("github.com", "github:")),
    (GITLAB, ("gitlab.com", "gitlab:")),
    ("bitbucket", ("bitbucket.org", "bitbucket:")),
    ("gitea", ("gitea.", "gitea:")),
    ("forgejo", ("forgejo.",)),
    ("codeberg", ("codeberg.org",)),
    ("sourcehut", ("sr.ht", "sourcehut")),
    ("azure_devops", ("azure.com", "visualstudio.com", "dev.azure")),
    ("gogs", ("gogs.",)),
]

_GITHUB_PATTERNS: list[re.Pattern[str]] = [
    # https://github.com/owner/repo[.git][/...], git@github.com:owner/repo.git
    re.compile(r"github\.com[/:]([^/\s:]+)/([^/\s?#]+)"),
    # github:owner/repo
    re.compile(r"^github:([^/\s]+)/([^/\s?#]+)"),
    # owner/repo
    re.compile(r"^([^/\s:]+)/([^/\s:?#]+)$"),
]

_GITLAB_PATTERNS: list[re.Pattern[str]] = [
    # https://gitlab.com/group/sub/project[.git], git@gitlab.com:group/project.git
    re.compile(r"gitlab\.com[/:]([^\s?#]+/[^\s?#]+)"),
    # gitlab:group/project
    re.compile(r"^gitlab:([^\s?#]+/[^\s?#]+)"),
    # group/project
    re.compile(r"^([^/\s:]+(?:/[^/\s:?#]+)+)$"),
]


@dataclass(frozen=True)
class RepoIdentifier:
    """Provider-specific repository address.

    `path` is ``owner/repo`` on GitHub and the full namespace path
    (``group/subgroup/project``) on GitLab.
    """

    host: str
    path: str

    @property
    def owner(self) -> str:
        return self.path.rsplit("/", 1)[0]

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


def classify(url: str) -> str:
    """Return the hosting-platform token for `url`, or "other"."""
    lower = url.lower()
    for host, signatures in HOST_SIGNATURES:
        if any(sig in lower for sig in signatures):
            return host
    return OTHER


def extract_identifier(url: str, host: str) -> Optional[RepoIdentifier]:
    """Extract the repository identifier for a supported host.

    Returns None when `host` is not fully supported or when no URL shape
    matches; callers treat that as "cannot analyze this URL".
    """
    url = url.strip()
    if not url.isprintable():
        return None
    if host == GITHUB:
        return _extract_github(url)
    if host == GITLAB:
        return _extract_gitlab(url)
    return None


def _extract_github(url: str) -> Optional[RepoIdentifier]:
    for pattern in _GITHUB_PATTERNS:
        match = pattern.search(url)
        if match:
            owner = match.group(1)
            repo = _strip_git_suffix(match.group(2))
            if not owner or not repo:
                return None
            return RepoIdentifier(host=GITHUB, path=f"{owner}/{repo}")
    return None


def _extract_gitlab(url: str) -> Optional[RepoIdentifier]:
    for pattern in _GITLAB_PATTERNS:
        match = pattern.search(url)
        if match:
            path = match.group(1).split("/-/", 1)[0]
            path = _strip_git_suffix(path.strip("/"))
            if "/" not in path:
                return None
            return RepoIdentifier(host=GITLAB, path=path)
    return None


def _strip_git_suffix(value: str) -> str:
    value = value.rstrip("/")
    if value.endswith(".git"):
        value = value[: -len(".git")]
    return value
