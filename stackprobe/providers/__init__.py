"""Hosting provider adapters.

Public API:
    get_provider(host, client, settings) -> RepoProvider
"""

import httpx

from stackprobe.core.config import Settings
from stackprobe.detection.hosts import GITHUB, GITLAB
from stackprobe.providers.base import (
    DirEntry,
    RepoInfo,
    RepoProvider,
    UnsupportedHostError,
)
from stackprobe.providers.github import GitHubProvider
from stackprobe.providers.gitlab import GitLabProvider

_PROVIDER_MAP: dict[str, type] = {
    GITHUB: GitHubProvider,
    GITLAB: GitLabProvider,
}


def get_provider(host: str, client: httpx.AsyncClient, settings: Settings) -> RepoProvider:
    """Return a provider bound to `client` for the given host token.

    Raises:
        UnsupportedHostError: If the host has no adapter.
    """
    provider_cls = _PROVIDER_MAP.get(host)
    if provider_cls is None:
        raise UnsupportedHostError(host)
    return provider_cls(client, settings)


__all__ = [
    "DirEntry",
    "RepoInfo",
    "RepoProvider",
    "UnsupportedHostError",
    "get_provider",
]
