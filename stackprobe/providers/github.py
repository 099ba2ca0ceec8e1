"""GitHub REST API adapter (unauthenticated, read-only).

Metadata and directory listings come from the REST v3 API; file bodies
are fetched from raw.githubusercontent.com, which does not count against
the REST rate limit.
"""

import logging
from typing import Any, Optional

import httpx

from stackprobe.core.config import Settings
from stackprobe.detection.hosts import RepoIdentifier
from stackprobe.providers.base import DirEntry, RepoInfo
from stackprobe.providers.http import get_json, get_text

logger = logging.getLogger(__name__)

# spdx_id values GitHub uses when it could not classify the license.
_UNDETERMINED_SPDX = frozenset({"noassertion", "other"})

_HEADERS = {
    "Accept": "application/vnd.github.v3+json",
    "X-GitHub-Api-Version": "2022-11-28",
}


class GitHubProvider:
    """RepoProvider for github.com."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self._client = client
        self._api_base = settings.github_api_base.rstrip("/")
        self._raw_base = settings.github_raw_base.rstrip("/")

    async def get_repo_info(self, ident: RepoIdentifier) -> Optional[RepoInfo]:
        """GET /repos/{owner}/{repo}"""
        data = await get_json(
            self._client,
            f"{self._api_base}/repos/{ident.owner}/{ident.name}",
            headers=_HEADERS,
        )
        if not isinstance(data, dict):
            logger.info("GitHub metadata unavailable for %s", ident.path)
            return None
        return _parse_repo_info(data)

    async def list_files(
        self,
        ident: RepoIdentifier,
        path: str = "",
        ref: Optional[str] = None,
    ) -> list[DirEntry]:
        """GET /repos/{owner}/{repo}/contents/{path}"""
        params = {"ref": ref} if ref and ref != "HEAD" else None
        data = await get_json(
            self._client,
            f"{self._api_base}/repos/{ident.owner}/{ident.name}/contents/{path.strip('/')}",
            headers=_HEADERS,
            params=params,
        )
        # A file path returns an object rather than a list.
        if not isinstance(data, list):
            return []
        return [entry for entry in (_parse_entry(item) for item in data) if entry]

    async def get_file(
        self,
        ident: RepoIdentifier,
        path: str,
        ref: Optional[str] = None,
    ) -> Optional[str]:
        """GET raw.githubusercontent.com/{owner}/{repo}/{ref}/{path}"""
        return await get_text(
            self._client,
            f"{self._raw_base}/{ident.owner}/{ident.name}/{ref or 'HEAD'}/{path.lstrip('/')}",
        )


def _parse_repo_info(data: dict[str, Any]) -> RepoInfo:
    license_id: Optional[str] = None
    license_data = data.get("license")
    if isinstance(license_data, dict):
        spdx = license_data.get("spdx_id")
        if isinstance(spdx, str) and spdx.lower() not in _UNDETERMINED_SPDX:
            license_id = spdx.lower()

    description = data.get("description")
    return RepoInfo(
        name=data.get("name"),
        description=description or None,
        license_id=license_id,
        # Treat a missing flag as private: never analyze what we can't confirm is public.
        is_private=bool(data.get("private", True)),
        default_branch=data.get("default_branch") or "HEAD",
    )


def _parse_entry(item: Any) -> Optional[DirEntry]:
    if not isinstance(item, dict) or not isinstance(item.get("name"), str):
        return None
    return DirEntry(
        name=item["name"],
        path=item.get("path") or item["name"],
        is_dir=item.get("type") == "dir",
    )
