"""GitLab REST API v4 adapter (unauthenticated, read-only).

Projects are addressed by their URL-encoded namespace path, so nested
groups (``group/subgroup/project``) work without an extra lookup.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from stackprobe.core.config import Settings
from stackprobe.detection.hosts import RepoIdentifier
from stackprobe.providers.base import DirEntry, RepoInfo
from stackprobe.providers.http import get_json, get_text

logger = logging.getLogger(__name__)

# Largest page the tree endpoint accepts. Root directories beyond this are
# truncated, which only loses presence signals.
_TREE_PAGE_SIZE = 100


class GitLabProvider:
    """RepoProvider for gitlab.com (or a self-managed instance)."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self._client = client
        self._api_base = settings.gitlab_api_base.rstrip("/")

    async def get_repo_info(self, ident: RepoIdentifier) -> Optional[RepoInfo]:
        """GET /projects/{id}?license=true"""
        data = await get_json(
            self._client,
            self._project_url(ident),
            params={"license": "true"},
        )
        if not isinstance(data, dict):
            logger.info("GitLab metadata unavailable for %s", ident.path)
            return None
        return _parse_project(data)

    async def list_files(
        self,
        ident: RepoIdentifier,
        path: str = "",
        ref: Optional[str] = None,
    ) -> list[DirEntry]:
        """GET /projects/{id}/repository/tree"""
        params: dict[str, Any] = {"per_page": _TREE_PAGE_SIZE}
        if path.strip("/"):
            params["path"] = path.strip("/")
        if ref and ref != "HEAD":
            params["ref"] = ref
        data = await get_json(
            self._client,
            f"{self._project_url(ident)}/repository/tree",
            params=params,
        )
        if not isinstance(data, list):
            return []
        return [entry for entry in (_parse_entry(item) for item in data) if entry]

    async def get_file(
        self,
        ident: RepoIdentifier,
        path: str,
        ref: Optional[str] = None,
    ) -> Optional[str]:
        """GET /projects/{id}/repository/files/{path}/raw"""
        encoded_path = quote(path.strip("/"), safe="")
        return await get_text(
            self._client,
            f"{self._project_url(ident)}/repository/files/{encoded_path}/raw",
            params={"ref": ref or "HEAD"},
        )

    def _project_url(self, ident: RepoIdentifier) -> str:
        return f"{self._api_base}/projects/{quote(ident.path, safe='')}"


def _parse_project(data: dict[str, Any]) -> RepoInfo:
    license_id: Optional[str] = None
    license_data = data.get("license")
    if isinstance(license_data, dict):
        key = license_data.get("key")
        if isinstance(key, str) and key:
            license_id = key.lower()

    description = data.get("description")
    return RepoInfo(
        name=data.get("name"),
        description=description or None,
        license_id=license_id,
        # "internal" projects need a login, so only "public" counts as public.
        is_private=data.get("visibility") != "public",
        default_branch=data.get("default_branch") or "HEAD",
    )


def _parse_entry(item: Any) -> Optional[DirEntry]:
    if not isinstance(item, dict) or not isinstance(item.get("name"), str):
        return None
    return DirEntry(
        name=item["name"],
        path=item.get("path") or item["name"],
        is_dir=item.get("type") == "tree",
    )
