"""Analyzer: turns a repository URL into a DetectedProfile.

Detection flow:
1. Classify the host and extract the repository identifier (no network).
2. Fetch repository metadata. Missing metadata or a private repository
   ends the analysis here, after exactly one call.
3. List the root directory, then concurrently list `.github`, fetch the
   compose file and fetch every manifest the listing shows.
4. Merge manifest signals in a fixed order and run the presence
   heuristics (CI, containers, governance files).
5. Fall back to classifying the LICENSE file when the host reported no
   license.

Any individual fetch or parse may fail; its signal is then simply absent
from the profile. Only steps 1 and 2 can make the whole analysis return None.
"""

import asyncio
import logging
from typing import Optional

import httpx
import structlog

from stackprobe.core.config import Settings, get_settings
from stackprobe.detection import hosts
from stackprobe.detection.heuristics import ci, docker, governance
from stackprobe.detection.heuristics import license as licenses
from stackprobe.detection.manifests import MANIFEST_PARSERS, package_json
from stackprobe.detection.patterns import LICENSE_FILE, OPEN_SOURCE_LICENSES
from stackprobe.detection.types import (
    OPEN_SOURCE_PROJECT_TYPE,
    Commands,
    DetectedProfile,
    PartialSignals,
)
from stackprobe.providers import RepoProvider, get_provider
from stackprobe.providers.base import DirEntry, RepoInfo
from stackprobe.providers.http import build_client

logger = logging.getLogger(__name__)

GITHUB_DIR = ".github"


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def analyze(url: str) -> Optional[DetectedProfile]:
    """Synchronous entry point for callers outside an event loop."""
    return asyncio.run(analyze_repository(url))


async def analyze_repository(
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> Optional[DetectedProfile]:
    """Analyze a hosted repository without cloning it.

    Args:
        url: Repository URL (https, SSH or `host:owner/repo` shorthand).
        client: Optional AsyncClient to issue requests with. When omitted a
            client is created for this call and closed afterwards.
        settings: Optional settings override.

    Returns:
        The profile, or None when the URL is unsupported, the repository
        is private, or its metadata could not be fetched.
    """
    settings = settings or get_settings()

    host = hosts.classify(url)
    if host not in hosts.SUPPORTED_HOSTS:
        logger.info("Unsupported repository host %s for %s", host, url)
        return None

    ident = hosts.extract_identifier(url, host)
    if ident is None:
        logger.info("Could not extract a repository identifier from %s", url)
        return None

    with structlog.contextvars.bound_contextvars(repo=ident.path, host=host):
        if client is not None:
            return await _analyze(get_provider(host, client, settings), ident)

        async with build_client(settings.http_timeout_seconds, settings.user_agent) as owned:
            return await _analyze(get_provider(host, owned, settings), ident)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

async def _analyze(provider: RepoProvider, ident: hosts.RepoIdentifier) -> Optional[DetectedProfile]:
    info = await provider.get_repo_info(ident)
    if info is None:
        return None
    if info.is_private:
        logger.info("Repository %s is private; skipping analysis", ident.path)
        return None

    ref = info.default_branch
    root = _RootListing(await provider.list_files(ident, ref=ref))

    compose_name = docker.compose_file(root.names)
    manifests = [parser for parser in MANIFEST_PARSERS if parser.FILENAME.lower() in root.names]

    github_listing, compose_content, *manifest_contents = await asyncio.gather(
        _list_github_dir(provider, ident, ref, root),
        _fetch(provider, ident, root.actual(compose_name), ref),
        *(_fetch(provider, ident, root.actual(parser.FILENAME.lower()), ref) for parser in manifests),
    )
    github_names = [entry.name for entry in github_listing]

    has_docker = docker.has_docker(root.names)
    signals = _merge(
        [
            _parse_manifest(parser, content, root.names)
            for parser, content in zip(manifests, manifest_contents)
            if content is not None
        ],
        has_docker=has_docker,
    )

    existing_files = governance.inventory(root.names, github_names)
    license_id = info.license_id
    if license_id is None and LICENSE_FILE in existing_files:
        content = await _fetch(provider, ident, root.actual(LICENSE_FILE.lower()), ref)
        if content is not None:
            license_id = licenses.classify(content)

    profile = _build_profile(
        info,
        ident,
        signals,
        license_id=license_id,
        cicd=ci.detect(root.names, github_names),
        has_docker=has_docker,
        container_registry=(
            docker.detect_registry(compose_content)
            if has_docker and compose_content is not None
            else None
        ),
        existing_files=existing_files,
    )
    _log_profile(ident, profile)
    return profile


class _RootListing:
    """Root directory entries indexed by lowercased name."""

    def __init__(self, entries: list[DirEntry]):
        self._by_lower = {entry.name.lower(): entry for entry in entries}
        self.names = set(self._by_lower)

    def actual(self, lower_name: Optional[str]) -> Optional[str]:
        """Return the path as the host spells it, or None if absent."""
        if lower_name is None:
            return None
        entry = self._by_lower.get(lower_name)
        return entry.path if entry else None

    def has_dir(self, lower_name: str) -> bool:
        entry = self._by_lower.get(lower_name)
        return entry is not None and entry.is_dir


async def _list_github_dir(
    provider: RepoProvider,
    ident: hosts.RepoIdentifier,
    ref: str,
    root: _RootListing,
) -> list[DirEntry]:
    if not root.has_dir(GITHUB_DIR):
        return []
    return await provider.list_files(ident, root.actual(GITHUB_DIR) or GITHUB_DIR, ref=ref)


async def _fetch(
    provider: RepoProvider,
    ident: hosts.RepoIdentifier,
    path: Optional[str],
    ref: str,
) -> Optional[str]:
    if path is None:
        return None
    return await provider.get_file(ident, path, ref=ref)


def _parse_manifest(parser, content: str, root_names: set[str]) -> PartialSignals:
    if parser is package_json:
        return package_json.parse(
            content,
            package_manager=package_json.detect_package_manager(root_names),
        )
    return parser.parse(content)


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------

def _merge(parts: list[PartialSignals], has_docker: bool) -> PartialSignals:
    """Merge parser outputs in order.

    Stack and datastore tokens are concatenated then deduplicated keeping
    first occurrence. Command slots, the test framework and the
    description go to the first parser that supplies them.
    """
    merged = PartialSignals(stack=[docker.DOCKER_TOKEN] if has_docker else [])
    for part in parts:
        merged.stack.extend(part.stack)
        merged.databases.extend(part.databases)
        merged.commands.fill_missing(part.commands)
        if merged.test_framework is None:
            merged.test_framework = part.test_framework
        if merged.description is None:
            merged.description = part.description
    merged.stack = _dedupe(merged.stack)
    merged.databases = _dedupe(merged.databases)
    return merged


def _dedupe(tokens: list[str]) -> list[str]:
    return list(dict.fromkeys(tokens))


def _build_profile(
    info: RepoInfo,
    ident: hosts.RepoIdentifier,
    signals: PartialSignals,
    *,
    license_id: Optional[str],
    cicd: Optional[str],
    has_docker: bool,
    container_registry: Optional[str],
    existing_files: list[str],
) -> DetectedProfile:
    is_public = not info.is_private
    is_open_source = is_public and license_id in OPEN_SOURCE_LICENSES
    return DetectedProfile(
        name=info.name,
        description=info.description or signals.description,
        repo_host=ident.host,
        stack=tuple(signals.stack),
        databases=tuple(signals.databases),
        commands=Commands(
            build=signals.commands.build,
            test=signals.commands.test,
            lint=signals.commands.lint,
            dev=signals.commands.dev,
        ),
        license=license_id,
        cicd=cicd,
        has_docker=has_docker,
        container_registry=container_registry,
        test_framework=signals.test_framework,
        existing_files=tuple(existing_files),
        is_public=is_public,
        is_open_source=is_open_source,
        project_type=OPEN_SOURCE_PROJECT_TYPE if is_open_source else None,
    )


def _log_profile(ident: hosts.RepoIdentifier, profile: DetectedProfile) -> None:
    logger.info(
        "Detection complete: repo=%s stack=%s license=%s cicd=%s docker=%s",
        ident.path,
        ",".join(profile.stack) or "-",
        profile.license,
        profile.cicd,
        profile.has_docker,
    )
