"""Read-only hosting provider contract.

All provider implementations must conform to this interface. Every
operation is independently fallible and reports failure through its
return type (None or an empty list) instead of raising, so a single bad
response never aborts an analysis.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from stackprobe.detection.hosts import RepoIdentifier


@dataclass(frozen=True)
class RepoInfo:
    """Repository metadata as reported by the host."""

    name: Optional[str]
    description: Optional[str]
    license_id: Optional[str]
    is_private: bool
    default_branch: str = "HEAD"


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing."""

    name: str
    path: str
    is_dir: bool


@runtime_checkable
class RepoProvider(Protocol):
    """Protocol for hosting platform read APIs.

    `ref` defaults to the host's notion of the default branch tip.
    """

    async def get_repo_info(self, ident: RepoIdentifier) -> Optional[RepoInfo]:
        """Return repository metadata, or None on any failure."""
        ...  # noqa: PLR6301

    async def list_files(
        self,
        ident: RepoIdentifier,
        path: str = "",
        ref: Optional[str] = None,
    ) -> list[DirEntry]:
        """List one directory level. Failure and emptiness both yield []."""
        ...  # noqa: PLR6301

    async def get_file(
        self,
        ident: RepoIdentifier,
        path: str,
        ref: Optional[str] = None,
    ) -> Optional[str]:
        """Return the raw text of a file, or None if absent or unreadable."""
        ...  # noqa: PLR6301


class UnsupportedHostError(Exception):
    """Raised when a provider is requested for a host without an adapter."""

    def __init__(self, host: str):
        self.host = host
        super().__init__(f"Unsupported repository host: {host}")
