"""Governance file inventory."""

from collections.abc import Iterable

from stackprobe.detection.patterns import FUNDING_FILE, GOVERNANCE_FILES


def inventory(root_names: set[str], github_dir_names: Iterable[str] = ()) -> list[str]:
    """Return the well-known files present, in check-list order.

    Names are compared case-insensitively. `.github/FUNDING.yml` is looked
    up in the `.github` listing; everything else in the root listing.
    """
    github_names = {name.lower() for name in github_dir_names}
    found: list[str] = []
    for filename in GOVERNANCE_FILES:
        if filename == FUNDING_FILE:
            if FUNDING_FILE.split("/", 1)[1].lower() in github_names:
                found.append(filename)
        elif filename.lower() in root_names:
            found.append(filename)
    return found
