"""CI system detection from root-level markers.

Checks run in a fixed order and the first hit wins, so a repository
configured for two CI systems reports only the first one checked.
"""

from collections.abc import Iterable
from typing import Optional

from stackprobe.detection.patterns import CI_MARKERS, GITHUB_ACTIONS

WORKFLOWS_DIR = "workflows"


def detect(root_names: set[str], github_dir_names: Iterable[str] = ()) -> Optional[str]:
    """Return the CI token for the repository, or None.

    Args:
        root_names: Lowercased names of the root directory entries.
        github_dir_names: Names of the `.github` directory entries, if listed.
    """
    if WORKFLOWS_DIR in {name.lower() for name in github_dir_names}:
        return GITHUB_ACTIONS
    for token, marker in CI_MARKERS:
        if marker in root_names:
            return token
    return None
