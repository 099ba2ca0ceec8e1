"""go.mod parser for Go projects.

Parses go.mod with a simple line-by-line parser. Handles both single-line
and multi-line require blocks. Module paths are matched by substring, so
major-version suffixes (`/v4`) do not need their own entries.
"""

import logging
from typing import Optional

from stackprobe.detection.manifests.base import (
    apply_language_filler,
    looks_binary,
    match_substrings,
)
from stackprobe.detection.patterns import (
    GO_COMMANDS,
    GO_DATASTORE_PATTERNS,
    GO_FRAMEWORK_PATTERNS,
    GO_TOOL_PATTERNS,
)
from stackprobe.detection.types import Commands, PartialSignals

logger = logging.getLogger(__name__)

LANGUAGE = "go"
FILENAME = "go.mod"


def parse(raw: str) -> PartialSignals:
    """Parse go.mod content. Malformed input yields empty signals."""
    parsed = parse_gomod(raw)
    if parsed is None:
        return PartialSignals()

    requires = parsed["requires"]
    stack = match_substrings(GO_FRAMEWORK_PATTERNS, requires) + match_substrings(
        GO_TOOL_PATTERNS, requires
    )
    return PartialSignals(
        stack=apply_language_filler(stack, LANGUAGE),
        databases=match_substrings(GO_DATASTORE_PATTERNS, requires),
        commands=Commands(**GO_COMMANDS),
    )


def parse_gomod(raw: str) -> Optional[dict]:
    """Return module, go_version and requires, or None without a module directive."""
    if looks_binary(raw):
        return None

    module = ""
    go_version = ""
    requires: list[str] = []
    in_require_block = False

    for line in raw.splitlines():
        stripped = line.split("//", 1)[0].strip()

        if stripped.startswith("module "):
            module = stripped[7:].strip().strip('"')
        elif stripped.startswith("go ") and not in_require_block:
            go_version = stripped[3:].strip()
        elif stripped.startswith("require") and stripped.endswith("("):
            in_require_block = True
        elif stripped == ")":
            in_require_block = False
        elif in_require_block:
            # Inside require block: "github.com/foo/bar v1.0.0"
            parts = stripped.split()
            if parts:
                requires.append(parts[0])
        elif stripped.startswith("require "):
            # Single-line require: "require github.com/foo/bar v1.0.0"
            parts = stripped[8:].strip().split()
            if parts:
                requires.append(parts[0])

    if not module:
        logger.info("go.mod has no module directive")
        return None
    return {"module": module, "go_version": go_version, "requires": requires}
