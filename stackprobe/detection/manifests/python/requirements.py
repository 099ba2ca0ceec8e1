"""requirements.txt parser.

Parses line-by-line. Strips version specifiers, extras, environment
markers and comments; skips pip options (-r, -e, --index-url, ...) and
direct URL requirements.
"""

import logging
import re

from stackprobe.detection.manifests.base import looks_binary
from stackprobe.detection.manifests.python import build_signals, requirement_name
from stackprobe.detection.types import PartialSignals

logger = logging.getLogger(__name__)

FILENAME = "requirements.txt"

_VALID_NAME = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?$")


def parse(raw: str) -> PartialSignals:
    """Parse requirements.txt content. Malformed input yields empty signals."""
    packages = parse_packages(raw)
    if packages is None:
        return PartialSignals()
    return build_signals(packages)


def parse_packages(raw: str) -> set[str] | None:
    """Return normalised package names, or None if the file is not a requirements list."""
    if looks_binary(raw):
        logger.info("requirements.txt contains binary data")
        return None

    packages: set[str] = set()
    for line_no, line in enumerate(raw.splitlines(), start=1):
        line = line.split(" #", 1)[0].strip()
        if not line or line.startswith(("#", "-", ".", "/")):
            continue
        if "://" in line:
            # "name @ https://..." keeps its name; a bare URL carries none.
            if "@" not in line.split("://", 1)[0]:
                continue
            line = line.split("@", 1)[0]
        bare = re.split(r"[><=!~;@\[\s(]", line, maxsplit=1)[0]
        if not _VALID_NAME.match(bare):
            logger.info("requirements.txt line %d is not a requirement: %r", line_no, line)
            return None
        packages.add(requirement_name(bare))
    return packages
