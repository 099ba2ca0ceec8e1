"""Manifest parsers.

Each parser module exposes `FILENAME` and `parse(raw) -> PartialSignals`,
and never raises on malformed content. `MANIFEST_PARSERS` fixes the merge
order used by the analyzer.
"""

from stackprobe.detection.manifests import cargo, gomod, makefile, package_json
from stackprobe.detection.manifests.python import pyproject, requirements

MANIFEST_PARSERS = (package_json, pyproject, requirements, cargo, gomod, makefile)

__all__ = ["MANIFEST_PARSERS"]
