"""Cargo.toml parser for Rust projects.

Uses stdlib tomllib (Python 3.11+). Handles standard single-crate and
workspace layouts. Cargo has no script table, so commands are the
toolchain defaults.
"""

import logging
import tomllib
from typing import Any

from stackprobe.detection.manifests.base import (
    apply_language_filler,
    clean_text,
    detect_datastores,
    match_patterns,
)
from stackprobe.detection.patterns import (
    RUST_COMMANDS,
    RUST_DATASTORE_PATTERNS,
    RUST_FRAMEWORK_PATTERNS,
    RUST_TOOL_PATTERNS,
)
from stackprobe.detection.types import Commands, PartialSignals

logger = logging.getLogger(__name__)

LANGUAGE = "rust"
FILENAME = "Cargo.toml"

_DEPENDENCY_TABLES = ("dependencies", "dev-dependencies", "build-dependencies")


def parse(raw: str) -> PartialSignals:
    """Parse Cargo.toml content. Malformed input yields empty signals."""
    try:
        data = tomllib.loads(raw)
    except (tomllib.TOMLDecodeError, RecursionError) as exc:
        logger.info("Failed to parse Cargo.toml: %s", exc)
        return PartialSignals()

    crates = _collect_crates(data)
    stack = match_patterns(RUST_FRAMEWORK_PATTERNS, crates) + match_patterns(
        RUST_TOOL_PATTERNS, crates
    )
    package = data.get("package")
    return PartialSignals(
        stack=apply_language_filler(stack, LANGUAGE),
        databases=detect_datastores(RUST_DATASTORE_PATTERNS, crates),
        commands=Commands(**RUST_COMMANDS),
        description=clean_text(package.get("description")) if isinstance(package, dict) else None,
    )


def _collect_crates(data: dict[str, Any]) -> set[str]:
    """Collect dependency names from crate and workspace tables."""
    crates: set[str] = set()
    sources = [data]
    workspace = data.get("workspace")
    if isinstance(workspace, dict):
        sources.append(workspace)

    for source in sources:
        for table in _DEPENDENCY_TABLES:
            block = source.get(table)
            if isinstance(block, dict):
                crates.update(name.lower() for name in block)

    # [target.'cfg(...)'.dependencies]
    target = data.get("target")
    if isinstance(target, dict):
        for cfg in target.values():
            if isinstance(cfg, dict):
                for table in _DEPENDENCY_TABLES:
                    block = cfg.get(table)
                    if isinstance(block, dict):
                        crates.update(name.lower() for name in block)
    return crates
