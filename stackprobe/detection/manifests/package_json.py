"""package.json parser for JavaScript / TypeScript projects.

Extracts frameworks, tools, datastores and the test framework from
dependencies + devDependencies, and build/test/lint/dev commands from
the scripts block.
"""

import json
import logging
from typing import Any, Optional

from stackprobe.detection.manifests.base import (
    apply_language_filler,
    clean_text,
    detect_datastores,
    first_present,
    match_patterns,
)
from stackprobe.detection.patterns import (
    JS_DATASTORE_PATTERNS,
    JS_FRAMEWORK_PATTERNS,
    JS_LOCK_FILES,
    JS_TEST_FRAMEWORKS,
    JS_TOOL_PATTERNS,
    JS_TYPE_TOOLS,
)
from stackprobe.detection.types import Commands, PartialSignals

logger = logging.getLogger(__name__)

LANGUAGE = "javascript"
FILENAME = "package.json"

# Slot → script names, first present wins.
SCRIPT_SLOTS: dict[str, list[str]] = {
    "build": ["build"],
    "test": ["test"],
    "lint": ["lint"],
    "dev": ["dev", "start"],
}


def parse(raw: str, package_manager: str = "npm") -> PartialSignals:
    """Parse package.json content. Malformed input yields empty signals."""
    data = _load(raw)
    if data is None:
        return PartialSignals()

    deps = _dependency_names(data)
    stack = match_patterns(JS_FRAMEWORK_PATTERNS, deps) + match_patterns(JS_TOOL_PATTERNS, deps)

    return PartialSignals(
        stack=apply_language_filler(stack, LANGUAGE, JS_TYPE_TOOLS),
        databases=detect_datastores(JS_DATASTORE_PATTERNS, deps),
        commands=_script_commands(data.get("scripts"), package_manager),
        test_framework=first_present(JS_TEST_FRAMEWORKS, deps),
        description=clean_text(data.get("description")),
    )


def detect_package_manager(root_names: set[str]) -> str:
    """Pick the package manager from lock files in the root listing.

    `root_names` holds lowercased entry names. Defaults to npm.
    """
    for lock_file, pm in JS_LOCK_FILES:
        if lock_file in root_names:
            return pm
    return "npm"


def _load(raw: str) -> Optional[dict[str, Any]]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        logger.info("Failed to parse package.json: %s", exc)
        return None
    if not isinstance(data, dict):
        logger.info("package.json root is not an object")
        return None
    return data


def _dependency_names(data: dict[str, Any]) -> set[str]:
    names: set[str] = set()
    for key in ("dependencies", "devDependencies"):
        block = data.get(key)
        if isinstance(block, dict):
            names.update(name for name in block if isinstance(name, str))
    return names


def _script_commands(scripts: Any, package_manager: str) -> Commands:
    commands = Commands()
    if not isinstance(scripts, dict):
        return commands
    for slot, names in SCRIPT_SLOTS.items():
        for name in names:
            if scripts.get(name):
                setattr(commands, slot, f"{package_manager} run {name}")
                break
    return commands
