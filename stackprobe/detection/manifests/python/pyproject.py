"""pyproject.toml parser.

Uses stdlib tomllib (Python 3.11+). Handles PEP 621 [project] tables,
PEP 735 [dependency-groups] and Poetry's [tool.poetry] layout. Configured
[tool.*] sections count as evidence too: a project with [tool.pytest.ini_options]
uses pytest even when the dependency lives in a separate dev file.
"""

import logging
import tomllib
from typing import Any

from stackprobe.detection.manifests.base import clean_text
from stackprobe.detection.manifests.python import (
    build_signals,
    normalise_name,
    requirement_name,
)
from stackprobe.detection.types import PartialSignals

logger = logging.getLogger(__name__)

FILENAME = "pyproject.toml"


def parse(raw: str) -> PartialSignals:
    """Parse pyproject.toml content. Malformed input yields empty signals."""
    try:
        data = tomllib.loads(raw)
    except (tomllib.TOMLDecodeError, RecursionError) as exc:
        logger.info("Failed to parse pyproject.toml: %s", exc)
        return PartialSignals()

    present = _collect_deps(data) | _configured_tools(data)
    return build_signals(present, description=_description(data))


def _collect_deps(data: dict[str, Any]) -> set[str]:
    """Collect all dependency names from known pyproject.toml layouts."""
    deps: set[str] = set()
    project = _table(data, "project")
    poetry = _table(_table(data, "tool"), "poetry")

    # PEP 621 [project.dependencies]: list of "pkg>=version" strings
    _add_requirements(deps, project.get("dependencies"))

    # PEP 621 optional deps
    for extra in _table(project, "optional-dependencies").values():
        _add_requirements(deps, extra)

    # PEP 735 dependency groups
    for group in _table(data, "dependency-groups").values():
        _add_requirements(deps, group)

    # Poetry [tool.poetry.dependencies] and the older dev-dependencies table
    for key in ("dependencies", "dev-dependencies"):
        deps.update(normalise_name(name) for name in _table(poetry, key))

    # Poetry group deps (newer layout)
    for group in _table(poetry, "group").values():
        if isinstance(group, dict):
            deps.update(normalise_name(name) for name in _table(group, "dependencies"))

    deps.discard("python")
    return deps


def _configured_tools(data: dict[str, Any]) -> set[str]:
    return {normalise_name(name) for name in _table(data, "tool")}


def _description(data: dict[str, Any]) -> str | None:
    return clean_text(_table(data, "project").get("description")) or clean_text(
        _table(_table(data, "tool"), "poetry").get("description")
    )


def _add_requirements(deps: set[str], specs: Any) -> None:
    if not isinstance(specs, list):
        return
    for spec in specs:
        if isinstance(spec, str):
            name = requirement_name(spec)
            if name:
                deps.add(name)


def _table(data: Any, key: str) -> dict[str, Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}
