"""Python ecosystem parsers.

pyproject.toml and requirements.txt both reduce to a set of normalised
distribution names; `build_signals` turns that set into PartialSignals so
the two files are interpreted identically.
"""

import re
from typing import Optional

from stackprobe.detection.manifests import base
from stackprobe.detection.manifests.base import (
    apply_language_filler,
    first_present,
    match_patterns,
)
from stackprobe.detection.patterns import (
    PYTHON_DATASTORE_PATTERNS,
    PYTHON_DEFAULT_LINT_CMD,
    PYTHON_DEFAULT_TEST_CMD,
    PYTHON_FRAMEWORK_PATTERNS,
    PYTHON_ORM_MARKERS,
    PYTHON_SQL_DATASTORES,
    PYTHON_TEST_FRAMEWORKS,
    PYTHON_TOOL_PATTERNS,
    PYTHON_TYPE_TOOLS,
)
from stackprobe.detection.types import Commands, PartialSignals

LANGUAGE = "python"

_NAME_SPLIT = re.compile(r"[><=!~;@\[\s(]")


def requirement_name(spec: str) -> str:
    """Extract the normalised distribution name from a PEP 508 string."""
    name = _NAME_SPLIT.split(spec.strip(), maxsplit=1)[0]
    return normalise_name(name)


def normalise_name(name: str) -> str:
    """PEP 503 normalisation, so `Flask_SQLAlchemy` and `flask-sqlalchemy` match."""
    return re.sub(r"[-_.]+", "-", name.strip()).lower()


def build_signals(present: set[str], description: Optional[str] = None) -> PartialSignals:
    """Turn a set of Python distribution names into PartialSignals."""
    stack = match_patterns(PYTHON_FRAMEWORK_PATTERNS, present) + match_patterns(
        PYTHON_TOOL_PATTERNS, present
    )
    return PartialSignals(
        stack=apply_language_filler(stack, LANGUAGE, PYTHON_TYPE_TOOLS),
        databases=python_datastores(present),
        commands=Commands(test=PYTHON_DEFAULT_TEST_CMD, lint=PYTHON_DEFAULT_LINT_CMD),
        test_framework=first_present(PYTHON_TEST_FRAMEWORKS, present),
        description=description,
    )


def python_datastores(present: set[str]) -> list[str]:
    """Map driver packages to datastores.

    SQLAlchemy with no SQL driver alongside it is reported as sqlite, the
    engine it falls back to in most starter projects. A project pairing it
    with an undetected driver will be misreported.
    """
    databases = base.detect_datastores(PYTHON_DATASTORE_PATTERNS, present)
    if PYTHON_ORM_MARKERS & present and not PYTHON_SQL_DATASTORES & set(databases):
        databases.append("sqlite")
    return databases
