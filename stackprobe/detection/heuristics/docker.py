"""Containerization detection."""

from typing import Optional

from stackprobe.detection.patterns import (
    COMPOSE_FILE_NAMES,
    DOCKERFILE_NAMES,
    REGISTRY_PATTERNS,
)

DOCKER_TOKEN = "docker"


def has_docker(root_names: set[str]) -> bool:
    """True when the root holds a Dockerfile or a compose file."""
    return any(name in root_names for name in DOCKERFILE_NAMES + COMPOSE_FILE_NAMES)


def compose_file(root_names: set[str]) -> Optional[str]:
    """Return the first compose file name present (lowercased), or None."""
    for name in COMPOSE_FILE_NAMES:
        if name in root_names:
            return name
    return None


def detect_registry(content: str) -> Optional[str]:
    """Infer the container registry from compose file content.

    Registries are tried in a fixed priority order; first match wins.
    """
    for token, substrings, pattern in REGISTRY_PATTERNS:
        if any(s in content for s in substrings):
            return token
        if pattern is not None and pattern.search(content):
            return token
    return None
