"""Makefile target scanner.

Contributes commands only: a Makefile says nothing reliable about the
language, so it never adds stack tokens. Since it is merged last, its
targets only fill slots no ecosystem manifest claimed.
"""

import re

from stackprobe.detection.manifests.base import looks_binary
from stackprobe.detection.types import Commands, PartialSignals

FILENAME = "Makefile"

# Slot → target names, first present wins.
TARGET_SLOTS: dict[str, list[str]] = {
    "build": ["build"],
    "test": ["test"],
    "lint": ["lint"],
    "dev": ["dev", "run"],
}

_TARGET_RE = re.compile(r"^([A-Za-z0-9_.-]+)\s*:(?!=)", re.MULTILINE)


def parse(raw: str) -> PartialSignals:
    """Scan Makefile content for well-known targets."""
    if looks_binary(raw):
        return PartialSignals()

    targets = set(_TARGET_RE.findall(raw))
    commands = Commands()
    for slot, names in TARGET_SLOTS.items():
        for name in names:
            if name in targets:
                setattr(commands, slot, f"make {name}")
                break
    return PartialSignals(commands=commands)
