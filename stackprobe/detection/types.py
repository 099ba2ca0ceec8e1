"""Shared types for the detection engine.

`PartialSignals` is what each manifest parser produces. `DetectedProfile`
is the single output of an analysis: built once by the analyzer from the
merged signals and never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Optional

OPEN_SOURCE_PROJECT_TYPE = "open_source"


@dataclass
class Commands:
    """Up to four shell-invocable commands. Absent slots stay None."""

    build: Optional[str] = None
    test: Optional[str] = None
    lint: Optional[str] = None
    dev: Optional[str] = None

    def fill_missing(self, other: "Commands") -> None:
        """Copy each slot from `other` only where this one is still empty."""
        for slot in ("build", "test", "lint", "dev"):
            if getattr(self, slot) is None and getattr(other, slot) is not None:
                setattr(self, slot, getattr(other, slot))

    def is_empty(self) -> bool:
        return not any((self.build, self.test, self.lint, self.dev))

    def to_dict(self) -> dict:
        return {
            slot: value
            for slot, value in (
                ("build", self.build),
                ("test", self.test),
                ("lint", self.lint),
                ("dev", self.dev),
            )
            if value is not None
        }


@dataclass
class PartialSignals:
    """Evidence extracted from a single manifest file."""

    stack: list[str] = field(default_factory=list)
    databases: list[str] = field(default_factory=list)
    commands: Commands = field(default_factory=Commands)
    test_framework: Optional[str] = None
    description: Optional[str] = None

    def is_empty(self) -> bool:
        return (
            not self.stack
            and not self.databases
            and self.commands.is_empty()
            and self.test_framework is None
            and self.description is None
        )


@dataclass(frozen=True)
class DetectedProfile:
    """Normalized description of a remote repository's stack and tooling.

    `is_open_source` is derived, never supplied independently: the analyzer
    computes it from `is_public` and `license`. `container_registry` is only
    meaningful for containerized repositories and is rejected otherwise.
    """

    name: Optional[str]
    description: Optional[str]
    repo_host: str
    stack: tuple[str, ...] = ()
    databases: tuple[str, ...] = ()
    commands: Commands = field(default_factory=Commands)
    license: Optional[str] = None
    cicd: Optional[str] = None
    has_docker: bool = False
    container_registry: Optional[str] = None
    test_framework: Optional[str] = None
    existing_files: tuple[str, ...] = ()
    is_public: bool = False
    is_open_source: bool = False
    project_type: Optional[str] = None

    def __post_init__(self) -> None:
        if self.container_registry is not None and not self.has_docker:
            raise ValueError("container_registry requires has_docker")

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape the web wizard consumes."""
        return {
            "name": self.name,
            "description": self.description,
            "stack": list(self.stack),
            "databases": list(self.databases),
            "commands": self.commands.to_dict(),
            "license": self.license,
            "repoHost": self.repo_host,
            "cicd": self.cicd,
            "hasDocker": self.has_docker,
            "containerRegistry": self.container_registry,
            "testFramework": self.test_framework,
            "existingFiles": list(self.existing_files),
            "isPublic": self.is_public,
            "isOpenSource": self.is_open_source,
            "projectType": self.project_type,
        }
