"""Pydantic schemas for repository endpoints.

Follows RORO pattern: receive a typed object, return a typed object.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DetectRepoRequest(BaseModel):
    """Payload for the stack detection endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    repo_url: str = Field(
        ...,
        alias="repoUrl",
        min_length=1,
        description="Repository URL, SSH remote or 'github:owner/repo' shorthand",
    )


class DetectRepoResponse(BaseModel):
    """Detected profile, serialized with camelCase keys."""

    success: bool = True
    detected: dict[str, Any]
