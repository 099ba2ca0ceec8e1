"""Repository endpoints.

Exposes the detection engine over HTTP. The engine is stateless; this
layer owns the per-process result cache and the rate limit.
"""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Request, status

from stackprobe.core.config import Settings, get_settings
from stackprobe.core.limiter import limiter
from stackprobe.detection import hosts
from stackprobe.detection.analyzer import analyze_repository
from stackprobe.repos.schemas import DetectRepoRequest, DetectRepoResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/repos", tags=["repositories"])

# TTL cache: repo URL → (profile dict, expire_monotonic)
_CACHE: dict[str, tuple[dict, float]] = {}


def clear_cache() -> None:
    _CACHE.clear()


def _prune(now: float) -> None:
    for key in [key for key, (_, expires) in _CACHE.items() if expires <= now]:
        del _CACHE[key]


@router.post("/detect", response_model=DetectRepoResponse)
@limiter.limit(get_settings().detect_rate_limit)
async def detect_repo(
    request: Request,
    body: DetectRepoRequest,
    settings: Settings = Depends(get_settings),
) -> DetectRepoResponse:
    """Infer the stack of a public GitHub or GitLab repository.

    Only the repository metadata, root listing and a handful of manifest
    files are fetched; nothing is cloned. Successful results are cached
    per URL for `detect_cache_ttl_seconds`.
    """
    url = body.repo_url.strip()
    host = hosts.classify(url)
    if host not in hosts.SUPPORTED_HOSTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported repository host '{host}'. Supported: github, gitlab.",
        )

    cached = _CACHE.get(url)
    if cached and time.monotonic() < cached[1]:
        return DetectRepoResponse(detected=cached[0])

    profile = await analyze_repository(url, settings=settings)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Repository not found, private, or unreachable",
        )

    detected = profile.to_dict()
    if settings.detect_cache_ttl_seconds > 0:
        now = time.monotonic()
        _prune(now)
        _CACHE[url] = (detected, now + settings.detect_cache_ttl_seconds)
    logger.info("Detected stack for %s", url)
    return DetectRepoResponse(detected=detected)
