"""Tests for POST /repos/detect.

The analyzer is replaced with a stub so these exercise only the HTTP
layer: validation, status mapping, serialization and caching.
"""

import pytest
from httpx import AsyncClient

from stackprobe.detection.types import Commands, DetectedProfile
from stackprobe.repos import router as repos_router

PROFILE = DetectedProfile(
    name="widget",
    description="A widget",
    repo_host="github",
    stack=("nextjs", "typescript"),
    commands=Commands(build="npm run build"),
    license="mit",
    is_public=True,
    is_open_source=True,
    project_type="open_source",
)


@pytest.fixture
def analyzed(monkeypatch) -> list[str]:
    """Stub the analyzer; returns the list of URLs it was called with."""
    calls: list[str] = []

    async def fake_analyze_repository(url, **kwargs):
        calls.append(url)
        return None if "missing" in url else PROFILE

    monkeypatch.setattr(repos_router, "analyze_repository", fake_analyze_repository)
    return calls


class TestDetect:
    @pytest.mark.asyncio
    async def test_returns_profile(self, client: AsyncClient, analyzed) -> None:
        res = await client.post("/repos/detect", json={"repoUrl": "https://github.com/acme/widget"})
        assert res.status_code == 200
        body = res.json()
        assert body["success"] is True
        assert body["detected"] == PROFILE.to_dict()
        assert body["detected"]["repoHost"] == "github"

    @pytest.mark.asyncio
    async def test_snake_case_field_accepted(self, client: AsyncClient, analyzed) -> None:
        res = await client.post("/repos/detect", json={"repo_url": "github:acme/widget"})
        assert res.status_code == 200

    @pytest.mark.asyncio
    async def test_unsupported_host_is_400(self, client: AsyncClient, analyzed) -> None:
        res = await client.post("/repos/detect", json={"repoUrl": "https://bitbucket.org/team/repo"})
        assert res.status_code == 400
        assert "bitbucket" in res.json()["detail"]
        assert analyzed == []

    @pytest.mark.asyncio
    async def test_not_found_is_404(self, client: AsyncClient, analyzed) -> None:
        res = await client.post("/repos/detect", json={"repoUrl": "https://github.com/acme/missing"})
        assert res.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_body_is_422(self, client: AsyncClient, analyzed) -> None:
        res = await client.post("/repos/detect", json={})
        assert res.status_code == 422

    @pytest.mark.asyncio
    async def test_empty_url_is_422(self, client: AsyncClient, analyzed) -> None:
        res = await client.post("/repos/detect", json={"repoUrl": ""})
        assert res.status_code == 422


class TestCache:
    @pytest.mark.asyncio
    async def test_repeat_request_is_served_from_cache(self, client: AsyncClient, analyzed) -> None:
        payload = {"repoUrl": "https://github.com/acme/widget"}
        first = await client.post("/repos/detect", json=payload)
        second = await client.post("/repos/detect", json=payload)
        assert first.json() == second.json()
        assert analyzed == ["https://github.com/acme/widget"]

    @pytest.mark.asyncio
    async def test_not_found_is_not_cached(self, client: AsyncClient, analyzed) -> None:
        payload = {"repoUrl": "https://github.com/acme/missing"}
        await client.post("/repos/detect", json=payload)
        await client.post("/repos/detect", json=payload)
        assert len(analyzed) == 2

    @pytest.mark.asyncio
    async def test_expired_entry_is_refreshed(self, client: AsyncClient, analyzed, monkeypatch) -> None:
        payload = {"repoUrl": "https://github.com/acme/widget"}
        await client.post("/repos/detect", json=payload)
        url = payload["repoUrl"]
        detected, _ = repos_router._CACHE[url]
        repos_router._CACHE[url] = (detected, 0.0)
        await client.post("/repos/detect", json=payload)
        assert len(analyzed) == 2

    @pytest.mark.asyncio
    async def test_expired_entries_are_evicted_on_write(self, client: AsyncClient, analyzed) -> None:
        repos_router._CACHE["https://github.com/acme/stale"] = ({}, 0.0)
        await client.post("/repos/detect", json={"repoUrl": "https://github.com/acme/widget"})
        assert list(repos_router._CACHE) == ["https://github.com/acme/widget"]

    @pytest.mark.asyncio
    async def test_live_entries_survive_eviction(self, client: AsyncClient, analyzed) -> None:
        await client.post("/repos/detect", json={"repoUrl": "https://github.com/acme/widget"})
        await client.post("/repos/detect", json={"repoUrl": "https://gitlab.com/group/project"})
        assert set(repos_router._CACHE) == {
            "https://github.com/acme/widget",
            "https://gitlab.com/group/project",
        }
