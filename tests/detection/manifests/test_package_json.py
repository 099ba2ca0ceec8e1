"""Tests for the package.json parser."""

import json

import pytest

from stackprobe.detection.manifests import package_json
from stackprobe.detection.types import Commands


def _pkg(deps=None, dev_deps=None, scripts=None, **extra) -> str:
    payload = {"dependencies": deps or {}, **extra}
    if dev_deps:
        payload["devDependencies"] = dev_deps
    if scripts:
        payload["scripts"] = scripts
    return json.dumps(payload)


class TestStack:
    def test_framework_and_tools(self) -> None:
        raw = _pkg(
            {"next": "14.0.0", "react": "18.2.0"},
            {"typescript": "5.3.0", "vitest": "1.0.0"},
        )
        signals = package_json.parse(raw)
        assert signals.stack == ["nextjs", "react", "typescript", "vitest"]

    def test_only_typescript_gets_language_filler(self) -> None:
        signals = package_json.parse(_pkg(dev_deps={"typescript": "5.3.0"}))
        assert signals.stack == ["javascript", "typescript"]

    def test_no_dependencies_gets_language_filler(self) -> None:
        assert package_json.parse(_pkg()).stack == ["javascript"]

    def test_datastores(self) -> None:
        signals = package_json.parse(_pkg({"express": "4", "pg": "8", "ioredis": "5"}))
        assert signals.stack == ["express"]
        assert signals.databases == ["postgresql", "redis"]


class TestCommands:
    def test_scripts_prefixed_with_package_manager(self) -> None:
        raw = _pkg(scripts={"build": "next build", "test": "vitest", "lint": "eslint .", "dev": "next dev"})
        signals = package_json.parse(raw, package_manager="pnpm")
        assert signals.commands == Commands(
            build="pnpm run build",
            test="pnpm run test",
            lint="pnpm run lint",
            dev="pnpm run dev",
        )

    def test_start_fills_dev(self) -> None:
        signals = package_json.parse(_pkg(scripts={"start": "node server.js"}))
        assert signals.commands == Commands(dev="npm run start")

    def test_empty_script_is_ignored(self) -> None:
        signals = package_json.parse(_pkg(scripts={"test": ""}))
        assert signals.commands.test is None


class TestTestFramework:
    def test_first_in_table_order_wins(self) -> None:
        signals = package_json.parse(_pkg(dev_deps={"jest": "29", "vitest": "1"}))
        assert signals.test_framework == "vitest"

    def test_none_without_runner(self) -> None:
        assert package_json.parse(_pkg({"react": "18"})).test_framework is None


class TestMalformed:
    @pytest.mark.parametrize("raw", ["{not json", "[]", "", "\x00\x01\x02", "[" * 100_000])
    def test_yields_empty_signals(self, raw) -> None:
        assert package_json.parse(raw).is_empty()


def test_description_is_stripped() -> None:
    assert package_json.parse(_pkg(description="  Widgets  ")).description == "Widgets"


@pytest.mark.parametrize(
    "root_names, expected",
    [
        ({"yarn.lock", "package.json"}, "yarn"),
        ({"pnpm-lock.yaml", "package-lock.json"}, "pnpm"),
        ({"bun.lockb"}, "bun"),
        ({"package.json"}, "npm"),
    ],
)
def test_detect_package_manager(root_names, expected) -> None:
    assert package_json.detect_package_manager(root_names) == expected
