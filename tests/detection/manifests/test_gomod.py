"""Tests for the go.mod parser."""

from stackprobe.detection.manifests import gomod
from stackprobe.detection.types import Commands

GOMOD = """\
module github.com/acme/api

go 1.22

require (
\tgithub.com/gin-gonic/gin v1.9.1
\tgorm.io/gorm v1.25.5
\tgorm.io/driver/postgres v1.5.4 // indirect
\tgithub.com/go-redis/redis/v8 v8.11.5
)
"""


class TestParseGomod:
    def test_block_requires(self) -> None:
        parsed = gomod.parse_gomod(GOMOD)
        assert parsed["module"] == "github.com/acme/api"
        assert parsed["go_version"] == "1.22"
        assert parsed["requires"] == [
            "github.com/gin-gonic/gin",
            "gorm.io/gorm",
            "gorm.io/driver/postgres",
            "github.com/go-redis/redis/v8",
        ]

    def test_single_line_require(self) -> None:
        parsed = gomod.parse_gomod("module x\n\nrequire github.com/labstack/echo/v4 v4.11.0\n")
        assert parsed["requires"] == ["github.com/labstack/echo/v4"]

    def test_missing_module_is_malformed(self) -> None:
        assert gomod.parse_gomod("go 1.22\n") is None


class TestParse:
    def test_stack_datastores_and_commands(self) -> None:
        signals = gomod.parse(GOMOD)
        assert signals.stack == ["gin", "gorm"]
        assert signals.databases == ["postgresql", "redis"]
        assert signals.commands == Commands(
            build="go build", test="go test ./...", lint="golangci-lint run", dev="go run ."
        )

    def test_no_requires_gets_language_filler(self) -> None:
        assert gomod.parse("module example.com/tool\n\ngo 1.22\n").stack == ["go"]

    def test_malformed_yields_empty_signals(self) -> None:
        assert gomod.parse("<html>not found</html>").is_empty()
