"""Tests for the requirements.txt parser."""

from stackprobe.detection.manifests.python import requirements

REQUIREMENTS = """\
# web
Flask==3.0.0
flask-sqlalchemy
redis>=5  # cache
-r dev.txt
-e .
--index-url https://pypi.example.com/simple

gunicorn
pytest; python_version > "3.8"
"""


class TestParsePackages:
    def test_names_are_normalised(self) -> None:
        assert requirements.parse_packages(REQUIREMENTS) == {
            "flask",
            "flask-sqlalchemy",
            "redis",
            "gunicorn",
            "pytest",
        }

    def test_named_url_requirement_keeps_name(self) -> None:
        assert requirements.parse_packages("Django @ https://example.com/django.tar.gz\n") == {"django"}

    def test_bare_url_is_skipped(self) -> None:
        assert requirements.parse_packages("https://example.com/pkg.whl\nclick\n") == {"click"}

    def test_non_requirement_content_is_malformed(self) -> None:
        assert requirements.parse_packages('{"dependencies": {}}') is None

    def test_binary_content_is_malformed(self) -> None:
        assert requirements.parse_packages("\x00\x01\x02") is None


class TestParse:
    def test_signals(self) -> None:
        signals = requirements.parse(REQUIREMENTS)
        assert signals.stack == ["flask", "pytest"]
        assert signals.databases == ["redis"]
        assert signals.test_framework == "pytest"
        assert signals.commands.test == "pytest"

    def test_empty_file_gets_language_filler(self) -> None:
        assert requirements.parse("").stack == ["python"]

    def test_malformed_yields_empty_signals(self) -> None:
        assert requirements.parse("<html>404</html>").is_empty()
