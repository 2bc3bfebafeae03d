"""Tests for the formatters package."""

import json
from pathlib import Path

import pytest

from javastyle import StyleConfig, analyze_source
from javastyle.formatters import (
    GithubFormatter,
    JsonFormatter,
    QuietFormatter,
    RichFormatter,
    get_formatter,
)

MESSY = "class Example {\n    int x=1;\n}\n"


def _make_verdict(source=MESSY, path="Example.java", **config):
    return analyze_source(source, config=StyleConfig(**config), path=Path(path))


class TestGetFormatter:
    def test_known_formatters(self):
        for name in ("rich", "json", "quiet", "github"):
            fmt = get_formatter(name)
            assert fmt is not None

    def test_verbose_rich(self):
        fmt = get_formatter("rich", verbose=True)
        assert isinstance(fmt, RichFormatter)
        assert fmt.verbose

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestJsonFormatter:
    def test_format_returns_valid_json(self):
        fmt = JsonFormatter()
        verdicts = [_make_verdict(), _make_verdict("class Example { }\n", "Clean.java")]
        data = json.loads(fmt.format(verdicts))
        assert data["passed"] is False
        assert [f["path"] for f in data["files"]] == ["Example.java", "Clean.java"]
        assert data["files"][0]["total_violations"] == 2
        assert data["files"][1]["passed"] is True

    def test_empty(self):
        data = json.loads(JsonFormatter().format([]))
        assert data == {"passed": True, "files": []}


class TestQuietFormatter:
    def test_format_returns_failing_paths(self):
        fmt = QuietFormatter()
        verdicts = [
            _make_verdict(path="a.java"),
            _make_verdict("class Example { }\n", "b.java"),
            _make_verdict(path="c.java"),
        ]
        assert fmt.format(verdicts) == "a.java\nc.java"


class TestGithubFormatter:
    def test_errors_for_failing_file(self):
        result = GithubFormatter().format([_make_verdict()])
        lines = result.splitlines()
        assert lines[0] == "::error file=Example.java,line=2,col=9::identifier too short"
        assert lines[1] == "::error file=Example.java,line=2,col=10::space around operator"

    def test_warnings_within_allowance(self):
        result = GithubFormatter().format([_make_verdict(allowed_violations=5)])
        assert result.startswith("::warning")

    def test_clean_file_has_no_output(self):
        assert GithubFormatter().format([_make_verdict("class Example { }\n")]) == ""


class TestRichFormatter:
    def test_render_does_not_crash(self, capsys):
        RichFormatter(verbose=True).render([_make_verdict(), _make_verdict(allowed_violations=5)])
        out = capsys.readouterr().out
        assert "Example.java" in out
        assert "identifier too short" in out

    def test_format_returns_empty_string(self, capsys):
        assert RichFormatter().format([_make_verdict("class Example { }\n")]) == ""
        assert "passed" in capsys.readouterr().out
