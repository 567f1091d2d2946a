from __future__ import annotations

import json
import re
from pathlib import Path

from typer.testing import CliRunner

from postmatter.cli import app


def _write_config(path: Path) -> None:
    path.write_text("project_name: Test Project\n", encoding="utf-8")


def _write_post(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_show_prints_json_document() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_post(Path("post.md"), '---\ntitle: "Example"\ntags: [a, b, c]\n---\nHello world')

        result = runner.invoke(app, ["show", "post.md", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["metadata"] == {"title": "Example", "tags": ["a", "b", "c"]}
        assert data["body"] == "Hello world"
        assert data["source_path"] == "post.md"


def test_show_renders_table_and_body() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_post(Path("post.md"), "---\ntitle: Shown\ntags: [x, y]\n---\nBody text here\n")

        result = runner.invoke(app, ["show", "post.md"])

        assert result.exit_code == 0, result.output
        assert "Shown" in result.output
        assert "[x, y]" in result.output
        assert "Body text here" in result.output


def test_show_reports_parse_failure() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_post(Path("broken.md"), "---\ntitle: Broken\n")

        result = runner.invoke(app, ["show", "broken.md"])

        assert result.exit_code == 1
        assert "Parse failed" in result.output
        assert "broken.md" in result.output


def test_show_rejects_missing_file() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(app, ["show", "nope.md"])

        assert result.exit_code != 0


def test_lint_flags_errors_and_warnings() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("postmatter.yml"))
        _write_post(Path("content/posts/bad.md"), "---\ntitle: ok\nbareword\n---\nBody\n")
        _write_post(Path("content/posts/untitled.md"), "---\ntags: [a]\n---\nBody\n")

        result = runner.invoke(app, ["lint"])

        assert result.exit_code == 1, result.output
        assert "ERROR" in result.output
        assert "bareword" in result.output
        assert re.search(r"Required\s+metadata\s+key\s+'title'\s+is\s+missing", result.output)
        assert re.search(r"1\s+error\(s\),\s+1\s+warning\(s\)", result.output)


def test_lint_clean_when_content_is_valid() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("postmatter.yml"))
        _write_post(Path("content/posts/ok.md"), "---\ntitle: Ready\ntags: [a, b]\n---\nAll good.\n")

        result = runner.invoke(app, ["lint"])

        assert result.exit_code == 0, result.output
        assert "Lint clean" in result.output


def test_lint_strict_treats_warnings_as_errors() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("postmatter.yml"))
        _write_post(Path("content/posts/plain.md"), "No metadata at all.\n")

        relaxed = runner.invoke(app, ["lint"])
        strict = runner.invoke(app, ["lint", "--strict"])

        assert relaxed.exit_code == 0, relaxed.output
        assert strict.exit_code == 1, strict.output
        assert "WARNING" in strict.output


def test_lint_missing_config_is_bad_parameter() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(app, ["lint", "--config", "missing.yml"])

        assert result.exit_code == 2


def test_report_writes_summary_and_skips_invalid() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_config(Path("postmatter.yml"))
        _write_post(Path("content/a.md"), "---\ntitle: A\n---\nBody\n")
        _write_post(Path("content/b.md"), "Plain\n")
        _write_post(Path("content/c.md"), "---\ntitle: open\n")

        result = runner.invoke(app, ["report"])

        assert result.exit_code == 0, result.output
        report_path = Path("site") / "postmatter-report.json"
        assert report_path.exists()
        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert data["project"] == "Test Project"
        assert data["documents"]["total"] == 2
        assert data["documents"]["with_metadata"] == 1
        assert len(data["failures"]) == 1
        assert "c.md" in data["failures"][0]
        assert "Skipped" in result.output


def test_show_prints_body_and_path_verbatim() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem():
        _write_post(Path("posts/[draft].md"), "---\ntitle: Draft\n---\nParty :tada: time\n")
        _write_post(Path("plain.md"), "Party :tada: [bold]time[/bold]\n")

        with_block = runner.invoke(app, ["show", "posts/[draft].md"])
        without_block = runner.invoke(app, ["show", "plain.md"])

        assert with_block.exit_code == 0, with_block.output
        assert "[draft].md" in with_block.output
        assert "Party :tada: time" in with_block.output
        assert without_block.exit_code == 0, without_block.output
        assert "Party :tada: [bold]time[/bold]" in without_block.output
