import json
import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .config import CONFIG_FILENAME, Config, load_config
from .content import Document, FrontMatterError, load_document
from .ingest import load_documents
from .reporting import assemble_report, build_document_stats, write_report
from .validation import DocumentIssue, IssueSeverity, lint_workspace

console = Console()
app = typer.Typer(help="Load content resources with front-matter metadata blocks.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def show(
    path: Path = typer.Argument(..., help="Content resource to load."),
    as_json: bool = typer.Option(False, "--json", help="Print the document as JSON."),
    encoding: str = typer.Option("utf-8", "--encoding", help="Text encoding of the resource."),
) -> None:
    """Load one resource and print its metadata and body."""
    if not path.is_file():
        raise typer.BadParameter(f"File not found: {path}")
    try:
        document = load_document(path, encoding=encoding)
    except FrontMatterError as exc:
        console.print(f"[bold red]Parse failed[/]: {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(document.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return
    _print_document(document)


@app.command()
def lint(
    config_path: str = typer.Option(CONFIG_FILENAME, "--config", "-c", help="Path to configuration file."),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors."),
) -> None:
    """Check every content resource for front-matter problems."""
    config = _load(config_path)
    report = lint_workspace(config)

    if not report.issues:
        console.print(
            f"[bold green]Lint clean[/]: no issues detected across {report.document_count} document(s)."
        )
        raise typer.Exit()

    for issue in sorted(report.issues, key=_lint_sort_key):
        style = "red" if issue.severity is IssueSeverity.ERROR else "yellow"
        location = issue.source_path
        if issue.pointer:
            location = f"{location} :: {issue.pointer}"
        console.print(f"[bold {style}]{issue.severity.name}[/] {escape(location)} - {escape(issue.message)}")

    console.print(
        f"[bold blue]Summary[/]: {report.error_count} error(s), {report.warning_count} warning(s) "
        f"across {report.document_count} document(s)."
    )

    exit_code = 0
    if report.error_count > 0 or (strict and report.warning_count > 0):
        exit_code = 1
    raise typer.Exit(code=exit_code)


@app.command()
def report(
    config_path: str = typer.Option(CONFIG_FILENAME, "--config", "-c", help="Path to configuration file."),
) -> None:
    """Load the workspace, skipping invalid resources, and write a JSON summary."""
    config = _load(config_path)
    start = time.perf_counter()
    failures: list[str] = []
    documents = load_documents(config, skip_invalid=True, failures=failures)
    stats = build_document_stats(documents)
    duration = time.perf_counter() - start

    workspace_report = assemble_report(
        project=config.project_name,
        duration_seconds=duration,
        documents=stats,
        failures=failures,
    )
    report_path = write_report(workspace_report, config.output_dir)

    console.print(
        f"[bold green]Documents[/]: {stats.total} "
        f"(with metadata {stats.with_metadata}, without {stats.without_metadata})"
    )
    for message in failures:
        console.print(f"[bold red]Skipped[/]: {escape(message)}")
    console.print(f"[bold green]Report[/]: written to {report_path}")


def _print_document(document: Document) -> None:
    if document.has_metadata:
        title = Text(document.source_path) if document.source_path else None
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Key")
        table.add_column("Value")
        for key, value in document.metadata.items():
            rendered = f"[{', '.join(value)}]" if isinstance(value, list) else value
            table.add_row(Text(key), Text(rendered))
        console.print(table)
    else:
        console.print("[bold yellow]No metadata[/]")
    console.print(document.body, markup=False, highlight=False, emoji=False)


def _lint_sort_key(issue: DocumentIssue) -> tuple[int, str, str]:
    severity_rank = 0 if issue.severity is IssueSeverity.ERROR else 1
    return (severity_rank, issue.source_path, issue.pointer or "")


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":
    app()
