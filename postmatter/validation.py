"""Lint diagnostics for content resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from .config import Config
from .content import (
    Document,
    FrontMatterError,
    MalformedMetadataLine,
    is_delimiter,
    iter_metadata_entries,
    parse_document,
)
from .ingest import iter_content_files

logger = logging.getLogger(__name__)


class IssueSeverity(Enum):
    """Severity level for lint issues."""

    ERROR = auto()
    WARNING = auto()


@dataclass(slots=True)
class DocumentIssue:
    """Represents a lint finding for a resource."""

    source_path: str
    message: str
    severity: IssueSeverity
    pointer: str | None = None


@dataclass(slots=True)
class LintReport:
    """Aggregate lint results for a workspace."""

    issues: list[DocumentIssue] = field(default_factory=list)
    document_count: int = 0

    def add(self, issue: DocumentIssue) -> None:
        self.issues.append(issue)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is IssueSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity is IssueSeverity.WARNING)


def lint_document(
    document: Document, config: Config, *, has_block: bool = False
) -> list[DocumentIssue]:
    """Run metadata checks against a single parsed document.

    ``has_block`` marks a resource that opened with an empty metadata block.
    """
    source = document.source_path or "<string>"
    issues: list[DocumentIssue] = []

    if not document.has_metadata:
        issues.append(
            DocumentIssue(
                source_path=source,
                message=(
                    "Metadata block is empty."
                    if has_block
                    else "Document has no metadata block."
                ),
                severity=IssueSeverity.WARNING,
            )
        )
    else:
        for key in config.lint.required_keys:
            if key not in document.metadata:
                issues.append(
                    DocumentIssue(
                        source_path=source,
                        message=f"Required metadata key '{key}' is missing.",
                        severity=IssueSeverity.WARNING,
                        pointer=f"metadata.{key}",
                    )
                )
        for key in config.lint.list_keys:
            value = document.metadata.get(key)
            if isinstance(value, str):
                issues.append(
                    DocumentIssue(
                        source_path=source,
                        message=f"Metadata key '{key}' should be a list like [a, b]; got {value!r}.",
                        severity=IssueSeverity.WARNING,
                        pointer=f"metadata.{key}",
                    )
                )

    if not document.body.strip():
        issues.append(
            DocumentIssue(
                source_path=source,
                message="Document body is empty.",
                severity=IssueSeverity.WARNING,
                pointer="body",
            )
        )

    return issues


def lint_text(text: str, config: Config, *, source: str | None = None) -> list[DocumentIssue]:
    """Parse raw resource text and lint the result, reporting parse failures as errors."""
    label = source or "<string>"
    try:
        document = parse_document(text, source=source)
    except FrontMatterError as exc:
        pointer = f"line {exc.lineno}" if isinstance(exc, MalformedMetadataLine) else None
        return [
            DocumentIssue(
                source_path=label,
                message=str(exc),
                severity=IssueSeverity.ERROR,
                pointer=pointer,
            )
        ]

    issues = _lint_repeated_keys(text, label, source)
    lines = text.splitlines()
    has_block = bool(lines) and is_delimiter(lines[0])
    issues.extend(lint_document(document, config, has_block=has_block))
    return issues


def lint_workspace(config: Config) -> LintReport:
    """Lint every content resource under the configured content directory."""
    report = LintReport()
    root = config.content_dir
    if not root.exists():
        logger.debug("Content directory %s does not exist", root)
        return report

    for path in iter_content_files(root, config.suffixes):
        report.document_count += 1
        for issue in _lint_path(path, config):
            report.add(issue)
    return report


def _lint_path(path: Path, config: Config) -> list[DocumentIssue]:
    try:
        with path.open("r", encoding=config.encoding, newline="") as handle:
            text = handle.read()
    except UnicodeDecodeError as exc:
        return [
            DocumentIssue(
                source_path=str(path),
                message=f"Cannot decode file as {config.encoding}: {exc.reason}",
                severity=IssueSeverity.ERROR,
            )
        ]
    return lint_text(text, config, source=str(path))


def _lint_repeated_keys(text: str, label: str, source: str | None) -> list[DocumentIssue]:
    issues: list[DocumentIssue] = []
    seen: dict[str, int] = {}
    for entry in iter_metadata_entries(text, source=source):
        first = seen.setdefault(entry.key, entry.lineno)
        if first != entry.lineno:
            issues.append(
                DocumentIssue(
                    source_path=label,
                    message=(
                        f"Metadata key '{entry.key}' repeats the one on line {first}; "
                        "the last value wins."
                    ),
                    severity=IssueSeverity.WARNING,
                    pointer=f"line {entry.lineno}",
                )
            )
    return issues
