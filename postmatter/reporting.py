"""Workspace reporting helpers for postmatter."""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, Field

from .content import Document

REPORT_FILENAME = "postmatter-report.json"


class DocumentStats(BaseModel):
    total: int
    with_metadata: int
    without_metadata: int
    keys: dict[str, int] = Field(default_factory=dict)


class WorkspaceReport(BaseModel):
    project: str
    generated_at: datetime
    duration_seconds: float
    documents: DocumentStats
    failures: list[str] = Field(default_factory=list)


def build_document_stats(documents: Iterable[Document]) -> DocumentStats:
    total = 0
    with_metadata = 0
    keys: Counter[str] = Counter()
    for document in documents:
        total += 1
        if document.has_metadata:
            with_metadata += 1
            keys.update(document.metadata.keys())
    return DocumentStats(
        total=total,
        with_metadata=with_metadata,
        without_metadata=total - with_metadata,
        keys=dict(sorted(keys.items())),
    )


def assemble_report(
    *,
    project: str,
    duration_seconds: float,
    documents: DocumentStats,
    failures: Iterable[str] = (),
) -> WorkspaceReport:
    return WorkspaceReport(
        project=project,
        generated_at=datetime.now(timezone.utc),
        duration_seconds=duration_seconds,
        documents=documents,
        failures=list(failures),
    )


def write_report(report: WorkspaceReport, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / REPORT_FILENAME
    with target.open("w", encoding="utf-8") as handle:
        json.dump(report.model_dump(mode="json"), handle, ensure_ascii=False, indent=2)
    return target
