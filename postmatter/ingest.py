"""High-level ingestion helpers to load documents from the workspace."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from .config import Config
from .content import Document, FrontMatterError, load_document

logger = logging.getLogger(__name__)


def load_documents(
    config: Config,
    *,
    skip_invalid: bool = False,
    failures: list[str] | None = None,
) -> list[Document]:
    """Load every content resource under the configured content directory.

    Parse failures propagate unless ``skip_invalid`` is set, in which case the
    resource is logged, described in ``failures`` when given, and left out.
    """
    root = config.content_dir
    documents: List[Document] = []
    if not root.exists():
        logger.debug("Content directory %s does not exist", root)
        return documents

    for path in iter_content_files(root, config.suffixes):
        try:
            document = load_document(path, encoding=config.encoding)
        except FrontMatterError as exc:
            if not skip_invalid:
                raise
            _record_failure(failures, str(exc))
            continue
        except UnicodeDecodeError as exc:
            if not skip_invalid:
                raise
            _record_failure(failures, f"{path}: cannot decode as {config.encoding} ({exc.reason})")
            continue
        documents.append(document)

    return documents


def iter_content_files(root: Path, suffixes: Iterable[str]) -> Iterable[Path]:
    """Yield content files under ``root``, root directory first, in sorted order."""
    allowed = {suffix.lower() for suffix in suffixes}
    directories = sorted(p for p in root.rglob("*") if p.is_dir())
    directories.insert(0, root)

    for directory in directories:
        for path in sorted(directory.iterdir()):
            if path.is_file() and path.suffix.lower() in allowed:
                logger.debug("Discovered content file %s", path)
                yield path


def _record_failure(failures: list[str] | None, message: str) -> None:
    logger.warning("Skipping resource: %s", message)
    if failures is not None:
        failures.append(message)
