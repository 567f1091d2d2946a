"""Write documents back out as delimiter-bounded text."""

from __future__ import annotations

from typing import Mapping

from .models import Document, MetadataValue
from .parsers import DELIMITER, KEY_TERMINATOR, QUOTE_CHARS, is_delimiter


def dump_document(document: Document) -> str:
    """Serialize a document so that parsing the result yields the same document."""
    if not document.metadata:
        lines = document.body.splitlines()
        if lines and is_delimiter(lines[0]):
            # A body opening with a delimiter line needs an empty block in front.
            return f"{DELIMITER}\n{DELIMITER}\n{document.body}"
        return document.body
    return dump_metadata(document.metadata) + document.body


def dump_metadata(metadata: Mapping[str, MetadataValue]) -> str:
    """Render a metadata mapping as a delimiter-bounded block."""
    lines = [DELIMITER]
    for key, value in metadata.items():
        _check_key(key)
        text = _format_list(value) if isinstance(value, list) else _format_scalar(value)
        lines.append(f"{key}{KEY_TERMINATOR} {text}" if text else f"{key}{KEY_TERMINATOR}")
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n"


def _check_key(key: str) -> None:
    if (
        not key
        or key != key.strip()
        or KEY_TERMINATOR in key
        or _has_newline(key)
    ):
        raise ValueError(f"Metadata key {key!r} cannot be serialized.")


def _format_scalar(value: str) -> str:
    if _has_newline(value):
        raise ValueError(f"Metadata value {value!r} spans multiple lines.")
    needs_quotes = (
        value != value.strip()
        or (value.startswith("[") and value.endswith("]") and len(value) >= 2)
        or (len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARS)
    )
    # Unquoting strips exactly one outer pair, so inner quotes need no escaping.
    return f'"{value}"' if needs_quotes else value


def _format_list(values: list[str]) -> str:
    return "[" + ", ".join(_format_item(item) for item in values) + "]"


def _format_item(item: str) -> str:
    if _has_newline(item):
        raise ValueError(f"Metadata list item {item!r} spans multiple lines.")
    needs_quotes = (
        not item
        or item != item.strip()
        or "," in item
        or item[0] in QUOTE_CHARS
    )
    if not needs_quotes:
        return item
    for quote in QUOTE_CHARS:
        if quote not in item:
            return f"{quote}{item}{quote}"
    raise ValueError(f"Metadata list item {item!r} contains both quote characters.")


def _has_newline(text: str) -> bool:
    return len(text.splitlines()) > 1 or text.endswith(("\n", "\r"))
