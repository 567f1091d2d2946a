"""Split a resource into its metadata block and body, and parse the block."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

from .models import Document, MetadataValue

DELIMITER = "---"
KEY_TERMINATOR = ":"
QUOTE_CHARS = "\"'"


class FrontMatterError(ValueError):
    """Raised when a resource has malformed front matter."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class UnterminatedMetadataBlock(FrontMatterError):
    """Opening delimiter found with no closing delimiter before end of input."""

    def __init__(self, source: str | None = None) -> None:
        super().__init__(
            f"{_label(source)}: closing metadata delimiter '{DELIMITER}' missing.",
            source=source,
        )


class MalformedMetadataLine(FrontMatterError):
    """A metadata line has no key terminator or an empty key."""

    def __init__(self, line: str, lineno: int, source: str | None = None) -> None:
        super().__init__(
            f"{_label(source)}:{lineno}: malformed metadata line {line!r} "
            f"(expected 'key{KEY_TERMINATOR} value').",
            source=source,
        )
        self.line = line
        self.lineno = lineno


@dataclass(frozen=True, slots=True)
class MetadataEntry:
    """One parsed `key: value` line and its 1-based position in the resource."""

    lineno: int
    key: str
    value: MetadataValue


def load_document(path: str | Path, *, encoding: str = "utf-8") -> Document:
    """Read a file and parse it into a document."""
    source_path = Path(path)
    # newline="" keeps the body's line terminators as they are on disk.
    with source_path.open("r", encoding=encoding, newline="") as handle:
        text = handle.read()
    return parse_document(text, source=str(source_path))


def parse_document(text: str, source: str | None = None) -> Document:
    """Parse a text blob into a document."""
    return _build(text.splitlines(keepends=True), "", source)


def parse_lines(lines: Sequence[str], source: str | None = None) -> Document:
    """Parse a sequence of lines into a document.

    Lines may carry their terminators (as from ``splitlines(keepends=True)``)
    or not, in which case the body is rejoined with ``\\n``.
    """
    collected = list(lines)
    terminated = all(line.endswith(("\n", "\r")) for line in collected[:-1])
    return _build(collected, "" if terminated else "\n", source)


def iter_metadata_entries(text: str, source: str | None = None) -> Iterator[MetadataEntry]:
    """Yield every entry of the metadata block in order, repeated keys included."""
    block, _ = _split(text.splitlines(keepends=True), "", source)
    if block is None:
        return iter(())
    return _iter_entries(block, source)


def parse_value(raw: str) -> MetadataValue:
    """Parse the text after the key terminator into a string or list of strings."""
    text = raw.strip()
    if len(text) >= 2 and text[0] == "[" and text[-1] == "]":
        items = (item.strip() for item in _split_items(text[1:-1]))
        return [_unquote(item) for item in items if item]
    return _unquote(text)


def is_delimiter(line: str) -> bool:
    return line.rstrip("\r\n").rstrip() == DELIMITER


def _build(lines: list[str], joiner: str, source: str | None) -> Document:
    block, body = _split(lines, joiner, source)
    if block is None:
        return Document(body=body, source_path=source)
    metadata = {entry.key: entry.value for entry in _iter_entries(block, source)}
    return Document(metadata=metadata, body=body, source_path=source)


def _split(
    lines: list[str], joiner: str, source: str | None
) -> tuple[list[str] | None, str]:
    if not lines or not is_delimiter(lines[0]):
        return None, joiner.join(lines)
    for index in range(1, len(lines)):
        if is_delimiter(lines[index]):
            return lines[1:index], joiner.join(lines[index + 1 :])
    raise UnterminatedMetadataBlock(source)


def _iter_entries(block: list[str], source: str | None) -> Iterator[MetadataEntry]:
    # The block starts on the line after the opening delimiter.
    for lineno, line in enumerate(block, start=2):
        if not line.strip():
            continue
        key, separator, value = line.partition(KEY_TERMINATOR)
        key = key.strip()
        if not separator or not key:
            raise MalformedMetadataLine(line.rstrip("\r\n"), lineno, source)
        yield MetadataEntry(lineno=lineno, key=key, value=parse_value(value))


def _split_items(inner: str) -> list[str]:
    items: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for char in inner:
        if quote is not None:
            current.append(char)
            if char == quote:
                quote = None
        elif char == ",":
            items.append("".join(current))
            current = []
        else:
            if char in QUOTE_CHARS and not "".join(current).strip():
                quote = char
            current.append(char)
    items.append("".join(current))
    return items


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in QUOTE_CHARS:
        return text[1:-1]
    return text


def _label(source: str | None) -> str:
    return source if source is not None else "<string>"
