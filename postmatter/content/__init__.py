"""Load content resources into documents and write them back out."""

from .models import Document, MetadataValue
from .parsers import (
    DELIMITER,
    FrontMatterError,
    MalformedMetadataLine,
    MetadataEntry,
    UnterminatedMetadataBlock,
    is_delimiter,
    iter_metadata_entries,
    load_document,
    parse_document,
    parse_lines,
)
from .serializers import dump_document, dump_metadata

__all__ = [
    "DELIMITER",
    "Document",
    "FrontMatterError",
    "MalformedMetadataLine",
    "MetadataEntry",
    "MetadataValue",
    "UnterminatedMetadataBlock",
    "dump_document",
    "dump_metadata",
    "is_delimiter",
    "iter_metadata_entries",
    "load_document",
    "parse_document",
    "parse_lines",
]
