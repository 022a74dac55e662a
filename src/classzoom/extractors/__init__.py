"""Source model extraction: parser protocol, declaration extractor, coordinator."""

from __future__ import annotations

from classzoom.extractors.base import MalformedDeclaration, SourceParseError
from classzoom.extractors.declarations import extract_type, extract_unit
from classzoom.extractors.parallel import extract_all, extract_file

__all__ = [
    "MalformedDeclaration",
    "SourceParseError",
    "extract_all",
    "extract_file",
    "extract_type",
    "extract_unit",
]
