"""Select the parser backend for a run."""

from __future__ import annotations

from classzoom.extractors.base import SourceParser


def detect_parser(name: str = "tree-sitter") -> SourceParser:
    """Return a parser backend by name (``tree-sitter`` or ``javalang``)."""
    if name == "tree-sitter":
        from classzoom.extractors.java import TreeSitterJavaParser

        return TreeSitterJavaParser()
    if name == "javalang":
        from classzoom.extractors.java import JavalangParser

        return JavalangParser()
    raise ValueError(f"unknown parser backend: {name!r}")
