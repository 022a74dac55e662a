"""Java parser backends."""

from __future__ import annotations

from classzoom.extractors.java.javalang_parser import JavalangParser
from classzoom.extractors.java.tree_sitter_parser import TreeSitterJavaParser

__all__ = [
    "JavalangParser",
    "TreeSitterJavaParser",
]
