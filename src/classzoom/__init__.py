"""classzoom: class diagrams of a Java source tree."""

from __future__ import annotations

from classzoom.analysis import connected_component
from classzoom.extractors import extract_all
from classzoom.graph import DependencyGraph, UnknownTypeError, build_graph
from classzoom.model import ExtractionReport, MethodSignature, TypeKind, TypeNode

__all__ = [
    "DependencyGraph",
    "ExtractionReport",
    "MethodSignature",
    "TypeKind",
    "TypeNode",
    "UnknownTypeError",
    "build_graph",
    "connected_component",
    "extract_all",
]
