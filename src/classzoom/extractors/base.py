"""Syntax capability protocol — every parser backend conforms to this interface.

The model extractor only talks to these protocols, so it works the same way
over any concrete parse tree that can answer them.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Literal, Protocol

# Declaration forms a backend may report for a type declaration.
DeclarationForm = Literal["class", "interface", "enum", "record", "annotation"]

# Member categories a backend may report; "other" members are ignored.
MemberCategory = Literal["field", "method", "type", "other"]

VISIBILITY_MODIFIERS = frozenset({"public", "protected", "private"})


class SourceParseError(Exception):
    """A source file could not be read or parsed."""


class MalformedDeclaration(Exception):
    """A declaration is missing a part the model needs (name, type, ...)."""


class MemberSyntax(Protocol):
    """One entry of a type body."""

    @property
    def category(self) -> MemberCategory:
        ...

    def field_declarators(self) -> list[tuple[str, str]]:
        """Return ``(name, type_text)`` for every variable a field declares."""
        ...

    def method_signature(self) -> tuple[str, str, list[str]]:
        """Return ``(name, return_type_text, [param_type_text, ...])``."""
        ...

    def as_type(self) -> TypeSyntax:
        """Return the nested type declaration this member holds."""
        ...


class TypeSyntax(Protocol):
    """A class, interface, enum, record or annotation type declaration."""

    @property
    def form(self) -> DeclarationForm:
        ...

    @property
    def name(self) -> str:
        ...

    @property
    def modifiers(self) -> list[str]:
        """Keyword modifiers, annotations excluded."""
        ...

    @property
    def extends_clause(self) -> list[str]:
        ...

    @property
    def implements_clause(self) -> list[str]:
        ...

    def members(self) -> Iterator[MemberSyntax]:
        ...


class CompilationUnit(Protocol):
    """One parsed source file."""

    @property
    def package(self) -> str:
        ...

    @property
    def types(self) -> list[TypeSyntax]:
        ...


class SourceParser(Protocol):
    """Protocol for parser backends."""

    name: str

    def parse(self, path: Path) -> CompilationUnit:
        """Parse *path*, raising :class:`SourceParseError` on failure."""
        ...
