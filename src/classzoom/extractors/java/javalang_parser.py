"""Parse Java source via javalang into the syntax capability protocol.

javalang rejects anything newer than Java 8 syntax (records, ``var``,
switch expressions, ...); such files become parse failures.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import javalang

from classzoom.extractors.base import (
    DeclarationForm,
    MalformedDeclaration,
    MemberCategory,
    SourceParseError,
)

_TYPE_DECL_FORMS: dict[type, DeclarationForm] = {
    javalang.tree.ClassDeclaration: "class",
    javalang.tree.InterfaceDeclaration: "interface",
    javalang.tree.EnumDeclaration: "enum",
    javalang.tree.AnnotationDeclaration: "annotation",
}


def _format_type(type_node) -> str:
    """Render a javalang type node the way it is written in source."""
    if type_node is None:
        return "void"
    text = type_node.name
    arguments = getattr(type_node, "arguments", None)
    if arguments:
        text += "<" + ", ".join(_format_argument(a) for a in arguments) + ">"
    sub_type = getattr(type_node, "sub_type", None)
    if sub_type is not None:
        text += "." + _format_type(sub_type)
    if type_node.dimensions:
        text += "[]" * len(type_node.dimensions)
    return text


def _format_argument(argument) -> str:
    if argument.pattern_type == "?":
        return "?"
    if argument.pattern_type in ("extends", "super"):
        return f"? {argument.pattern_type} {_format_type(argument.type)}"
    return _format_type(argument.type)


def _form_of(node) -> DeclarationForm | None:
    # Exact match: unknown TypeDeclaration subclasses are not extracted.
    return _TYPE_DECL_FORMS.get(type(node))


class JavalangMember:
    """A member of a class, interface or enum body."""

    def __init__(self, node, owner: str) -> None:
        self._node = node
        self._owner = owner

    @property
    def category(self) -> MemberCategory:
        node = self._node
        if isinstance(
            node,
            (javalang.tree.FieldDeclaration, javalang.tree.EnumConstantDeclaration),
        ):
            return "field"
        if isinstance(
            node,
            (
                javalang.tree.MethodDeclaration,
                javalang.tree.ConstructorDeclaration,
                javalang.tree.AnnotationMethod,
            ),
        ):
            return "method"
        if _form_of(node) is not None:
            return "type"
        return "other"

    def field_declarators(self) -> list[tuple[str, str]]:
        node = self._node
        if isinstance(node, javalang.tree.EnumConstantDeclaration):
            return [(node.name, self._owner)]

        if node.type is None:
            raise MalformedDeclaration("field without a type")
        type_text = _format_type(node.type)
        declarators = []
        for declarator in node.declarators:
            extra = "[]" * len(declarator.dimensions or [])
            declarators.append((declarator.name, type_text + extra))
        if not declarators:
            raise MalformedDeclaration("field without a name")
        return declarators

    def method_signature(self) -> tuple[str, str, list[str]]:
        node = self._node
        if not node.name:
            raise MalformedDeclaration("method without a name")

        if isinstance(node, javalang.tree.ConstructorDeclaration):
            return node.name, "", _parameter_types(node.parameters)
        if isinstance(node, javalang.tree.AnnotationMethod):
            return node.name, _format_type(node.return_type), []
        return node.name, _format_type(node.return_type), _parameter_types(
            node.parameters
        )

    def as_type(self) -> JavalangType:
        return JavalangType(self._node)


class JavalangType:
    """A javalang class, interface, enum or annotation declaration."""

    def __init__(self, node) -> None:
        self._node = node

    @property
    def form(self) -> DeclarationForm:
        return _form_of(self._node)

    @property
    def name(self) -> str:
        if not self._node.name:
            raise MalformedDeclaration("type declaration without a name")
        return self._node.name

    @property
    def modifiers(self) -> list[str]:
        return sorted(self._node.modifiers or ())

    @property
    def extends_clause(self) -> list[str]:
        extends = getattr(self._node, "extends", None)
        if extends is None:
            return []
        if isinstance(extends, list):
            # Interface can extend multiple
            return [_format_type(t) for t in extends]
        return [_format_type(extends)]

    @property
    def implements_clause(self) -> list[str]:
        implements = getattr(self._node, "implements", None) or []
        return [_format_type(t) for t in implements]

    def members(self) -> Iterator[JavalangMember]:
        owner = self.name
        body = self._node.body
        if body is None:
            return
        if isinstance(body, javalang.tree.EnumBody):
            for constant in body.constants or []:
                yield JavalangMember(constant, owner)
            body = body.declarations or []
        for member in body:
            if member is None or isinstance(member, (list, tuple)):
                # initializer blocks
                continue
            yield JavalangMember(member, owner)


class JavalangUnit:
    """A parsed ``.java`` file."""

    def __init__(self, tree) -> None:
        self._tree = tree

    @property
    def package(self) -> str:
        if self._tree.package is None:
            return ""
        return self._tree.package.name

    @property
    def types(self) -> list[JavalangType]:
        return [
            JavalangType(t)
            for t in self._tree.types
            if t is not None and _form_of(t) is not None
        ]


class JavalangParser:
    """Parse Java files with javalang."""

    name = "javalang"

    def parse(self, path: Path) -> JavalangUnit:
        try:
            source = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise SourceParseError(f"could not read {path}: {e}") from e

        try:
            tree = javalang.parse.parse(source)
        except javalang.parser.JavaSyntaxError as e:
            raise SourceParseError(f"Java syntax error in {path}: {e}") from e
        except Exception as e:
            raise SourceParseError(f"failed to parse {path}: {e!r}") from e

        return JavalangUnit(tree)


def _parameter_types(parameters) -> list[str]:
    types = []
    for param in parameters or []:
        if param.type is None:
            raise MalformedDeclaration(f"parameter {param.name} without a type")
        text = _format_type(param.type)
        if param.varargs:
            text += "..."
        types.append(text)
    return types
