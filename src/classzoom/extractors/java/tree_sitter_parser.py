"""Parse Java source via tree-sitter into the syntax capability protocol."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from pathlib import Path

import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser

from classzoom.extractors.base import (
    DeclarationForm,
    MalformedDeclaration,
    MemberCategory,
    SourceParseError,
)

logger = logging.getLogger(__name__)

# tree-sitter node types that represent Java type declarations.
_TYPE_DECL_TYPES: dict[str, DeclarationForm] = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "record_declaration": "record",
    "annotation_type_declaration": "annotation",
}

# tree-sitter node types that represent method-like declarations.
_METHOD_DECL_TYPES = {
    "method_declaration",
    "constructor_declaration",
    "annotation_type_element_declaration",
}

_FIELD_DECL_TYPES = {"field_declaration", "constant_declaration"}

_ANNOTATION_TYPES = {"annotation", "marker_annotation"}


def _text(node: Node) -> str:
    # Collapse line breaks and indentation inside multi-line type texts.
    return " ".join(node.text.decode("utf-8", errors="replace").split())


def _type_text(type_node: Node | None, dimensions: Node | None = None) -> str:
    if type_node is None or type_node.has_error:
        raise MalformedDeclaration("missing or unparsable type")
    text = _text(type_node)
    if dimensions is not None:
        text += _text(dimensions).replace(" ", "")
    return text


def _type_list(clause: Node | None) -> list[str]:
    """Return the types of an ``extends``/``implements`` clause node."""
    if clause is None:
        return []
    for child in clause.named_children:
        if child.type == "type_list":
            return [_text(t) for t in child.named_children]
    return [_text(t) for t in clause.named_children]


def _child_of_type(node: Node, node_type: str) -> Node | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


class TreeSitterMember:
    """A member of a class, interface, enum or record body."""

    def __init__(self, node: Node, owner: str) -> None:
        self._node = node
        self._owner = owner

    @property
    def category(self) -> MemberCategory:
        node_type = self._node.type
        if node_type in _FIELD_DECL_TYPES or node_type == "enum_constant":
            return "field"
        if node_type == "formal_parameter":
            # record component
            return "field"
        if node_type in _METHOD_DECL_TYPES:
            return "method"
        if node_type in _TYPE_DECL_TYPES:
            return "type"
        return "other"

    def field_declarators(self) -> list[tuple[str, str]]:
        node = self._node
        if node.has_error:
            raise MalformedDeclaration(f"syntax error in field at line {_line(node)}")

        if node.type == "enum_constant":
            name = node.child_by_field_name("name")
            if name is None:
                raise MalformedDeclaration("enum constant without a name")
            return [(_text(name), self._owner)]

        type_node = node.child_by_field_name("type")
        if node.type == "formal_parameter":
            name = node.child_by_field_name("name")
            if name is None:
                raise MalformedDeclaration("record component without a name")
            return [(_text(name), _type_text(type_node))]

        declarators = []
        for declarator in node.children_by_field_name("declarator"):
            name = declarator.child_by_field_name("name")
            if name is None:
                continue
            type_text = _type_text(
                type_node, declarator.child_by_field_name("dimensions")
            )
            declarators.append((_text(name), type_text))
        if not declarators:
            raise MalformedDeclaration(f"field without a name at line {_line(node)}")
        return declarators

    def method_signature(self) -> tuple[str, str, list[str]]:
        node = self._node
        if node.has_error:
            raise MalformedDeclaration(f"syntax error in method at line {_line(node)}")

        name_node = node.child_by_field_name("name")
        if name_node is None:
            raise MalformedDeclaration(f"method without a name at line {_line(node)}")

        if node.type == "constructor_declaration":
            return_type = ""
        else:
            return_type = _type_text(node.child_by_field_name("type"))

        params = _parameter_types(node.child_by_field_name("parameters"))
        return _text(name_node), return_type, params

    def as_type(self) -> TreeSitterType:
        return TreeSitterType(self._node)


class TreeSitterType:
    """A Java type declaration node."""

    def __init__(self, node: Node) -> None:
        self._node = node

    @property
    def form(self) -> DeclarationForm:
        return _TYPE_DECL_TYPES[self._node.type]

    @property
    def name(self) -> str:
        name_node = self._node.child_by_field_name("name")
        if name_node is None:
            raise MalformedDeclaration(
                f"type declaration without a name at line {_line(self._node)}"
            )
        return _text(name_node)

    @property
    def modifiers(self) -> list[str]:
        modifiers = _child_of_type(self._node, "modifiers")
        if modifiers is None:
            return []
        return [
            _text(child)
            for child in modifiers.children
            if child.type not in _ANNOTATION_TYPES
        ]

    @property
    def extends_clause(self) -> list[str]:
        if self.form == "interface":
            return _type_list(_child_of_type(self._node, "extends_interfaces"))
        return _type_list(self._node.child_by_field_name("superclass"))

    @property
    def implements_clause(self) -> list[str]:
        return _type_list(self._node.child_by_field_name("interfaces"))

    def members(self) -> Iterator[TreeSitterMember]:
        owner = self.name
        if self.form == "record":
            components = self._node.child_by_field_name("parameters")
            if components is not None:
                for child in components.named_children:
                    if child.type == "formal_parameter":
                        yield TreeSitterMember(child, owner)

        body = self._node.child_by_field_name("body")
        if body is None:
            return
        for child in body.named_children:
            if child.type == "enum_body_declarations":
                for declaration in child.named_children:
                    yield TreeSitterMember(declaration, owner)
            else:
                yield TreeSitterMember(child, owner)


class TreeSitterUnit:
    """A parsed ``.java`` file."""

    def __init__(self, root: Node) -> None:
        self._root = root

    @property
    def package(self) -> str:
        declaration = _child_of_type(self._root, "package_declaration")
        if declaration is None:
            return ""
        for child in declaration.named_children:
            if child.type in ("identifier", "scoped_identifier"):
                return _text(child).replace(" ", "")
        return ""

    @property
    def types(self) -> list[TreeSitterType]:
        return [
            TreeSitterType(child)
            for child in self._root.children
            if child.type in _TYPE_DECL_TYPES
        ]


class TreeSitterJavaParser:
    """Parse Java files with tree-sitter; one ``Parser`` per thread."""

    name = "tree-sitter"

    def __init__(self) -> None:
        self._language = Language(tsjava.language())
        self._local = threading.local()

    def _parser(self) -> Parser:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = Parser(self._language)
            self._local.parser = parser
        return parser

    def parse(self, path: Path) -> TreeSitterUnit:
        try:
            source = path.read_bytes()
        except OSError as e:
            raise SourceParseError(f"could not read {path}: {e}") from e

        tree = self._parser().parse(source)
        unit = TreeSitterUnit(tree.root_node)
        if tree.root_node.has_error:
            if not unit.types:
                raise SourceParseError(f"no type declaration could be parsed in {path}")
            logger.debug("%s: syntax errors, keeping what parsed", path)
        return unit


def _parameter_types(params: Node | None) -> list[str]:
    """Extract parameter type texts from a formal_parameters node."""
    if params is None:
        return []

    param_types = []
    for child in params.named_children:
        if child.type == "formal_parameter":
            param_types.append(
                _type_text(
                    child.child_by_field_name("type"),
                    child.child_by_field_name("dimensions"),
                )
            )
        elif child.type == "spread_parameter":
            # spread_parameter has no "type" field: modifiers?, type, "...", declarator
            type_nodes = [
                c
                for c in child.named_children
                if c.type not in ("modifiers", "variable_declarator")
            ]
            if not type_nodes:
                raise MalformedDeclaration("varargs parameter without a type")
            param_types.append(_type_text(type_nodes[0]) + "...")
    return param_types


def _line(node: Node) -> int:
    return node.start_point[0] + 1  # 1-indexed
