"""Build :class:`TypeNode` trees from parsed type declarations."""

from __future__ import annotations

import logging

from classzoom.extractors.base import (
    VISIBILITY_MODIFIERS,
    CompilationUnit,
    MalformedDeclaration,
    TypeSyntax,
)
from classzoom.model import MethodSignature, TypeKind, TypeNode

logger = logging.getLogger(__name__)


def extract_unit(unit: CompilationUnit) -> list[TypeNode]:
    """Extract every top-level type declared in *unit*."""
    nodes = []
    for decl in unit.types:
        try:
            node = extract_type(decl, TypeNode(package=unit.package))
        except MalformedDeclaration as e:
            logger.debug("Skipping malformed type declaration: %s", e)
            continue
        nodes.append(node)
    return nodes


def extract_type(decl: TypeSyntax, node: TypeNode) -> TypeNode:
    """Populate *node* from *decl*, recursing into nested types, and return it."""
    node.simple_name = decl.name
    node.kind = _kind_of(decl)

    if decl.form == "interface":
        # Interfaces may extend several super-interfaces.
        for name in decl.extends_clause:
            _append_unique(node.implements, name)
    else:
        for name in decl.extends_clause[:1]:
            _append_unique(node.extends, name)

    for name in decl.implements_clause:
        _append_unique(node.implements, name)

    for member in decl.members():
        try:
            if member.category == "field":
                for field_name, type_text in member.field_declarators():
                    node.members[field_name] = type_text
            elif member.category == "method":
                name, return_type, param_types = member.method_signature()
                node.methods.append(
                    MethodSignature(
                        name=name, return_type=return_type, param_types=param_types
                    )
                )
            elif member.category == "type":
                nested = extract_type(
                    member.as_type(), TypeNode(enclosing=node, package=node.package)
                )
                node.nested_types.append(nested)
        except MalformedDeclaration as e:
            logger.debug("%s: skipping malformed member: %s", node.simple_name, e)

    return node


def _kind_of(decl: TypeSyntax) -> TypeKind:
    if decl.form == "enum":
        return TypeKind.ENUM
    if decl.form == "interface":
        return TypeKind.INTERFACE
    extra = [m for m in decl.modifiers if m not in VISIBILITY_MODIFIERS]
    if extra == ["abstract"]:
        return TypeKind.ABSTRACT_CLASS
    return TypeKind.CLASS


def _append_unique(names: list[str], name: str) -> None:
    if name and name not in names:
        names.append(name)
