"""Language-agnostic data model for extracted type declarations."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path


class TypeKind(enum.Enum):
    """Kind of a declared type as shown on a class diagram."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ABSTRACT_CLASS = "abstract class"


@dataclass
class MethodSignature:
    """A method or constructor: name, return type and parameter types as written."""

    name: str
    return_type: str = ""
    param_types: list[str] = field(default_factory=list)


@dataclass(eq=False)
class TypeNode:
    """One declared type, top-level or nested.

    ``full_name`` is derived from the enclosing chain every time it is read,
    so a nested node only gets its final name once it is attached to its
    enclosing node.
    """

    simple_name: str = ""
    kind: TypeKind = TypeKind.CLASS
    package: str = ""
    enclosing: TypeNode | None = field(default=None, repr=False)
    extends: list[str] = field(default_factory=list)
    implements: list[str] = field(default_factory=list)
    members: dict[str, str] = field(default_factory=dict)
    methods: list[MethodSignature] = field(default_factory=list)
    nested_types: list[TypeNode] = field(default_factory=list, repr=False)
    source_path: Path | None = None

    @property
    def full_name(self) -> str:
        if self.enclosing is not None:
            return f"{self.enclosing.full_name}.{self.simple_name}"
        if self.package:
            return f"{self.package}.{self.simple_name}"
        return self.simple_name

    @property
    def scope(self) -> str:
        """The package/enclosing prefix of ``full_name`` ("" at the root)."""
        return self.full_name.rpartition(".")[0]

    def sibling_name(self, reference: str) -> str:
        """Qualify *reference* as if it were declared next to this type."""
        scope = self.scope
        return f"{scope}.{reference}" if scope else reference

    def walk(self):
        """Yield this node and every nested node, breadth-first."""
        queue = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.nested_types)


# Mapping from full name to node, at most one node per name.
TypeRegistry = dict[str, TypeNode]


@dataclass
class ParseFailure:
    """A source file that could not be read or parsed."""

    path: Path
    reason: str


@dataclass
class ExtractionReport:
    """Outcome of extracting a whole source tree.

    Failed files are excluded from ``registry`` and listed in ``failures``.
    ``collisions`` lists full names declared more than once; for those only
    the last declaration merged is kept.
    """

    registry: TypeRegistry = field(default_factory=dict)
    failures: list[ParseFailure] = field(default_factory=list)
    collisions: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
