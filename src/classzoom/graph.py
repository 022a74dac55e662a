"""Undirected dependency graph over extracted types."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from classzoom.model import TypeNode

logger = logging.getLogger(__name__)


class UnknownTypeError(KeyError):
    """A full name was asked for that is not in the registry."""


@dataclass(frozen=True)
class UnresolvedReference:
    """A type reference that names nothing in the scanned tree."""

    source: str
    reference: str
    relation: str  # "extends", "implements" or "field"


def resolve_reference(
    registry: Mapping[str, TypeNode], node: TypeNode, reference: str
) -> str | None:
    """Resolve *reference*, as written inside *node*, to a registry full name.

    The reference is tried as a full name first, then as a sibling of *node*
    (same package and enclosing chain).  Imports are not consulted.
    """
    if reference in registry:
        return reference
    sibling = node.sibling_name(reference)
    if sibling in registry:
        return sibling
    return None


class DependencyGraph:
    """Types connected by extends, implements and field-type relations.

    Edges are undirected and carry no labels.  A node is never connected to
    itself.
    """

    def __init__(self, nodes: Mapping[str, TypeNode]) -> None:
        self._nodes: dict[str, TypeNode] = dict(nodes)
        self._adjacency: dict[str, set[str]] = {name: set() for name in self._nodes}
        self.unresolved: list[UnresolvedReference] = []

    def connect(self, a: str, b: str) -> None:
        if a == b:
            return
        self._adjacency[a].add(b)
        self._adjacency[b].add(a)

    def __contains__(self, full_name: object) -> bool:
        return full_name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, full_name: str) -> TypeNode:
        try:
            return self._nodes[full_name]
        except KeyError:
            raise UnknownTypeError(full_name) from None

    @property
    def nodes(self) -> list[TypeNode]:
        return list(self._nodes.values())

    def neighbors(self, full_name: str) -> set[str]:
        if full_name not in self._adjacency:
            raise UnknownTypeError(full_name)
        return set(self._adjacency[full_name])

    def edges(self) -> set[frozenset[str]]:
        return {
            frozenset((a, b)) for a, targets in self._adjacency.items() for b in targets
        }

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)


def build_graph(registry: Mapping[str, TypeNode]) -> DependencyGraph:
    """Connect every type to the types it extends, implements or holds as fields."""
    graph = DependencyGraph(registry)

    for full_name, node in registry.items():
        references = (
            [(ref, "extends") for ref in node.extends]
            + [(ref, "implements") for ref in node.implements]
            + [(type_text, "field") for type_text in node.members.values()]
        )
        for reference, relation in references:
            target = resolve_reference(registry, node, reference)
            if target is None:
                graph.unresolved.append(
                    UnresolvedReference(full_name, reference, relation)
                )
                continue
            graph.connect(full_name, target)

    edge_count = len(graph.edges())
    logger.debug(
        "Graph: %d nodes, %d edges, %d unresolved references",
        len(graph),
        edge_count,
        len(graph.unresolved),
    )
    return graph
