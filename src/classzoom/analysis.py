"""Post-extraction graph analysis (connected components)."""

from __future__ import annotations

from collections import deque

from classzoom.graph import DependencyGraph, UnknownTypeError
from classzoom.model import TypeNode


def connected_component(graph: DependencyGraph, full_name: str) -> list[TypeNode]:
    """Return every type reachable from *full_name*, the root first.

    Nodes are listed in breadth-first order.  Raises :class:`UnknownTypeError`
    if *full_name* is not a node of *graph*.
    """
    if full_name not in graph:
        raise UnknownTypeError(full_name)

    seen = {full_name}
    order = [full_name]
    queue = deque([full_name])
    while queue:
        current = queue.popleft()
        for neighbor in sorted(graph.neighbors(current)):
            if neighbor not in seen:
                seen.add(neighbor)
                order.append(neighbor)
                queue.append(neighbor)

    return [graph.node(name) for name in order]
