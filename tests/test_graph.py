from __future__ import annotations

import pytest

from classzoom.analysis import connected_component
from classzoom.extractors import extract_all
from classzoom.graph import UnknownTypeError, build_graph, resolve_reference
from classzoom.model import TypeNode


def _node(name: str, package: str = "p", **kwargs) -> TypeNode:
    return TypeNode(simple_name=name, package=package, **kwargs)


def _registry(*nodes: TypeNode) -> dict[str, TypeNode]:
    registry = {}
    for node in nodes:
        for each in node.walk():
            registry[each.full_name] = each
    return registry


def _names(nodes) -> set[str]:
    return {node.full_name for node in nodes}


def _edge(a: str, b: str) -> frozenset[str]:
    return frozenset((a, b))


def test_extends_makes_one_edge():
    registry = _registry(_node("A", extends=["B"]), _node("B"))

    graph = build_graph(registry)

    assert graph.edges() == {_edge("p.A", "p.B")}
    assert _names(connected_component(graph, "p.A")) == {"p.A", "p.B"}


def test_field_type_connects_and_unrelated_type_is_isolated():
    registry = _registry(_node("A", members={"c": "C"}), _node("B"), _node("C"))

    graph = build_graph(registry)

    assert _names(connected_component(graph, "p.A")) == {"p.A", "p.C"}
    assert [n.full_name for n in connected_component(graph, "p.B")] == ["p.B"]


def test_implements_edges_are_undirected_and_deduplicated():
    registry = _registry(
        _node("Impl", extends=["Base"], implements=["Api"], members={"base": "Base"}),
        _node("Base"),
        _node("Api"),
    )

    graph = build_graph(registry)

    assert graph.edges() == {_edge("p.Impl", "p.Base"), _edge("p.Impl", "p.Api")}
    assert graph.neighbors("p.Api") == {"p.Impl"}
    assert _names(connected_component(graph, "p.Api")) == {"p.Api", "p.Impl", "p.Base"}


def test_nested_types_are_distinct_nodes():
    outer = _node("Outer")
    inner = TypeNode(simple_name="Inner", enclosing=outer, package="p")
    outer.nested_types.append(inner)

    registry = _registry(outer)

    assert set(registry) == {"p.Outer", "p.Outer.Inner"}
    graph = build_graph(registry)
    assert len(graph) == 2
    assert graph.edges() == set()


def test_unresolvable_references_make_no_edges():
    registry = _registry(
        _node(
            "A",
            extends=["java.util.AbstractList<String>"],
            members={"name": "String", "count": "int", "items": "List<B>"},
        ),
        _node("B"),
    )

    graph = build_graph(registry)

    assert graph.edges() == set()
    assert {(u.source, u.reference, u.relation) for u in graph.unresolved} == {
        ("p.A", "java.util.AbstractList<String>", "extends"),
        ("p.A", "String", "field"),
        ("p.A", "int", "field"),
        ("p.A", "List<B>", "field"),
    }


def test_self_references_never_make_self_edges():
    node = _node(
        "Chain", extends=["Chain"], implements=["p.Chain"], members={"next": "Chain"}
    )
    registry = _registry(node, _node("Other", members={"chain": "Chain"}))

    graph = build_graph(registry)

    assert graph.edges() == {_edge("p.Other", "p.Chain")}
    assert "p.Chain" not in graph.neighbors("p.Chain")


def test_resolution_tries_full_name_then_sibling():
    outer = _node("Outer")
    inner = TypeNode(simple_name="Inner", enclosing=outer, package="p")
    helper = TypeNode(simple_name="Helper", enclosing=outer, package="p")
    outer.nested_types.extend([inner, helper])
    remote = _node("Remote", package="q")
    main = _node("Main")
    registry = _registry(outer, remote, main)

    assert resolve_reference(registry, main, "q.Remote") == "q.Remote"
    assert resolve_reference(registry, main, "Outer") == "p.Outer"
    assert resolve_reference(registry, main, "Outer.Inner") == "p.Outer.Inner"
    assert resolve_reference(registry, inner, "Helper") == "p.Outer.Helper"
    # Only the innermost scope is tried, never the package of the enclosing type.
    assert resolve_reference(registry, inner, "Main") is None
    assert resolve_reference(registry, main, "Remote") is None


def test_default_package_resolution():
    registry = {
        "A": TypeNode(simple_name="A", members={"b": "B"}),
        "B": TypeNode(simple_name="B"),
    }
    graph = build_graph(registry)
    assert graph.edges() == {_edge("A", "B")}


def test_every_edge_comes_from_a_resolvable_reference():
    registry = _registry(
        _node("A", extends=["B"], members={"c": "C", "x": "Unknown"}),
        _node("B", implements=["I"]),
        _node("C"),
        _node("I"),
        _node("Lone", members={"s": "String"}),
    )

    graph = build_graph(registry)

    for edge in graph.edges():
        a, b = sorted(edge)
        assert a != b
        references = {
            (src, resolve_reference(registry, registry[src], ref))
            for src in (a, b)
            for ref in (
                registry[src].extends
                + registry[src].implements
                + list(registry[src].members.values())
            )
        }
        assert (a, b) in references or (b, a) in references


def test_component_is_maximal_and_connected():
    registry = _registry(
        _node("A", members={"b": "B"}),
        _node("B", extends=["C"]),
        _node("C"),
        _node("D", implements=["C"]),
        _node("X", members={"y": "Y"}),
        _node("Y"),
    )
    graph = build_graph(registry)

    component = connected_component(graph, "p.D")
    names = [n.full_name for n in component]

    assert names[0] == "p.D"
    assert set(names) == {"p.A", "p.B", "p.C", "p.D"}
    assert len(names) == len(set(names))
    for name in names:
        assert graph.neighbors(name) <= set(names)


def test_unknown_root_is_an_error():
    graph = build_graph(_registry(_node("A")))
    with pytest.raises(UnknownTypeError):
        connected_component(graph, "p.Missing")
    with pytest.raises(UnknownTypeError):
        graph.node("p.Missing")


def test_graph_from_source_is_idempotent(java_tree, parser):
    root = java_tree(
        {
            "zoo/Animal.java": """
                package zoo;

                public abstract class Animal implements Named {
                    private Keeper keeper;
                }
            """,
            "zoo/Named.java": """
                package zoo;

                public interface Named {
                    String name();
                }
            """,
            "zoo/Lion.java": """
                package zoo;

                public class Lion extends Animal {
                    private Mane mane;

                    static class Mane {
                        private Lion owner;
                    }
                }
            """,
            "zoo/Keeper.java": """
                package zoo;

                public class Keeper {
                    private String name;
                }
            """,
            "zoo/Ticket.java": """
                package zoo;

                public class Ticket {
                    private java.math.BigDecimal price;
                }
            """,
        }
    )

    first = build_graph(extract_all(root, parser=parser).registry)
    second = build_graph(extract_all(root, parser=parser).registry)

    assert first.edges() == second.edges()
    assert set(first) == set(second)
    assert first.edges() == {
        _edge("zoo.Animal", "zoo.Named"),
        _edge("zoo.Animal", "zoo.Keeper"),
        _edge("zoo.Lion", "zoo.Animal"),
    }
    # A nested type is only found from its siblings, not from its enclosing type.
    assert _names(connected_component(first, "zoo.Lion.Mane")) == {"zoo.Lion.Mane"}
    assert _names(connected_component(first, "zoo.Keeper")) == {
        "zoo.Animal",
        "zoo.Keeper",
        "zoo.Lion",
        "zoo.Named",
    }
    assert _names(connected_component(first, "zoo.Ticket")) == {"zoo.Ticket"}
