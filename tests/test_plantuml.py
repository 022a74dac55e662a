from __future__ import annotations

from classzoom.model import MethodSignature, TypeKind, TypeNode
from classzoom.renderer.plantuml import render_plantuml, write_plantuml


def _shapes() -> list[TypeNode]:
    return [
        TypeNode(
            simple_name="Circle",
            package="geo",
            extends=["Shape"],
            implements=["Drawable"],
            members={"center": "Point", "radius": "double"},
            methods=[
                MethodSignature("Circle", "", ["Point", "double"]),
                MethodSignature("area", "double", []),
            ],
        ),
        TypeNode(simple_name="Shape", package="geo", kind=TypeKind.ABSTRACT_CLASS),
        TypeNode(simple_name="Drawable", package="geo", kind=TypeKind.INTERFACE),
        TypeNode(simple_name="Point", package="geo"),
        TypeNode(
            simple_name="Color",
            package="geo",
            kind=TypeKind.ENUM,
            members={"RED": "Color"},
        ),
    ]


def test_render_blocks_and_relations():
    text = render_plantuml(_shapes(), title="shapes")

    assert text.startswith("@startuml\n")
    assert text.rstrip().endswith("@enduml")
    assert "title shapes" in text
    assert "abstract class geo.Shape {" in text
    assert "interface geo.Drawable {" in text
    assert "enum geo.Color {" in text
    assert "  center : Point" in text
    assert "  Circle(Point, double)" in text
    assert "  area() : double" in text
    assert "geo.Shape <|-- geo.Circle" in text
    assert "geo.Drawable <|.. geo.Circle" in text
    assert "geo.Circle --> geo.Point : center" in text
    # enum constants point at the enum itself
    assert "geo.Color --> geo.Color" not in text


def test_relations_only_between_painted_types():
    circle, *_ = _shapes()
    text = render_plantuml([circle])

    assert "class geo.Circle {" in text
    assert "<|--" not in text
    assert "-->" not in text


def test_blocks_in_full_name_order():
    text = render_plantuml(_shapes())
    order = [line.split()[-2] for line in text.splitlines() if line.endswith("{")]
    assert order == sorted(order)


def test_write_plantuml(tmp_path):
    out = write_plantuml(_shapes(), tmp_path / "out", "shapes")

    assert out == tmp_path / "out" / "shapes.puml"
    assert out.read_text().startswith("@startuml")
