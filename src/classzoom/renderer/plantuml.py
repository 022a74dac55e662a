"""Render extracted types to a PlantUML class diagram."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from string import Template

from classzoom.graph import resolve_reference
from classzoom.model import TypeNode

logger = logging.getLogger(__name__)

_TEMPLATE_PATH = Path(__file__).with_name("template.puml")


def _type_block(node: TypeNode) -> list[str]:
    lines = [f"{node.kind.value} {node.full_name} {{"]
    for name, type_text in node.members.items():
        lines.append(f"  {name} : {type_text}")
    for method in node.methods:
        params = ", ".join(method.param_types)
        if method.return_type:
            lines.append(f"  {method.name}({params}) : {method.return_type}")
        else:
            lines.append(f"  {method.name}({params})")
    lines.append("}")
    return lines


def _relations(painted: dict[str, TypeNode]) -> list[str]:
    """Relations between painted types only, resolved like graph edges."""
    lines: list[str] = []
    for full_name, node in painted.items():
        for ref in node.extends:
            target = resolve_reference(painted, node, ref)
            if target is not None and target != full_name:
                lines.append(f"{target} <|-- {full_name}")
        for ref in node.implements:
            target = resolve_reference(painted, node, ref)
            if target is not None and target != full_name:
                lines.append(f"{target} <|.. {full_name}")
        for field_name, type_text in node.members.items():
            target = resolve_reference(painted, node, type_text)
            if target is not None and target != full_name:
                lines.append(f"{full_name} --> {target} : {field_name}")
    # Deduplicate, keep first occurrence.
    return list(dict.fromkeys(lines))


def render_plantuml(nodes: Iterable[TypeNode], title: str = "") -> str:
    """Return the PlantUML source for *nodes*, painted in full-name order."""
    painted = {node.full_name: node for node in nodes}
    body: list[str] = []
    for full_name in sorted(painted):
        body.extend(_type_block(painted[full_name]))
        body.append("")
    body.extend(_relations(painted))

    template = Template(_TEMPLATE_PATH.read_text())
    return template.safe_substitute(TITLE=title, BODY="\n".join(body))


def write_plantuml(nodes: Iterable[TypeNode], dest: Path, name: str) -> Path:
    """Write the diagram for *nodes* to ``dest/name.puml`` and return the path."""
    nodes = list(nodes)
    output_path = dest / f"{name}.puml"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_plantuml(nodes, title=name))
    logger.debug("Painted %d types to %s", len(nodes), output_path)
    return output_path
