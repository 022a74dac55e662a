"""Orchestrator: discover → extract → (graph → component) → render."""

from __future__ import annotations

import logging
from pathlib import Path

from classzoom.analysis import connected_component
from classzoom.config import Settings, load_settings
from classzoom.detect import detect_parser
from classzoom.discover import source_predicate
from classzoom.extractors import extract_all
from classzoom.graph import build_graph
from classzoom.renderer.plantuml import write_plantuml

logger = logging.getLogger(__name__)


def run(
    src: Path,
    dest: Path,
    name: str,
    *,
    focus: str | None = None,
    settings: Settings | None = None,
) -> Path:
    """Run the full classzoom pipeline and return the output path.

    With *focus* set, only the connected component of that type is painted;
    an unknown focus raises :class:`~classzoom.graph.UnknownTypeError`.
    """
    src = src.resolve()
    if settings is None:
        settings = load_settings(src)

    report = extract_all(
        src,
        parser=detect_parser(settings.parser),
        predicate=source_predicate(settings.suffixes),
        exclude=settings.exclude,
        workers=settings.workers,
    )

    if report.failures:
        logger.warning(
            "%d file(s) could not be parsed and were skipped", len(report.failures)
        )
    if report.collisions:
        logger.warning(
            "%d type(s) declared more than once; the last declaration was kept: %s",
            len(report.collisions),
            ", ".join(sorted(set(report.collisions))),
        )

    if focus:
        graph = build_graph(report.registry)
        nodes = connected_component(graph, focus)
        logger.debug("Component of %s: %d types", focus, len(nodes))
    else:
        nodes = list(report.registry.values())

    out_path = write_plantuml(nodes, dest, name)
    logger.info("Generated %s", out_path)
    return out_path
