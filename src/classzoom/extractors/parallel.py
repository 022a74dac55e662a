"""Extract every source file under a root concurrently into one registry."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from classzoom.discover import find_source_files, source_predicate
from classzoom.extractors.base import SourceParseError, SourceParser
from classzoom.extractors.declarations import extract_unit
from classzoom.model import ExtractionReport, ParseFailure, TypeNode

logger = logging.getLogger(__name__)


def extract_file(parser: SourceParser, path: Path) -> list[TypeNode]:
    """Parse *path* and return all of its types, top-level and nested, flattened.

    Raises :class:`SourceParseError` if the file cannot be read or parsed.
    """
    unit = parser.parse(path)
    nodes: list[TypeNode] = []
    for top_level in extract_unit(unit):
        for node in top_level.walk():
            node.source_path = path
            nodes.append(node)
    logger.debug("%s: %d types", path, len(nodes))
    return nodes


def extract_all(
    root: Path,
    *,
    parser: SourceParser | None = None,
    predicate: Callable[[str], bool] | None = None,
    exclude: Iterable[str] = (),
    workers: int | None = None,
) -> ExtractionReport:
    """Extract all candidate files under *root* using a thread pool.

    Each worker parses one file and flattens its type tree; results are
    merged into the registry in file order once every worker is done, so on
    a name collision the declaration from the later file wins.  Files that
    fail are recorded in the report and otherwise ignored.
    """
    if parser is None:
        from classzoom.detect import detect_parser

        parser = detect_parser()
    if predicate is None:
        predicate = source_predicate()

    root = Path(root)
    files = list(find_source_files(root, predicate, exclude))
    max_workers = workers or os.cpu_count() or 1
    logger.debug(
        "Extracting %d files under %s with %s (%d workers)",
        len(files),
        root,
        parser.name,
        max_workers,
    )

    report = ExtractionReport()
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [(path, executor.submit(extract_file, parser, path)) for path in files]

        for path, future in futures:
            try:
                nodes = future.result()
            except SourceParseError as e:
                logger.warning("Skipping %s: %s", path, e)
                report.failures.append(ParseFailure(path=path, reason=str(e)))
                continue
            except Exception as e:
                logger.exception("Unexpected error extracting %s", path)
                report.failures.append(ParseFailure(path=path, reason=repr(e)))
                continue
            _merge(report, nodes)

    logger.debug(
        "Registry: %d types from %d files (%d failed, %d collisions)",
        len(report.registry),
        len(files),
        len(report.failures),
        len(report.collisions),
    )
    return report


def _merge(report: ExtractionReport, nodes: list[TypeNode]) -> None:
    for node in nodes:
        full_name = node.full_name
        if full_name in report.registry:
            logger.debug(
                "Duplicate declaration of %s in %s replaces %s",
                full_name,
                node.source_path,
                report.registry[full_name].source_path,
            )
            report.collisions.append(full_name)
        report.registry[full_name] = node
