"""Find candidate source files under a root directory."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

# Files to skip when walking Java sources.
_SKIP_FILES = {"package-info.java", "module-info.java"}


def source_predicate(suffixes: Iterable[str] = (".java",)) -> Callable[[str], bool]:
    """Return a filename predicate accepting *suffixes*, minus descriptor files."""
    suffixes = tuple(suffixes)

    def accept(name: str) -> bool:
        return name.endswith(suffixes) and name not in _SKIP_FILES

    return accept


def find_source_files(
    root: Path,
    predicate: Callable[[str], bool],
    exclude: Iterable[str] = (),
) -> Iterator[Path]:
    """Yield files under *root* whose name satisfies *predicate*, in sorted order.

    *exclude* holds glob patterns matched against the path relative to *root*.
    """
    exclude = list(exclude)
    for path in sorted(root.rglob("*")):
        if not path.is_file() or not predicate(path.name):
            continue
        relative = path.relative_to(root).as_posix()
        if any(fnmatch.fnmatch(relative, pattern) for pattern in exclude):
            logger.debug("Excluded %s", relative)
            continue
        yield path
