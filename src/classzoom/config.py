"""Read optional settings from .classzoom.toml or pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

PARSERS = ("tree-sitter", "javalang")


@dataclass
class Settings:
    """Run settings; CLI flags override whatever was read from disk."""

    parser: str = "tree-sitter"
    workers: int | None = None  # None: one per CPU
    suffixes: list[str] = field(default_factory=lambda: [".java"])
    exclude: list[str] = field(default_factory=list)


def load_settings(root: Path) -> Settings:
    """Read ``[classzoom]`` from .classzoom.toml, else ``[tool.classzoom]``."""
    table = _read_config_table(root)
    settings = Settings()

    parser = table.get("parser")
    if parser is not None:
        if parser in PARSERS:
            settings.parser = parser
        else:
            logger.warning("Unknown parser %r in config; using %s", parser, settings.parser)

    workers = table.get("workers")
    if workers is not None:
        if isinstance(workers, int) and workers > 0:
            settings.workers = workers
        else:
            logger.warning("Ignoring invalid workers setting %r", workers)

    suffixes = table.get("suffixes")
    if isinstance(suffixes, list) and suffixes:
        settings.suffixes = [str(s) for s in suffixes]

    exclude = table.get("exclude")
    if isinstance(exclude, list):
        settings.exclude = [str(p) for p in exclude]

    return settings


def _read_config_table(root: Path) -> dict:
    # Try .classzoom.toml first
    classzoom_toml = root / ".classzoom.toml"
    if classzoom_toml.exists():
        try:
            with open(classzoom_toml, "rb") as f:
                data = tomllib.load(f)
            return data.get("classzoom", {})
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not read %s: %s", classzoom_toml, e)

    # Fall back to [tool.classzoom] in pyproject.toml
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
            return data.get("tool", {}).get("classzoom", {})
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not read %s: %s", pyproject, e)

    return {}
