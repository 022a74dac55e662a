from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from classzoom.detect import detect_parser


@pytest.fixture
def java_tree(tmp_path):
    """Write ``{relative_path: source}`` under a fresh root and return the root."""

    def write(files: dict[str, str]) -> Path:
        root = tmp_path / "src"
        for relative, source in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source))
        return root

    return write


@pytest.fixture(params=["tree-sitter", "javalang"])
def parser(request):
    return detect_parser(request.param)
