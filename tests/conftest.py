"""Shared fixtures: a storage root with a memo/ directory and a memo writer."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def memo_root(tmp_path: Path) -> Path:
    root = tmp_path / "root"
    (root / "memo").mkdir(parents=True)
    return root


@pytest.fixture
def write_memo(memo_root: Path) -> Callable[[str, str], Path]:
    """Write ``text`` to ``memo_root/memo/<name>`` and return the path."""

    def _write(name: str, text: str) -> Path:
        path = memo_root / "memo" / name
        path.write_text(text, encoding="utf-8", newline="")
        return path

    return _write
