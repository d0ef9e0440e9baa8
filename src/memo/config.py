"""Configuration loading from environment variables and memo.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

DEFAULT_ROOT = Path.home() / ".memo"
_CONFIG_FILENAME = "memo.toml"

DEFAULT_EDITOR = "vim"
DEFAULT_BROWSER = "w3m -num -T text/html"


@dataclass
class MemoConfig:
    """Top-level memo configuration."""

    root: Path = DEFAULT_ROOT
    editor: str = DEFAULT_EDITOR
    browser: str = DEFAULT_BROWSER
    log_level: str = "INFO"
    log_file: Path | None = None


def load_config(config_path: Path | None = None) -> MemoConfig:
    """Load configuration from environment variables and optional memo.toml.

    Priority: environment variables > memo.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.memo/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, DEFAULT_ROOT / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    root = os.getenv("MEMO_ROOT", file_data.get("root", str(DEFAULT_ROOT)))
    log_file = os.getenv("MEMO_LOG_FILE", file_data.get("log_file"))

    return MemoConfig(
        root=Path(root).expanduser(),
        editor=os.getenv(
            "MEMO_EDITOR", os.getenv("EDITOR", file_data.get("editor", DEFAULT_EDITOR))
        ),
        browser=os.getenv("MEMO_BROWSER", file_data.get("browser", DEFAULT_BROWSER)),
        log_level=os.getenv("MEMO_LOG_LEVEL", file_data.get("log_level", "INFO")),
        log_file=Path(log_file).expanduser() if log_file else None,
    )
