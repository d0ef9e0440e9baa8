"""The memo store: every memo file under ``<root>/memo/``, loaded once.

The store is read-only after :meth:`Memo.load`. Searches borrow its entries
through :class:`~memo.search.SearchSet`; creating or deleting memos goes
through the filesystem (editor, unlink), never through the loaded store.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from memo.config import DEFAULT_EDITOR, DEFAULT_ROOT
from memo.entry import MatchCondition, MemoEntry
from memo.errors import InvalidValueError, MemoError, MemoIOError, UnexpectedError
from memo.filename import FileName
from memo.search import EntryPredicate, SearchSet

logger = logging.getLogger(__name__)

MEMO_DIR = "memo"


class Memo:
    """All memo entries of one storage root."""

    def __init__(
        self,
        entries: Iterable[MemoEntry],
        root: Path,
        rejected: Iterable[Path] = (),
    ) -> None:
        self._entries = tuple(entries)
        self._root = Path(root)
        self._rejected = tuple(rejected)

    # ── Root bootstrap ────────────────────────────────────────

    @staticmethod
    def setup_root(root: str | Path | None = None) -> tuple[Path, Path]:
        """Ensure ``root`` and ``root/memo`` exist. Returns both paths."""
        root_path = Path(root).expanduser() if root else DEFAULT_ROOT
        memo_dir = root_path / MEMO_DIR

        if root_path.exists() and not root_path.is_dir():
            raise InvalidValueError(f"{root_path} is not a directory.")

        try:
            memo_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise UnexpectedError(f"Failed to create memo path {memo_dir}: {e}") from e

        return root_path, memo_dir

    # ── Load ──────────────────────────────────────────────────

    @classmethod
    def load(cls, root: str | Path | None = None, prune: bool = True) -> Memo:
        """Scan ``root/memo`` and parse every file in it.

        A file that fails to parse does not abort the scan: it is recorded
        in :attr:`rejected` and, with ``prune``, removed from disk.
        """
        root_path, memo_dir = cls.setup_root(root)

        try:
            files = sorted(memo_dir.iterdir())
        except OSError as e:
            raise MemoIOError(f"Failed to read dir {memo_dir} : {e}") from e

        entries: list[MemoEntry] = []
        rejected: list[Path] = []
        for path in files:
            if not path.is_file():
                logger.warning("Skip %s which is not a file.", path)
                continue
            try:
                entries.append(MemoEntry.load(path))
            except MemoError as e:
                rejected.append(path)
                if not prune:
                    logger.warning("Failed to load %s: %s", path, e)
                    continue
                logger.warning("Failed to load %s, remove it: %s", path, e)
                try:
                    path.unlink()
                except OSError as unlink_error:
                    logger.warning("Failed to remove %s: %s", path, unlink_error)

        logger.debug("Loaded %d memos from %s", len(entries), memo_dir)
        return cls(entries, root_path, rejected)

    # ── Accessors ─────────────────────────────────────────────

    @property
    def root(self) -> Path:
        return self._root

    @property
    def memo_dir(self) -> Path:
        return self._root / MEMO_DIR

    @property
    def entries(self) -> tuple[MemoEntry, ...]:
        return self._entries

    @property
    def rejected(self) -> tuple[Path, ...]:
        """Files that failed to parse during :meth:`load`."""
        return self._rejected

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # ── Search ────────────────────────────────────────────────

    def all(self) -> SearchSet:
        return SearchSet(self._entries, self._root)

    def new_search(self) -> SearchSet:
        return SearchSet((), self._root)

    def find(
        self,
        key: str | None,
        is_tag: bool = False,
        condition: MatchCondition = MatchCondition(),
    ) -> SearchSet:
        return self.all().find(key, is_tag, condition)

    def find_else(self, predicate: EntryPredicate) -> SearchSet:
        return self.all().find_else(predicate)

    # ── Create / remove ───────────────────────────────────────

    @classmethod
    def create(
        cls,
        root: str | Path | None = None,
        html: bool = False,
        editor: str = DEFAULT_EDITOR,
        now: datetime | None = None,
    ) -> Path:
        """Open ``editor`` on a new, timestamp-named memo file."""
        _root, memo_dir = cls.setup_root(root)
        output = memo_dir / FileName.create(html=html, now=now).file_name()
        command = [*shlex.split(editor), str(output)]

        try:
            result = subprocess.run(command)
        except OSError as e:
            raise UnexpectedError(f"Failed to execute {editor}: {e}") from e
        if result.returncode != 0:
            raise UnexpectedError(f"{editor} failed with exit code {result.returncode}")

        logger.info("Created memo %s", output)
        return output

    @staticmethod
    def remove(entries: Iterable[MemoEntry]) -> list[str]:
        """Delete the files behind ``entries``. Returns the removed paths."""
        removed = []
        for entry in entries:
            try:
                Path(entry.full_path).unlink()
            except OSError as e:
                raise MemoIOError(f"Failed to remove {entry.full_path}: {e}") from e
            logger.info("Removed memo %s", entry.full_path)
            removed.append(entry.full_path)
        return removed
