"""Search results and the set algebra used to combine them.

A :class:`SearchSet` is an ordered, read-only selection of entries from one
store. It never copies entries; every operation returns a new set and leaves
its operands untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from memo.entry import MatchCondition, MemoEntry
from memo.errors import InvalidValueError

EntryPredicate = Callable[[MemoEntry], bool]


class SearchSet:
    """Ordered selection of memo entries scoped to a storage root."""

    def __init__(self, entries: Iterable[MemoEntry], root: str | Path) -> None:
        self._entries = tuple(entries)
        self._root = str(root)

    @property
    def entries(self) -> tuple[MemoEntry, ...]:
        return self._entries

    @property
    def root(self) -> str:
        return self._root

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MemoEntry]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchSet):
            return NotImplemented
        return self._root == other._root and self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        paths = ", ".join(e.full_path for e in self._entries)
        return f"SearchSet(root={self._root!r}, entries=[{paths}])"

    # ── Filtering ─────────────────────────────────────────────

    def new_search(self) -> SearchSet:
        """Empty set with the same root."""
        return SearchSet((), self._root)

    def find(
        self,
        key: str | None,
        is_tag: bool = False,
        condition: MatchCondition = MatchCondition(),
    ) -> SearchSet:
        """Keep entries matching ``key``; ``None`` keeps everything."""
        if key is None:
            return SearchSet(self._entries, self._root)
        pattern = condition.compile(key)
        if is_tag:
            return self.find_else(lambda e: e.match_tag(pattern, condition))
        return self.find_else(lambda e: e.match_any(pattern, condition))

    def find_else(self, predicate: EntryPredicate) -> SearchSet:
        return SearchSet((e for e in self._entries if predicate(e)), self._root)

    # ── Algebra ───────────────────────────────────────────────

    def _check_root(self, other: SearchSet, op: str) -> None:
        if self._root != other._root:
            raise InvalidValueError(
                f"Cannot {op} searches from different roots: "
                f"{self._root} and {other._root}"
            )

    def union(self, other: SearchSet) -> SearchSet:
        """Self's entries followed by other's entries not already present."""
        self._check_root(other, "union")
        seen = set(self._entries)
        tail = []
        for entry in other._entries:
            if entry not in seen:
                seen.add(entry)
                tail.append(entry)
        return SearchSet(self._entries + tuple(tail), self._root)

    def difference(self, other: SearchSet) -> SearchSet:
        self._check_root(other, "subtract")
        drop = set(other._entries)
        return self.find_else(lambda e: e not in drop)

    def intersection(self, other: SearchSet) -> SearchSet:
        self._check_root(other, "intersect")
        keep = set(other._entries)
        return self.find_else(lambda e: e in keep)
