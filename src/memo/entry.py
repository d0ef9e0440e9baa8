"""Memo entries and keyword/tag matching.

A memo file is parsed into a :class:`MemoEntry`: the first line is the
title, bracketed tokens in the title are its tags, and everything after the
first line is the body. Search keys are regular-expression fragments.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from memo.errors import InvalidValueError, MemoIOError, UnexpectedError
from memo.filename import FileName, decode

TAG_PATTERN = re.compile(r"\[[A-Za-z0-9_-]+\]")


@dataclass(frozen=True)
class MatchCondition:
    """How a search key is matched."""

    ignore_case: bool = False
    match_word: bool = False

    def compile(self, key: str) -> re.Pattern[str]:
        """Compile ``key`` as a regex, bounded by ``\\b`` when matching words."""
        source = rf"\b{key}\b" if self.match_word else key
        flags = re.IGNORECASE if self.ignore_case else 0
        try:
            return re.compile(source, flags)
        except re.error as e:
            raise InvalidValueError(f"Invalid search key {key!r}: {e}") from e


@dataclass(frozen=True, eq=False)
class MemoEntry:
    """One memo file. Entries are equal when their resolved paths are."""

    title: str
    tags: tuple[str, ...]
    body: str
    created: FileName
    full_path: str

    @classmethod
    def load(cls, file: str | Path) -> MemoEntry:
        path = Path(file)
        if not path.name:
            raise InvalidValueError(f"Invalid memo file name {file}")

        created = decode(path.name)

        title = ""
        body: list[str] = []
        try:
            with open(path, encoding="utf-8", errors="replace", newline="") as f:
                for i, line in enumerate(f):
                    if i == 0:
                        title = line.rstrip("\r\n")
                    else:
                        body.append(line)
        except OSError as e:
            raise MemoIOError(f"Failed to read {file} : {e}") from e

        if not title.strip():
            raise UnexpectedError(f"{file} is empty")

        try:
            full_path = str(path.resolve(strict=True))
        except OSError as e:
            raise UnexpectedError(
                f"Failed to retrieve absolute path for {file} : {e}"
            ) from e

        return cls(
            title=title,
            tags=tuple(TAG_PATTERN.findall(title)),
            body="".join(body),
            created=created,
            full_path=full_path,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemoEntry):
            return NotImplemented
        return self.full_path == other.full_path

    def __hash__(self) -> int:
        return hash(self.full_path)

    # ── Presentation ──────────────────────────────────────────

    def tags_text(self) -> str:
        """Tags joined by single spaces."""
        return " ".join(self.tags)

    def create_time(self) -> str:
        return self.created.create_time()

    @property
    def is_html(self) -> bool:
        return self.created.is_html

    # ── Matching ──────────────────────────────────────────────

    def match_tag(self, key: str | re.Pattern[str], condition: MatchCondition) -> bool:
        pattern = _pattern(key, condition)
        return any(pattern.search(tag.strip("[]")) for tag in self.tags)

    def match_content(
        self, key: str | re.Pattern[str], condition: MatchCondition
    ) -> bool:
        pattern = _pattern(key, condition)
        return bool(pattern.search(self.title) or pattern.search(self.body))

    def match_any(self, key: str | re.Pattern[str], condition: MatchCondition) -> bool:
        pattern = _pattern(key, condition)
        return self.match_tag(pattern, condition) or self.match_content(
            pattern, condition
        )


def _pattern(key: str | re.Pattern[str], condition: MatchCondition) -> re.Pattern[str]:
    # Already-compiled patterns come from SearchSet.find, compiled once per scan.
    if isinstance(key, re.Pattern):
        return key
    return condition.compile(key)
