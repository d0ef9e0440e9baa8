"""Memo file names: creation timestamp plus suffix.

A memo is stored as ``{year}_{month}_{day}_{hour}_{minute}_{second}.{suffix}``
with unpadded fields, e.g. ``2024_3_7_9_5_0.txt``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePath

from memo.errors import InvalidValueError

SUFFIXES = ("txt", "html")
_FIELDS = ("second", "minute", "hour", "day", "month", "year")


@dataclass(frozen=True)
class FileName:
    """Creation time and suffix of a memo file."""

    year: str
    month: str
    day: str
    hour: str
    minute: str
    second: str
    suffix: str = "txt"

    @classmethod
    def create(cls, html: bool = False, now: datetime | None = None) -> FileName:
        now = now or datetime.now()
        return cls(
            year=str(now.year),
            month=str(now.month),
            day=str(now.day),
            hour=str(now.hour),
            minute=str(now.minute),
            second=str(now.second),
            suffix="html" if html else "txt",
        )

    @classmethod
    def from_file_name(cls, name: str) -> FileName:
        return decode(name)

    def file_name(self) -> str:
        stem = "_".join(
            [self.year, self.month, self.day, self.hour, self.minute, self.second]
        )
        return f"{stem}.{self.suffix}"

    def create_time(self) -> str:
        """Zero-padded display form: ``YYYY/MM/DD HH:MM:SS``."""
        return (
            f"{self.year:0>4}/{self.month:0>2}/{self.day:0>2} "
            f"{self.hour:0>2}:{self.minute:0>2}:{self.second:0>2}"
        )

    @property
    def is_html(self) -> bool:
        return self.suffix == "html"


def encode(created_at: datetime, is_html: bool = False) -> str:
    """Return the file name for a memo created at ``created_at``."""
    return FileName.create(html=is_html, now=created_at).file_name()


def decode(name: str) -> FileName:
    """Parse a memo file name.

    Only the last six ``_``-separated fields of the stem are used, so any
    leading fields are ignored. A missing extension means ``txt``.
    """
    path = PurePath(name)
    stem = path.stem
    if not stem:
        raise InvalidValueError(f"Invalid file name {name}")

    suffix = path.suffix[1:] if path.suffix else "txt"
    if suffix not in SUFFIXES:
        raise InvalidValueError(f"Invalid suffix for {name}")

    parts = stem.split("_")
    fields: dict[str, str] = {}
    for field_name in _FIELDS:
        if not parts:
            raise InvalidValueError(f"No {field_name} entry in file name {name}")
        fields[field_name] = parts.pop()

    return FileName(suffix=suffix, **fields)
