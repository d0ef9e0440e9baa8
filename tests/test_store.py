"""Tests for the memo store: root bootstrap, load scan, create and remove."""

from __future__ import annotations

import subprocess
from datetime import datetime
from pathlib import Path

import pytest

from memo.errors import InvalidValueError, MemoIOError, UnexpectedError
from memo.store import Memo


class FakeRun:
    """Stands in for subprocess.run and records the commands it gets."""

    def __init__(self, returncode: int = 0, error: Exception | None = None):
        self.returncode = returncode
        self.error = error
        self.commands: list[list[str]] = []

    def __call__(self, command, *args, **kwargs):
        self.commands.append(command)
        if self.error:
            raise self.error
        return subprocess.CompletedProcess(command, self.returncode)


class TestSetupRoot:
    def test_creates_directories(self, tmp_path: Path):
        root, memo_dir = Memo.setup_root(tmp_path / "fresh")
        assert root == tmp_path / "fresh"
        assert memo_dir == root / "memo"
        assert memo_dir.is_dir()

    def test_idempotent(self, memo_root: Path):
        Memo.setup_root(memo_root)
        Memo.setup_root(memo_root)
        assert (memo_root / "memo").is_dir()

    def test_root_is_a_file(self, tmp_path: Path):
        not_dir = tmp_path / "file"
        not_dir.write_text("x")
        with pytest.raises(InvalidValueError, match="not a directory"):
            Memo.setup_root(not_dir)


class TestLoad:
    def test_loads_sorted(self, write_memo, memo_root: Path):
        write_memo("2024_1_1_0_0_2.txt", "Second\n")
        write_memo("2024_1_1_0_0_1.txt", "First [x]\nbody\n")
        memo = Memo.load(memo_root)
        assert [e.title for e in memo.entries] == ["First [x]", "Second"]
        assert len(memo) == 2
        assert memo.root == memo_root
        assert memo.rejected == ()

    def test_empty(self, memo_root: Path):
        memo = Memo.load(memo_root)
        assert memo.is_empty()

    def test_bootstraps_missing_root(self, tmp_path: Path):
        memo = Memo.load(tmp_path / "new")
        assert memo.is_empty()
        assert memo.memo_dir.is_dir()

    def test_malformed_files_pruned(self, write_memo, memo_root: Path, caplog):
        good = write_memo("2024_1_1_0_0_1.txt", "Good\n")
        empty = write_memo("2024_1_1_0_0_2.txt", "\n\nbody\n")
        bad_name = write_memo("readme.txt", "Not a memo\n")
        with caplog.at_level("WARNING", logger="memo.store"):
            memo = Memo.load(memo_root)
        assert [e.title for e in memo.entries] == ["Good"]
        assert set(memo.rejected) == {empty, bad_name}
        assert good.exists()
        assert not empty.exists()
        assert not bad_name.exists()
        assert "remove it" in caplog.text

    def test_malformed_files_kept_without_prune(self, write_memo, memo_root: Path):
        bad = write_memo("2024_1_1_0_0_2.md", "Title\n")
        memo = Memo.load(memo_root, prune=False)
        assert memo.rejected == (bad,)
        assert bad.exists()

    def test_skips_directories(self, write_memo, memo_root: Path):
        write_memo("2024_1_1_0_0_1.txt", "Good\n")
        (memo_root / "memo" / "2024_1_1_0_0_2.txt").mkdir()
        memo = Memo.load(memo_root)
        assert len(memo) == 1
        assert memo.rejected == ()
        assert (memo_root / "memo" / "2024_1_1_0_0_2.txt").is_dir()


class TestSearch:
    def test_find_and_all(self, write_memo, memo_root: Path):
        write_memo("2024_1_1_0_0_1.txt", "A [work]\n")
        write_memo("2024_1_1_0_0_2.txt", "B [home]\n")
        memo = Memo.load(memo_root)
        assert [e.title for e in memo.find("work", is_tag=True)] == ["A [work]"]
        assert memo.find(None) == memo.all()
        assert len(memo.all()) == 2
        assert memo.new_search().is_empty()
        assert memo.find_else(lambda e: "home" in e.title).root == str(memo_root)


class TestCreate:
    def test_runs_editor_on_new_file(self, memo_root: Path, monkeypatch):
        fake = FakeRun()
        monkeypatch.setattr("memo.store.subprocess.run", fake)
        path = Memo.create(
            memo_root, html=False, editor="nano -w", now=datetime(2024, 3, 7, 9, 5, 0)
        )
        assert path == memo_root / "memo" / "2024_3_7_9_5_0.txt"
        assert fake.commands == [["nano", "-w", str(path)]]

    def test_html(self, memo_root: Path, monkeypatch):
        monkeypatch.setattr("memo.store.subprocess.run", FakeRun())
        path = Memo.create(memo_root, html=True, now=datetime(2024, 3, 7, 9, 5, 0))
        assert path.name == "2024_3_7_9_5_0.html"

    def test_editor_missing(self, memo_root: Path, monkeypatch):
        monkeypatch.setattr(
            "memo.store.subprocess.run", FakeRun(error=FileNotFoundError("no such editor"))
        )
        with pytest.raises(UnexpectedError, match="Failed to execute"):
            Memo.create(memo_root, editor="no-such-editor")

    def test_editor_fails(self, memo_root: Path, monkeypatch):
        monkeypatch.setattr("memo.store.subprocess.run", FakeRun(returncode=1))
        with pytest.raises(UnexpectedError, match="exit code 1"):
            Memo.create(memo_root)


class TestRemove:
    def test_removes_files(self, write_memo, memo_root: Path):
        write_memo("2024_1_1_0_0_1.txt", "Keep\n")
        gone = write_memo("2024_1_1_0_0_2.txt", "Drop [old]\n")
        memo = Memo.load(memo_root)
        removed = Memo.remove(memo.find("old", is_tag=True))
        assert removed == [str(gone.resolve())]
        assert not gone.exists()
        assert len(Memo.load(memo_root)) == 1

    def test_missing_file(self, write_memo, memo_root: Path):
        path = write_memo("2024_1_1_0_0_1.txt", "Drop\n")
        memo = Memo.load(memo_root)
        path.unlink()
        with pytest.raises(MemoIOError):
            Memo.remove(memo.entries)
