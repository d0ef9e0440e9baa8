"""
CLI for memo.

Usage:
    memo -a                         # write a new text memo in $EDITOR
    memo -t work                    # memos tagged [work]
    memo "proj-a+proj-b*urgent"     # key expression, evaluated left to right
    memo -t work -d draft           # delete matching memos, one prompt each
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from memo import __version__
from memo.config import load_config
from memo.entry import MatchCondition
from memo.errors import MemoError, UnexpectedError
from memo.html import render_listing, write_listing
from memo.query import compose
from memo.search import SearchSet
from memo.store import Memo

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="memo",
    help="Tagged local notes with a small query language.",
    add_completion=False,
    rich_markup_mode=None,
)


def _setup_logging(level: str, log_file: Path | None = None) -> None:
    handlers: list[logging.Handler]
    if log_file:
        handlers = [logging.FileHandler(log_file, encoding="utf-8")]
    else:
        handlers = [logging.StreamHandler(sys.stderr)]
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _version_callback(value: bool):
    if value:
        print(f"memo {__version__}")
        raise typer.Exit()


def _show(path: Path, browser: str) -> None:
    """Open the rendered listing and wait for the browser to exit."""
    command = [*shlex.split(browser), str(path)]
    try:
        result = subprocess.run(command)
    except OSError as e:
        raise UnexpectedError(f"Failed to execute {browser}: {e}") from e
    if result.returncode != 0:
        raise UnexpectedError(f"{browser} failed with exit code {result.returncode}")


def _delete(entries: SearchSet) -> None:
    selected = []
    for entry in entries:
        typer.echo(f"{entry.title}\n  {entry.full_path}")
        if typer.confirm("Delete this memo?", default=False):
            selected.append(entry)
    removed = Memo.remove(selected)
    typer.echo(f"Removed {len(removed)} memo(s).")


@app.command()
def main(
    keys: Annotated[
        Optional[str],
        typer.Argument(help="Keyword expression, e.g. 'a+b-c*d'"),
    ] = None,
    path: Annotated[
        Optional[Path],
        typer.Option("--path", "-p", help="Root path to store memos (default ~/.memo)"),
    ] = None,
    add_text_memo: Annotated[
        bool, typer.Option("--add-text-memo", "-a", help="Add text memo")
    ] = False,
    add_html_memo: Annotated[
        bool, typer.Option("--add-html-memo", "-A", help="Add html memo")
    ] = False,
    ignore_case: Annotated[
        bool, typer.Option("--ignore-case", "-I", help="Ignore case sensitivity")
    ] = False,
    word: Annotated[
        bool, typer.Option("--word", "-W", help="Match key as a word")
    ] = False,
    tag: Annotated[
        Optional[str],
        typer.Option("--tag", "-t", help='Search the memo with a tag of "TAG"'),
    ] = None,
    delete: Annotated[
        bool, typer.Option("--delete", "-d", help="Delete matched memos after confirming each")
    ] = False,
    log: Annotated[
        Optional[Path], typer.Option("--log", "-l", help="Log file")
    ] = None,
    verbose: Annotated[
        int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity")
    ] = 0,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = None,
):
    """Search memos by tag and keyword expression, or add a new one."""
    config = load_config()
    level = "DEBUG" if verbose else config.log_level
    _setup_logging(level, log or config.log_file)

    if add_text_memo and add_html_memo:
        raise typer.BadParameter("--add-text-memo and --add-html-memo are exclusive")

    root = path or config.root

    try:
        if add_text_memo or add_html_memo:
            Memo.create(root, html=add_html_memo, editor=config.editor)
            return

        memo = Memo.load(root)
        if memo.is_empty():
            logger.info("No memo.")
            return

        condition = MatchCondition(ignore_case=ignore_case, match_word=word)
        entries = compose(memo, tag, keys, condition)
        if entries.is_empty():
            logger.info("No memo.")
            return

        if delete:
            _delete(entries)
            return

        heading = f"Result for tag `{tag.strip()}`" if tag is not None else "Memo"
        output = write_listing(memo.root, render_listing(heading, entries))
        _show(output, config.browser)
    except MemoError as e:
        logger.debug("%s failed", e.kind, exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
