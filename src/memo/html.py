"""HTML listing of search results, written to ``<root>/index.html``."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from memo.errors import MemoIOError
from memo.search import SearchSet

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"

_MARKUP = re.compile(r"<[^<>]+>")
_SPACES = re.compile(" +")


def h1(text: str) -> str:
    return f"<H1>{text}</H1>"


def link(title: str, href: str) -> str:
    return f"<a href={href}>{title}</a>"


def list_items(items: Iterable[str]) -> str:
    """``<ul>`` with one ``<li>`` per item; newlines become ``<br>``."""
    lines = ["<ul>\n"]
    for item in items:
        lines.append(f"<li>{item.replace(chr(10), '<br>')}</li>\n")
    lines.append("</ul>\n")
    return "".join(lines)


def clear_html_tags(text: str) -> str:
    """Strip markup and collapse repeated spaces."""
    text = _MARKUP.sub("", text).strip()
    return _SPACES.sub(" ", text).strip()


def render_listing(heading: str, search: SearchSet) -> str:
    items = []
    for entry in search:
        title = clear_html_tags(entry.title) if entry.is_html else entry.title
        items.append(
            "\n".join(
                [
                    link(title, entry.full_path),
                    f"tags: {entry.tags_text()}",
                    f"created at: {entry.create_time()}",
                ]
            )
        )
    return h1(f"{heading} ({len(search)})") + list_items(items)


def write_listing(root: str | Path, content: str) -> Path:
    """Replace ``root/index.html`` with ``content``."""
    output = Path(root) / INDEX_FILENAME
    try:
        output.unlink(missing_ok=True)
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        raise MemoIOError(f"Failed to write result to {output}: {e}") from e
    logger.info("Wrote %d bytes to %s", len(content), output)
    return output
