"""Query expressions: keys joined by ``+`` (union), ``-`` (difference) and
``*`` (intersection).

Operators have no precedence and there are no parentheses; ``a+b-c*d`` is
evaluated strictly left to right as ``((a + b) - c) * d``. Operators at
either end of the expression are dropped. Keys are regex fragments, so an
empty key (``a++b``) matches every entry.
"""

from __future__ import annotations

import logging
from typing import Protocol

from memo.entry import MatchCondition
from memo.search import SearchSet

logger = logging.getLogger(__name__)

OPERATORS = "+-*"

_APPLY = {
    "+": SearchSet.union,
    "-": SearchSet.difference,
    "*": SearchSet.intersection,
}


class Searchable(Protocol):
    """Anything a query can run against: a store or a previous result."""

    def find(
        self, key: str | None, is_tag: bool = ..., condition: MatchCondition = ...
    ) -> SearchSet: ...

    def new_search(self) -> SearchSet: ...


def tokenize(expression: str) -> tuple[list[str], list[str]]:
    """Split an expression into keys and the operators between them.

    Always returns ``len(ops) == len(keys) - 1`` unless there are no keys.
    """
    text = expression.strip(OPERATORS)
    keys: list[str] = []
    ops: list[str] = []
    current = 0

    while current < len(text):
        rest = text[current:]
        pos = next((i for i, ch in enumerate(rest) if ch in OPERATORS), None)
        if pos is None:
            keys.append(rest.strip())
            break
        keys.append(rest[:pos].strip())
        ops.append(rest[pos])
        current += pos + 1

    logger.debug("tokenized %r: keys=%s ops=%s", expression, keys, ops)
    return keys, ops


def evaluate(
    source: Searchable,
    expression: str,
    condition: MatchCondition = MatchCondition(),
) -> SearchSet:
    """Resolve every key with ``find`` and fold the results left to right."""
    keys, ops = tokenize(expression)
    if not keys:
        return source.new_search()

    searches = []
    for key in keys:
        if not key:
            logger.debug("empty key in %r matches every entry", expression)
        searches.append(source.find(key, False, condition))

    result = searches[0]
    for op, search in zip(ops, searches[1:]):
        logger.debug("%s %s %s", result, op, search)
        result = _APPLY[op](result, search)
    return result


def compose(
    source: Searchable,
    tag: str | None = None,
    expression: str | None = None,
    condition: MatchCondition = MatchCondition(),
) -> SearchSet:
    """Combine an optional tag filter with an optional key expression.

    With both, the result is their intersection; with neither, every entry.
    """
    tag_search = source.find(tag.strip(), True, condition) if tag is not None else None
    key_search = evaluate(source, expression, condition) if expression is not None else None

    if tag_search is not None and key_search is not None:
        return tag_search.intersection(key_search)
    if tag_search is not None:
        return tag_search
    if key_search is not None:
        return key_search
    return source.find(None)
