"""
Store-level text matching helpers.

Search terms are split into lower-case words. A row matches when any word is
a case-insensitive substring of one of the searched columns; relevance is the
weighted count of (word, column) hits. Everything compiles to portable SQL so
filtering and ordering happen in the database, before pagination.
"""

import re

from sqlalchemy import case, false, func, literal, or_
from sqlalchemy.sql.elements import ColumnElement

from core.constants import MAX_SEARCH_TERMS

_WORD_RE = re.compile(r"\w+", re.UNICODE)
LIKE_ESCAPE = "\\"


def tokenize(term: str | None) -> list[str]:
    """Split a search term into distinct lower-case words, in order of appearance."""
    if not term:
        return []
    words: list[str] = []
    for word in _WORD_RE.findall(term.lower()):
        if word not in words:
            words.append(word)
        if len(words) >= MAX_SEARCH_TERMS:
            break
    return words


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input is matched literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_ci(column, value: str) -> ColumnElement[bool]:
    """Case-insensitive substring match of a literal value."""
    pattern = f"%{escape_like(value.lower())}%"
    return func.lower(column).like(pattern, escape=LIKE_ESCAPE)


def text_match(columns: list, words: list[str]) -> ColumnElement[bool]:
    """True when any word occurs in any of the columns."""
    if not words:
        return false()
    return or_(*(contains_ci(column, word) for word in words for column in columns))


def relevance_score(weighted_columns: list[tuple], words: list[str]) -> ColumnElement:
    """
    Weighted hit count.

    Args:
        weighted_columns: (column, weight) pairs
        words: Output of tokenize()
    """
    terms = [
        case((contains_ci(column, word), weight), else_=0)
        for word in words
        for column, weight in weighted_columns
    ]
    if not terms:
        return literal(0)
    score = terms[0]
    for term in terms[1:]:
        score = score + term
    return score


__all__ = ["tokenize", "escape_like", "contains_ci", "text_match", "relevance_score"]
