"""Locate the leading comments of a source file.

A docblock has to be the first thing in a file, but tooling sometimes needs
a directive string like ``"use babel";`` or ``'use strict';`` ahead of it.
String literals and semicolons are therefore stepped over; any other token
ends the search.
"""

__all__ = ["MAX_TOKENS", "first_comments"]

import itertools

from . import _lexer

# Avoid lexing unbounded in perverse cases
MAX_TOKENS = 10

_SKIPPABLE = frozenset([_lexer.STRING, _lexer.SEMICOLON])


def first_comments(results, max_tokens=MAX_TOKENS):
    """Find the comments attached to the first commented token.

    Each token pulled from ``results`` costs one unit of ``max_tokens``. When
    a single token carries more comments than the budget has left, only the
    leading ones are returned.

    Args:
        results: (Iterable[LexResult]) Token stream, usually from lex()
        max_tokens: (int) Most tokens to examine

    Returns:
        (list[Comment] | None) Comments in source order, or None when the
        search ends without finding any
    """
    for used, result in enumerate(itertools.islice(results, max(max_tokens, 0))):
        if result.comments:
            return result.comments[:max_tokens - used]
        if result.kind not in _SKIPPABLE:
            return None
    return None
