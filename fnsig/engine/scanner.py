"""Bracket-aware scanning primitives for parameter-list text.

Everything here is a pure function over an immutable string. The central
piece is :func:`scan`, which walks the text outside of quoted literals and
reports the bracket nesting depth of every character. The segmenter, the
assignment splitter and the extractor are all built on it.

Usage::

    segment("a, {b, c} = {}, ...rest")
    # ['a', '{b, c} = {}', '...rest']

    split_assignment("filter = user => user")
    # ['filter ', ' user => user']
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..constants import ASSIGNMENT, BRACKET_PAIRS, CLOSERS, OPENERS, QUOTE_CHARS
from ..core.exceptions import DecompositionError

logger = logging.getLogger(__name__)

# Characters that, directly before a ``=``, make it part of an operator
_OPERATOR_TAILS = frozenset("=!<>")


def scan(text: str) -> Iterator[tuple[int, str, int]]:
    """Yield ``(index, char, depth)`` for every character outside quotes.

    Openers report the depth they open at, closers the depth they close
    back to, so the outermost brackets of a token are reported at depth 0.
    Quoted literals (``'``, ``"`` and backtick, with backslash escapes) are
    skipped entirely.

    Raises:
        DecompositionError: On a mismatched or unmatched closer, an
            unclosed opener or an unterminated quote. Closers and quotes
            are checked as they are reached; unclosed openers only once the
            whole text has been consumed.
    """
    stack: list[str] = []
    quote: str | None = None
    quote_start = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue

        if ch in QUOTE_CHARS:
            quote = ch
            quote_start = i
        elif ch in OPENERS:
            yield i, ch, len(stack)
            stack.append(ch)
        elif ch in CLOSERS:
            if not stack or stack[-1] != BRACKET_PAIRS[ch]:
                raise DecompositionError(
                    f"Unmatched {ch!r} at position {i}", text=text, position=i
                )
            stack.pop()
            yield i, ch, len(stack)
        else:
            yield i, ch, len(stack)
        i += 1

    if quote is not None:
        raise DecompositionError(
            f"Unterminated {quote} quote starting at position {quote_start}",
            text=text,
            position=quote_start,
        )
    if stack:
        raise DecompositionError(
            f"Unclosed {stack[-1]!r} in {text!r}", text=text, position=n
        )


def matching_closer(text: str, open_index: int) -> int:
    """Return the index of the bracket closing the one at *open_index*."""
    if open_index >= len(text) or text[open_index] not in OPENERS:
        raise DecompositionError(
            f"No opening bracket at position {open_index}",
            text=text,
            position=open_index,
        )
    for i, ch, depth in scan(text[open_index:]):
        if ch in CLOSERS and depth == 0:
            return open_index + i
    # scan() raises for an unclosed opener before we get here
    raise DecompositionError(
        f"Unclosed {text[open_index]!r} at position {open_index}",
        text=text,
        position=open_index,
    )


def strip_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside of quoted literals.

    Line comments are dropped up to (not including) the newline; block
    comments are replaced with a single space so that tokens on either side
    stay apart.
    """
    out: list[str] = []
    quote: str | None = None
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if quote is not None:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue

        if ch in QUOTE_CHARS:
            quote = ch
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            continue
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise DecompositionError(
                    f"Unterminated block comment at position {i}",
                    text=text,
                    position=i,
                )
            out.append(" ")
            i = end + 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def segment(text: str) -> list[str]:
    """Split *text* on top-level commas.

    Segments are trimmed at the edges. Empty input gives ``[]``; a single
    trailing comma does not add an empty segment, but empty segments in the
    middle (array holes) are kept.
    """
    if not text.strip():
        return []

    segments: list[str] = []
    start = 0
    for i, ch, depth in scan(text):
        if ch == "," and depth == 0:
            segments.append(text[start:i].strip())
            start = i + 1

    tail = text[start:].strip()
    if tail or not segments:
        segments.append(tail)
    return segments


def split_assignment(segment_text: str) -> list[str]:
    """Split a segment at top-level ``=`` characters.

    A piece starting with ``>`` belongs to an arrow (``=>``) and is glued
    back onto the previous one, as are the pieces of comparison operators
    (``==``, ``!=``, ``<=``, ``>=``). One piece means no default; with more
    than one, ``"=".join(pieces[1:])`` is the default expression text.
    """
    text = segment_text.strip()
    pieces: list[str] = []
    start = 0
    for i, ch, depth in scan(text):
        if ch == ASSIGNMENT and depth == 0:
            pieces.append(text[start:i])
            start = i + 1
    pieces.append(text[start:])

    merged = [pieces[0]]
    for piece in pieces[1:]:
        previous = merged[-1]
        continues_operator = (
            len(merged) > 1 and (not previous or previous[-1] in _OPERATOR_TAILS)
        )
        if piece.startswith(">") or piece == "" or continues_operator:
            merged[-1] = previous + ASSIGNMENT + piece
        else:
            merged.append(piece)
    return merged
