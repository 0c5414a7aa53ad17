"""Structural decomposition of parameter patterns.

Turns one parameter clause (``{x, y = 1} = {}``, ``[a, [b, c]]``,
``...rest``) into a :class:`~fnsig.models.ParameterDescriptor` whose
``raw_shape`` mirrors the nesting of the pattern. Nested object and array
content is re-segmented with the scanner, so defaults that are themselves
literals (``item2 = {prop3: ['a', 'b']}``) decompose recursively while
arrow-valued defaults (``filter = user => user``) stay whole.

Only the binding skeleton of a pattern (keys, ``:`` targets and nested
patterns) is held to the pattern grammar. Default values are expressions:
object and array literals among them still decompose, anything else is an
opaque leaf.
"""

from __future__ import annotations

import logging
import re

from ..constants import (
    ASSIGNMENT,
    CLOSERS,
    MAX_DECOMPOSITION_DEPTH,
    QUOTE_CHARS,
    SPREAD_MARKER,
)
from ..core.exceptions import DecompositionError, UnknownShapeError
from ..models import (
    DestructureKind,
    KeyedMapping,
    Leaf,
    OrderedSequence,
    ParameterDescriptor,
    Shape,
    Spread,
)
from .scanner import scan, segment, split_assignment, strip_comments

logger = logging.getLogger(__name__)

# Unquoted characters allowed in the binding part of a pattern entry, with
# nested bracket content excluded
_BINDING_CHARS = re.compile(r"[\w\s$.:\[\]{}]*")

# Leaves that serialize without quoting
_BARE_LEAF = re.compile(r"[\w$.]+")

_BOOLEANS = {"true": True, "false": False}


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify(token: str, pattern: bool = True) -> DestructureKind:
    """Classify a trimmed token.

    A token whose first bracket closes on its last character is an object
    or array pattern. Bracket-delimited tokens are never downgraded to a
    leaf: in *pattern* position, a binding skeleton outside the pattern
    grammar raises :class:`UnknownShapeError`. Literals in default-value
    position (``pattern=False``) are not checked.

    Raises:
        DecompositionError: If the token's brackets or quotes don't balance.
        UnknownShapeError: If a bracket-delimited pattern binds something
            the pattern grammar does not allow.
    """
    chars = list(scan(token))
    if not token or token[0] not in "[{":
        if token.startswith(SPREAD_MARKER):
            return DestructureKind.SPREAD
        return DestructureKind.NONE

    closer = next(i for i, ch, depth in chars if ch in CLOSERS and depth == 0)
    if closer != len(token) - 1:
        return DestructureKind.NONE

    if pattern:
        for entry in segment(token[1:-1]):
            binding = split_assignment(entry)[0] if entry else ""
            if not _BINDING_CHARS.fullmatch(_outer_chars(binding)):
                raise UnknownShapeError(
                    f"Unrecognised pattern: {token!r}", text=token, position=0
                )
    return DestructureKind.OBJECT if token[0] == "{" else DestructureKind.ARRAY


def _outer_chars(text: str) -> str:
    """Unquoted characters of *text* outside any nested bracket pair."""
    return "".join(ch for _, ch, depth in scan(text) if depth == 0)


# ---------------------------------------------------------------------------
# Decomposition
# ---------------------------------------------------------------------------


def decompose(
    token: str,
    depth: int = 0,
    max_depth: int = MAX_DECOMPOSITION_DEPTH,
    pattern: bool = True,
) -> tuple[Shape, DestructureKind]:
    """Recursively decompose *token* into a shape.

    Args:
        token: Pattern or literal text.
        depth: Current nesting level.
        max_depth: Nesting level at which decomposition gives up.
        pattern: ``True`` for binding position, ``False`` for default-value
            text, where only object and array literals are taken apart.

    Returns:
        ``(shape, kind)`` where *kind* classifies the outermost level.

    Raises:
        DecompositionError: On unbalanced input or nesting beyond
            *max_depth*.
        UnknownShapeError: On a bracket-delimited pattern outside the
            grammar.
    """
    if depth > max_depth:
        raise DecompositionError(
            f"Pattern nesting exceeds maximum depth of {max_depth}", text=token
        )

    token = token.strip()
    kind = classify(token, pattern=pattern)

    if kind is DestructureKind.OBJECT:
        shape: Shape = _decompose_object(token, depth, max_depth, pattern)
    elif kind is DestructureKind.ARRAY:
        shape = OrderedSequence(
            items=tuple(
                decompose(element, depth + 1, max_depth, pattern)[0]
                for element in segment(token[1:-1])
            )
        )
    elif kind is DestructureKind.SPREAD:
        target, _ = decompose(
            token[len(SPREAD_MARKER):], depth + 1, max_depth, pattern
        )
        shape = Spread(target=target)
    else:
        shape = Leaf(value=_leaf_value(token))
    return shape, kind


def _decompose_object(
    token: str, depth: int, max_depth: int, pattern: bool
) -> KeyedMapping:
    entries: dict[str, Shape | None] = {}
    for entry in segment(token[1:-1]):
        if not entry:
            raise DecompositionError(
                f"Empty entry in object pattern {token!r}", text=token
            )
        key, value_text, is_default = _split_entry(entry)
        value = None
        if value_text is not None:
            # Defaults are expressions even inside a pattern
            value, _ = decompose(
                value_text, depth + 1, max_depth, pattern and not is_default
            )
        entries[_unquote(key.strip())] = value
    return KeyedMapping(entries=entries)


def split_entry(entry: str) -> tuple[str, str | None]:
    """Split an object entry into key and value text.

    The key ends at whichever comes first of a top-level ``:`` or an
    assignment ``=``. Shorthand entries have no value.
    """
    key, value, _ = _split_entry(entry)
    return key, value


def _split_entry(entry: str) -> tuple[str, str | None, bool]:
    text = entry.strip()
    pieces = split_assignment(text)
    head = pieces[0]
    for i, ch, depth in scan(head):
        if ch == ":" and depth == 0:
            return head[:i], text[i + 1:], False
    if len(pieces) > 1:
        return head, ASSIGNMENT.join(pieces[1:]), True
    return head, None, False


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] in QUOTE_CHARS and text[-1] == text[0]:
        return text[1:-1]
    return text


def _leaf_value(token: str) -> str | bool:
    if token in _BOOLEANS:
        return _BOOLEANS[token]
    return _unquote(token).strip()


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def serialize_shape(shape: Shape) -> str:
    """Render *shape* as pattern text that decomposes back to an equal shape."""
    if isinstance(shape, Leaf):
        if isinstance(shape.value, bool):
            return "true" if shape.value else "false"
        return _quote_leaf(shape.value)
    if isinstance(shape, OrderedSequence):
        rendered = ", ".join(serialize_shape(item) for item in shape.items)
        # segment() drops one trailing empty segment, so a trailing hole
        # needs its own comma
        if shape.items and shape.items[-1] == Leaf(value=""):
            rendered += ","
        return "[" + rendered + "]"
    if isinstance(shape, KeyedMapping):
        rendered = []
        for key, value in shape.entries.items():
            key_text = key if _BARE_LEAF.fullmatch(key) else _quote_leaf(key)
            if value is None:
                rendered.append(key_text)
            else:
                rendered.append(f"{key_text}: {serialize_shape(value)}")
        return "{" + ", ".join(rendered) + "}"
    if isinstance(shape, Spread):
        return SPREAD_MARKER + serialize_shape(shape.target)
    raise UnknownShapeError(f"Cannot serialize {type(shape).__name__}")


def _quote_leaf(value: str) -> str:
    if value == "" or (
        _BARE_LEAF.fullmatch(value)
        and value not in _BOOLEANS
        and not value.startswith(SPREAD_MARKER)
    ):
        return value
    quote = next((q for q in QUOTE_CHARS if q not in value), "'")
    return f"{quote}{_escape(value, quote)}{quote}"


def _escape(value: str, quote: str) -> str:
    """Backslash-escape unescaped *quote* characters and a dangling backslash.

    Text taken from quoted source is already escaped and passes through
    unchanged.
    """
    out: list[str] = []
    escaped = False
    for ch in value:
        if ch == quote and not escaped:
            out.append("\\")
        out.append(ch)
        escaped = ch == "\\" and not escaped
    if escaped:
        out.append("\\")
    return "".join(out)


def shape_to_python(shape: Shape | None) -> object:
    """Convert *shape* to plain Python values.

    Leaves become ``str``/``bool``, sequences lists, mappings dicts and
    spreads a ``"..."``-prefixed string (or a ``{"...": inner}`` dict when
    the rest target is destructured).
    """
    if shape is None:
        return None
    if isinstance(shape, Leaf):
        return shape.value
    if isinstance(shape, OrderedSequence):
        return [shape_to_python(item) for item in shape.items]
    if isinstance(shape, KeyedMapping):
        return {key: shape_to_python(value) for key, value in shape.entries.items()}
    if isinstance(shape, Spread):
        if isinstance(shape.target, Leaf):
            return f"{SPREAD_MARKER}{shape.target.value}"
        return {SPREAD_MARKER: shape_to_python(shape.target)}
    raise UnknownShapeError(f"Cannot convert {type(shape).__name__}")


# ---------------------------------------------------------------------------
# Parameter descriptors
# ---------------------------------------------------------------------------


def build(raw_segment: str, max_depth: int = MAX_DECOMPOSITION_DEPTH) -> ParameterDescriptor:
    """Build the descriptor for one top-level parameter segment.

    Raises:
        DecompositionError: For an empty segment, a rest parameter with a
            default, or any decomposition failure.
    """
    text = raw_segment.strip()
    if not text:
        raise DecompositionError("Empty parameter in parameter list", text=raw_segment)

    pieces = split_assignment(text)
    has_default = len(pieces) > 1
    pattern = strip_comments(pieces[0]).strip()
    shape, kind = decompose(pattern, max_depth=max_depth)

    name = ""
    if kind is DestructureKind.NONE:
        name = str(shape.value)
    elif kind is DestructureKind.SPREAD:
        if has_default:
            raise DecompositionError(
                f"Rest parameter cannot have a default: {text!r}", text=text
            )
        if isinstance(shape.target, Leaf):
            name = str(shape.target.value)

    return ParameterDescriptor(
        name=name,
        raw_shape=shape,
        destructure_kind=kind,
        has_default=has_default,
    )
