"""Signature extraction from serialized callable source.

Locates the parameter list of a function, arrow function, method or class
constructor in the text produced by a runtime's "stringify callable"
facility, and classifies the callable (async, generator, arrow, class).

Recognised forms::

    [async] function[*] [name] (params) { ... }
    [async] (params) => ...
    [async] param => ...
    [static] [async] [*] [get|set] name (params) { ... }
    class [Name] [extends Expr] { ... constructor(params) { ... } ... }
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..constants import ARROW_MARKER, MAX_SUPERTYPE_CHAIN, NATIVE_CODE_SUFFIX
from ..core.exceptions import DecompositionError, ExtractionError, NotInspectableError
from ..models import Extraction, ParameterDescriptor
from ..registry import SourceRegistry
from .scanner import matching_closer, scan, strip_comments

logger = logging.getLogger(__name__)

_IDENT = r"[A-Za-z_$][\w$]*"
_IDENT_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_$"
)

_WHITESPACE = re.compile(r"\s+")
_CLASS_HEAD = re.compile(rf"class\b\s*(?!extends\b)(?P<name>{_IDENT})?\s*")
_EXTENDS = re.compile(r"extends\b")
_FUNCTION_HEAD = re.compile(
    rf"(?P<async>async\b\s*)?function\b\s*(?P<star>\*)?\s*(?P<name>{_IDENT})?\s*\("
)
_ARROW_SINGLE = re.compile(rf"(?P<async>async\b\s*)?(?P<param>{_IDENT})\s*=>")
_ARROW_PAREN = re.compile(r"(?P<async>async\b\s*)?\(")
_METHOD_HEAD = re.compile(
    r"(?:static\b\s*)?"
    r"(?P<async>async\b\s*(?=[*\[\w$]))?"
    r"(?P<star>\*)?\s*"
    r"(?:(?:get|set)\b\s*(?=[\[\w$]))?"
    rf"(?P<name>{_IDENT}|\[)\s*"
)
_CONSTRUCTOR = re.compile(r"constructor\s*\(")

# (source_text) -> (extraction, parameters); one step, no supertype walk
Analyzer = Callable[[str | None], tuple[Extraction, list[ParameterDescriptor]]]


def ensure_inspectable(source_text: str | None) -> str:
    """Return the trimmed source text, rejecting opaque callables.

    Raises:
        NotInspectableError: If there is no text or the text is the
            runtime's placeholder for native code.
    """
    if source_text is None or not source_text.strip():
        raise NotInspectableError("Callable has no source text to inspect")
    if _WHITESPACE.sub("", source_text).endswith(NATIVE_CODE_SUFFIX):
        raise NotInspectableError(
            f"Signatures cannot be described for native functions. Given: {source_text}"
        )
    return source_text.strip()


def extract(source_text: str | None) -> Extraction:
    """Locate and classify the parameter list of a serialized callable.

    Args:
        source_text: Stringified callable.

    Returns:
        An :class:`Extraction` with comments already stripped from
        ``parameter_text``.

    Raises:
        NotInspectableError: For native or missing source.
        ExtractionError: If no recognised callable form or no balanced
            parameter list is found.
    """
    text = ensure_inspectable(source_text)
    try:
        text = strip_comments(text).strip()
    except DecompositionError as exc:
        raise ExtractionError(f"Function parsing failed: {exc}") from exc

    if _CLASS_HEAD.match(text):
        return _extract_class(text)
    return _extract_function(text)


def _extract_function(text: str) -> Extraction:
    m = _FUNCTION_HEAD.match(text)
    if m:
        params, _ = _parameter_group(text, m.end() - 1)
        return Extraction(
            name=m.group("name") or "",
            is_async=bool(m.group("async")),
            is_generator_form=bool(m.group("star")),
            parameter_text=params,
        )

    m = _ARROW_SINGLE.match(text)
    if m:
        return Extraction(
            is_async=bool(m.group("async")),
            is_arrow_form=True,
            parameter_text=m.group("param"),
        )

    m = _ARROW_PAREN.match(text)
    if m:
        params, end = _parameter_group(text, m.end() - 1)
        if _follows_arrow(text, end):
            return Extraction(
                is_async=bool(m.group("async")),
                is_arrow_form=True,
                parameter_text=params,
            )
        if m.group("async"):
            # A method literally named "async"
            return Extraction(name="async", parameter_text=params)
        raise ExtractionError(f"Function parsing failed: {text}")

    m = _METHOD_HEAD.match(text)
    if m:
        name = m.group("name")
        pos = m.end()
        if name == "[":
            close = _closer(text, m.start("name"))
            name = text[m.start("name") + 1:close].strip()
            pos = close + 1
            while pos < len(text) and text[pos].isspace():
                pos += 1
        if pos < len(text) and text[pos] == "(":
            params, _ = _parameter_group(text, pos)
            return Extraction(
                name=name,
                is_async=bool(m.group("async")),
                is_generator_form=bool(m.group("star")),
                parameter_text=params,
            )

    raise ExtractionError(
        f"Function parsing failed: {text}. Expected a function, arrow "
        "function, method or class"
    )


def _extract_class(text: str) -> Extraction:
    m = _CLASS_HEAD.match(text)
    name = m.group("name") or ""
    pos = m.end()

    superclass = None
    if _EXTENDS.match(text, pos):
        pos += len("extends")
        brace = _top_level_index(text, "{", pos)
        superclass = text[pos:brace].strip() or None
        pos = brace
    if pos >= len(text) or text[pos] != "{":
        raise ExtractionError(f"Class body not found: {text}")

    # Scanned lazily: member bodies past the constructor may hold regex
    # literals or other text the scanner cannot balance
    body = text[pos:]
    try:
        for i, ch, depth in scan(body):
            if ch == "}" and depth == 0:
                break
            if depth != 1 or ch != "c":
                continue
            if body[i - 1] in _IDENT_CHARS or body[i - 1] == ".":
                continue
            ctor = _CONSTRUCTOR.match(body, i)
            if ctor:
                params, _ = _parameter_group(body, ctor.end() - 1)
                return Extraction(
                    name=name,
                    is_class_form=True,
                    parameter_text=params,
                    superclass=superclass,
                    has_constructor=True,
                )
    except DecompositionError as exc:
        logger.debug(f"Stopped scanning body of class {name!r}: {exc}")

    return Extraction(name=name, is_class_form=True, superclass=superclass)


# ---------------------------------------------------------------------------
# Index helpers; bracket errors surface as extraction failures here
# ---------------------------------------------------------------------------


def _parameter_group(text: str, open_index: int) -> tuple[str, int]:
    close = _closer(text, open_index)
    return text[open_index + 1:close], close + 1


def _closer(text: str, open_index: int) -> int:
    try:
        return matching_closer(text, open_index)
    except DecompositionError as exc:
        raise ExtractionError(f"No balanced parameter list: {exc}") from exc


def _top_level_index(text: str, char: str, start: int) -> int:
    for i, ch, depth in _safe_scan(text[start:]):
        if ch == char and depth == 0:
            return start + i
    raise ExtractionError(f"Expected {char!r} in {text!r}")


def _safe_scan(text: str):
    try:
        yield from scan(text)
    except DecompositionError as exc:
        raise ExtractionError(f"Unbalanced source: {exc}") from exc


def _follows_arrow(text: str, pos: int) -> bool:
    return text[pos:].lstrip().startswith(ARROW_MARKER)


# ---------------------------------------------------------------------------
# Inherited constructors
# ---------------------------------------------------------------------------


def resolve_inherited(
    extraction: Extraction,
    registry: SourceRegistry | None,
    analyze: Analyzer,
    max_chain: int = MAX_SUPERTYPE_CHAIN,
) -> list[ParameterDescriptor]:
    """Return the parameters a constructor-less class inherits.

    Walks the declared supertype chain through *registry* until it reaches
    a class with its own constructor, a plain function, or a class with no
    supertype (which yields no parameters).

    Raises:
        ExtractionError: If a supertype cannot be resolved, the chain is
            cyclic, or it is longer than *max_chain*.
        NotInspectableError: If a supertype is native.
    """
    seen: set[str] = {extraction.name} if extraction.name else set()
    reference = extraction.superclass
    steps = 0
    while reference is not None:
        if reference in seen:
            raise ExtractionError(f"Cyclic supertype chain at {reference!r}")
        seen.add(reference)
        steps += 1
        if steps > max_chain:
            raise ExtractionError(
                f"Supertype chain longer than {max_chain} starting at {extraction.name!r}"
            )
        if registry is None:
            raise ExtractionError(
                f"Cannot resolve supertype {reference!r} without a source registry"
            )
        source = registry.resolve(reference)
        if source is None:
            raise ExtractionError(f"Unknown supertype {reference!r}")

        logger.debug(f"Following supertype {reference!r} of {extraction.name!r}")
        parent, parameters = analyze(source.source_text)
        if not parent.is_class_form or parent.has_constructor:
            return parameters
        reference = parent.superclass
    return []
