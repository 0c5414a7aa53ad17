"""Tree-sitter parsing engine for serialized callables.

Thin wrapper around tree-sitter used by the full-grammar backend. Grammars
are loaded on first use; every parse gets its own ``Parser``.

Usage::

    engine = ASTEngine()
    ast = engine.parse("(function f(a, b = 1) {})", language="javascript")
    ast.has_errors, ast.get_text(ast.root_node)
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import tree_sitter as ts
import tree_sitter_javascript as ts_js
import tree_sitter_typescript as ts_ts

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ParsedAST wrapper
# ---------------------------------------------------------------------------


class ParsedAST:
    """A parse tree together with the text it was parsed from.

    Attributes:
        tree: The underlying ``tree_sitter.Tree``.
        source_code: Text handed to the parser, wrapping included.
        language: Grammar name the text was parsed with.
    """

    __slots__ = ("tree", "source_code", "language", "_encoded")

    def __init__(self, tree: ts.Tree, source_code: str, language: str) -> None:
        self.tree = tree
        self.source_code = source_code
        self.language = language
        self._encoded = source_code.encode("utf-8")

    @property
    def root_node(self) -> ts.Node:
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        """``True`` if the tree holds ``ERROR`` or ``MISSING`` nodes."""
        return self.tree.root_node.has_error

    def get_text(self, node: ts.Node) -> str:
        """Source text spanned by *node* (byte offsets decoded back to str)."""
        return self._encoded[node.start_byte:node.end_byte].decode(
            "utf-8", errors="replace"
        )


def named_children(node: ts.Node) -> list[ts.Node]:
    """Return the named children of *node*, skipping comments."""
    return [child for child in node.named_children if child.type != "comment"]


# ---------------------------------------------------------------------------
# Supported grammars
# ---------------------------------------------------------------------------

_GRAMMARS: dict[str, Callable[[], object]] = {
    "javascript": ts_js.language,
    "typescript": ts_ts.language_typescript,
    "tsx": ts_ts.language_tsx,
}


# ---------------------------------------------------------------------------
# ASTEngine
# ---------------------------------------------------------------------------


class ASTEngine:
    """Parses callable source with a cached tree-sitter ``Language``.

    ``Language`` objects are shared for the lifetime of the engine. Parsers
    carry per-parse state, so one is created for every call and the engine
    itself can be shared between threads.
    """

    def __init__(self) -> None:
        self._languages: dict[str, ts.Language] = {}

    def _get_language(self, language: str) -> ts.Language:
        """Return (and cache) the ``Language`` for *language*.

        Raises:
            ValueError: If no grammar is bundled for *language*.
        """
        if language not in _GRAMMARS:
            raise ValueError(
                f"Unsupported language: {language!r}. "
                f"Supported: {', '.join(sorted(_GRAMMARS))}"
            )
        if language not in self._languages:
            logger.debug(f"Loading tree-sitter grammar for {language}")
            self._languages[language] = ts.Language(_GRAMMARS[language]())
        return self._languages[language]

    def parse(self, source_code: str, language: str = "javascript") -> ParsedAST:
        """Parse *source_code* with the grammar named by *language*.

        Raises:
            ValueError: If *language* is not supported.
        """
        parser = ts.Parser(language=self._get_language(language))
        tree = parser.parse(source_code.encode("utf-8"))
        if tree.root_node.has_error:
            logger.debug(f"Parse errors in {language} source: {source_code!r}")
        return ParsedAST(tree=tree, source_code=source_code, language=language)
