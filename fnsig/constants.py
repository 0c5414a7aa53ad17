"""Constants and configuration values for fnsig.

This module centralizes magic numbers and defaults that are used across
the codebase. Values that operators may want to tune are read from the
environment once, at import time.
"""

import os

# =============================================================================
# Backend Selection
# =============================================================================

TEXT_BACKEND = "text"
TREE_SITTER_BACKEND = "tree-sitter"

# Backend used when no explicit configuration is passed
DEFAULT_BACKEND = os.environ.get("FNSIG_BACKEND", TEXT_BACKEND)

# Grammar used by the tree-sitter backend
DEFAULT_LANGUAGE = "javascript"


# =============================================================================
# Decomposition Limits
# =============================================================================

# Maximum nesting of array/object patterns before decomposition gives up
MAX_DECOMPOSITION_DEPTH = int(os.environ.get("FNSIG_MAX_DEPTH", 64))

# Maximum number of superclasses followed when a class has no constructor
MAX_SUPERTYPE_CHAIN = int(os.environ.get("FNSIG_MAX_SUPERTYPE_CHAIN", 32))


# =============================================================================
# Lexical Markers
# =============================================================================

OPENERS = "([{"
CLOSERS = ")]}"
BRACKET_PAIRS = dict(zip(CLOSERS, OPENERS))
QUOTE_CHARS = "'\"`"

SPREAD_MARKER = "..."
ARROW_MARKER = "=>"
ASSIGNMENT = "="

# Whitespace-free suffix of Function.prototype.toString() for builtins
NATIVE_CODE_SUFFIX = "{[nativecode]}"
