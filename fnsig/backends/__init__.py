"""
Signature backends for fnsig.

``TextBackend`` runs the hand-rolled text engine; ``TreeSitterBackend``
(in :mod:`fnsig.backends.grammar`) runs a full tree-sitter parse. Both
produce structurally identical descriptors.
"""

from .base import SignatureBackend
from .factory import get_backend
from .text import TextBackend

__all__ = [
    "SignatureBackend",
    "TextBackend",
    "get_backend",
]
