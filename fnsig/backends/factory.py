"""
Backend factory.

Creates the configured :class:`SignatureBackend`. Backends are cached per
configuration; they hold no per-call state, so sharing them is safe.
"""

import logging
from functools import lru_cache

from ..config import DescriberConfig
from ..constants import TEXT_BACKEND, TREE_SITTER_BACKEND
from ..core.exceptions import ConfigurationError
from .base import SignatureBackend
from .text import TextBackend

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def get_backend(config: DescriberConfig | None = None) -> SignatureBackend:
    """
    Get the backend selected by *config*.

    Args:
        config: Describer settings (defaults to ``DescriberConfig()``)

    Returns:
        A backend instance

    Raises:
        ConfigurationError: If the backend name is unknown or its grammar
            cannot be loaded
    """
    config = config or DescriberConfig()

    if config.backend == TEXT_BACKEND:
        backend: SignatureBackend = TextBackend(config)
    elif config.backend == TREE_SITTER_BACKEND:
        # Imported lazily so the text backend works without grammar wheels
        try:
            from .grammar import TreeSitterBackend
        except ImportError as e:
            raise ConfigurationError(
                f"The tree-sitter backend needs tree-sitter grammars installed: {e}"
            ) from e
        backend = TreeSitterBackend(config)
    else:
        raise ConfigurationError(f"Unknown backend: {config.backend!r}")

    logger.debug(f"Created {type(backend).__name__} for backend={config.backend}")
    return backend
