"""Entry point for describing callable signatures.

Usage::

    from fnsig import describe_signature

    descriptor = describe_signature("async function load(ids, {fetch = false} = {}) {}")
    descriptor.min_arity, descriptor.max_arity   # (1, 2)
"""

from __future__ import annotations

from .backends.factory import get_backend
from .config import DescriberConfig
from .models import CallableSource, SignatureDescriptor
from .registry import SourceRegistry


def describe_signature(
    callable_source: CallableSource | str,
    *,
    registry: SourceRegistry | None = None,
    config: DescriberConfig | None = None,
) -> SignatureDescriptor:
    """Describe the declared signature of a serialized callable.

    Args:
        callable_source: A :class:`CallableSource`, or the stringified
            callable on its own.
        registry: Sources of supertypes, consulted when a class declares no
            constructor of its own.
        config: Backend selection and limits.

    Raises:
        NotInspectableError: For native or missing source.
        ExtractionError: If no parameter list can be located.
        DecompositionError: If a parameter pattern cannot be decomposed.
        ConfigurationError: If the configured backend is unavailable.
    """
    if isinstance(callable_source, str):
        callable_source = CallableSource(source_text=callable_source)
    backend = get_backend(config)
    return backend.describe(callable_source, registry=registry)


def describe_parameters(
    parameter_text: str,
    *,
    config: DescriberConfig | None = None,
) -> SignatureDescriptor:
    """Describe a bare parameter list such as ``"a, b = 1, ...rest"``."""
    return get_backend(config).describe_parameter_text(parameter_text)
