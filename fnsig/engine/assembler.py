"""Assembly of the final signature descriptor."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.exceptions import DecompositionError
from ..models import DestructureKind, Extraction, ParameterDescriptor, SignatureDescriptor

logger = logging.getLogger(__name__)


def min_arity(parameters: Sequence[ParameterDescriptor]) -> int:
    """Count leading parameters without a default or spread.

    Counting stops at the first parameter that has a default or is a rest
    parameter; required-looking parameters after it are not counted.
    """
    count = 0
    for parameter in parameters:
        if parameter.has_default or parameter.destructure_kind is DestructureKind.SPREAD:
            break
        count += 1
    return count


def assemble(
    extraction: Extraction,
    parameters: Sequence[ParameterDescriptor],
    declared_length: int | None = None,
    trust_declared_length: bool = True,
    backend: str = "",
) -> SignatureDescriptor:
    """Combine an extraction and its parameters into a descriptor.

    Args:
        extraction: Header information for the callable.
        parameters: Descriptors in declaration order.
        declared_length: Runtime-reported count of leading named
            parameters, cross-checked against the computed minimum.
        trust_declared_length: Let *declared_length* override the computed
            minimum when they disagree.
        backend: Name recorded on the descriptor.

    Raises:
        DecompositionError: If a rest parameter is not the last parameter.
    """
    parameters = tuple(parameters)
    spread_positions = [
        i for i, p in enumerate(parameters)
        if p.destructure_kind is DestructureKind.SPREAD
    ]
    if spread_positions and spread_positions[0] != len(parameters) - 1:
        raise DecompositionError(
            f"Rest parameter must be last, found at position {spread_positions[0]}"
        )

    minimum = min_arity(parameters)
    maximum = None if spread_positions else len(parameters)

    if declared_length is not None and maximum is not None and declared_length != minimum:
        logger.warning(
            f"Declared length {declared_length} disagrees with computed minimum "
            f"arity {minimum} for {extraction.name or '<anonymous>'}",
            extra={
                "event": "arity_mismatch",
                "backend": backend,
                "callable_name": extraction.name,
                "computed": minimum,
                "declared": declared_length,
            },
        )
        if trust_declared_length and declared_length <= maximum:
            minimum = declared_length

    return SignatureDescriptor(
        name=extraction.name,
        is_async=extraction.is_async,
        is_arrow_form=extraction.is_arrow_form,
        is_generator_form=extraction.is_generator_form,
        is_class_form=extraction.is_class_form,
        parameters=parameters,
        min_arity=minimum,
        max_arity=maximum,
        backend=backend,
    )
