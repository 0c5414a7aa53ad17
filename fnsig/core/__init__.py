"""Core utilities shared by every backend: the exception hierarchy."""

from .exceptions import (
    ConfigurationError,
    DecompositionError,
    DecompositionFailure,
    ExtractionError,
    ExtractionFailure,
    FnSigError,
    NotInspectable,
    NotInspectableError,
    UnknownShape,
    UnknownShapeError,
)

__all__ = [
    "ConfigurationError",
    "DecompositionError",
    "DecompositionFailure",
    "ExtractionError",
    "ExtractionFailure",
    "FnSigError",
    "NotInspectable",
    "NotInspectableError",
    "UnknownShape",
    "UnknownShapeError",
]
