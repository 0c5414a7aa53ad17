"""fnsig: signature introspection from serialized callable source.

Describes the declared parameters of JavaScript-style callables (functions,
arrow functions, methods and class constructors) from their source text:
names, defaults, destructuring shape and arity bounds.

Quick start::

    from fnsig import describe_signature

    sig = describe_signature("function f(name, ...rest) {}")
    [p.name for p in sig.parameters]   # ['name', 'rest']
    sig.max_arity                      # None (unbounded)
"""

from .config import DescriberConfig
from .core.exceptions import (
    ConfigurationError,
    DecompositionError,
    ExtractionError,
    FnSigError,
    NotInspectableError,
    UnknownShapeError,
)
from .describe import describe_parameters, describe_signature
from .models import (
    CallableSource,
    DestructureKind,
    Extraction,
    KeyedMapping,
    Leaf,
    OrderedSequence,
    ParameterDescriptor,
    SignatureDescriptor,
    Spread,
)
from .registry import SourceRegistry

__version__ = "0.1.0"

__all__ = [
    "CallableSource",
    "ConfigurationError",
    "DecompositionError",
    "DescriberConfig",
    "DestructureKind",
    "Extraction",
    "ExtractionError",
    "FnSigError",
    "KeyedMapping",
    "Leaf",
    "NotInspectableError",
    "OrderedSequence",
    "ParameterDescriptor",
    "SignatureDescriptor",
    "SourceRegistry",
    "Spread",
    "UnknownShapeError",
    "describe_parameters",
    "describe_signature",
]
