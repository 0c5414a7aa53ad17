"""Hand-rolled text engine for parameter-list introspection.

Quick start::

    from fnsig.engine import build, segment

    [build(s) for s in segment("{x, y = 1} = {}, ...rest")]
"""

from .assembler import assemble, min_arity
from .decomposer import build, classify, decompose, serialize_shape, shape_to_python, split_entry
from .extractor import ensure_inspectable, extract, resolve_inherited
from .scanner import matching_closer, scan, segment, split_assignment, strip_comments

__all__ = [
    "assemble",
    "build",
    "classify",
    "decompose",
    "ensure_inspectable",
    "extract",
    "matching_closer",
    "min_arity",
    "resolve_inherited",
    "scan",
    "segment",
    "serialize_shape",
    "shape_to_python",
    "split_assignment",
    "split_entry",
    "strip_comments",
]
