"""Pydantic models for describing callable signatures.

This module defines the immutable values produced by every backend: the
shape tree of a parameter pattern, per-parameter descriptors, and the final
signature descriptor. Shapes form a tagged union discriminated on ``kind``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DestructureKind(str, Enum):
    """How a parameter binds its argument."""

    NONE = "none"
    ARRAY = "array"
    OBJECT = "object"
    SPREAD = "spread"


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


class Leaf(BaseModel):
    """A bare token: identifier, default expression text or literal.

    Attributes:
        value: Token text with surrounding quotes removed. ``true`` and
            ``false`` are exposed as booleans.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = "leaf"
    value: Union[str, bool]


class OrderedSequence(BaseModel):
    """An array pattern or array literal."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["sequence"] = "sequence"
    items: tuple[Shape, ...] = ()


class KeyedMapping(BaseModel):
    """An object pattern or object literal.

    Attributes:
        entries: Property key to decomposed value, in source order.
            Shorthand entries (``{x}``) map to ``None``.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["mapping"] = "mapping"
    entries: dict[str, Optional[Shape]] = Field(default_factory=dict)


class Spread(BaseModel):
    """A rest/spread element wrapping its target pattern."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["spread"] = "spread"
    target: Shape


Shape = Annotated[
    Union[Leaf, OrderedSequence, KeyedMapping, Spread],
    Field(discriminator="kind"),
]

OrderedSequence.model_rebuild()
KeyedMapping.model_rebuild()
Spread.model_rebuild()


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


class ParameterDescriptor(BaseModel):
    """One declared parameter.

    Attributes:
        name: Bound identifier. Empty for array/object patterns and for a
            rest parameter whose target is itself destructured.
        raw_shape: Decomposed pattern.
        destructure_kind: How the argument is bound.
        has_default: ``True`` when the parameter declares a default value.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    raw_shape: Shape
    destructure_kind: DestructureKind = DestructureKind.NONE
    has_default: bool = False


class SignatureDescriptor(BaseModel):
    """Signature metadata for a single callable.

    Attributes:
        name: Declared name, or the runtime name when the text has none.
        is_async: Declared with the ``async`` keyword.
        is_arrow_form: Arrow function.
        is_generator_form: Generator function or method.
        is_class_form: Class; parameters are the constructor's.
        parameters: Declared parameters in order.
        min_arity: Leading parameters without default or spread.
        max_arity: Parameter count, ``None`` when a rest parameter exists.
        backend: Name of the backend that produced this descriptor.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    is_async: bool = False
    is_arrow_form: bool = False
    is_generator_form: bool = False
    is_class_form: bool = False
    parameters: tuple[ParameterDescriptor, ...] = ()
    min_arity: int = Field(default=0, ge=0)
    max_arity: Optional[int] = Field(default=0, ge=0)
    backend: str = ""

    @property
    def is_variadic(self) -> bool:
        return self.max_arity is None

    def structural_dump(self) -> dict:
        """Dump everything except the backend tag, for cross-backend comparison."""
        return self.model_dump(exclude={"backend"})


class Extraction(BaseModel):
    """Header information located by a signature extractor.

    Attributes:
        parameter_text: Raw text between the parameter parentheses, with
            comments already stripped.
        superclass: Text of the ``extends`` clause of a class.
        has_constructor: Whether a class declares its own constructor.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    is_async: bool = False
    is_arrow_form: bool = False
    is_generator_form: bool = False
    is_class_form: bool = False
    parameter_text: str = ""
    superclass: Optional[str] = None
    has_constructor: bool = False


class CallableSource(BaseModel):
    """Serialized callable handed in by the caller.

    Attributes:
        source_text: Output of the runtime's "stringify callable" facility,
            ``None`` when the callable is opaque.
        name: Runtime name, used when the text declares none.
        declared_length: Runtime count of leading named parameters, when
            the runtime reports one.
    """

    model_config = ConfigDict(frozen=True)

    source_text: Optional[str]
    name: str = ""
    declared_length: Optional[int] = Field(default=None, ge=0)
