"""Configuration model for describing signatures."""

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_BACKEND,
    DEFAULT_LANGUAGE,
    MAX_DECOMPOSITION_DEPTH,
    TEXT_BACKEND,
    TREE_SITTER_BACKEND,
)
from .core.exceptions import ConfigurationError

_BACKENDS = frozenset({TEXT_BACKEND, TREE_SITTER_BACKEND})


class DescriberConfig(BaseModel):
    """Settings shared by every backend."""

    model_config = ConfigDict(frozen=True)

    backend: str = Field(
        default=DEFAULT_BACKEND,
        description="Backend used to describe callables ('text' or 'tree-sitter')",
    )
    max_depth: int = Field(
        default=MAX_DECOMPOSITION_DEPTH,
        ge=1,
        description="Maximum nesting depth of destructuring patterns",
    )
    language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Grammar used by the tree-sitter backend",
    )
    trust_declared_length: bool = Field(
        default=True,
        description="Let a runtime-declared length override the computed min arity",
    )

    @field_validator("backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        if value not in _BACKENDS:
            raise ConfigurationError(
                f"Unknown backend: {value!r}. "
                f"Supported: {', '.join(sorted(_BACKENDS))}"
            )
        return value

    @classmethod
    def from_env(cls) -> "DescriberConfig":
        """Build a config from ``FNSIG_*`` environment variables."""
        values: dict[str, object] = {}
        if "FNSIG_BACKEND" in os.environ:
            values["backend"] = os.environ["FNSIG_BACKEND"]
        if "FNSIG_MAX_DEPTH" in os.environ:
            values["max_depth"] = int(os.environ["FNSIG_MAX_DEPTH"])
        if "FNSIG_LANGUAGE" in os.environ:
            values["language"] = os.environ["FNSIG_LANGUAGE"]
        if "FNSIG_TRUST_DECLARED_LENGTH" in os.environ:
            values["trust_declared_length"] = (
                os.environ["FNSIG_TRUST_DECLARED_LENGTH"].lower() in ("1", "true", "yes")
            )
        return cls(**values)
