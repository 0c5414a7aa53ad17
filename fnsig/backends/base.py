"""
Base signature backend interface.

A backend turns serialized callable source into an extraction plus
parameter descriptors. The shared :meth:`SignatureBackend.describe` then
handles inherited constructors and arity assembly, so every backend yields
structurally identical descriptors for the same source.
"""

import logging
from abc import ABC, abstractmethod

from ..config import DescriberConfig
from ..core.exceptions import FnSigError
from ..engine.assembler import assemble
from ..engine.extractor import resolve_inherited
from ..models import CallableSource, Extraction, ParameterDescriptor, SignatureDescriptor
from ..registry import SourceRegistry

logger = logging.getLogger(__name__)


class SignatureBackend(ABC):
    """
    Abstract interface for signature introspection backends.

    Subclasses implement :meth:`analyze`, one non-recursive step from
    source text to an extraction and its parameters.
    """

    name: str = ""

    def __init__(self, config: DescriberConfig | None = None) -> None:
        self.config = config or DescriberConfig()

    @abstractmethod
    def analyze(
        self, source_text: str | None
    ) -> tuple[Extraction, list[ParameterDescriptor]]:
        """
        Extract the header and parameters of one callable.

        A class without its own constructor is returned with
        ``has_constructor=False`` and no parameters; the supertype walk is
        done by :meth:`describe`.

        Raises:
            NotInspectableError: For native or missing source.
            ExtractionError: If the callable shape is not recognised.
            DecompositionError: If a parameter cannot be decomposed.
        """

    def describe(
        self,
        source: CallableSource,
        registry: SourceRegistry | None = None,
    ) -> SignatureDescriptor:
        """
        Describe a serialized callable.

        Args:
            source: Callable source handed in by the caller.
            registry: Store used to resolve declared supertypes of classes
                without their own constructor.

        Returns:
            The assembled :class:`SignatureDescriptor`.
        """
        try:
            extraction, parameters = self.analyze(source.source_text)
            if extraction.is_class_form and not extraction.has_constructor:
                parameters = resolve_inherited(extraction, registry, self.analyze)
            if not extraction.name and source.name:
                extraction = extraction.model_copy(update={"name": source.name})

            descriptor = assemble(
                extraction,
                parameters,
                declared_length=source.declared_length,
                trust_declared_length=self.config.trust_declared_length,
                backend=self.name,
            )
        except FnSigError as e:
            logger.debug(
                f"Failed to describe {source.name or '<anonymous>'}: {e}",
                extra={
                    "event": "describe_failed",
                    "backend": self.name,
                    "callable_name": source.name,
                    "error": str(e),
                },
            )
            raise

        logger.debug(
            f"Described {descriptor.name or '<anonymous>'} "
            f"({len(descriptor.parameters)} parameters)",
            extra={
                "event": "describe",
                "backend": self.name,
                "callable_name": descriptor.name,
            },
        )
        return descriptor

    def describe_parameter_text(self, parameter_text: str) -> SignatureDescriptor:
        """Describe a bare parameter list such as ``"a, b = 1, ...rest"``."""
        return self.describe(
            CallableSource(source_text=f"function ({parameter_text}\n) {{}}")
        )
