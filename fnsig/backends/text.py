"""Backend built on the hand-rolled text engine."""

from ..constants import TEXT_BACKEND
from ..engine.decomposer import build
from ..engine.extractor import extract
from ..engine.scanner import segment
from ..models import Extraction, ParameterDescriptor
from .base import SignatureBackend


class TextBackend(SignatureBackend):
    """Describes callables with the bracket-aware text engine."""

    name = TEXT_BACKEND

    def analyze(
        self, source_text: str | None
    ) -> tuple[Extraction, list[ParameterDescriptor]]:
        extraction = extract(source_text)
        parameters = [
            build(raw, max_depth=self.config.max_depth)
            for raw in segment(extraction.parameter_text)
        ]
        return extraction, parameters
