"""
Source registry for supertype lookup.

A class printed without its own constructor inherits the constructor of
the class named in its ``extends`` clause. The registry is the external
store that maps those declared supertype references to serialized sources,
so the supertype chain can be walked explicitly instead of through any
runtime prototype chain.
"""

import logging
from collections.abc import Iterable, Iterator

from .models import CallableSource

logger = logging.getLogger(__name__)


class SourceRegistry:
    """
    Name-to-source mapping used to resolve declared supertypes.

    Example::

        registry = SourceRegistry()
        registry.register(CallableSource(source_text="class Base { constructor(a) {} }", name="Base"))
        registry.resolve("Base")
    """

    def __init__(self, sources: Iterable[CallableSource] = ()) -> None:
        self._sources: dict[str, CallableSource] = {}
        for source in sources:
            self.register(source)

    def register(self, source: CallableSource, name: str | None = None) -> None:
        """
        Register *source* under *name* (defaults to ``source.name``).

        Raises:
            ValueError: If neither *name* nor ``source.name`` is given.
        """
        key = (name or source.name).strip()
        if not key:
            raise ValueError("A registered source needs a name")
        if key in self._sources:
            logger.debug(f"Replacing registered source {key!r}")
        self._sources[key] = source

    def resolve(self, reference: str) -> CallableSource | None:
        """Return the source registered for a supertype reference, if any."""
        return self._sources.get(reference.strip())

    def __contains__(self, reference: object) -> bool:
        return isinstance(reference, str) and reference.strip() in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sources)
