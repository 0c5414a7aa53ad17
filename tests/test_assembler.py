"""Tests for arity computation and descriptor assembly."""

import logging

import pytest

from fnsig.core.exceptions import DecompositionError
from fnsig.engine.assembler import assemble, min_arity
from fnsig.engine.decomposer import build
from fnsig.models import Extraction


def _parameters(*segments):
    return [build(s) for s in segments]


class TestMinArity:
    """Test counting of required leading parameters."""

    def test_all_required(self):
        assert min_arity(_parameters("a", "b", "c")) == 3

    def test_stops_at_first_default(self):
        """Required-looking parameters after a default are not counted."""
        assert min_arity(_parameters("a", "b = 1", "c")) == 1

    def test_stops_at_rest(self):
        assert min_arity(_parameters("a", "...rest")) == 1

    def test_empty(self):
        assert min_arity([]) == 0


class TestAssemble:
    """Test building the final descriptor."""

    def test_copies_header(self):
        extraction = Extraction(name="load", is_async=True, is_arrow_form=True)
        descriptor = assemble(extraction, _parameters("a"), backend="text")
        assert descriptor.name == "load"
        assert descriptor.is_async
        assert descriptor.is_arrow_form
        assert not descriptor.is_class_form
        assert descriptor.backend == "text"

    def test_bounds(self):
        descriptor = assemble(Extraction(), _parameters("a", "b = [2,3]"))
        assert descriptor.min_arity == 1
        assert descriptor.max_arity == 2
        assert not descriptor.is_variadic

    def test_rest_is_unbounded(self):
        descriptor = assemble(Extraction(), _parameters("name", "...rest"))
        assert descriptor.min_arity == 1
        assert descriptor.max_arity is None
        assert descriptor.is_variadic

    def test_rest_not_last(self):
        with pytest.raises(DecompositionError, match="must be last"):
            assemble(Extraction(), _parameters("...rest", "a"))

    def test_parameters_are_a_tuple(self):
        descriptor = assemble(Extraction(), _parameters("a", "b"))
        assert isinstance(descriptor.parameters, tuple)
        assert [p.name for p in descriptor.parameters] == ["a", "b"]


class TestDeclaredLength:
    """Test the cross-check against a runtime-declared length."""

    def test_agreement_is_silent(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fnsig"):
            descriptor = assemble(Extraction(name="f"), _parameters("a", "b"), declared_length=2)
        assert descriptor.min_arity == 2
        assert caplog.records == []

    def test_mismatch_overrides_when_trusted(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fnsig"):
            descriptor = assemble(
                Extraction(name="f"),
                _parameters("a", "b", "c"),
                declared_length=1,
                backend="text",
            )
        assert descriptor.min_arity == 1
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.event == "arity_mismatch"
        assert record.computed == 3
        assert record.declared == 1
        assert record.callable_name == "f"
        assert record.backend == "text"

    def test_mismatch_kept_when_untrusted(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fnsig"):
            descriptor = assemble(
                Extraction(),
                _parameters("a", "b"),
                declared_length=0,
                trust_declared_length=False,
            )
        assert descriptor.min_arity == 2
        assert len(caplog.records) == 1

    def test_declared_above_maximum_ignored(self):
        descriptor = assemble(Extraction(), _parameters("a"), declared_length=5)
        assert descriptor.min_arity == 1
        assert descriptor.max_arity == 1

    def test_variadic_not_checked(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fnsig"):
            descriptor = assemble(Extraction(), _parameters("a", "...b"), declared_length=3)
        assert descriptor.min_arity == 1
        assert caplog.records == []
