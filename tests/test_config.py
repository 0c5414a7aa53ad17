"""Tests for configuration, logging, the exception hierarchy and the registry."""

import json
import logging

import pytest

from fnsig import CallableSource, DescriberConfig, SourceRegistry
from fnsig.backends import TextBackend, get_backend
from fnsig.core import (
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
from fnsig.logging_config import (
    LOGGER_NAME,
    SignatureLogFormatter,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_logger():
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    logger.handlers[:] = saved[2]


class TestDescriberConfig:
    """Test the configuration model."""

    def test_defaults(self):
        config = DescriberConfig()
        assert config.backend in ("text", "tree-sitter")
        assert config.max_depth >= 1
        assert config.language == "javascript"
        assert config.trust_declared_length is True

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError, match="Unknown backend"):
            DescriberConfig(backend="regex")

    def test_max_depth_must_be_positive(self):
        with pytest.raises(ValueError):
            DescriberConfig(max_depth=0)

    def test_hashable(self):
        assert hash(DescriberConfig(max_depth=5)) == hash(DescriberConfig(max_depth=5))

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FNSIG_BACKEND", "text")
        monkeypatch.setenv("FNSIG_MAX_DEPTH", "7")
        monkeypatch.setenv("FNSIG_LANGUAGE", "typescript")
        monkeypatch.setenv("FNSIG_TRUST_DECLARED_LENGTH", "false")
        config = DescriberConfig.from_env()
        assert config.backend == "text"
        assert config.max_depth == 7
        assert config.language == "typescript"
        assert config.trust_declared_length is False

    def test_from_env_defaults(self, monkeypatch):
        for name in ("FNSIG_MAX_DEPTH", "FNSIG_LANGUAGE", "FNSIG_TRUST_DECLARED_LENGTH"):
            monkeypatch.delenv(name, raising=False)
        config = DescriberConfig.from_env()
        assert config.language == "javascript"
        assert config.trust_declared_length is True

    def test_from_env_bad_backend(self, monkeypatch):
        monkeypatch.setenv("FNSIG_BACKEND", "nope")
        with pytest.raises(ConfigurationError):
            DescriberConfig.from_env()


class TestFactory:
    """Test backend selection for the text engine."""

    def test_text_backend(self):
        backend = get_backend(DescriberConfig(backend="text"))
        assert isinstance(backend, TextBackend)
        assert backend.name == "text"

    def test_cached_per_config(self):
        first = get_backend(DescriberConfig(backend="text", max_depth=9))
        second = get_backend(DescriberConfig(backend="text", max_depth=9))
        assert first is second
        assert first.config.max_depth == 9


class TestLogging:
    """Test structured logging setup."""

    def test_formatter_includes_extras(self):
        record = logging.LogRecord(
            name="fnsig.engine.assembler",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Declared length %d disagrees",
            args=(1,),
            exc_info=None,
        )
        record.event = "arity_mismatch"
        record.backend = "text"
        record.computed = 2
        record.declared = 1

        entry = json.loads(SignatureLogFormatter().format(record))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "fnsig.engine.assembler"
        assert entry["message"] == "Declared length 1 disagrees"
        assert entry["event"] == "arity_mismatch"
        assert entry["computed"] == 2
        assert entry["declared"] == 1
        assert "error" not in entry

    def test_configure_logging_to_file(self, restore_logger, tmp_path):
        log_file = tmp_path / "fnsig.log"
        configure_logging(log_file=str(log_file), log_level="debug", enable_console=False)

        logger = get_logger()
        assert logger is restore_logger
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1

        logging.getLogger("fnsig.backends.base").debug(
            "Described f", extra={"event": "describe", "callable_name": "f"}
        )
        logger.handlers[0].flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["event"] == "describe"
        assert entry["callable_name"] == "f"

    def test_configure_logging_replaces_handlers(self, restore_logger):
        configure_logging(enable_console=True)
        configure_logging(enable_console=True)
        assert len(restore_logger.handlers) == 1


class TestExceptions:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize("error_class", [
        NotInspectableError,
        ExtractionError,
        DecompositionError,
        UnknownShapeError,
        ConfigurationError,
    ])
    def test_all_derive_from_base(self, error_class):
        assert issubclass(error_class, FnSigError)

    def test_unknown_shape_is_decomposition_error(self):
        assert issubclass(UnknownShapeError, DecompositionError)

    def test_decomposition_error_context(self):
        error = DecompositionError("Unmatched ']'", text="a]", position=1)
        assert str(error) == "Unmatched ']'"
        assert error.text == "a]"
        assert error.position == 1

    def test_aliases(self):
        assert NotInspectable is NotInspectableError
        assert ExtractionFailure is ExtractionError
        assert DecompositionFailure is DecompositionError
        assert UnknownShape is UnknownShapeError


class TestSourceRegistry:
    """Test the supertype source registry."""

    def test_register_and_resolve(self):
        source = CallableSource(source_text="class Base {}", name="Base")
        registry = SourceRegistry([source])
        assert registry.resolve("Base") is source
        assert registry.resolve(" Base ") is source
        assert "Base" in registry
        assert len(registry) == 1
        assert list(registry) == ["Base"]

    def test_register_under_alias(self):
        registry = SourceRegistry()
        source = CallableSource(source_text="class Base {}", name="Base")
        registry.register(source, name="models.Base")
        assert registry.resolve("models.Base") is source
        assert registry.resolve("Base") is None

    def test_unnamed_source(self):
        with pytest.raises(ValueError):
            SourceRegistry().register(CallableSource(source_text="class {}"))

    def test_replace(self):
        registry = SourceRegistry()
        registry.register(CallableSource(source_text="class A {}", name="A"))
        newer = CallableSource(source_text="class A { constructor(x) {} }", name="A")
        registry.register(newer)
        assert registry.resolve("A") is newer
        assert len(registry) == 1

    def test_unknown(self):
        assert SourceRegistry().resolve("Nothing") is None
        assert 42 not in SourceRegistry()
