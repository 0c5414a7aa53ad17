"""Custom exception hierarchy for fnsig.

Every failure while describing a callable is terminal for that call: callers
get one of the exceptions below instead of a partially filled descriptor.
"""


class FnSigError(Exception):
    """Base exception for all fnsig errors.

    All custom exceptions inherit from this class so callers can catch
    every fnsig-specific error with a single except clause.
    """
    pass


# =============================================================================
# Source Errors
# =============================================================================

class NotInspectableError(FnSigError):
    """The callable has no inspectable source text (native or missing)."""
    pass


class ExtractionError(FnSigError):
    """No balanced parameter list could be located, or the callable shape
    was not recognised."""
    pass


# =============================================================================
# Decomposition Errors
# =============================================================================

class DecompositionError(FnSigError):
    """Bracket mismatch, unterminated quote or nesting too deep."""

    def __init__(self, message: str, text: str | None = None, position: int | None = None):
        super().__init__(message)
        self.text = text
        self.position = position


class UnknownShapeError(DecompositionError):
    """A bracket-delimited token matches no recognised pattern grammar."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(FnSigError):
    """Invalid backend name or configuration value."""
    pass


# =============================================================================
# Convenience Aliases for Common Cases
# =============================================================================

NotInspectable = NotInspectableError
ExtractionFailure = ExtractionError
DecompositionFailure = DecompositionError
UnknownShape = UnknownShapeError
