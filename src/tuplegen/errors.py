"""
Exception hierarchy for the tuple family generator.

Every failure is fatal to the run that hits it. There is no partial-success
mode: a generator is only useful when it produces a complete, internally
consistent family, so nothing is written once any of these is raised.
"""

from typing import Optional


class TupleGenError(Exception):
    """
    Base exception for all generator errors.

    Carries a human-readable message plus an optional ``details`` dict
    that pinpoints which arity or which file failed.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InvalidArity(TupleGenError):
    """
    Raised when a requested maximum arity cannot be generated.

    Either it is below 1, or its positions do not fit in the naming
    engine's letter budget. Raised before any emission takes place.
    """

    def __init__(self, message: str, arity: Optional[int] = None):
        details = {"arity": arity} if arity is not None else {}
        super().__init__(message, details)
        self.arity = arity


class UnsupportedArity(InvalidArity):
    """Raised by the naming engine for a lookup outside its supported range."""


class ModelInconsistency(TupleGenError):
    """
    Raised when a model invariant does not hold.

    This always points at a builder bug; emitters re-validate what they are
    handed and refuse to emit rather than patching the model up.
    """

    def __init__(self, message: str, arity: Optional[int] = None):
        details = {"arity": arity} if arity is not None else {}
        super().__init__(message, details)
        self.arity = arity


class AnchorNotFound(TupleGenError):
    """Raised when rendered text has no import block to anchor comments to."""

    def __init__(self, message: str, filename: Optional[str] = None):
        details = {"file": filename} if filename else {}
        super().__init__(message, details)
        self.filename = filename


class RenderError(TupleGenError):
    """Raised when the source backend rejects the code it was asked to render."""

    def __init__(self, message: str, filename: Optional[str] = None, source: str = ""):
        details = {}
        if filename:
            details["file"] = filename
        if source:
            details["source_length"] = len(source)
        super().__init__(message, details)
        self.filename = filename
        self.source = source


class ConfigError(TupleGenError):
    """Raised when a configuration file cannot be read or is invalid."""


class WriteError(TupleGenError):
    """Raised when a generated file cannot be written."""

    def __init__(self, message: str, filename: Optional[str] = None):
        details = {"file": filename} if filename else {}
        super().__init__(message, details)
        self.filename = filename
