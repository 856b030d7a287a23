"""Error taxonomy for result correlation."""

from __future__ import annotations

from typing import Optional

from .outcome import Result


class CorrelationError(Exception):
    """Base class for conditions that abort a correlation run."""

    def __init__(self, message: str, rule_id: Optional[str] = None, value: Optional[str] = None) -> None:
        super().__init__(message)
        self.rule_id = rule_id
        self.value = value

    def __str__(self) -> str:
        message = super().__str__()
        if self.rule_id:
            return f"{message} (rule {self.rule_id})"
        return message


class DocumentIntegrityError(CorrelationError):
    """The results document violates a structural assumption."""


class DocumentParseError(DocumentIntegrityError):
    """The results document is not well-formed XML."""


class MissingTargetError(DocumentIntegrityError):
    """The results document names no target host."""


class MissingIdentifierError(DocumentIntegrityError):
    """A check reference has an empty identifier."""


class MalformedIdentifierError(DocumentIntegrityError):
    """A check identifier does not follow the expected naming convention."""


class UnrecognizedStatusError(CorrelationError):
    """A rule-result carries an outcome token outside the known set."""

    def __init__(self, message: str, rule_id: Optional[str] = None, value: Optional[str] = None) -> None:
        super().__init__(message, rule_id=rule_id, value=value)
        self.result = Result.INVALID


class MissingStatusError(UnrecognizedStatusError):
    """A rule-result has no outcome at all."""


class PolicyFormatError(ValueError):
    """A policy file cannot be turned into a check set."""


class ConfigurationError(ValueError):
    """Correlator settings are incomplete or inconsistent."""
