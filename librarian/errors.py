"""Errors raised while validating a repository."""

from __future__ import annotations


class ValidationError(Exception):
    """Base class for every validation failure."""

    default_message = "validation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidTrainingTypeError(ValidationError):
    default_message = "invalid training file type"


class UnsupportedVersionError(ValidationError):
    default_message = "unsupported training version"


class UnsupportedFormatError(ValidationError):
    default_message = "unsupported training format"


class MismatchedDefinitionError(ValidationError):
    default_message = "mismatched definition"


class NoDimensionError(ValidationError):
    default_message = "no dimension specified for evaluation"


class UnregisteredDimensionError(ValidationError):
    default_message = "dimension not registered for evaluation"


class NoMeasurementsError(ValidationError):
    default_message = "no measurements found"


class RequiredFieldError(ValidationError):
    """A content entry lacks a field that must be filled in."""

    def __init__(self, entry_id: str, field: str) -> None:
        self.entry_id = entry_id
        self.field = field
        super().__init__(f"required field {field} for content entry {entry_id}")


class TrainingNotFoundError(ValidationError):
    """An evaluation refers to a training entry that is not known or not valid."""

    def __init__(self, entry_id: str) -> None:
        self.entry_id = entry_id
        super().__init__(f"specified training {entry_id} was not found")