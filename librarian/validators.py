"""Validators that check training and evaluation documents."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path

from librarian.domain import Directory, File
from librarian.errors import (
    MismatchedDefinitionError,
    NoDimensionError,
    NoMeasurementsError,
    RequiredFieldError,
    TrainingNotFoundError,
    UnregisteredDimensionError,
    UnsupportedFormatError,
    UnsupportedVersionError,
    ValidationError,
)
from librarian.models import (
    DSUReport,
    EvaluationDefinition,
    EvaluationRecord,
    TrainingDefinition,
)
from librarian.plan import ValidationPlan

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = "0.1.0"
PROTOCOL_URL = "https://protocol.tome.gg"

_FAILURES = (ValidationError, OSError, ValueError)


class Validator(ABC):
    """Checks the directories and files of a validation plan."""

    @abstractmethod
    def directory(self, directory: Directory) -> None:
        """Check a directory, raising on failure."""

    @abstractmethod
    def file(self, file: File) -> None:
        """Check a file, raising on failure."""


class DSUValidator(Validator):
    """Checks daily stand-up training files and records their entries."""

    def __init__(self, plan: ValidationPlan) -> None:
        self.plan = plan
        self.log = logging.LoggerAdapter(
            logger, {"validator": "training", "type": "dsu"}
        )

    def directory(self, directory: Directory) -> None:
        """Training directories have no rules of their own; they are only noted."""
        if "training" in directory.path:
            self.log.debug("training directory %s", directory.path)

    def file(self, file: File) -> None:
        if "dsu" not in file.filepath:
            return
        self.log.debug("DSU evaluator - processing file %s", file.filepath)

        document = TrainingDefinition.from_yaml(Path(file.filepath).read_bytes())

        if document.kind != "training":
            return
        if document.version != SUPPORTED_VERSION:
            raise UnsupportedVersionError()
        if document.format_kind != "dsu":
            raise UnsupportedFormatError()
        if document.format_version != SUPPORTED_VERSION:
            raise UnsupportedVersionError()
        if document.definition != f"{PROTOCOL_URL}/{document.kind}/{document.version}":
            raise MismatchedDefinitionError()
        expected_format = (
            f"{PROTOCOL_URL}/formats/{document.format_kind}/{document.format_version}"
        )
        if document.format_definition != expected_format:
            raise MismatchedDefinitionError()

        if not document.content:
            self.log.warning("empty training set")

        for entry in document.content:
            self.plan.register_training(entry.id)
            self.log.debug("registered training %s", entry.id)
            _check_entry(entry)
            self.plan.mark_valid(entry.id)

        self.log.info("ok")


def _check_entry(entry: DSUReport) -> None:
    required = (
        ("doing_today", entry.doing_today),
        ("done_yesterday", entry.done_yesterday),
        ("datetime", entry.datetime_raw),
        ("id", entry.id),
    )
    for name, value in required:
        if not value.strip():
            raise RequiredFieldError(entry.id, name)


class EvaluationValidator(Validator):
    """Checks evaluation files against the training entries already seen."""

    def __init__(self, plan: ValidationPlan) -> None:
        self.plan = plan
        self.registered_dimensions: list[str] = []
        self.log = logging.LoggerAdapter(logger, {"validator": "evaluation"})

    def directory(self, directory: Directory) -> None:
        """Evaluation directories have no rules of their own; they are only noted."""
        if "evaluations" in directory.path:
            self.log.debug("evaluations directory %s", directory.path)

    def file(self, file: File) -> None:
        if "evaluations" not in file.filepath:
            return

        document = EvaluationDefinition.from_yaml(Path(file.filepath).read_bytes())

        if document.kind != "evaluations":
            return
        if document.version != SUPPORTED_VERSION:
            raise UnsupportedVersionError()
        if document.definition != f"{PROTOCOL_URL}/{document.kind}/{document.version}":
            self.log.error(
                "error: %s; on tomegg.definition = %s",
                MismatchedDefinitionError.default_message,
                document.definition,
            )
            raise MismatchedDefinitionError()
        if not document.dimensions:
            raise NoDimensionError()

        for dimension in document.dimensions:
            expected = f"{PROTOCOL_URL}/dimensions/{dimension.name}/{dimension.version}"
            if dimension.definition != expected:
                self.log.error(
                    "error: %s; on meta.dimensions.definition = %s",
                    MismatchedDefinitionError.default_message,
                    dimension.definition,
                )
                raise MismatchedDefinitionError()
            self.registered_dimensions.extend((dimension.name, dimension.alias))

        if not document.evaluations:
            self.log.warning("empty evaluations set")

        for record in document.evaluations:
            self._check_record(record)

        self.log.info("ok")

    def _check_record(self, record: EvaluationRecord) -> None:
        if record.id == "":
            raise RequiredFieldError(record.id, "id")
        if not self.plan.is_registered(record.id) or not self.plan.is_valid(record.id):
            raise TrainingNotFoundError(record.id)
        if not record.measurements:
            self.log.error("%s (id %s)", NoMeasurementsError.default_message, record.id)
            raise NoMeasurementsError()

        for measurement in record.measurements:
            if not measurement.dimension.strip():
                raise RequiredFieldError(record.id, "dimension")
            if measurement.score is None:
                raise RequiredFieldError(record.id, "score")
            if measurement.dimension not in self.registered_dimensions:
                self.log.error(
                    "%s: %s",
                    UnregisteredDimensionError.default_message,
                    measurement.dimension,
                )
                raise UnregisteredDimensionError()


def _walk(directory: Directory) -> Iterator[Directory]:
    for child in directory.directories:
        yield child
        yield from _walk(child)


def build_plan(root: Directory) -> ValidationPlan:
    """Gather every directory below root and every file in the tree into a plan."""
    directories = list(_walk(root))
    files = [*root.files, *(f for d in directories for f in d.files)]
    for file in files:
        logger.debug("Files added: %s", file.filepath)
    return ValidationPlan(directories, files)


def validate_plan(plan: ValidationPlan) -> list[Exception]:
    """Run every validator over the plan and return the failures found, in order."""
    validators: list[Validator] = [DSUValidator(plan), EvaluationValidator(plan)]
    errors: list[Exception] = []

    logger.debug("Validating the plan: Step 1 - validate directories")
    for directory in plan.directories:
        logger.debug("Validating dir: %s", directory.path)
        for validator in validators:
            try:
                validator.directory(directory)
            except _FAILURES as exc:
                directory.error = exc
                errors.append(exc)

    logger.debug("Validating the plan: Step 2 - validate files")
    for file in plan.files:
        logger.debug("Validating file: %s", file.filepath)
        for validator in validators:
            try:
                validator.file(file)
            except _FAILURES as exc:
                file.error = exc
                if file.directory is not None:
                    file.directory.erroneous_files.append(file)
                errors.append(exc)

    return errors