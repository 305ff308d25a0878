"""The ordered set of directories and files to validate."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from librarian.domain import Directory, File

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DIRECTORY_WEIGHTS = (
    ("evaluations", 100),
    ("meta", 110),
    ("flash-cards", 90),
    ("mappings", 90),
    ("mental-models", 90),
    ("training", 10),
)
_DEFAULT_WEIGHT = 100
_BASE_FILE_WEIGHT = 100


def directory_weight(path: str) -> int:
    """Weight of a directory, decided by the first marker found in its path."""
    return next(
        (weight for marker, weight in _DIRECTORY_WEIGHTS if marker in path),
        _DEFAULT_WEIGHT,
    )


def file_weight(file: File) -> int:
    """Weight of a file: the base file weight scaled by its directory's weight."""
    parent_path = file.directory.path if file.directory else ""
    return _BASE_FILE_WEIGHT * directory_weight(parent_path)


def _unique(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    seen: dict[str, T] = {}
    for item in items:
        seen.setdefault(key(item), item)
    return list(seen.values())


def _reorder(items: list, weights: list[int]) -> None:
    # Every ordered pair is compared against the weights as first computed,
    # so each pair with different weights is exchanged exactly once.
    for i, j in itertools.product(range(len(items)), repeat=2):
        if weights[i] > weights[j]:
            items[i], items[j] = items[j], items[i]


class ValidationPlan:
    """Directories and files to validate, with the training entries seen so far."""

    def __init__(self, directories: Iterable[Directory], files: Iterable[File]) -> None:
        self.directories: list[Directory] = _unique(directories, key=lambda d: d.path)
        self.files: list[File] = _unique(files, key=lambda f: f.filepath)
        self.directory_weights: list[int] = []
        self.file_weights: list[int] = []
        self.registered_training: list[str] = []
        self.valid_training: list[str] = []
        for file in self.files:
            logger.debug("Files added: %s", file.filepath)

    def is_registered(self, entry_id: str) -> bool:
        return entry_id in self.registered_training

    def is_valid(self, entry_id: str) -> bool:
        return entry_id in self.valid_training

    def register_training(self, entry_id: str) -> None:
        self.registered_training.append(entry_id)

    def mark_valid(self, entry_id: str) -> None:
        self.valid_training.append(entry_id)

    def assign_weights(self) -> None:
        """Weigh every directory and file, then reorder both lists by weight."""
        self.directory_weights = [directory_weight(d.path) for d in self.directories]
        self.file_weights = [file_weight(f) for f in self.files]
        _reorder(self.directories, self.directory_weights)
        _reorder(self.files, self.file_weights)