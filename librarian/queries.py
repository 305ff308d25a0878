"""Lookups over the daily stand-up entries and evaluations of a plan."""

from __future__ import annotations

from pathlib import Path

from librarian.models import DSUReport, EvaluationDefinition, TrainingDefinition
from librarian.plan import ValidationPlan


class DSUNotFoundError(LookupError):
    """No daily stand-up entry matches the request."""


def _read(filepath: str) -> bytes | None:
    try:
        return Path(filepath).read_bytes()
    except OSError:
        return None


def all_dsu_entries(plan: ValidationPlan) -> list[DSUReport]:
    """Every stand-up entry in the plan's readable DSU training files."""
    entries: list[DSUReport] = []
    for file in plan.files:
        if "dsu" not in file.filepath or "training" not in file.filepath:
            continue
        data = _read(file.filepath)
        if data is None:
            continue
        try:
            document = TrainingDefinition.from_yaml(data)
        except ValueError:
            continue
        if document.kind != "training" or document.format_kind != "dsu":
            continue
        entries.extend(document.content)
    return entries


def all_evaluation_ids(plan: ValidationPlan) -> list[str]:
    """The IDs of every evaluation in the plan's readable evaluation files."""
    ids: list[str] = []
    for file in plan.files:
        if "evaluations" not in file.filepath:
            continue
        data = _read(file.filepath)
        if data is None:
            continue
        try:
            document = EvaluationDefinition.from_yaml(data)
        except ValueError:
            continue
        if document.kind != "evaluations":
            continue
        ids.extend(record.id for record in document.evaluations)
    return ids


def find_missing_evaluations(
    plan: ValidationPlan, limit_to_last_3: bool
) -> list[DSUReport]:
    """Stand-up entries with no evaluation, oldest first.

    With limit_to_last_3, only the three most recent of them are returned.
    """
    evaluated = set(all_evaluation_ids(plan))
    missing = sorted(
        (entry for entry in all_dsu_entries(plan) if entry.id not in evaluated),
        key=lambda entry: entry.datetime,
    )
    if limit_to_last_3:
        return missing[-3:]
    return missing


def get_dsu_by_uuid(plan: ValidationPlan, uuid: str) -> DSUReport:
    """The first stand-up entry with the given ID."""
    for entry in all_dsu_entries(plan):
        if entry.id == uuid:
            return entry
    raise DSUNotFoundError(f"DSU entry with UUID {uuid} not found")


def get_latest_dsu(plan: ValidationPlan) -> DSUReport:
    """The stand-up entry with the latest date; the first one wins a tie."""
    entries = all_dsu_entries(plan)
    if not entries:
        raise DSUNotFoundError("no DSU entries found")
    return max(entries, key=lambda entry: entry.datetime)