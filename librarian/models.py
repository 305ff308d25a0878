"""Training and evaluation documents as they are read from YAML."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any

import yaml
from dateutil import parser as date_parser

ZERO_TIME = dt.datetime(1, 1, 1, tzinfo=dt.timezone.utc)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _Loader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as plain strings."""


_Loader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _load(text: str | bytes) -> Any:
    try:
        return yaml.load(text, Loader=_Loader)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid YAML: {exc}") from exc


def _mapping(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"expected a mapping for {where}")
    return value


def _sequence(value: Any, where: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"expected a sequence for {where}")
    return value


def _text(value: Any, where: str = "value") -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        raise ValueError(f"expected a scalar for {where}")
    return str(value)


def _score(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"score must be an integer, not {value!r}")
    return int(value)


def parse_datetime(text: str) -> dt.datetime:
    """Parse a date or date-time in any common layout; naive values are UTC."""
    try:
        value = date_parser.parse(text)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"failed to parse date: {exc}") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value


@dataclass
class DSUReport:
    """One daily stand-up entry."""

    id: str = ""
    datetime_raw: str = ""
    datetime: dt.datetime = ZERO_TIME
    remarks: str = ""
    done_yesterday: str = ""
    doing_today: str = ""
    blockers: str = ""

    @classmethod
    def from_mapping(cls, data: Any) -> DSUReport:
        data = _mapping(data, "content entry")
        raw = _text(data.get("datetime"), "datetime")
        stamp = raw.strip()
        return cls(
            id=_text(data.get("id"), "id"),
            datetime_raw=raw,
            datetime=parse_datetime(stamp) if stamp else ZERO_TIME,
            remarks=_text(data.get("remarks"), "remarks"),
            done_yesterday=_text(data.get("done_yesterday"), "done_yesterday"),
            doing_today=_text(data.get("doing_today"), "doing_today"),
            blockers=_text(data.get("blockers"), "blockers"),
        )


@dataclass
class TrainingBase:
    """Fields shared by training entries."""

    id: str = ""
    date: dt.datetime = ZERO_TIME
    remarks: str = ""


@dataclass
class TrainingDefinition:
    """A training document holding daily stand-up entries."""

    kind: str = ""
    version: str = ""
    definition: str = ""
    format_kind: str = ""
    format_version: str = ""
    format_definition: str = ""
    tags: list[str] = field(default_factory=list)
    content: list[DSUReport] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> TrainingDefinition:
        data = _mapping(data, "document")
        header = _mapping(data.get("tomegg"), "tomegg")
        meta = _mapping(data.get("meta"), "meta")
        layout = _mapping(meta.get("format"), "meta.format")
        return cls(
            kind=_text(header.get("type"), "tomegg.type"),
            version=_text(header.get("version"), "tomegg.version"),
            definition=_text(header.get("definition"), "tomegg.definition"),
            format_kind=_text(layout.get("type"), "meta.format.type"),
            format_version=_text(layout.get("version"), "meta.format.version"),
            format_definition=_text(layout.get("definition"), "meta.format.definition"),
            tags=[_text(tag, "meta.tags") for tag in _sequence(meta.get("tags"), "meta.tags")],
            content=[
                DSUReport.from_mapping(entry)
                for entry in _sequence(data.get("content"), "content")
            ],
        )

    @classmethod
    def from_yaml(cls, text: str | bytes) -> TrainingDefinition:
        return cls.from_mapping(_load(text))


@dataclass
class Dimension:
    """A dimension that evaluations are measured along."""

    alias: str = ""
    name: str = ""
    version: str = ""
    definition: str = ""


def _dimension(data: Any) -> Dimension:
    data = _mapping(data, "meta.dimensions entry")
    return Dimension(
        alias=_text(data.get("alias"), "alias"),
        name=_text(data.get("name"), "name"),
        version=_text(data.get("version"), "version"),
        definition=_text(data.get("definition"), "definition"),
    )


@dataclass
class StandardMeasurement:
    """A score given along one dimension."""

    dimension: str = ""
    score: int | None = None
    remarks: str = ""
    wins: str = ""
    mistakes: str = ""
    meta: str = ""

    @classmethod
    def from_mapping(cls, data: Any) -> StandardMeasurement:
        data = _mapping(data, "measurement")
        return cls(
            dimension=_text(data.get("dimension"), "dimension"),
            score=_score(data.get("score")),
            remarks=_text(data.get("remarks"), "remarks"),
            wins=_text(data.get("wins"), "wins"),
            mistakes=_text(data.get("mistakes"), "mistakes"),
            meta=_text(data.get("meta"), "meta"),
        )


@dataclass
class EvaluationRecord:
    """The measurements taken for one training entry."""

    id: str = ""
    measurements: list[StandardMeasurement] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> EvaluationRecord:
        data = _mapping(data, "evaluation")
        return cls(
            id=_text(data.get("id"), "id"),
            measurements=[
                StandardMeasurement.from_mapping(item)
                for item in _sequence(data.get("measurements"), "measurements")
            ],
        )


@dataclass
class EvaluationDefinition:
    """An evaluations document."""

    kind: str = ""
    version: str = ""
    definition: str = ""
    dimensions: list[Dimension] = field(default_factory=list)
    evaluations: list[EvaluationRecord] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> EvaluationDefinition:
        data = _mapping(data, "document")
        header = _mapping(data.get("tomegg"), "tomegg")
        meta = _mapping(data.get("meta"), "meta")
        return cls(
            kind=_text(header.get("type"), "tomegg.type"),
            version=_text(header.get("version"), "tomegg.version"),
            definition=_text(header.get("definition"), "tomegg.definition"),
            dimensions=[
                _dimension(item)
                for item in _sequence(meta.get("dimensions"), "meta.dimensions")
            ],
            evaluations=[
                EvaluationRecord.from_mapping(item)
                for item in _sequence(data.get("evaluations"), "evaluations")
            ],
        )

    @classmethod
    def from_yaml(cls, text: str | bytes) -> EvaluationDefinition:
        return cls.from_mapping(_load(text))