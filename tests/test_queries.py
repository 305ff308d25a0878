import datetime as dt

import pytest
import yaml

from librarian.domain import Directory, File
from librarian.plan import ValidationPlan
from librarian.queries import (
    DSUNotFoundError,
    all_dsu_entries,
    all_evaluation_ids,
    find_missing_evaluations,
    get_dsu_by_uuid,
    get_latest_dsu,
)


def _standup_doc(entries, format_type="dsu"):
    return {
        "tomegg": {
            "type": "training",
            "version": "0.1.0",
            "definition": "https://protocol.tome.gg/training/0.1.0",
        },
        "meta": {
            "format": {
                "type": format_type,
                "version": "0.1.0",
                "definition": f"https://protocol.tome.gg/formats/{format_type}/0.1.0",
            }
        },
        "content": entries,
    }


def _eval_doc(ids, kind="evaluations"):
    return {
        "tomegg": {
            "type": kind,
            "version": "0.1.0",
            "definition": f"https://protocol.tome.gg/{kind}/0.1.0",
        },
        "meta": {"dimensions": []},
        "evaluations": [
            {"id": entry_id, "measurements": [{"dimension": "focus", "score": 1}]}
            for entry_id in ids
        ],
    }


def _entry(entry_id, when):
    return {
        "id": entry_id,
        "datetime": when,
        "done_yesterday": "read",
        "doing_today": "write",
        "blockers": "",
    }


def _file(base, relative, content):
    path = base / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        path.write_text(content)
    else:
        path.write_text(yaml.safe_dump(content))
    return File(filepath=str(path), directory=Directory(path=str(path.parent)))


def _plan(*files):
    return ValidationPlan([], list(files))


@pytest.fixture
def repo(tmp_path):
    standup = _file(
        tmp_path,
        "training/dsu-reports.yaml",
        _standup_doc(
            [
                _entry("U3", "2025-09-24"),
                _entry("U1", "2025-09-20"),
                _entry("U5", "2025-09-26"),
                _entry("U2", "2025-09-22"),
                _entry("U4", "2025-09-25"),
            ]
        ),
    )
    review = _file(tmp_path, "evaluations/self.yaml", _eval_doc(["U4"]))
    return _plan(standup, review)


def test_entries_are_read_in_file_order(repo):
    assert [e.id for e in all_dsu_entries(repo)] == ["U3", "U1", "U5", "U2", "U4"]


def test_entries_skip_unsuitable_files(tmp_path):
    outside = _file(tmp_path, "other/dsu.yaml", _standup_doc([_entry("Z1", "2025-01-01")]))
    wrong_format = _file(
        tmp_path, "training/dsu-x.yaml", _standup_doc([_entry("Z2", "2025-01-01")], "log")
    )
    broken = _file(tmp_path, "training/dsu-broken.yaml", "content: [unclosed")
    absent = File(filepath=str(tmp_path / "training" / "dsu-absent.yaml"))
    good = _file(
        tmp_path, "training/dsu-good.yaml", _standup_doc([_entry("Z3", "2025-01-01")])
    )

    entries = all_dsu_entries(_plan(outside, wrong_format, broken, absent, good))

    assert [e.id for e in entries] == ["Z3"]


def test_evaluation_ids_skip_other_kinds(tmp_path):
    review = _file(tmp_path, "evaluations/a.yaml", _eval_doc(["A", "B"]))
    other = _file(tmp_path, "evaluations/b.yaml", _eval_doc(["C"], kind="notes"))
    unrelated = _file(tmp_path, "notes/c.yaml", _eval_doc(["D"]))

    assert all_evaluation_ids(_plan(review, other, unrelated)) == ["A", "B"]


def test_missing_entries_all_sorted_oldest_first(repo):
    missing = find_missing_evaluations(repo, False)
    assert [e.id for e in missing] == ["U1", "U2", "U3", "U5"]
    stamps = [e.datetime for e in missing]
    assert stamps == sorted(stamps)


def test_missing_entries_limited_to_last_three(repo):
    missing = find_missing_evaluations(repo, True)
    assert [e.id for e in missing] == ["U2", "U3", "U5"]


def test_missing_entries_empty_when_all_reviewed(tmp_path):
    standup = _file(
        tmp_path, "training/dsu.yaml", _standup_doc([_entry("K1", "2025-02-01")])
    )
    review = _file(tmp_path, "evaluations/self.yaml", _eval_doc(["K1"]))
    assert find_missing_evaluations(_plan(standup, review), True) == []


def test_lookup_by_uuid(repo):
    entry = get_dsu_by_uuid(repo, "U5")
    assert entry.id == "U5"
    assert entry.datetime_raw == "2025-09-26"
    assert entry.doing_today == "write"


def test_lookup_by_uuid_not_found(repo):
    with pytest.raises(DSUNotFoundError) as info:
        get_dsu_by_uuid(repo, "nope")
    assert str(info.value) == "DSU entry with UUID nope not found"


def test_latest_entry(repo):
    latest = get_latest_dsu(repo)
    assert latest.id == "U5"
    assert latest.datetime == max(e.datetime for e in all_dsu_entries(repo))


def test_latest_entry_first_wins_tie(tmp_path):
    standup = _file(
        tmp_path,
        "training/dsu.yaml",
        _standup_doc([_entry("T1", "2025-03-03"), _entry("T2", "2025-03-03")]),
    )
    latest = get_latest_dsu(_plan(standup))
    assert latest.id == "T1"
    assert latest.datetime.date() == dt.date(2025, 3, 3)


def test_latest_entry_none_found(tmp_path):
    with pytest.raises(DSUNotFoundError, match="no DSU entries found"):
        get_latest_dsu(_plan())