# librarian

`librarian` provides the `tome` command for working with Tome.gg learning
repositories. A repository holds daily stand-up (DSU) training files and
self-evaluation files, both in YAML. `tome` checks that these files follow the
protocol and answers questions about the entries in them.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Commands

Commands that take `--directory` / `-d` use the current working directory when
the option is omitted. A single trailing `/` on the directory is dropped.
Directories whose path contains `.git` are not read.

`tome --version` (or `-v`) prints the version.

### validate

```
tome validate --directory path/to/repo
tome validate --verbose
```

A training file (a file whose path contains `dsu`) with `tomegg.type:
training` must declare version `0.1.0`, the `dsu` format at version `0.1.0`,
and the definition URLs `https://protocol.tome.gg/training/0.1.0` and
`https://protocol.tome.gg/formats/dsu/0.1.0`. Every entry needs a non-blank
`id`, `datetime`, `done_yesterday` and `doing_today`.

An evaluation file (a file whose path contains `evaluations`) with
`tomegg.type: evaluations` must declare version `0.1.0`, the definition URL
`https://protocol.tome.gg/evaluations/0.1.0`, and at least one dimension, each
with the definition `https://protocol.tome.gg/dimensions/<name>/<version>`.
Every evaluation must refer to a DSU entry that was registered and is valid,
and must have measurements, each with a dimension (a registered name or alias)
and a score.

Directories are weighed by name and files are checked in weighted order, so
training files are checked before evaluation files. On success the command
prints a success line; otherwise it reports the first problem found and exits
with a non-zero status. `--verbose` turns on debug logging.

### missing-evaluations (alias: missing)

```
tome missing-evaluations -d path/to/repo
tome missing --all
```

Lists DSU entries with no self-evaluation, oldest first. Without `--all`, only
the three most recent of them are shown.

### get-dsu (alias: get)

```
tome get-dsu --uuid 155CA198-7084-42F7-BBEE-A5A2FD3CB76F
```

Shows the UUID, date, what was done yesterday and what is planned today, plus
blockers and remarks when present.

### get-latest (alias: latest)

```
tome get-latest
tome latest -d path/to/repo
```

Shows the DSU entry with the latest date.

### initalize (alias: init)

```
tome init --name my-tome --destination ./my-tome --public
```

Creates a repository from the Tome.gg template with the `gh` command-line tool
(private unless `--public` is given) and clones it into the destination.
`--dest` is accepted for `--destination`. `gh` must be installed and logged in.

### completion

```
tome completion fish > ~/.config/fish/completions/tome.fish
```

Prints a fish completion script. Only fish is supported.

## Library use

```python
from librarian.parser import parse
from librarian.validators import build_plan, validate_plan
from librarian.queries import get_latest_dsu, find_missing_evaluations

root = parse("path/to/repo")
plan = build_plan(root)
plan.assign_weights()

errors = validate_plan(plan)
if errors:
    print(f"invalid: {errors[0]}")

latest = get_latest_dsu(plan)
print(latest.id, latest.datetime)

for entry in find_missing_evaluations(plan, limit_to_last_3=False):
    print(entry.id)
```

- `librarian.parser.parse` walks a directory and returns a
  `librarian.domain.Directory` tree of directories and `File`s; it raises
  `OSError` when the tree cannot be read.
- `librarian.validators.validate_plan` returns the failures it found, in order.
  Protocol problems are subclasses of `librarian.errors.ValidationError`;
  unreadable files appear as `OSError` and malformed YAML as `ValueError`.
- `librarian.queries.get_dsu_by_uuid` and `get_latest_dsu` raise
  `librarian.queries.DSUNotFoundError` when nothing matches. The queries skip
  files they cannot read or parse.
- `librarian.models` holds the document types (`TrainingDefinition`,
  `DSUReport`, `EvaluationDefinition`, `EvaluationRecord`,
  `StandardMeasurement`, `Dimension`) with `from_yaml` / `from_mapping`
  constructors, and `parse_datetime`, which reads dates in common layouts and
  treats dates without a time zone as UTC.

## What it does not do

`tome` only reads and checks a repository; it does not create or edit DSU
entries or evaluations. The `completion` command writes scripts for fish only.