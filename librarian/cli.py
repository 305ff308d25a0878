"""The ``tome`` command line."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Sequence

import click

from librarian.models import DSUReport
from librarian.parser import parse
from librarian.plan import ValidationPlan
from librarian.queries import (
    DSUNotFoundError,
    find_missing_evaluations,
    get_dsu_by_uuid,
    get_latest_dsu,
)
from librarian.validators import build_plan, validate_plan

logger = logging.getLogger(__name__)

VERSION = "0.4.4"
TEMPLATE_REPOSITORY = "tome-gg/template"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_VERSION_MESSAGE = (
    " 📚 Tome.gg CLI; 🚀 version %(version)s\n"
    " 💜 Dreams of sustainability and freedom built from Manila\n"
)

_ALIASES = {
    "init": "initalize",
    "missing": "missing-evaluations",
    "get": "get-dsu",
    "latest": "get-latest",
}

FISH_COMPLETION = """# Fish completion for tome
complete -c tome -f

# Main commands
complete -c tome -n "__fish_use_subcommand" -a "init" -d "Initialize a new Git repository using the Tome.gg template"
complete -c tome -n "__fish_use_subcommand" -a "initalize" -d "Initialize a new Git repository using the Tome.gg template"
complete -c tome -n "__fish_use_subcommand" -a "missing-evaluations" -d "Find DSU entries that don't have corresponding self evaluations"
complete -c tome -n "__fish_use_subcommand" -a "missing" -d "Find DSU entries that don't have corresponding self evaluations"
complete -c tome -n "__fish_use_subcommand" -a "get-dsu" -d "Retrieve a DSU entry by its UUID"
complete -c tome -n "__fish_use_subcommand" -a "get" -d "Retrieve a DSU entry by its UUID"
complete -c tome -n "__fish_use_subcommand" -a "get-latest" -d "Retrieve the most recent DSU entry by date"
complete -c tome -n "__fish_use_subcommand" -a "latest" -d "Retrieve the most recent DSU entry by date"
complete -c tome -n "__fish_use_subcommand" -a "validate" -d "Validate a directory using the Librarian protocol"
complete -c tome -n "__fish_use_subcommand" -a "completion" -d "Generate shell completion scripts"
complete -c tome -n "__fish_use_subcommand" -a "help" -d "Shows a list of commands or help for one command"

# Global options
complete -c tome -l help -s h -d "Show help"
complete -c tome -l version -s v -d "Print the version"

# Directory flag for commands that support it
complete -c tome -n "__fish_seen_subcommand_from missing-evaluations missing get-dsu get get-latest latest validate" -l directory -s d -d "Path to the directory" -r

# Missing evaluations flags
complete -c tome -n "__fish_seen_subcommand_from missing-evaluations missing" -l all -d "Show all missing evaluations (default: show last 3 only)"

# UUID flag for get-dsu command
complete -c tome -n "__fish_seen_subcommand_from get-dsu get" -l uuid -s u -d "UUID of the DSU entry to retrieve" -r

# Init command flags
complete -c tome -n "__fish_seen_subcommand_from init initalize" -l name -s n -d "The name of the repository" -r
complete -c tome -n "__fish_seen_subcommand_from init initalize" -l destination -d "The directory path for cloning" -r
complete -c tome -n "__fish_seen_subcommand_from init initalize" -l dest -d "The directory path for cloning" -r
complete -c tome -n "__fish_seen_subcommand_from init initalize" -l public -d "Initialize as public repository"

# Validate command flags
complete -c tome -n "__fish_seen_subcommand_from validate" -l verbose -d "Enable verbose logging"

# Completion subcommands
complete -c tome -n "__fish_seen_subcommand_from completion" -a "fish" -d "Generate fish completion script\""""


class _AliasedGroup(click.Group):
    """A group that also answers to the short names of its commands."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, _ALIASES.get(cmd_name, cmd_name))


def _resolve_directory(path: str) -> str:
    if not path:
        try:
            path = os.getcwd()
        except OSError as exc:
            raise click.ClickException(
                f"failed to get current working directory: {exc}"
            ) from exc
    if path.endswith("/"):
        path = path[:-1]
    return path


def _load_plan(path: str) -> ValidationPlan:
    try:
        root = parse(path)
    except OSError as exc:
        raise click.ClickException(f"failed to parse directory: {exc}") from exc
    plan = build_plan(root)
    plan.assign_weights()
    return plan


def _show_entry(entry: DSUReport) -> None:
    click.echo(f"UUID: {entry.id}")
    click.echo(f"Date: {entry.datetime.strftime(DATE_FORMAT)}")
    click.echo(f"Done Yesterday: {entry.done_yesterday}")
    click.echo(f"Doing Today: {entry.doing_today}")
    if entry.blockers:
        click.echo(f"Blockers: {entry.blockers}")
    if entry.remarks:
        click.echo(f"Remarks: {entry.remarks}")


def _directory_option(help_text: str):
    return click.option("--directory", "-d", default="", help=help_text)


_tome = click.version_option(VERSION, "--version", "-v", message=_VERSION_MESSAGE)(
    _AliasedGroup(
        name="tome",
        help="The Tome.gg CLI for working with the Librarian protocol",
    )
)


@_tome.command(
    "initalize",
    help=(
        "Initializes a new Git repository using the Tome.gg template, "
        "and then immediately clones it into a target directory."
    ),
)
@click.option(
    "--name", "-n", required=True,
    help="The name of the repository to be generated using the gh CLI tool.",
)
@click.option(
    "--destination", "--dest", required=True,
    help="The directory path designating the target destination where the "
    "repository should be cloned locally.",
)
@click.option(
    "--public", is_flag=True,
    help="Initializes the GitHub repository as public. Defaults to a private repository.",
)
def _initialize(name: str, destination: str, public: bool) -> None:
    if not name:
        raise click.ClickException("Invalid repository name")
    visibility = "--public" if public else "--private"
    steps = (
        (
            "Initialize repository failed",
            ["gh", "repo", "create", name, "--template", TEMPLATE_REPOSITORY, visibility],
        ),
        ("Clone repository failed", ["gh", "repo", "clone", name, destination]),
    )
    for failure, command in steps:
        try:
            subprocess.run(
                command,
                check=True,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.error("%s: %s", failure, exc)
            raise click.ClickException(str(exc)) from exc


@_tome.command(
    "missing-evaluations",
    help="Find DSU entries that don't have corresponding self evaluations",
)
@_directory_option("Path to the directory to analyze")
@click.option(
    "--all", "show_all", is_flag=True,
    help="Show all missing evaluations (default: show last 3 only)",
)
def _missing_evaluations(directory: str, show_all: bool) -> None:
    plan = _load_plan(_resolve_directory(directory))
    missing = find_missing_evaluations(plan, not show_all)

    if not missing:
        click.echo("✅ All DSU entries have corresponding self evaluations!")
        return

    scope = "all entries" if show_all else "last 3, use --all for complete list"
    click.echo(f"Found {len(missing)} DSU entries without self evaluations ({scope}):\n")
    for entry in missing:
        click.echo(f"UUID: {entry.id}\nDate: {entry.datetime.strftime(DATE_FORMAT)}\n")


@_tome.command("get-dsu", help="Retrieve a DSU entry by its UUID")
@_directory_option("Path to the directory to search")
@click.option("--uuid", "-u", required=True, help="UUID of the DSU entry to retrieve")
def _get_dsu(directory: str, uuid: str) -> None:
    plan = _load_plan(_resolve_directory(directory))
    try:
        entry = get_dsu_by_uuid(plan, uuid)
    except DSUNotFoundError as exc:
        raise click.ClickException(f"failed to get DSU entry: {exc}") from exc
    _show_entry(entry)


@_tome.command("get-latest", help="Retrieve the most recent DSU entry by date")
@_directory_option("Path to the directory to search")
def _get_latest(directory: str) -> None:
    plan = _load_plan(_resolve_directory(directory))
    try:
        entry = get_latest_dsu(plan)
    except DSUNotFoundError as exc:
        raise click.ClickException(f"failed to get latest DSU entry: {exc}") from exc
    click.echo("🚀 Latest DSU Entry:\n")
    _show_entry(entry)


_completion = click.Group(name="completion", help="Generate shell completion scripts")
_tome.add_command(_completion)


@_completion.command("fish", help="Generate fish completion script")
def _fish() -> None:
    click.echo(FISH_COMPLETION)


@_tome.command("validate", help="Validate a directory using the Librarian protocol")
@_directory_option("Path to the directory to validate")
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
def _validate(directory: str, verbose: bool) -> None:
    path = _resolve_directory(directory)
    logging.getLogger("librarian").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.info("validating directory %s", path)

    plan = _load_plan(path)
    logger.debug(
        "plan initialized: %d directories, %d files",
        len(plan.directories),
        len(plan.files),
    )

    errors = validate_plan(plan)
    if errors:
        logger.error("validation failed: %s", "; ".join(str(e) for e in errors))
        raise click.ClickException(str(errors[0]))

    click.echo(f" 🚀 [SUCCESS] Repository {path} is valid!")


def _run(argv: Sequence[str] | None) -> int:
    try:
        result = _tome.main(
            args=list(argv) if argv is not None else None,
            prog_name="tome",
            standalone_mode=False,
        )
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``tome`` command and return its exit status."""
    package_logger = logging.getLogger("librarian")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "time=%(asctime)s level=%(levelname)s msg=%(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)
    try:
        return _run(argv)
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)


if __name__ == "__main__":
    sys.exit(main())