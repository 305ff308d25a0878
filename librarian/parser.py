"""Reading a directory tree from disk."""

from __future__ import annotations

import logging
import os
import stat

from librarian.domain import Directory, File

logger = logging.getLogger(__name__)

_DIRECTORY_BLACKLIST = (".git",)


def should_skip_directory(path: str) -> bool:
    """True when the path mentions an ignored directory anywhere."""
    return any(name in path for name in _DIRECTORY_BLACKLIST)


def parent_directory(root: str, path: str) -> str:
    """Path up to the last slash, or the root when there is no slash."""
    head, sep, _ = path.rpartition("/")
    return head if sep else root


def _join(base: str, name: str) -> str:
    return os.path.normpath(os.path.join(base, name))


def parse(root_directory: str) -> Directory:
    """Walk the tree under root_directory and return its root Directory.

    Raises OSError when the root or a directory inside it cannot be read.
    """
    memo: dict[str, Directory] = {root_directory: Directory(path=root_directory)}

    def visit(path: str, is_dir: bool) -> None:
        parent = memo.setdefault(parent_directory(root_directory, path), Directory())

        if not is_dir:
            logger.debug("adding file %s to %s", path, parent.path)
            parent.files.append(File(filepath=path, directory=parent))
            return

        if should_skip_directory(path):
            return

        directory = memo.setdefault(path, Directory(path=path))
        if path != root_directory:
            logger.debug("adding dir %s to %s", path, parent.path)
            parent.directories.append(directory)

        with os.scandir(path) as entries:
            children = sorted(entries, key=lambda entry: entry.name)
        for entry in children:
            visit(_join(path, entry.name), entry.is_dir(follow_symlinks=False))

    mode = os.lstat(root_directory).st_mode
    visit(root_directory, stat.S_ISDIR(mode))
    return memo[root_directory]