"""The directory tree that validation works on."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class Directory:
    """A folder found under the root directory."""

    path: str = ""
    directories: list[Directory] = field(default_factory=list)
    files: list[File] = field(default_factory=list)
    error: Exception | None = None
    erroneous_files: list[File] = field(default_factory=list)

    def status(self) -> str:
        """Describe this directory and, after it, every subdirectory."""
        nested = "".join(child.status() for child in self.directories)
        summary = (
            f"Path [{self.path}] has a total of {len(self.directories)} "
            f"directories and {len(self.files)} files."
        )
        if self.error is not None:
            return f" ❌ {summary} Validation failed: {self.error}\n{nested}"
        return f" ✅ {summary}\n{nested}"


@dataclass(eq=False)
class File:
    """A file found in a directory."""

    filepath: str = ""
    directory: Directory | None = field(default=None, repr=False)
    error: Exception | None = None