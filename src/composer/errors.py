"""Exceptions raised while composing or running build tasks."""

from __future__ import annotations

from typing import Iterable, Sequence


class BuildError(RuntimeError):
    """Base class for every failure surfaced to the host runner."""


class ConfigurationError(BuildError):
    """Raised when options or the project configuration file are invalid."""


class RegistryError(BuildError):
    """Raised when the task registry encounters an invalid operation."""


class DuplicateTaskError(RegistryError):
    def __init__(self, name: str) -> None:
        super().__init__(f"A task with the name {name!r} already exists!")
        self.name = name


class UnknownTaskError(RegistryError):
    def __init__(self, name: str, required_by: str | None = None) -> None:
        if required_by:
            message = f"Task {required_by!r} depends on unknown task {name!r}"
        else:
            message = f"Unknown task: {name!r}"
        super().__init__(message)
        self.name = name
        self.required_by = required_by


class CyclicDependencyError(RegistryError):
    def __init__(self, cycle: Sequence[str]) -> None:
        super().__init__("Cycle detected in task graph: " + " -> ".join(cycle))
        self.cycle = list(cycle)


class ConfigNotFoundError(BuildError):
    """Raised when a configuration file is missing from every search location."""

    def __init__(self, filename: str, searched: Iterable[str]) -> None:
        self.filename = filename
        self.searched = [str(s) for s in searched]
        super().__init__(
            f"Could not find a valid {filename} in any of: {', '.join(self.searched)}"
        )


class LintViolationError(BuildError):
    """Raised after a linter has reported every violation it found."""

    def __init__(self, tool: str, report: str) -> None:
        super().__init__(f"{tool} reported lint violations")
        self.tool = tool
        self.report = report


class DependencyError(BuildError):
    """Raised by depcheck for invalid script files or unused dependencies."""

    def __init__(self, message: str, names: Iterable[str]) -> None:
        super().__init__(message)
        self.names = sorted(names)


class ExternalToolError(BuildError):
    """Raised when an external tool cannot be run or exits abnormally."""

    def __init__(self, command: Sequence[str], returncode: int | None, output: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        if returncode is None:
            message = f"Could not run {self.command[0]!r}"
        else:
            message = f"Command {' '.join(self.command)!r} exited with code {returncode}"
        super().__init__(message)
