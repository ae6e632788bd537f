"""Exceptions raised while scaffolding.

Every failure is terminal for the current invocation.  Generation is not
transactional: ``written`` lists the files that were already produced when
the error was raised, and they are left on disk.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all pillars failures."""

    def __init__(self, message: str, written: list[Path] | None = None) -> None:
        self.written: list[Path] = list(written or [])
        super().__init__(message)


class InvalidKind(ScaffoldError):
    """The component kind is neither a canonical kind nor an alias."""

    def __init__(self, kind: str, valid: list[str]) -> None:
        self.kind = kind
        self.valid = valid
        super().__init__(f'Invalid type "{kind}". Valid types: {", ".join(valid)}')


class InvalidName(ScaffoldError):
    """The entity name is not a bare identifier."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Invalid name "{name}". Use a bare identifier such as "user" or "orderItem".'
        )


class AlreadyExists(ScaffoldError):
    """A generation target (or a new project directory) is already on disk."""

    def __init__(self, label: str, path: Path, written: list[Path] | None = None) -> None:
        self.label = label
        self.path = path
        super().__init__(f"{label} already exists: {path}", written)


class InstallFailed(ScaffoldError):
    """The package manager could not install dependencies."""

    def __init__(self, manager: str, detail: str) -> None:
        self.manager = manager
        self.detail = detail
        super().__init__(f"Failed to install dependencies using {manager}: {detail}")


class SetupFailed(ScaffoldError):
    """Test tooling setup (manifest update or installation) did not complete."""
