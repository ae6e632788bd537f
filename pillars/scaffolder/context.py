"""Project context detection.

A ``ProjectContext`` is a snapshot of the two facts about a target project
that generation depends on: whether it is a TypeScript project and which
package manager it uses.  It is computed once per invocation and passed
explicitly to the generator.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

TSCONFIG_FILE = "tsconfig.json"
MANIFEST_FILE = "package.json"


class LanguageMode(str, Enum):
    """Template variant to render."""
    PLAIN = "plain"
    TYPED = "typed"


class PackageManager(str, Enum):
    """Supported Node.js package managers."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


# Checked in order; the first lock file found wins.
LOCK_FILES: tuple[tuple[str, PackageManager], ...] = (
    ("yarn.lock", PackageManager.YARN),
    ("pnpm-lock.yaml", PackageManager.PNPM),
)

DEFAULT_PACKAGE_MANAGER = PackageManager.NPM


class ProjectContext(BaseModel):
    """Immutable per-invocation view of the target project."""

    model_config = ConfigDict(frozen=True)

    root: Path = Field(..., description="Project root directory")
    language: LanguageMode = Field(default=LanguageMode.PLAIN)
    package_manager: PackageManager = Field(default=DEFAULT_PACKAGE_MANAGER)

    @classmethod
    def detect(cls, root: str | Path) -> "ProjectContext":
        """Inspect *root* and build a context from the files present there."""
        root_path = Path(root)
        context = cls(
            root=root_path,
            language=detect_language(root_path),
            package_manager=detect_package_manager(root_path),
        )
        logger.debug(
            "Detected %s project using %s in %s",
            context.language.value,
            context.package_manager.value,
            root_path,
        )
        return context

    @property
    def typed(self) -> bool:
        return self.language is LanguageMode.TYPED

    @property
    def extension(self) -> str:
        """Source file extension without the dot."""
        return "ts" if self.typed else "js"

    @property
    def import_suffix(self) -> str:
        """Suffix appended to relative import specifiers in generated code."""
        return "" if self.typed else ".js"


def detect_language(root: Path) -> LanguageMode:
    """Return ``TYPED`` when a ``tsconfig.json`` exists in *root*."""
    if (root / TSCONFIG_FILE).exists():
        return LanguageMode.TYPED
    return LanguageMode.PLAIN


def detect_package_manager(root: Path) -> PackageManager:
    """Return the package manager whose lock file is present (yarn, then pnpm)."""
    for lock_file, manager in LOCK_FILES:
        if (root / lock_file).exists():
            return manager
    return DEFAULT_PACKAGE_MANAGER
