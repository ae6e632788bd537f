"""Shared pytest fixtures for the pillars test suite.

Provides reusable fixtures for:
- Temporary plain (JavaScript) and typed (TypeScript) projects
- Project contexts detected from those projects
- Mocked dependency installers
- Mock subprocess helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from pillars.scaffolder.context import ProjectContext
from pillars.scaffolder.installer import DependencyInstaller


# ---------------------------------------------------------------------------
# Manifests
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_manifest() -> dict[str, Any]:
    """A ``package.json`` as ``pillars create`` writes it for a plain project."""
    return {
        "name": "shop-api",
        "version": "1.0.0",
        "description": "",
        "license": "ISC",
        "author": "",
        "main": "src/index.js",
        "scripts": {
            "dev": "node --watch src/index.js",
            "start": "node src/index.js",
        },
        "dependencies": {"express": "^5.1.0"},
        "devDependencies": {},
        "type": "module",
    }


# ---------------------------------------------------------------------------
# Projects & contexts
# ---------------------------------------------------------------------------

@pytest.fixture
def plain_project(tmp_path: Path, sample_manifest: dict[str, Any]) -> Path:
    """Temporary JavaScript project root with a manifest and no tsconfig."""
    root = tmp_path / "shop-api"
    root.mkdir()
    (root / "package.json").write_text(json.dumps(sample_manifest, indent=2), encoding="utf-8")
    return root


@pytest.fixture
def typed_project(plain_project: Path) -> Path:
    """Temporary TypeScript project root (a ``tsconfig.json`` is present)."""
    (plain_project / "tsconfig.json").write_text("{}", encoding="utf-8")
    return plain_project


@pytest.fixture
def plain_context(plain_project: Path) -> ProjectContext:
    return ProjectContext.detect(plain_project)


@pytest.fixture
def typed_context(typed_project: Path) -> ProjectContext:
    return ProjectContext.detect(typed_project)


# ---------------------------------------------------------------------------
# Installer & subprocess doubles
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_installer() -> MagicMock:
    """A DependencyInstaller whose commands succeed without running anything."""
    installer = MagicMock(spec=DependencyInstaller)
    installer.install = AsyncMock(return_value=None)
    installer.install_all = AsyncMock(return_value=None)
    return installer


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
