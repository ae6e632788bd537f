"""Dependency installation through the project's package manager.

Wraps npm, yarn and pnpm behind one interface.  Every call blocks the
caller until the package manager exits; output is streamed straight to the
terminal so the user sees progress.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pillars.utils import run_command

from .context import PackageManager
from .errors import InstallFailed

logger = logging.getLogger(__name__)


def add_command(
    manager: PackageManager, packages: list[str], dev: bool = False
) -> list[str]:
    """Build the command that adds *packages* to the manifest."""
    if manager is PackageManager.YARN:
        return ["yarn", "add", *(["--dev"] if dev else []), *packages]
    flag = "-D" if dev else "-S"
    if manager is PackageManager.PNPM:
        return ["pnpm", "add", flag, *packages]
    return ["npm", "install", flag, *packages]


def install_command(manager: PackageManager) -> list[str]:
    """Build the command that installs everything the manifest declares."""
    if manager is PackageManager.YARN:
        return ["yarn"]
    return [manager.value, "install"]


class DependencyInstaller:
    """Runs package manager commands inside a project directory."""

    def __init__(self, timeout: int = 600) -> None:
        self.timeout = timeout

    async def install(
        self,
        manager: PackageManager,
        packages: list[str],
        *,
        dev: bool = False,
        cwd: str | Path | None = None,
    ) -> None:
        """Add *packages* (as dev dependencies when *dev* is set).

        Raises:
            InstallFailed: If the package manager is missing, times out, or
                exits with a non-zero code.
        """
        await self._run(manager, add_command(manager, packages, dev), cwd)

    async def install_all(
        self, manager: PackageManager, *, cwd: str | Path | None = None
    ) -> None:
        """Install every dependency declared in the project's manifest.

        Raises:
            InstallFailed: As for :meth:`install`.
        """
        await self._run(manager, install_command(manager), cwd)

    async def _run(
        self, manager: PackageManager, cmd: list[str], cwd: str | Path | None
    ) -> None:
        logger.info("Running %s in %s", " ".join(cmd), cwd or ".")
        try:
            returncode, _, stderr = await run_command(
                cmd, cwd=cwd, timeout=self.timeout, capture=False
            )
        except FileNotFoundError as exc:
            raise InstallFailed(manager.value, f"{cmd[0]} is not installed") from exc

        if returncode != 0:
            detail = stderr or f"{' '.join(cmd)} exited with code {returncode}"
            raise InstallFailed(manager.value, detail)
