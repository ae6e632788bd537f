"""New project bootstrapping.

Creates an Express project skeleton with the five layer folders, an entry
point, ``package.json``, optional ``tsconfig.json``, ``.env`` and
``.gitignore``, then installs its dependencies with the package manager the
user picks.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from rich.prompt import Prompt

from pillars.utils import console, ensure_dir, save_json

from .context import MANIFEST_FILE, TSCONFIG_FILE, PackageManager
from .errors import AlreadyExists
from .installer import DependencyInstaller
from .recipes import LAYER_FOLDERS
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000

DEPENDENCIES: dict[str, str] = {
    "body-parser": "^2.2.0",
    "cors": "^2.8.5",
    "dotenv": "^16.4.7",
    "express": "^5.1.0",
    "jsonwebtoken": "^9.0.2",
    "morgan": "^1.10.0",
    "path": "^0.12.7",
}

TYPED_DEV_DEPENDENCIES: dict[str, str] = {
    "@types/body-parser": "^1.19.5",
    "@types/cors": "^2.8.17",
    "@types/express": "^4.17.21",
    "@types/morgan": "^1.9.9",
    "@types/node": "^20.11.24",
    "ts-node-dev": "^2.0.0",
    "typescript": "^5.3.3",
}

PROJECT_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES2020",
        "module": "NodeNext",
        "moduleResolution": "NodeNext",
        "outDir": "./dist",
        "rootDir": "./src",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
        "allowImportingTsExtensions": True,
        "noEmit": True,
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules"],
}

# Menu number -> package manager, in display order
PACKAGE_MANAGER_CHOICES: dict[str, PackageManager] = {
    "1": PackageManager.NPM,
    "2": PackageManager.YARN,
    "3": PackageManager.PNPM,
}


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Pydantic model describing the project to create."""

    name: str = Field(..., description="Project directory and package name")
    typescript: bool = Field(default=False, description="Generate a TypeScript project")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"invalid project name: {value!r}")
        return value


def prompt_package_manager() -> PackageManager:
    """Ask which package manager to use; npm is the default."""
    console.print("\n[bold]Select a package manager:[/bold]")
    for number, manager in PACKAGE_MANAGER_CHOICES.items():
        suffix = " (default)" if manager is PackageManager.NPM else ""
        console.print(f"  {number}. {manager.value}{suffix}")
    answer = Prompt.ask(
        "Enter your choice",
        choices=list(PACKAGE_MANAGER_CHOICES),
        default="1",
        console=console,
    )
    return PACKAGE_MANAGER_CHOICES[answer]


# ---------------------------------------------------------------------------
# Initializer
# ---------------------------------------------------------------------------


class ProjectInitializer:
    """Bootstraps a new project directory."""

    def __init__(
        self,
        config: ProjectConfig,
        renderer: TemplateRenderer | None = None,
        *,
        installer: DependencyInstaller | None = None,
        prompt: Callable[[], PackageManager] = prompt_package_manager,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.installer = installer or DependencyInstaller()
        self.prompt = prompt
        self.package_manager: PackageManager | None = None

    @property
    def extension(self) -> str:
        return "ts" if self.config.typescript else "js"

    async def create(
        self,
        output_dir: str | Path,
        package_manager: PackageManager | None = None,
    ) -> Path:
        """Create the project under *output_dir* and install its dependencies.

        Args:
            output_dir: Parent directory; the project folder is created inside it.
            package_manager: Skip the interactive prompt and use this manager.

        Returns:
            Path to the new project root.

        Raises:
            AlreadyExists: The project directory is already present.
            InstallFailed: The package manager could not install dependencies.
        """
        root = Path(output_dir) / self.config.name
        if root.exists():
            raise AlreadyExists(f'Project "{self.config.name}"', root)

        context = self._build_context()

        # 1. Layer folders
        for folder in LAYER_FOLDERS:
            await asyncio.to_thread(ensure_dir, root / folder)

        # 2. Entry point
        await self.renderer.render_to_file(
            "project/index.j2", root / "src" / f"index.{self.extension}", context
        )

        # 3. Manifest and compiler config
        await save_json(self.build_manifest(), root / MANIFEST_FILE)
        if self.config.typescript:
            await save_json(PROJECT_TSCONFIG, root / TSCONFIG_FILE)

        # 4. Env and ignore files
        await self.renderer.render_to_file("project/env.j2", root / ".env", context)
        await self.renderer.render_to_file(
            "project/gitignore.j2", root / ".gitignore", context
        )
        logger.info("Created project skeleton in %s", root)

        # 5. Dependencies
        manager = package_manager or self.prompt()
        self.package_manager = manager
        console.print(f"Installing dependencies using [bold]{manager.value}[/bold]...")
        await self.installer.install_all(manager, cwd=root)

        return root

    def build_manifest(self) -> dict[str, Any]:
        """Return the ``package.json`` document for the new project."""
        typed = self.config.typescript
        scripts = {
            "dev": (
                "ts-node-dev --respawn --transpile-only src/index.ts"
                if typed
                else "node --watch src/index.js"
            ),
            "start": "node dist/index.js" if typed else "node src/index.js",
        }
        if typed:
            scripts["build"] = "tsc"

        manifest: dict[str, Any] = {
            "name": self.config.name,
            "version": "1.0.0",
            "description": "",
            "license": "ISC",
            "author": "",
            "main": "dist/index.js" if typed else "src/index.js",
            "scripts": scripts,
            "dependencies": dict(DEPENDENCIES),
            "devDependencies": dict(TYPED_DEV_DEPENDENCIES) if typed else {},
        }
        if not typed:
            manifest["type"] = "module"
        return manifest

    def _build_context(self) -> dict[str, Any]:
        return {
            "project_name": self.config.name,
            "typed": self.config.typescript,
            "port": self.config.port,
        }
