"""Component generation.

Resolves a component kind to its recipe and writes each file of the recipe
into an existing project.  Files are checked and written one at a time: the
first target that already exists stops the run, and anything written before
it stays on disk.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pillars.utils import dump_json, ensure_dir, write_file

from .context import TSCONFIG_FILE, ProjectContext
from .errors import AlreadyExists, InstallFailed, SetupFailed
from .installer import DependencyInstaller
from .kinds import ComponentKind, EntityName, resolve_kind
from .manifest import (
    TEST_DEPENDENCIES,
    TEST_TSCONFIG,
    Manifest,
    apply_test_setup,
    needs_test_tooling,
)
from .recipes import RECIPES, TEST, LayerRecipe
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)


@dataclass
class GeneratedFile:
    """A rendered file waiting to be written."""

    path: Path
    content: str


class ComponentGenerator:
    """Generates model/repository/service/controller/route/test files.

    Filesystem access goes through three callables so the generator can be
    driven against an in-memory tree:

    * ``exists(path) -> bool``
    * ``write(path, text)`` (creates parent directories)
    * ``mkdir(path)``

    The dependency installer and manifest accessor are injectable for the
    same reason.
    """

    def __init__(
        self,
        context: ProjectContext,
        renderer: TemplateRenderer | None = None,
        *,
        installer: DependencyInstaller | None = None,
        manifest: Manifest | None = None,
        exists: Callable[[Path], bool] | None = None,
        write: Callable[[Path, str], None] | None = None,
        mkdir: Callable[[Path], Any] | None = None,
    ) -> None:
        self.context = context
        self.renderer = renderer or TemplateRenderer()
        self.installer = installer or DependencyInstaller()
        self.manifest = manifest or Manifest(context.root)
        self._exists = exists or Path.exists
        self._write = write or write_file
        self._mkdir = mkdir or ensure_dir

    # -- Public API --------------------------------------------------------

    async def generate(self, kind: str, name: str) -> list[Path]:
        """Generate every file for *kind* named after *name*.

        Returns:
            Paths written, in order.  For ``test`` this also includes
            ``package.json`` and, when it was created, ``tsconfig.json``.

        Raises:
            InvalidKind: *kind* is not a known kind or alias.
            InvalidName: *name* is not a bare identifier.
            AlreadyExists: A target file is already on disk.
            SetupFailed: The ``test`` tooling setup did not complete.
        """
        component = resolve_kind(kind)
        entity = EntityName.parse(name)
        written: list[Path] = []

        if component is ComponentKind.TEST:
            await asyncio.to_thread(self._mkdir, self.context.root / TEST.folder)

        for recipe in RECIPES[component]:
            target = self.target_path(recipe, entity)
            if self._exists(target):
                raise AlreadyExists(recipe.label, target, written)
            generated = self.render_file(recipe, entity)
            await asyncio.to_thread(self._write, generated.path, generated.content)
            logger.debug("Wrote %s", generated.path)
            written.append(generated.path)

        if component is ComponentKind.TEST:
            await self._setup_test_tooling(written)

        logger.info(
            "Generated %s %r (%d file(s))", component.value, entity.lower, len(written)
        )
        return written

    def target_path(self, recipe: LayerRecipe, entity: EntityName) -> Path:
        """Where *recipe* writes for *entity* in this project."""
        filename = recipe.render_filename(entity, self.context.extension)
        return self.context.root / recipe.folder / filename

    def render_file(self, recipe: LayerRecipe, entity: EntityName) -> GeneratedFile:
        """Render one recipe entry without touching the filesystem."""
        content = self.renderer.render(recipe.template, self._template_context(entity))
        return GeneratedFile(path=self.target_path(recipe, entity), content=content)

    # -- Context building --------------------------------------------------

    def _template_context(self, entity: EntityName) -> dict[str, Any]:
        return {
            "name": entity.lower,
            "Name": entity.capitalized,
            "typed": self.context.typed,
            "ext": self.context.extension,
            "import_suffix": self.context.import_suffix,
        }

    # -- Test tooling ------------------------------------------------------

    async def _setup_test_tooling(self, written: list[Path]) -> None:
        """Merge Jest into the manifest and install it if it is missing.

        *written* is extended in place so a ``SetupFailed`` raised halfway
        reports everything produced so far.
        """
        try:
            document = self.manifest.read()
        except (OSError, ValueError) as exc:
            raise SetupFailed(
                f"Failed to set up Jest: cannot read {self.manifest.path}: {exc}", written
            ) from exc

        updated = apply_test_setup(document)
        try:
            written.append(await self.manifest.write(updated))
        except OSError as exc:
            raise SetupFailed(
                f"Failed to set up Jest: cannot write {self.manifest.path}: {exc}", written
            ) from exc

        if not needs_test_tooling(updated):
            logger.debug("jest already declared, skipping installation")
            return

        manager = self.context.package_manager
        logger.info("Installing Jest and dependencies using %s", manager.value)
        try:
            await self.installer.install(
                manager, TEST_DEPENDENCIES, dev=True, cwd=self.context.root
            )
        except InstallFailed as exc:
            raise SetupFailed(f"Failed to set up Jest: {exc}", written) from exc

        tsconfig = self.context.root / TSCONFIG_FILE
        if self._exists(tsconfig):
            return
        try:
            await asyncio.to_thread(self._write, tsconfig, dump_json(TEST_TSCONFIG))
        except OSError as exc:
            raise SetupFailed(
                f"Failed to set up Jest: cannot write {tsconfig}: {exc}", written
            ) from exc
        written.append(tsconfig)
