"""Integration tests for the create-then-add workflow.

These tests run the real initializer and generator against a temporary
directory.  Only the package manager is replaced; no Node.js tooling is
required.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from pillars.scaffolder import (
    AlreadyExists,
    ComponentGenerator,
    PackageManager,
    ProjectConfig,
    ProjectContext,
    ProjectInitializer,
)


async def _create(tmp_path: Path, installer, *, typescript: bool) -> Path:
    initializer = ProjectInitializer(
        ProjectConfig(name="billing", typescript=typescript),
        installer=installer,
        prompt=lambda: PackageManager.NPM,
    )
    return await initializer.create(tmp_path)


@pytest.mark.integration
class TestScaffoldWorkflow:
    async def test_typed_project_resource_and_test(self, tmp_path: Path, mock_installer):
        root = await _create(tmp_path, mock_installer, typescript=True)
        context = ProjectContext.detect(root)
        assert context.typed

        generator = ComponentGenerator(context, installer=mock_installer)
        resource = await generator.generate("resource", "invoice")
        assert all(p.suffix == ".ts" for p in resource)

        for path in resource:
            for spec in re.findall(r"from '(\.\./[^']+)'", path.read_text()):
                assert (path.parent / f"{spec}.ts").resolve().is_file()

        tsconfig_before = (root / "tsconfig.json").read_text()
        written = await generator.generate("test", "invoice")
        assert written[0] == root / "__tests__" / "invoice.test.ts"
        assert (root / "tsconfig.json").read_text() == tsconfig_before

        manifest = json.loads((root / "package.json").read_text())
        assert manifest["scripts"]["build"] == "tsc"
        assert "test:watch" in manifest["scripts"]
        assert manifest["dependencies"]["express"]

    async def test_plain_project_with_yarn_lock(self, tmp_path: Path, mock_installer):
        root = await _create(tmp_path, mock_installer, typescript=False)
        (root / "yarn.lock").write_text("")
        context = ProjectContext.detect(root)
        assert context.package_manager is PackageManager.YARN

        generator = ComponentGenerator(context, installer=mock_installer)
        await generator.generate("model", "customer")
        written = await generator.generate("test", "customer")

        assert (root / "tsconfig.json") in written
        assert mock_installer.install.await_args.args[0] is PackageManager.YARN

        # The next invocation sees the tsconfig written by the test setup.
        assert ProjectContext.detect(root).typed

    async def test_resource_after_single_layer_stops_at_collision(
        self, tmp_path: Path, mock_installer
    ):
        root = await _create(tmp_path, mock_installer, typescript=False)
        generator = ComponentGenerator(ProjectContext.detect(root), installer=mock_installer)
        await generator.generate("sv", "user")

        with pytest.raises(AlreadyExists) as excinfo:
            await generator.generate("rs", "user")

        assert excinfo.value.label == "Service"
        assert [p.name for p in excinfo.value.written] == ["user.js", "UserRepository.js"]
