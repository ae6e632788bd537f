"""Tests for the Jinja2 TemplateRenderer and the bundled templates."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from jinja2 import UndefinedError

from pillars.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit

COMPONENT_TEMPLATES = [
    "component/controller.j2",
    "component/model.j2",
    "component/repository.j2",
    "component/route.j2",
    "component/service.j2",
    "component/test.j2",
]


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def _context(typed: bool) -> dict[str, Any]:
    return {
        "name": "invoice",
        "Name": "Invoice",
        "typed": typed,
        "ext": "ts" if typed else "js",
        "import_suffix": "" if typed else ".js",
    }


class TestTemplateRenderer:
    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.j2").write_text("Hello {{ Name }}!\n")
        assert TemplateRenderer(tmp_path).render("hello.j2", {"Name": "Ada"}) == "Hello Ada!\n"

    def test_missing_variable_is_an_error(self, renderer):
        with pytest.raises(UndefinedError):
            renderer.render("component/model.j2", {"typed": False})

    @pytest.mark.asyncio
    async def test_render_to_file_creates_parents(self, renderer, tmp_path: Path):
        out = tmp_path / "src" / "models" / "invoice.js"
        path = await renderer.render_to_file("component/model.j2", out, _context(False))
        assert path == out
        assert "export class Invoice" in out.read_text(encoding="utf-8")


class TestComponentTemplates:
    @pytest.mark.parametrize("template", COMPONENT_TEMPLATES)
    @pytest.mark.parametrize("typed", [False, True])
    def test_no_template_syntax_left(self, renderer, template, typed):
        content = renderer.render(template, _context(typed))
        assert "{{" not in content
        assert "{%" not in content
        assert content.endswith("}\n") or content.endswith(";\n")

    @pytest.mark.parametrize("template", COMPONENT_TEMPLATES)
    def test_plain_variant_has_no_type_annotations(self, renderer, template):
        content = renderer.render(template, _context(False))
        assert "interface" not in content
        assert ": string" not in content
        assert "Promise<" not in content
        assert "private " not in content

    def test_model_typed(self, renderer):
        content = renderer.render("component/model.j2", _context(True))
        assert "export interface InvoiceData {" in content
        assert "export class Invoice {" in content
        assert "constructor(data: InvoiceData) {" in content

    def test_model_plain(self, renderer):
        content = renderer.render("component/model.j2", _context(False))
        assert content == (
            "// Invoice model (dummy example)\n"
            "export class Invoice {\n"
            "  constructor(data) {\n"
            "    Object.assign(this, data);\n"
            "  }\n"
            "}\n"
        )

    def test_repository_imports(self, renderer):
        typed = renderer.render("component/repository.j2", _context(True))
        plain = renderer.render("component/repository.j2", _context(False))
        assert "import { Invoice, InvoiceData } from '../models/invoice';" in typed
        assert "import { Invoice } from '../models/invoice.js';" in plain

    def test_repository_store(self, renderer):
        typed = renderer.render("component/repository.j2", _context(True))
        plain = renderer.render("component/repository.j2", _context(False))
        assert "private items: Invoice[] = [];" in typed
        assert "constructor()" not in typed
        assert "this.items = [];" in plain
        assert "findById(id: string): Invoice | undefined {" in typed
        assert "findById(id) {" in plain

    def test_service_imports_repository_by_capitalized_name(self, renderer):
        typed = renderer.render("component/service.j2", _context(True))
        plain = renderer.render("component/service.j2", _context(False))
        assert "from '../repositories/InvoiceRepository';" in typed
        assert "from '../repositories/InvoiceRepository.js';" in plain
        assert "export class InvoiceService {" in plain

    def test_controller(self, renderer):
        typed = renderer.render("component/controller.j2", _context(True))
        plain = renderer.render("component/controller.j2", _context(False))
        assert "import { Request, Response } from 'express';" in typed
        assert "from '../services/InvoiceService';" in typed
        assert "req.body as InvoiceData" in typed
        assert "(error as Error).message" in typed
        assert "from '../services/InvoiceService.js';" in plain
        assert "error: error.message" in plain
        assert "express" not in plain

    def test_route(self, renderer):
        plain = renderer.render("component/route.j2", _context(False))
        assert "from '../controllers/InvoiceController.js';" in plain
        assert "const controller = new InvoiceController();" in plain
        assert plain.count("router.") == 5
        assert plain.endswith("export default router;\n")

    def test_route_router_import_per_mode(self, renderer):
        typed = renderer.render("component/route.j2", _context(True))
        plain = renderer.render("component/route.j2", _context(False))
        assert typed.startswith("import { Router } from 'express';\n")
        assert "const router = Router();" in typed
        assert plain.startswith("import express from 'express';\n")
        assert "const router = express.Router();" in plain

    def test_controller_not_found_responses(self, renderer):
        typed = renderer.render("component/controller.j2", _context(True))
        plain = renderer.render("component/controller.j2", _context(False))
        assert typed.count(
            "        res.status(404).json({ error: 'Item not found' });\n        return;\n"
        ) == 3
        assert plain.count(
            "        return res.status(404).json({ error: 'Item not found' });\n"
        ) == 3
        assert "Invoice not found" not in typed + plain

    def test_repository_store_comment(self, renderer):
        for typed in (False, True):
            content = renderer.render("component/repository.j2", _context(typed))
            assert content.count("// pretend DB") == 1

    def test_test_stub(self, renderer):
        typed = renderer.render("component/test.j2", _context(True))
        plain = renderer.render("component/test.j2", _context(False))
        assert typed.startswith("import { describe, it, expect, beforeEach } from '@jest/globals';")
        assert plain.startswith("describe('Invoice', () => {")
        assert plain.endswith("  // Add more test cases here\n});\n")
        assert "// Add more test cases here" in typed


class TestProjectTemplates:
    def test_index_uses_port(self, renderer):
        content = renderer.render(
            "project/index.j2", {"project_name": "x", "typed": False, "port": 4000}
        )
        assert "process.env.PORT || 4000" in content
        assert "${PORT}" in content

    def test_index_imports_and_banner(self, renderer):
        content = renderer.render(
            "project/index.j2", {"project_name": "x", "typed": True, "port": 3000}
        )
        assert "import dotenv from 'dotenv';\nimport path from 'path';\n" in content
        assert "console.log(`\U0001f680 Server running on http://localhost:${PORT}`);" in content

    def test_env(self, renderer):
        assert renderer.render("project/env.j2", {"port": 3000}) == "PORT=3000\n"

    @pytest.mark.parametrize(
        "typed,expected",
        [(False, "node_modules/\n.env\n"), (True, "node_modules/\n.env\ndist/\n")],
    )
    def test_gitignore(self, renderer, typed, expected):
        assert renderer.render("project/gitignore.j2", {"typed": typed}) == expected
