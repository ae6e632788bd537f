"""Reading and updating a project's ``package.json``.

The test tooling setup only ever touches three things in the manifest: the
``test``/``test:watch`` scripts and the ``jest`` block.  Everything else is
carried over untouched.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from pillars.utils import load_json, save_json

from .context import MANIFEST_FILE

JEST_COMMAND = "node --experimental-vm-modules node_modules/jest/bin/jest.js"

TEST_SCRIPTS: dict[str, str] = {
    "test": JEST_COMMAND,
    "test:watch": f"{JEST_COMMAND} --watch",
}

JEST_CONFIG: dict[str, Any] = {
    "preset": "ts-jest",
    "testEnvironment": "node",
    "moduleNameMapper": {
        "^(\\.{1,2}/.*)\\.js$": "$1",
    },
    "transform": {
        "^.+\\.tsx?$": ["ts-jest", {"useESM": True}],
    },
}

# Installed as dev dependencies when ``jest`` is not declared yet
TEST_DEPENDENCIES: list[str] = [
    "jest@latest",
    "@jest/globals@latest",
    "ts-jest@latest",
    "typescript@latest",
    "@types/jest@latest",
]

# Written when the test setup installs TypeScript into a plain project
TEST_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES2020",
        "module": "ESNext",
        "moduleResolution": "node",
        "esModuleInterop": True,
        "strict": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
    },
    "include": ["**/*.ts"],
    "exclude": ["node_modules"],
}


class Manifest:
    """Accessor for the ``package.json`` in a project root."""

    def __init__(self, root: str | Path) -> None:
        self.path = Path(root) / MANIFEST_FILE

    def read(self) -> dict[str, Any]:
        """Parse the manifest.

        Raises:
            FileNotFoundError: If the project has no manifest.
            json.JSONDecodeError: If it is not valid JSON.
            ValueError: If it does not hold a JSON object.
        """
        return load_json(self.path)

    async def write(self, document: dict[str, Any]) -> Path:
        """Write *document* back with two-space indentation."""
        await save_json(document, self.path)
        return self.path


def apply_test_setup(document: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *document* with the Jest scripts and config merged in.

    Existing scripts other than ``test``/``test:watch`` are kept, the
    ``jest`` block is replaced, and all other keys are left as they were.
    Applying it twice gives the same result as applying it once.
    """
    updated = copy.deepcopy(document)
    scripts = updated.get("scripts")
    updated["scripts"] = {**(scripts if isinstance(scripts, dict) else {}), **TEST_SCRIPTS}
    updated["jest"] = copy.deepcopy(JEST_CONFIG)
    return updated


def needs_test_tooling(document: dict[str, Any]) -> bool:
    """True when ``jest`` is not yet declared as a dev dependency."""
    dev_dependencies = document.get("devDependencies")
    if not isinstance(dev_dependencies, dict):
        return True
    return not dev_dependencies.get("jest")
