"""Generation recipes.

A recipe is the fixed, ordered list of files emitted for one canonical
component kind.  File names are built from the ``{name}`` (lower form) and
``{Name}`` (capitalized form) placeholders; the generated sources import
one another using the same patterns, so any layer can be added on its own
and still line up with the others.
"""

from __future__ import annotations

from dataclasses import dataclass

from .kinds import ComponentKind, EntityName


@dataclass(frozen=True)
class LayerRecipe:
    """One file in a recipe."""

    label: str
    folder: str
    filename: str
    template: str

    def render_filename(self, entity: EntityName, extension: str) -> str:
        """Return the on-disk file name, e.g. ``UserService.ts``."""
        stem = self.filename.format(name=entity.lower, Name=entity.capitalized)
        return f"{stem}.{extension}"


MODEL = LayerRecipe("Model", "src/models", "{name}", "component/model.j2")
REPOSITORY = LayerRecipe(
    "Repository", "src/repositories", "{Name}Repository", "component/repository.j2"
)
SERVICE = LayerRecipe("Service", "src/services", "{Name}Service", "component/service.j2")
CONTROLLER = LayerRecipe(
    "Controller", "src/controllers", "{Name}Controller", "component/controller.j2"
)
ROUTE = LayerRecipe("Routes", "src/routes", "{Name}Routes", "component/route.j2")
TEST = LayerRecipe("Test file", "__tests__", "{name}.test", "component/test.j2")

RECIPES: dict[ComponentKind, tuple[LayerRecipe, ...]] = {
    ComponentKind.MODEL: (MODEL,),
    ComponentKind.REPOSITORY: (REPOSITORY,),
    ComponentKind.SERVICE: (SERVICE,),
    ComponentKind.CONTROLLER: (CONTROLLER,),
    ComponentKind.ROUTE: (ROUTE,),
    ComponentKind.RESOURCE: (MODEL, REPOSITORY, SERVICE, CONTROLLER, ROUTE),
    ComponentKind.TEST: (TEST,),
}

# Folders created for every new project
LAYER_FOLDERS: tuple[str, ...] = tuple(
    recipe.folder for recipe in RECIPES[ComponentKind.RESOURCE]
)
