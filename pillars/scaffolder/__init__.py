"""pillars scaffolder -- generates Express project structures and components.

Quick usage::

    from pillars.scaffolder import ComponentGenerator, ProjectContext

    context = ProjectContext.detect("./my-api")
    generator = ComponentGenerator(context)
    written = await generator.generate("resource", "invoice")
"""

from pillars.scaffolder.context import LanguageMode, PackageManager, ProjectContext
from pillars.scaffolder.errors import (
    AlreadyExists,
    InstallFailed,
    InvalidKind,
    InvalidName,
    ScaffoldError,
    SetupFailed,
)
from pillars.scaffolder.generator import ComponentGenerator, GeneratedFile
from pillars.scaffolder.initializer import ProjectConfig, ProjectInitializer
from pillars.scaffolder.installer import DependencyInstaller
from pillars.scaffolder.kinds import ComponentKind, EntityName, resolve_kind
from pillars.scaffolder.templates import TemplateRenderer

__all__ = [
    "AlreadyExists",
    "ComponentGenerator",
    "ComponentKind",
    "DependencyInstaller",
    "EntityName",
    "GeneratedFile",
    "InstallFailed",
    "InvalidKind",
    "InvalidName",
    "LanguageMode",
    "PackageManager",
    "ProjectConfig",
    "ProjectContext",
    "ProjectInitializer",
    "ScaffoldError",
    "SetupFailed",
    "TemplateRenderer",
    "resolve_kind",
]
