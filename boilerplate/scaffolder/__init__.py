"""Boilerplate scaffolder -- writes a resolved template tree to disk.

This package walks an archetype's template tree, resolves ``{{ Name }}``
placeholders in every path and file against a parameter dictionary, un-masks
reserved file names (``go.mod_`` -> ``go.mod``), strips build-exclusion
marker lines and writes the result under a destination directory.

Quick usage::

    from boilerplate.scaffolder import Materializer

    result = Materializer().materialize(
        "headless-service",
        "/tmp/out",
        {"ProjectName": "demo", "ProjectPackage": "example.com/demo", ...},
    )
"""

from boilerplate.scaffolder.errors import (
    BoilerplateError,
    FilesystemError,
    InvalidPathError,
    ParameterValidationError,
    PathCollisionError,
    TemplateRenderError,
    TemplateSyntaxError,
    UndefinedParameterError,
    UnknownArchetypeError,
)
from boilerplate.scaffolder.filesystem import LocalFilesystem, MemoryFilesystem, OutputFilesystem
from boilerplate.scaffolder.generator import (
    MaterializeResult,
    Materializer,
    ResolvedNode,
    materialize,
)
from boilerplate.scaffolder.repository import (
    ARCHETYPE_ROOTS,
    Archetype,
    DirectoryTemplateRepository,
    TemplateNode,
    TemplateRepository,
    TemplateTree,
    get_template_tree,
    is_valid_archetype,
    list_archetypes,
)
from boilerplate.scaffolder.shaper import OutputShaper
from boilerplate.scaffolder.templates import TemplateRenderer

__all__ = [
    "ARCHETYPE_ROOTS",
    "Archetype",
    "BoilerplateError",
    "DirectoryTemplateRepository",
    "FilesystemError",
    "InvalidPathError",
    "LocalFilesystem",
    "MaterializeResult",
    "Materializer",
    "MemoryFilesystem",
    "OutputFilesystem",
    "OutputShaper",
    "ParameterValidationError",
    "PathCollisionError",
    "ResolvedNode",
    "TemplateNode",
    "TemplateRenderError",
    "TemplateRenderer",
    "TemplateRepository",
    "TemplateSyntaxError",
    "TemplateTree",
    "UndefinedParameterError",
    "UnknownArchetypeError",
    "get_template_tree",
    "is_valid_archetype",
    "list_archetypes",
    "materialize",
]
