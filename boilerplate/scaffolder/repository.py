"""Template tree storage and the archetype registry.

Each archetype (``cobra``, ``headless-service``, ``spa``,
``indirect-selection``) owns one template tree. The packaged trees live under
``boilerplate/scaffolder/project_templates/<root id>/``; the root id
(``_headlessServiceProject`` etc.) is a storage detail and never shows up in
generated output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import FilesystemError, UnknownArchetypeError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "project_templates"


# ---------------------------------------------------------------------------
# Archetypes
# ---------------------------------------------------------------------------


class Archetype(str, Enum):
    """Project archetypes shipped with the package."""

    COBRA = "cobra"
    HEADLESS_SERVICE = "headless-service"
    SPA = "spa"
    INDIRECT_SELECTION = "indirect-selection"


# Archetype id -> template root directory name
ARCHETYPE_ROOTS: dict[str, str] = {
    Archetype.COBRA.value: "_cobraProject",
    Archetype.HEADLESS_SERVICE.value: "_headlessServiceProject",
    Archetype.SPA.value: "_spaProject",
    Archetype.INDIRECT_SELECTION.value: "_indirectSelectionProject",
}


def archetype_id(archetype: str | Archetype) -> str:
    """Return the plain string identifier for *archetype*."""
    if isinstance(archetype, Archetype):
        return archetype.value
    return str(archetype)


# ---------------------------------------------------------------------------
# Tree model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateNode:
    """One entry of a template tree.

    ``original_path`` is a posix path relative to the template store and
    always starts with the archetype's root id.
    """

    original_path: str
    leaf_name: str
    is_dir: bool


@dataclass(frozen=True)
class TemplateTree:
    """All nodes of one archetype, in pre-order (directories before children)."""

    archetype: str
    root_id: str
    nodes: tuple[TemplateNode, ...]

    @property
    def files(self) -> list[TemplateNode]:
        return [n for n in self.nodes if not n.is_dir]

    @property
    def directories(self) -> list[TemplateNode]:
        return [n for n in self.nodes if n.is_dir]


# ---------------------------------------------------------------------------
# Repository interface
# ---------------------------------------------------------------------------


class TemplateRepository(ABC):
    """Read-only collection of named template trees."""

    @abstractmethod
    def list_archetypes(self) -> list[str]:
        """Return every archetype identifier this repository serves."""

    def is_valid_archetype(self, archetype: str | Archetype) -> bool:
        return archetype_id(archetype) in self.list_archetypes()

    @abstractmethod
    def get_template_tree(self, archetype: str | Archetype) -> TemplateTree:
        """Enumerate the full tree for *archetype*.

        Raises:
            UnknownArchetypeError: If *archetype* is not registered.
        """

    @abstractmethod
    def read_bytes(self, node: TemplateNode) -> bytes:
        """Return the raw content of a file node."""


class DirectoryTemplateRepository(TemplateRepository):
    """Serves template trees from a directory on disk.

    Args:
        template_dir: Directory holding one subdirectory per archetype root.
            Defaults to the templates packaged with ``boilerplate``.
        roots: Mapping of archetype id to root directory name. Defaults to
            :data:`ARCHETYPE_ROOTS`.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        roots: dict[str, str] | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.roots = dict(ARCHETYPE_ROOTS if roots is None else roots)

    def list_archetypes(self) -> list[str]:
        """Return the registered archetypes whose template tree is present."""
        return [key for key, root in self.roots.items() if (self.template_dir / root).is_dir()]

    def root_id(self, archetype: str | Archetype) -> str:
        """Return the root directory name for *archetype*.

        Raises:
            UnknownArchetypeError: If *archetype* is not registered or its
                template tree is missing from ``template_dir``.
        """
        key = archetype_id(archetype)
        root = self.roots.get(key)
        if root is None or not (self.template_dir / root).is_dir():
            raise UnknownArchetypeError(key, self.list_archetypes())
        return root

    def get_template_tree(self, archetype: str | Archetype) -> TemplateTree:
        key = archetype_id(archetype)
        root = self.root_id(key)
        root_path = self.template_dir / root

        # Explicit stack keeps deep trees off the call stack.  Children are
        # pushed in reverse so they pop in name order.
        nodes: list[TemplateNode] = []
        stack: list[tuple[str, Path]] = [
            (f"{root}/{child.name}", child) for child in _sorted_children(root_path, reverse=True)
        ]
        while stack:
            rel, path = stack.pop()
            is_dir = path.is_dir()
            nodes.append(TemplateNode(original_path=rel, leaf_name=path.name, is_dir=is_dir))
            if is_dir:
                stack.extend(
                    (f"{rel}/{child.name}", child)
                    for child in _sorted_children(path, reverse=True)
                )

        return TemplateTree(archetype=key, root_id=root, nodes=tuple(nodes))

    def read_bytes(self, node: TemplateNode) -> bytes:
        path = self.template_dir / node.original_path
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FilesystemError(
                f"Cannot read template file {node.original_path}: {exc}", node.original_path
            ) from exc


def _sorted_children(path: Path, *, reverse: bool = False) -> list[Path]:
    try:
        return sorted(path.iterdir(), key=lambda p: p.name, reverse=reverse)
    except OSError as exc:
        raise FilesystemError(f"Cannot list template directory {path}: {exc}", str(path)) from exc


# ---------------------------------------------------------------------------
# Registry functions over the packaged templates
# ---------------------------------------------------------------------------


def default_repository() -> DirectoryTemplateRepository:
    """Return a repository over the templates shipped with the package."""
    return DirectoryTemplateRepository()


def list_archetypes() -> list[str]:
    """List the packaged archetype identifiers."""
    return default_repository().list_archetypes()


def is_valid_archetype(archetype: str | Archetype) -> bool:
    """Return ``True`` if *archetype* names a packaged archetype."""
    return default_repository().is_valid_archetype(archetype)


def get_template_tree(archetype: str | Archetype) -> TemplateTree:
    """Enumerate a packaged archetype's template tree."""
    return default_repository().get_template_tree(archetype)
