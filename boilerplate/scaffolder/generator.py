"""Main scaffolding orchestrator.

Takes an archetype id and a finished parameter dictionary and writes the
archetype's template tree under a destination directory with every
placeholder resolved.  A run goes through three phases that are never
re-entered:

1. ENUMERATE -- list every node of the archetype's template tree.
2. RESOLVE   -- resolve every path and name, un-mask reserved names, detect
   collisions, then resolve and shape every file's content in memory.  Any
   failure here aborts the run before the destination is touched.
3. WRITE     -- create the directories, then write each file.  A failure
   here leaves already written files in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from ..config import GeneratorConfig
from .errors import InvalidPathError, PathCollisionError
from .filesystem import LocalFilesystem, OutputFilesystem
from .repository import (
    Archetype,
    DirectoryTemplateRepository,
    TemplateNode,
    TemplateRepository,
    TemplateTree,
)
from .shaper import OutputShaper
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Run model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedNode:
    """A template node together with its output location."""

    node: TemplateNode
    resolved_path: str
    resolved_name: str

    @property
    def is_dir(self) -> bool:
        return self.node.is_dir


@dataclass
class MaterializeResult:
    """What a successful run created, in creation order."""

    archetype: str
    destination: Path
    directories: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Materializer
# ---------------------------------------------------------------------------


class Materializer:
    """Writes a resolved template tree to an output filesystem.

    Args:
        config: Run settings; defaults to ``GeneratorConfig()``.
        repository: Template store; defaults to a directory repository over
            ``config.template_dir`` (or the packaged templates).
        filesystem: Output store; defaults to the local disk.
        renderer: Placeholder resolver.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        repository: TemplateRepository | None = None,
        filesystem: OutputFilesystem | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.repository = repository or DirectoryTemplateRepository(self.config.template_dir)
        self.filesystem = filesystem or LocalFilesystem()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def materialize(
        self,
        archetype: str | Archetype,
        destination: str | Path | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> MaterializeResult:
        """Generate the project for *archetype* under *destination*.

        Args:
            archetype: Archetype identifier.
            destination: Output directory; defaults to ``config.dest_dir``.
            parameters: Finished parameter dictionary.

        Returns:
            The directories and files that were written.

        Raises:
            UnknownArchetypeError: Unknown *archetype*; nothing is written.
            TemplateSyntaxError: Malformed placeholder; nothing is written.
            UndefinedParameterError: Missing parameter; nothing is written.
            TemplateRenderError: A template failed while rendering; nothing
                is written.
            InvalidPathError: A path resolves outside the destination.
            PathCollisionError: Two nodes resolve to the same output.
            FilesystemError: A directory or file could not be written.
        """
        params = dict(parameters or {})
        dest = Path(destination) if destination is not None else self.config.dest_dir

        # 1. ENUMERATE
        tree = self.repository.get_template_tree(archetype)

        # 2. RESOLVE
        resolved = self.resolve_tree(tree, params)
        shaper = OutputShaper(
            self.renderer,
            params,
            marker_template=self.config.build_exclusion_marker,
            mask=self.config.mask_suffix,
        )
        resolved = [self._unmask(rn, shaper) for rn in resolved]
        _check_collisions(resolved)
        contents = {
            rn.resolved_path: self._render_file(rn, params, shaper)
            for rn in resolved
            if not rn.is_dir
        }

        # 3. WRITE
        result = MaterializeResult(archetype=tree.archetype, destination=dest)
        self._create_directories(dest, resolved, result)
        for rn in resolved:
            if rn.is_dir:
                continue
            result.files.append(self._write_file(dest, rn, contents[rn.resolved_path]))
        return result

    def resolve_tree(self, tree: TemplateTree, params: Mapping[str, Any]) -> list[ResolvedNode]:
        """Resolve the path and name of every node in *tree*.

        Either every node resolves or the first failure is raised.
        """
        resolved: list[ResolvedNode] = []
        for node in tree.nodes:
            path = self.renderer.resolve_path(node.original_path, params, tree.root_id)
            name = self.renderer.render_string(node.leaf_name, params, origin=node.original_path)
            _validate_relative(path, name, node)
            resolved.append(ResolvedNode(node=node, resolved_path=path, resolved_name=name))
        return resolved

    # -- Internal steps ----------------------------------------------------

    @staticmethod
    def _unmask(rn: ResolvedNode, shaper: OutputShaper) -> ResolvedNode:
        if rn.is_dir:
            return rn
        path, name = shaper.unmask(rn.resolved_path, rn.resolved_name)
        if name == rn.resolved_name:
            return rn
        return ResolvedNode(node=rn.node, resolved_path=path, resolved_name=name)

    def _create_directories(
        self, dest: Path, resolved: list[ResolvedNode], result: MaterializeResult
    ) -> None:
        seen: set[str] = set()
        wanted: list[str] = []
        for rn in resolved:
            rel = rn.resolved_path if rn.is_dir else str(PurePosixPath(rn.resolved_path).parent)
            if rel not in seen:
                seen.add(rel)
                wanted.append(rel)

        self.filesystem.make_dirs(dest)
        for rel in wanted:
            target = dest if rel == "." else dest / rel
            self.filesystem.make_dirs(target)
            if rel != ".":
                result.directories.append(target)

    def _render_file(
        self, rn: ResolvedNode, params: Mapping[str, Any], shaper: OutputShaper
    ) -> bytes:
        # Content always comes from the original template location.
        raw = self.repository.read_bytes(rn.node)
        content = self.renderer.resolve_bytes(raw, params, origin=rn.node.original_path)
        return shaper.strip_build_exclusions(content)

    def _write_file(self, dest: Path, rn: ResolvedNode, content: bytes) -> Path:
        target = dest / rn.resolved_path
        self.filesystem.write_bytes(target, content)
        return target


# ---------------------------------------------------------------------------
# Module-level convenience
# ---------------------------------------------------------------------------


def materialize(
    archetype: str | Archetype,
    destination: str | Path | None = None,
    parameters: Mapping[str, Any] | None = None,
    config: GeneratorConfig | None = None,
) -> MaterializeResult:
    """Materialize *archetype* with a default ``Materializer``."""
    return Materializer(config).materialize(archetype, destination, parameters)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _validate_relative(path: str, name: str, node: TemplateNode) -> None:
    """Reject resolved paths that are empty or would escape the destination."""
    origin = node.original_path
    if not path or not name:
        raise InvalidPathError(f"Template {origin!r} resolves to an empty path", origin)
    parts = path.split("/")
    if path.startswith("/") or any(part in ("", ".", "..") for part in parts):
        raise InvalidPathError(
            f"Template {origin!r} resolves to {path!r}, which is not a safe relative path",
            origin,
        )


def _check_collisions(resolved: list[ResolvedNode]) -> None:
    """Raise ``PathCollisionError`` when outputs overlap.

    Two directories resolving to the same path merge; anything involving a
    file is a collision.  Parent directories implied by a path count as
    directories.
    """
    owners: dict[str, ResolvedNode] = {}
    implied: dict[str, ResolvedNode] = {}
    for rn in resolved:
        path = rn.resolved_path
        previous = owners.get(path)
        if previous is not None and not (previous.is_dir and rn.is_dir):
            raise PathCollisionError(path, previous.node.original_path, rn.node.original_path)
        owners[path] = rn
        for parent in PurePosixPath(path).parents:
            if str(parent) != ".":
                implied.setdefault(str(parent), rn)

    for path, rn in owners.items():
        if not rn.is_dir and path in implied:
            raise PathCollisionError(path, rn.node.original_path, implied[path].node.original_path)
