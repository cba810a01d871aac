"""Output shaping applied after placeholder resolution.

Two independent transforms:

* un-masking reserved file names: ``go.mod_`` is stored with a trailing mask
  so the generator's own build does not mistake it for its manifest, and is
  written as ``go.mod``;
* stripping the build-exclusion marker line that keeps template sources out
  of the generator's own build.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config import DEFAULT_BUILD_EXCLUSION_MARKER, DEFAULT_MASK_SUFFIX
from .templates import TemplateRenderer


def unmask_name(name: str, mask: str = DEFAULT_MASK_SUFFIX) -> str:
    """Strip exactly one trailing *mask* from *name*, if present."""
    if mask and name.endswith(mask) and len(name) > len(mask):
        return name[: -len(mask)]
    return name


def unmask_path(path: str, mask: str = DEFAULT_MASK_SUFFIX) -> str:
    """Strip one trailing *mask* from the final segment of a posix *path*."""
    head, sep, last = path.rpartition("/")
    return f"{head}{sep}{unmask_name(last, mask)}"


class OutputShaper:
    """Applies the reserved-name and build-marker transforms for one run.

    The marker template is resolved once, against the same parameters as
    the files, when the shaper is created.
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        params: Mapping[str, Any],
        *,
        marker_template: str = DEFAULT_BUILD_EXCLUSION_MARKER,
        mask: str = DEFAULT_MASK_SUFFIX,
    ) -> None:
        self.mask = mask
        self.marker = renderer.render_string(marker_template, params, origin="<build exclusion marker>")

    def is_masked(self, name: str) -> bool:
        return unmask_name(name, self.mask) != name

    def unmask(self, resolved_path: str, resolved_name: str) -> tuple[str, str]:
        """Return the un-masked ``(path, name)`` pair for a file."""
        if not self.is_masked(resolved_name):
            return resolved_path, resolved_name
        return unmask_path(resolved_path, self.mask), unmask_name(resolved_name, self.mask)

    def strip_build_exclusions(self, content: bytes) -> bytes:
        """Remove every occurrence of the resolved marker from *content*."""
        marker = self.marker.encode("utf-8")
        if not marker:
            return content
        return content.replace(marker, b"")
