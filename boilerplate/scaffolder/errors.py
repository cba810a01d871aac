"""Exceptions raised by the scaffolding engine.

Every error carries the template or output ``path`` that triggered it so the
command line can report exactly which file broke a run.
"""

from __future__ import annotations

from collections.abc import Iterable


class BoilerplateError(Exception):
    """Base class for all scaffolding failures."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class UnknownArchetypeError(BoilerplateError):
    """Raised when an archetype identifier is not registered."""

    def __init__(self, archetype: str, valid: Iterable[str] = ()) -> None:
        self.archetype = archetype
        self.valid = list(valid)
        message = f"Unknown project type: {archetype!r}"
        if self.valid:
            message += f". Valid project types are: {', '.join(self.valid)}"
        super().__init__(message)


class TemplateSyntaxError(BoilerplateError):
    """Raised when a path or content template contains a malformed placeholder."""

    def __init__(self, message: str, path: str = "", lineno: int | None = None) -> None:
        self.lineno = lineno
        location = f"{path}:{lineno}" if path and lineno else path
        super().__init__(f"Template syntax error in {location or '<string>'}: {message}", path)


class UndefinedParameterError(BoilerplateError):
    """Raised when a placeholder references a parameter that was not supplied."""

    def __init__(self, names: Iterable[str], path: str = "") -> None:
        self.names = sorted(set(names))
        joined = ", ".join(self.names)
        super().__init__(
            f"Undefined parameter(s) {joined} referenced in {path or '<string>'}", path
        )


class TemplateRenderError(BoilerplateError):
    """Raised when a well-formed template fails while rendering.

    Examples are attribute access on a string parameter or a filter applied
    to a value it cannot handle.  The Jinja2 or Python error is chained as
    ``__cause__``.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"Cannot render {path or '<string>'}: {message}", path)


class InvalidPathError(BoilerplateError):
    """Raised when a resolved path would land outside the destination."""


class PathCollisionError(BoilerplateError):
    """Raised when two template nodes resolve to the same output path."""

    def __init__(self, path: str, first: str, second: str) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Templates {first!r} and {second!r} both resolve to {path!r}", path
        )


class FilesystemError(BoilerplateError):
    """Raised when creating a directory or writing a file fails.

    The underlying ``OSError`` is chained as ``__cause__``.
    """


class ParameterValidationError(BoilerplateError):
    """Raised when collected parameters stay invalid after every allowed attempt."""
