"""Jinja2 placeholder resolution for template paths and file contents.

Provides the TemplateRenderer class which expands ``{{ Name }}`` placeholders
against a parameter dictionary.  The same rules apply to directory/file names
and to file bytes: a malformed placeholder raises ``TemplateSyntaxError`` and a
placeholder naming a key that is not in the dictionary raises
``UndefinedParameterError``.  Undefined names are found statically, before
anything is rendered, so a whole tree can be checked up front.

Every piece of template syntax starts with ``{{``: block tags are written
``{{% if Name %}}`` and comments ``{{# ... #}}``.  Text without ``{{`` is
never handed to Jinja2 and comes back unchanged, so ``{%d}`` in a format
string or ``${#ARR[@]}`` in a shell script needs no escaping.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError, UndefinedError, meta, select_autoescape
from jinja2 import TemplateSyntaxError as JinjaSyntaxError

from .errors import TemplateRenderError, TemplateSyntaxError, UndefinedParameterError

PLACEHOLDER_START = "{{"

_UNDEFINED_NAME_RE = re.compile(r"'([^']+)' is undefined")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Resolves placeholders in path strings and file contents.

    The renderer is stateless between calls; one instance can be shared by
    every node of a run.
    """

    def __init__(self) -> None:
        self.env = Environment(
            block_start_string="{{%",
            block_end_string="%}}",
            comment_start_string="{{#",
            comment_end_string="#}}",
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = _pascal_case_filter
        # Rendered output uses the newline style of its source.
        self._envs: dict[str, Environment] = {"\n": self.env}

    # -- Static checks -----------------------------------------------------

    def referenced_names(self, source: str, origin: str = "") -> set[str]:
        """Return the parameter names *source* refers to.

        Raises:
            TemplateSyntaxError: If *source* cannot be parsed.
        """
        if PLACEHOLDER_START not in source:
            return set()
        try:
            ast = self.env.parse(source)
        except JinjaSyntaxError as exc:
            raise TemplateSyntaxError(exc.message or str(exc), origin, exc.lineno) from exc
        return {name for name in meta.find_undeclared_variables(ast) if name not in self.env.globals}

    def check(self, source: str, params: Mapping[str, Any], origin: str = "") -> None:
        """Verify that *source* parses and that every name it uses is in *params*."""
        missing = self.referenced_names(source, origin) - set(params)
        if missing:
            raise UndefinedParameterError(missing, origin)

    # -- Rendering ---------------------------------------------------------

    def render_string(self, source: str, params: Mapping[str, Any], origin: str = "") -> str:
        """Render *source* with *params*.

        Strings without placeholders come back unchanged.

        Args:
            source: Template text.
            params: Parameter dictionary.
            origin: Template path used in error messages.

        Returns:
            The resolved text.

        Raises:
            TemplateSyntaxError: Malformed template syntax.
            UndefinedParameterError: A referenced name is not in *params*.
            TemplateRenderError: Rendering failed for any other reason.
        """
        self.check(source, params, origin)
        if PLACEHOLDER_START not in source:
            return source

        env = self._env_for(source)
        try:
            template = env.from_string(source)
        except JinjaSyntaxError as exc:
            # e.g. an unknown filter, reported when the template is compiled
            raise TemplateSyntaxError(exc.message or str(exc), origin, exc.lineno) from exc

        try:
            return template.render(**params)
        except UndefinedError as exc:
            match = _UNDEFINED_NAME_RE.fullmatch(str(exc))
            if match:
                raise UndefinedParameterError([match.group(1)], origin) from exc
            raise TemplateRenderError(str(exc), origin) from exc
        except (TemplateError, TypeError, ValueError, ArithmeticError, LookupError) as exc:
            raise TemplateRenderError(str(exc), origin) from exc

    def resolve_path(self, path: str, params: Mapping[str, Any], root_id: str = "") -> str:
        """Resolve a template path into a path relative to the destination.

        Placeholders are substituted first; then the archetype's root id is
        removed as the leading component, followed by one leading ``/``.
        """
        resolved = self.render_string(path, params, origin=path)
        if root_id:
            if resolved == root_id:
                resolved = ""
            elif resolved.startswith(root_id + "/"):
                resolved = resolved[len(root_id):]
        if resolved.startswith("/"):
            resolved = resolved[1:]
        return resolved

    def resolve_bytes(self, data: bytes, params: Mapping[str, Any], origin: str = "") -> bytes:
        """Resolve placeholders in UTF-8 file content.

        Content that is not valid UTF-8 is treated as a binary asset and
        returned untouched.
        """
        text = _decode(data)
        if text is None or PLACEHOLDER_START not in text:
            return data
        return self.render_string(text, params, origin).encode("utf-8")

    def _env_for(self, source: str) -> Environment:
        newline = _newline_style(source)
        env = self._envs.get(newline)
        if env is None:
            env = self._envs[newline] = self.env.overlay(newline_sequence=newline)
        return env


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", str(value))
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _decode(data: bytes) -> str | None:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _newline_style(text: str) -> str:
    """Return the first line ending used in *text* (``\\n`` if there is none)."""
    match = re.search(r"\r\n|\r|\n", text)
    return match.group(0) if match else "\n"
