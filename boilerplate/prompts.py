"""Interactive parameter collection.

Asks the user for every parameter of an archetype, offering defaults, and
re-asks for answers that fail validation.  The finished, validated model is
handed to the scaffolding engine as a parameter dictionary via ``as_map()``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TextIO

from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Prompt

from .params import ProjectParams, params_model_for, prompt_fields
from .scaffolder.errors import ParameterValidationError
from .scaffolder.repository import Archetype, archetype_id
from .utils import console as default_console
from .utils import print_error


def format_validation_error(exc: ValidationError) -> list[str]:
    """Flatten a pydantic error into ``"Field: message"`` lines."""
    lines: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "parameters"
        lines.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return lines


class ParameterCollector:
    """Collects archetype parameters from the user.

    Args:
        console: Console used for prompts and error output.
        stream: Optional text stream to read answers from instead of stdin.
        max_attempts: How many rounds of prompting are allowed before giving up.
        interactive: When ``False`` nothing is asked; supplied answers and
            defaults are validated once.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        stream: TextIO | None = None,
        max_attempts: int = 3,
        interactive: bool = True,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.console = console or default_console
        self.stream = stream
        self.max_attempts = max_attempts
        self.interactive = interactive

    def collect(
        self, archetype: str | Archetype, answers: Mapping[str, Any] | None = None
    ) -> ProjectParams:
        """Return validated parameters for *archetype*.

        Args:
            archetype: Archetype whose parameter model is used.
            answers: Pre-supplied answers keyed by placeholder name; these
                are not asked for again unless they fail validation.

        Raises:
            ParameterValidationError: If the answers are still invalid after
                ``max_attempts`` rounds (or after one round when not
                interactive).
        """
        model = params_model_for(archetype)
        known: dict[str, Any] = {k: v for k, v in (answers or {}).items() if v is not None}
        last_errors: list[str] = []

        attempts = self.max_attempts if self.interactive else 1
        for _ in range(attempts):
            values = dict(known)
            if self.interactive:
                for alias, message, default in prompt_fields(model):
                    if alias not in values:
                        values[alias] = self.ask(message, default)
            try:
                return model.model_validate(values)
            except ValidationError as exc:
                last_errors = format_validation_error(exc)
                if self.interactive:
                    for line in last_errors:
                        print_error(line, out=self.console)
                invalid = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
                known = {k: v for k, v in values.items() if k not in invalid}

        raise ParameterValidationError(
            f"Invalid parameters for {archetype_id(archetype)!r}: " + "; ".join(last_errors)
        )

    def ask(self, message: str, default: str | None = None) -> str:
        """Ask one question; an empty answer takes *default*."""
        answer = Prompt.ask(
            message,
            console=self.console,
            default=default or "",
            show_default=bool(default),
            stream=self.stream,
        )
        answer = answer.strip() if isinstance(answer, str) else str(answer)
        return answer or (default or "")

    def choose_archetype(self, archetypes: Sequence[str]) -> str:
        """Let the user pick one of *archetypes* by number."""
        self.console.print("Available project types:")
        for i, name in enumerate(archetypes, start=1):
            self.console.print(f"  {i}. {name}")

        for _ in range(self.max_attempts):
            raw = self.ask("Please select a project type (number)")
            if not raw.isdigit():
                print_error("Please enter a valid number.", out=self.console)
                continue
            choice = int(raw)
            if not 1 <= choice <= len(archetypes):
                print_error(f"Please enter a number between 1 and {len(archetypes)}.", out=self.console)
                continue
            return archetypes[choice - 1]

        raise ParameterValidationError("No valid project type selected")
