"""Boilerplate configuration.

Typed configuration for the generator. Settings use Pydantic v2 models so
they are validated at construction time and can be read from environment
variables without boiler-plate. A ``GeneratorConfig`` is created once by the
CLI (or by library callers) and passed explicitly into the ``Materializer``;
nothing in the package keeps process-wide mutable state.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_BUILD_EXCLUSION_MARKER = "// +build exclude {{ ProjectName }}\n"
DEFAULT_MASK_SUFFIX = "_"


class GeneratorConfig(BaseModel):
    """Settings for a single materialization run."""

    dest_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory the generated project is written under",
    )
    template_dir: Path | None = Field(
        default=None,
        description="Alternative template store (defaults to the packaged templates)",
    )
    build_exclusion_marker: str = Field(
        default=DEFAULT_BUILD_EXCLUSION_MARKER,
        description="Template for the marker line stripped from generated files",
    )
    mask_suffix: str = Field(
        default=DEFAULT_MASK_SUFFIX,
        min_length=1,
        description="Trailing character that masks reserved file names in the template store",
    )
    max_prompt_attempts: int = Field(
        default=3, ge=1, description="How many times invalid answers are re-prompted"
    )

    @field_validator("build_exclusion_marker")
    @classmethod
    def check_marker(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("build_exclusion_marker must not be blank")
        return value

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            BOILERPLATE_DEST_DIR, BOILERPLATE_TEMPLATE_DIR,
            BOILERPLATE_MAX_PROMPT_ATTEMPTS.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BOILERPLATE_DEST_DIR"):
            kwargs["dest_dir"] = Path(os.environ["BOILERPLATE_DEST_DIR"])
        if os.environ.get("BOILERPLATE_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["BOILERPLATE_TEMPLATE_DIR"])
        if os.environ.get("BOILERPLATE_MAX_PROMPT_ATTEMPTS"):
            kwargs["max_prompt_attempts"] = int(os.environ["BOILERPLATE_MAX_PROMPT_ATTEMPTS"])
        return cls(**kwargs)
