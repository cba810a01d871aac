"""Parameter models for each project archetype.

Every archetype has a Pydantic model whose field aliases are the placeholder
names used in its templates (``ProjectName``, ``EnvPrefix``, ...).  Field
descriptions double as prompt messages for the interactive collector.
``as_map()`` produces the finished parameter dictionary, including derived
values such as ``ProjectPackageName``, which the scaffolding engine then
treats as ordinary entries.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator

from .scaffolder.errors import ParameterValidationError, UnknownArchetypeError
from .scaffolder.repository import Archetype, archetype_id

_NAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_ENV_PREFIX_RE = re.compile(r"^[A-Z][A-Z0-9_]*$")
_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")
_GO_VERSION_RE = re.compile(r"^\d+\.\d+(\.\d+)?$")

# Fields filled in from other answers rather than asked for.
_NO_PROMPT = {"prompt": False}


def _check_email(value: str) -> str:
    if not _EMAIL_RE.match(value):
        raise ValueError(f"{value!r} is not a valid email address")
    return value


Email = Annotated[str, AfterValidator(_check_email)]


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ProjectParams(BaseModel):
    """Parameters every archetype needs."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    project_name: str = Field(
        ..., alias="ProjectName", description="Enter your project name (e.g. my-service)."
    )
    project_package: str = Field(
        ...,
        alias="ProjectPackage",
        description="Enter your project package (e.g. github.com/you/my-service).",
    )
    project_short_desc: str = Field(
        default="", alias="ProjectShortDesc", description="Enter a short project description."
    )
    project_long_desc: str = Field(
        default="", alias="ProjectLongDesc", description="Enter a long project description."
    )
    project_version: str = Field(
        default="0.1.0", alias="ProjectVersion", description="Enter the initial project version."
    )
    golang_version: str = Field(
        default="1.22", alias="GolangVersion", description="Enter the Go version to build with."
    )
    dbt_repo: str = Field(
        default="", alias="DbtRepo", description="Enter the DBT trusted repository URL (optional)."
    )

    @field_validator("project_name")
    @classmethod
    def check_name(cls, value: str) -> str:
        if not _NAME_RE.match(value):
            raise ValueError(
                "project name must start with a letter and contain only letters, digits, '-' or '_'"
            )
        return value

    @field_validator("project_package")
    @classmethod
    def check_package(cls, value: str) -> str:
        if not value or any(ch.isspace() for ch in value):
            raise ValueError("project package must be non-empty and contain no whitespace")
        return value

    @field_validator("project_version")
    @classmethod
    def check_version(cls, value: str) -> str:
        if not _SEMVER_RE.match(value):
            raise ValueError("project version must look like MAJOR.MINOR.PATCH")
        return value

    @field_validator("golang_version")
    @classmethod
    def check_go_version(cls, value: str) -> str:
        if not _GO_VERSION_RE.match(value):
            raise ValueError("Go version must look like MAJOR.MINOR or MAJOR.MINOR.PATCH")
        return value

    @property
    def package_name(self) -> str:
        """Go package-safe version of the project name."""
        return self.project_name.replace("-", "")

    def as_map(self) -> dict[str, Any]:
        """Return the parameter dictionary used for template resolution."""
        data = self.model_dump(by_alias=True)
        data["ProjectPackageName"] = self.package_name
        return data


class CobraParams(ProjectParams):
    """Parameters for the ``cobra`` CLI tool archetype."""

    maintainer_name: str = Field(
        default="", alias="MaintainerName", description="Enter the maintainer's name."
    )
    maintainer_email: Email = Field(
        default="you@example.com",
        alias="MaintainerEmail",
        description="Enter the maintainer's email address.",
    )


class ServiceParams(CobraParams):
    """Shared parameters of the service archetypes."""

    env_prefix: str = Field(
        default="SERVICE",
        alias="EnvPrefix",
        description="Enter environment variable prefix for your service.",
    )
    default_server_port: str = Field(
        default="8080", alias="DefaultServerPort", description="Enter default server port."
    )
    server_short_desc: str = Field(
        default="", alias="ServerShortDesc", json_schema_extra=_NO_PROMPT
    )
    server_long_desc: str = Field(
        default="", alias="ServerLongDesc", json_schema_extra=_NO_PROMPT
    )
    owner_name: str = Field(
        default="example", alias="OwnerName", description="Enter the owner/organization name."
    )
    owner_email: Email = Field(
        default="code@example.com",
        alias="OwnerEmail",
        description="Enter the owner/organization email address.",
    )

    @field_validator("env_prefix")
    @classmethod
    def check_env_prefix(cls, value: str) -> str:
        if not _ENV_PREFIX_RE.match(value):
            raise ValueError("env prefix must be upper case letters, digits and '_'")
        return value

    @field_validator("default_server_port")
    @classmethod
    def check_port(cls, value: str) -> str:
        if not value.isdigit() or not 1 <= int(value) <= 65535:
            raise ValueError(f"{value!r} is not a valid port (1-65535)")
        return value

    @model_validator(mode="after")
    def default_server_descriptions(self) -> "ServiceParams":
        if not self.server_short_desc:
            self.server_short_desc = self.project_short_desc
        if not self.server_long_desc:
            self.server_long_desc = self.project_long_desc
        return self


class HeadlessServiceParams(ServiceParams):
    """Parameters for the ``headless-service`` archetype."""

    default_server_port: str = Field(
        default="8080", alias="DefaultServerPort", description="Enter default metrics port."
    )


class IndirectSelectionParams(ServiceParams):
    """Parameters for the ``indirect-selection`` RPC service archetype."""

    env_prefix: str = Field(
        default="SERVICE",
        alias="EnvPrefix",
        description="Enter environment variable prefix for your indirect selection service.",
    )
    default_server_port: str = Field(
        default="50001", alias="DefaultServerPort", description="Enter default gRPC port."
    )


class SPAParams(ProjectParams):
    """Parameters for the ``spa`` single page application archetype."""

    project_maintainer_name: str = Field(
        default="", alias="ProjectMaintainerName", description="Enter the maintainer's name."
    )
    project_maintainer_email: Email = Field(
        default="you@example.com",
        alias="ProjectMaintainerEmail",
        description="Enter the maintainer's email address.",
    )

    def as_map(self) -> dict[str, Any]:
        data = super().as_map()
        data["ProjectEnvPrefix"] = self.project_name.replace("-", "_").upper()
        return data


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

PARAMS_BY_ARCHETYPE: dict[str, type[ProjectParams]] = {
    Archetype.COBRA.value: CobraParams,
    Archetype.HEADLESS_SERVICE.value: HeadlessServiceParams,
    Archetype.SPA.value: SPAParams,
    Archetype.INDIRECT_SELECTION.value: IndirectSelectionParams,
}


def params_model_for(archetype: str | Archetype) -> type[ProjectParams]:
    """Return the parameter model for *archetype*."""
    key = archetype_id(archetype)
    try:
        return PARAMS_BY_ARCHETYPE[key]
    except KeyError:
        raise UnknownArchetypeError(key, PARAMS_BY_ARCHETYPE) from None


def prompt_fields(model: type[ProjectParams]) -> list[tuple[str, str, str | None]]:
    """Return ``(alias, message, default)`` for every field that is prompted for.

    ``default`` is ``None`` for required fields.
    """
    fields: list[tuple[str, str, str | None]] = []
    for name, info in model.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        if extra.get("prompt") is False:
            continue
        default = None if info.is_required() else info.default
        fields.append((info.alias or name, info.description or name, default))
    return fields


def load_parameter_file(path: str | Path) -> dict[str, Any]:
    """Load pre-supplied answers from a YAML or JSON mapping file.

    Raises:
        ParameterValidationError: If the file cannot be read or is not a mapping.
    """
    file_path = Path(path)
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ParameterValidationError(f"Cannot load parameters from {file_path}: {exc}", str(file_path)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParameterValidationError(
            f"Parameter file {file_path} must contain a mapping, got {type(data).__name__}",
            str(file_path),
        )
    return {str(k): "" if v is None else str(v) for k, v in data.items()}
