"""Integration tests for the packaged archetypes.

These tests run the real template store, parameter models and materializer
end-to-end and verify that every generated project is free of placeholders,
masked names and build-exclusion markers.

No external tools (Go toolchain, Node) are required.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from boilerplate import materialize, params_model_for
from boilerplate.scaffolder.errors import UndefinedParameterError, UnknownArchetypeError
from boilerplate.scaffolder.repository import list_archetypes

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _params_for(archetype: str, **overrides: Any) -> dict[str, Any]:
    model = params_model_for(archetype)
    values = {
        "ProjectName": "demo",
        "ProjectPackage": "example.com/demo",
        "ProjectShortDesc": "Demo project",
        "ProjectLongDesc": "A demo project generated in tests.",
        **overrides,
    }
    return model.model_validate(values).as_map()


def _generated_files(root: Path) -> list[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


# ---------------------------------------------------------------------------
# Every archetype
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("archetype", list_archetypes())
class TestEveryArchetype:
    def test_generates_clean_project(self, archetype: str, out_dir: Path):
        result = materialize(archetype, out_dir, _params_for(archetype))
        project = out_dir / "demo"

        assert project.is_dir()
        assert result.files == [f for f in result.files if f.is_file()]
        for path in _generated_files(out_dir):
            text = path.read_text(encoding="utf-8")
            assert "{{" not in text, f"unresolved placeholder in {path}"
            assert "{%" not in text, f"unresolved block in {path}"
            assert "+build exclude" not in text, f"build marker left in {path}"
            assert not path.name.endswith("_"), f"masked name left: {path}"

    def test_go_module(self, archetype: str, out_dir: Path):
        materialize(archetype, out_dir, _params_for(archetype))
        go_mod = out_dir / "demo" / "go.mod"
        assert go_mod.is_file()
        assert not (out_dir / "demo" / "go.mod_").exists()
        assert go_mod.read_text().startswith("module example.com/demo")

    def test_main_package(self, archetype: str, out_dir: Path):
        materialize(archetype, out_dir, _params_for(archetype))
        main_go = (out_dir / "demo" / "main.go").read_text()
        assert main_go.startswith("/*")
        assert "package main\n" in main_go
        assert "example.com/demo/cmd" in main_go

    def test_rerun_overwrites(self, archetype: str, out_dir: Path):
        materialize(archetype, out_dir, _params_for(archetype))
        first = {p: p.read_bytes() for p in _generated_files(out_dir)}
        materialize(archetype, out_dir, _params_for(archetype))
        second = {p: p.read_bytes() for p in _generated_files(out_dir)}
        assert first == second


# ---------------------------------------------------------------------------
# Headless service specifics
# ---------------------------------------------------------------------------


class TestHeadlessService:
    def test_root_command(self, out_dir: Path, headless_params: dict[str, str]):
        materialize("headless-service", out_dir, headless_params)
        root_go = (out_dir / "demo" / "cmd" / "root.go").read_text()
        assert "package cmd\n" in root_go
        assert "Demo service" in root_go

    def test_package_directory_uses_package_name(self, out_dir: Path):
        materialize("headless-service", out_dir, _params_for("headless-service", ProjectName="my-svc"))
        assert (out_dir / "my-svc" / "pkg" / "mysvc" / "mysvc.go").is_file()

    def test_env_prefix_and_port(self, out_dir: Path):
        params = _params_for("headless-service", EnvPrefix="DEMO", DefaultServerPort="9100")
        materialize("headless-service", out_dir, params)
        text = "".join(p.read_text() for p in _generated_files(out_dir / "demo" / "cmd"))
        text += "".join(p.read_text() for p in _generated_files(out_dir / "demo" / "pkg"))
        assert "DEMO" in text
        assert "9100" in text


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_unknown_archetype_writes_nothing(self, out_dir: Path, headless_params: dict[str, str]):
        with pytest.raises(UnknownArchetypeError):
            materialize("bogus", out_dir, headless_params)
        assert not out_dir.exists()

    def test_missing_parameter_writes_nothing(self, out_dir: Path, headless_params: dict[str, str]):
        params = {k: v for k, v in headless_params.items() if k != "ProjectName"}
        with pytest.raises(UndefinedParameterError) as exc_info:
            materialize("headless-service", out_dir, params)
        assert "ProjectName" in exc_info.value.names
        assert not out_dir.exists()

    def test_missing_content_parameter_writes_nothing(
        self, out_dir: Path, headless_params: dict[str, str]
    ):
        params = {k: v for k, v in headless_params.items() if k != "EnvPrefix"}
        with pytest.raises(UndefinedParameterError):
            materialize("headless-service", out_dir, params)
        assert not out_dir.exists()
