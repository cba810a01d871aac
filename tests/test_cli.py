"""Unit tests for the command line entry point (boilerplate.cli)."""

from __future__ import annotations

from pathlib import Path

import pytest

from boilerplate import cli
from boilerplate.cli import build_parser, main

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BOILERPLATE_DEST_DIR", "BOILERPLATE_TEMPLATE_DIR", "BOILERPLATE_MAX_PROMPT_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def answers(tmp_path: Path) -> Path:
    path = tmp_path / "answers.yaml"
    path.write_text(
        "ProjectName: demo\n"
        "ProjectPackage: example.com/demo\n"
        "ProjectShortDesc: Demo service\n"
        "MaintainerName: Jane Doe\n"
        "MaintainerEmail: jane@example.com\n"
    )
    return path


class TestParser:
    def test_gen_options(self):
        args = build_parser().parse_args(
            ["gen", "-t", "spa", "-d", "out", "-p", "a.yaml", "--no-input", "--dry-run"]
        )
        assert args.command == "gen"
        assert args.type_flag == "spa"
        assert args.project_type is None
        assert args.dest_dir == "out"
        assert args.params == "a.yaml"
        assert args.no_input and args.dry_run

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_version(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "boilerplate" in capsys.readouterr().out


class TestList:
    def test_lists_archetypes(self, capsys: pytest.CaptureFixture[str]):
        assert main(["list"]) == 0
        out = capsys.readouterr().out.split()
        assert out == ["cobra", "headless-service", "spa", "indirect-selection"]


class TestGen:
    def test_generates_project(self, tmp_path: Path, answers: Path, capsys: pytest.CaptureFixture[str]):
        dest = tmp_path / "out"
        code = main(["gen", "headless-service", "-d", str(dest), "-p", str(answers), "--no-input"])
        assert code == 0
        assert (dest / "demo" / "go.mod").is_file()
        assert (dest / "demo" / "cmd" / "root.go").is_file()
        assert "New project created in ./demo" in capsys.readouterr().out

    def test_type_flag_wins(self, tmp_path: Path, answers: Path):
        dest = tmp_path / "out"
        code = main(["gen", "spa", "-t", "cobra", "-d", str(dest), "-p", str(answers), "--no-input"])
        assert code == 0
        assert (dest / "demo" / "cmd" / "version.go").is_file()

    def test_dest_dir_from_env(
        self, tmp_path: Path, answers: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("BOILERPLATE_DEST_DIR", str(tmp_path / "env-out"))
        assert main(["gen", "cobra", "-p", str(answers), "--no-input"]) == 0
        assert (tmp_path / "env-out" / "demo" / "main.go").is_file()

    def test_invalid_type(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        dest = tmp_path / "out"
        assert main(["gen", "bogus", "-d", str(dest), "--no-input"]) == 1
        assert "Invalid project type" in capsys.readouterr().out
        assert not dest.exists()

    def test_type_required_without_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        assert main(["gen", "-d", str(tmp_path), "--no-input"]) == 1
        assert "project type is required" in capsys.readouterr().out

    def test_missing_parameters(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        dest = tmp_path / "out"
        assert main(["gen", "cobra", "-d", str(dest), "--no-input"]) == 1
        assert "Error:" in capsys.readouterr().out
        assert not dest.exists()

    def test_bad_parameter_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        bad = tmp_path / "bad.yaml"
        bad.write_text("- not\n- a mapping\n")
        assert main(["gen", "cobra", "-d", str(tmp_path / "out"), "-p", str(bad), "--no-input"]) == 1
        out = " ".join(capsys.readouterr().out.split())
        assert "must contain a mapping" in out

    def test_dry_run_writes_nothing(
        self, tmp_path: Path, answers: Path, capsys: pytest.CaptureFixture[str]
    ):
        dest = tmp_path / "out"
        code = main(["gen", "cobra", "-d", str(dest), "-p", str(answers), "--no-input", "--dry-run"])
        assert code == 0
        assert not dest.exists()
        out = capsys.readouterr().out
        assert "main.go" in out
        assert "go.mod" in out
        assert "Dry run" in out

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch):
        def interrupted(args, config):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli, "run_gen", interrupted)
        assert main(["gen", "cobra"]) == 130
