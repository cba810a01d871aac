"""Shared pytest fixtures for the boilerplate test suite.

Provides reusable fixtures for:
- Complete parameter dictionaries for the packaged archetypes
- Throw-away template stores built under ``tmp_path``
- Materializers wired to those stores
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from boilerplate.params import HeadlessServiceParams
from boilerplate.scaffolder.repository import DirectoryTemplateRepository


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

@pytest.fixture
def headless_params() -> dict[str, str]:
    """Finished parameter dictionary for a ``headless-service`` named demo."""
    params = HeadlessServiceParams(
        ProjectName="demo",
        ProjectPackage="example.com/demo",
        ProjectShortDesc="Demo service",
        ProjectLongDesc="A demo headless service.",
        MaintainerName="Jane Doe",
        MaintainerEmail="jane@example.com",
    )
    return params.as_map()


@pytest.fixture
def simple_params() -> dict[str, str]:
    """Small dictionary used with hand-built template stores."""
    return {"ProjectName": "demo", "ProjectPackageName": "demopkg", "Greeting": "hello"}


# ---------------------------------------------------------------------------
# Template stores
# ---------------------------------------------------------------------------

TemplateStoreFactory = Callable[[dict[str, str | bytes | None]], DirectoryTemplateRepository]


@pytest.fixture
def make_store(tmp_path: Path) -> TemplateStoreFactory:
    """Build a template store with a single ``demo`` archetype rooted at ``_demoProject``.

    Keys are posix paths below the root; a value of ``None`` creates an
    (empty) directory, anything else a file.
    """

    def _make(files: dict[str, str | bytes | None]) -> DirectoryTemplateRepository:
        store = tmp_path / "templates"
        root = store / "_demoProject"
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            target = root / rel
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return DirectoryTemplateRepository(store, roots={"demo": "_demoProject"})

    return _make


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Destination directory (not created in advance)."""
    return tmp_path / "out"
