from __future__ import annotations

from pathlib import Path

import pytest

from maytapi_relay.config import Settings


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project root with a minimal static/ directory."""
    static = tmp_path / "static"
    static.mkdir()
    (static / "index.html").write_text("<h1>send form</h1>", encoding="utf-8")
    (static / "app.css").write_text("body { color: red; }", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> Settings:
    return Settings(
        maytapi_instance_id="inst-42",
        maytapi_token="secret-token",
        project_root=project_root,
    )
