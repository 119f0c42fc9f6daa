from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from recipeshelf.config import EffectiveConfig, resolve_config  # noqa: E402
from recipeshelf.services.web_service import create_app  # noqa: E402


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    recipes = project / "recipes"
    (recipes / "desserts").mkdir(parents=True)
    (recipes / "spicy_tofu_stir_fry").write_text("Press the tofu\nFry it hot", encoding="utf-8")
    (recipes / "desserts" / "lemon_tart").write_text("Blind bake the crust", encoding="utf-8")
    (recipes / "pancakes.md").write_text(
        "---\ntitle: Pancakes\nserves: 4\ntags: [breakfast, sweet]\n---\nWhisk\nRest\n",
        encoding="utf-8",
    )
    return project


@pytest.fixture()
def make_config(temp_home: Path) -> Callable[..., EffectiveConfig]:
    def _make(project: Path, **overrides: Any) -> EffectiveConfig:
        args: dict[str, Any] = {"project": str(project)}
        args.update(overrides)
        return resolve_config(args)

    return _make


@pytest.fixture()
def app(project_dir: Path, make_config: Callable[..., EffectiveConfig]):
    flask_app = create_app(make_config(project_dir))
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture()
def client(app):
    return app.test_client()
