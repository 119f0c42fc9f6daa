from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import EffectiveConfig


PACKAGE_ROOT = Path(__file__).resolve().parent
BUNDLED_TEMPLATES_DIR = PACKAGE_ROOT / "templates"
BUNDLED_STATIC_DIR = PACKAGE_ROOT / "static"


@dataclass(frozen=True)
class ServerPaths:
    root: Path
    recipes_dir: Path
    templates_dir: Path
    static_dir: Path


def resolve_server_paths(cfg: EffectiveConfig) -> ServerPaths:
    root = Path(cfg.project_dir)
    return ServerPaths(
        root=root,
        recipes_dir=_resolve(root, Path(cfg.recipes_dir)),
        templates_dir=_resolve_dir(root, Path(cfg.templates_dir), BUNDLED_TEMPLATES_DIR),
        static_dir=_resolve_dir(root, Path(cfg.static_dir), BUNDLED_STATIC_DIR),
    )


def _resolve(root: Path, rel: Path) -> Path:
    return rel if rel.is_absolute() else root / rel


def _resolve_dir(root: Path, rel: Path, fallback: Path) -> Path:
    candidate = _resolve(root, rel)
    if candidate.is_dir():
        return candidate
    return fallback
