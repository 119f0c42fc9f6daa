from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import json
import os
import tomllib
from typing import Any, Optional

from .errors import ConfigError


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class EffectiveConfig:
    recipes_dir: str
    templates_dir: str
    static_dir: str
    static_url: str
    host: str
    port: int
    trusted_html: bool
    log_level: str
    project_dir: str


def _config_root() -> Path:
    return Path(os.path.expanduser("~/.config/recipeshelf"))


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def load_profile(profile: str) -> Optional[str]:
    path = _config_root() / "projects.d" / f"{profile}.toml"
    if not path.exists():
        return None
    data = _load_toml(path)
    project = data.get("project")
    if not project:
        raise ConfigError(f"Profile {profile!r} missing 'project' key")
    return str(project)


def load_project_config(project_dir: str) -> dict[str, Any]:
    path = Path(project_dir) / "recipeshelf.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def merge_config(cli: dict[str, Any], project: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    merged = dict(global_cfg)
    merged.update(project)
    merged.update(cli)
    return merged


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    global_cfg = load_global_config()
    profile = cli_args.get("profile")
    project_dir = cli_args.get("project")
    if not project_dir and profile:
        project_dir = load_profile(profile)
    if not project_dir:
        project_dir = global_cfg.get("default_project") or os.getcwd()

    project_cfg = load_project_config(project_dir)
    merged = merge_config(_cli_to_dict(cli_args), project_cfg, global_cfg)

    return EffectiveConfig(
        recipes_dir=str(merged.get("recipes_dir", "recipes")),
        templates_dir=str(merged.get("templates_dir", "templates")),
        static_dir=str(merged.get("static_dir", "static")),
        static_url=_normalize_static_url(merged.get("static_url", "/static/")),
        host=str(merged.get("host", "")),
        port=_normalize_port(merged.get("port", 8000)),
        trusted_html=bool(merged.get("trusted_html", False)),
        log_level=_normalize_log_level(merged.get("log_level", "INFO")),
        project_dir=str(project_dir),
    )


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in (
        "recipes_dir",
        "templates_dir",
        "static_dir",
        "static_url",
        "host",
        "port",
        "log_level",
    ):
        if cli_args.get(key) is not None:
            out[key] = cli_args[key]
    # store_true flags only override when set
    if cli_args.get("trusted_html"):
        out["trusted_html"] = True
    return out


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = [
        f"recipes_dir = {_toml_str(cfg.recipes_dir)}",
        f"templates_dir = {_toml_str(cfg.templates_dir)}",
        f"static_dir = {_toml_str(cfg.static_dir)}",
        f"static_url = {_toml_str(cfg.static_url)}",
        f"host = {_toml_str(cfg.host)}",
        f"port = {cfg.port}",
        f"trusted_html = {str(cfg.trusted_html).lower()}",
        f"log_level = {_toml_str(cfg.log_level)}",
    ]
    return "\n".join(lines) + "\n"


def _toml_str(value: str) -> str:
    # JSON string escapes are a subset of TOML basic-string escapes
    return json.dumps(value, ensure_ascii=False)


def _normalize_static_url(value: Any) -> str:
    text = str(value or "").strip().strip("/")
    if not text:
        raise ConfigError("static_url must not be empty")
    return f"/{text}/"


def _normalize_port(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid port: {value!r}")
    try:
        port = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid port: {value!r}") from exc
    if not 1 <= port <= 65535:
        raise ConfigError(f"Port out of range: {port}")
    return port


def _normalize_log_level(value: Any) -> str:
    text = str(value or "").strip().upper()
    if text not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level: {value!r}")
    return text
