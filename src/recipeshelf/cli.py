from __future__ import annotations

import argparse
import json
import logging
import os
import shutil
import sys
from collections.abc import Callable

from .config import EffectiveConfig, config_to_toml, resolve_config
from .errors import ConfigError, RecipeNotFoundError, RecipeshelfError, ServeError
from .listing import scan_recipes
from .paths import BUNDLED_STATIC_DIR, BUNDLED_TEMPLATES_DIR, resolve_server_paths
from .services.web_service import create_app
from .store import RecipeStore

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "serve": _cmd_serve,
        "list": _cmd_list,
        "show": _cmd_show,
        "config": _cmd_config,
        "init": _cmd_init,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help(sys.stderr)
        return 1

    try:
        return handler(args)
    except RecipeshelfError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)


def _common_parser(default: object) -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False, argument_default=default)
    common.add_argument("--project")
    common.add_argument("--profile")
    common.add_argument("--recipes-dir")
    common.add_argument("--templates-dir")
    common.add_argument("--static-dir")
    common.add_argument("--static-url")
    common.add_argument("--log-level")
    return common


def _build_parser() -> argparse.ArgumentParser:
    # subcommand copies must not reset flags given before the subcommand
    common = _common_parser(argparse.SUPPRESS)

    parser = argparse.ArgumentParser(prog="recipeshelf", parents=[_common_parser(None)])
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", parents=[common])
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.add_argument("--trusted-html", action="store_true", help="Embed recipe files as raw HTML")

    listing = sub.add_parser("list", parents=[common])
    listing.add_argument("--json", action="store_true")

    show = sub.add_parser("show", parents=[common])
    show.add_argument("title")

    sub.add_parser("config", parents=[common])

    init = sub.add_parser("init")
    init.add_argument("path", nargs="?", default=".")
    init.add_argument("--force", action="store_true")

    return parser


def _cmd_serve(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    logging.basicConfig(level=cfg.log_level, format=LOG_FORMAT)
    app = create_app(cfg)
    try:
        app.run(host=cfg.host or "0.0.0.0", port=cfg.port)
    except OSError as exc:
        raise ServeError(f"Failed to listen on {cfg.host or '*'}:{cfg.port}: {exc}") from exc
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    recipes = scan_recipes(resolve_server_paths(cfg).recipes_dir)
    if args.json:
        print(json.dumps([{"title": r.title, "name": r.name, "path": r.path} for r in recipes], indent=2))
    else:
        for rec in recipes:
            print(f"{rec.title}: {rec.name}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    store = RecipeStore(resolve_server_paths(cfg).recipes_dir)
    store.rescan()
    entry = store.find_by_title(args.title)
    print(entry.name)
    print(entry.path)
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    print(config_to_toml(cfg), end="")
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    root = os.path.abspath(args.path)
    config_path = os.path.join(root, "recipeshelf.toml")
    if os.path.exists(config_path) and not args.force:
        raise ConfigError(f"{config_path} already exists (use --force to overwrite)")

    os.makedirs(os.path.join(root, "recipes"), exist_ok=True)
    shutil.copytree(BUNDLED_TEMPLATES_DIR, os.path.join(root, "templates"), dirs_exist_ok=True)
    shutil.copytree(BUNDLED_STATIC_DIR, os.path.join(root, "static"), dirs_exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as fh:
        fh.write(
            """recipes_dir = \"recipes\"\ntemplates_dir = \"templates\"\nstatic_dir = \"static\"\n# static_url = \"/static/\"\n# port = 8000\n# trusted_html = false\n"""
        )
    print(config_path)
    return 0


def _resolve_cfg(args: argparse.Namespace) -> EffectiveConfig:
    return resolve_config(vars(args).copy())


def _exit_code(exc: RecipeshelfError) -> int:
    if isinstance(exc, ConfigError):
        return 2
    if isinstance(exc, RecipeNotFoundError):
        return 3
    if isinstance(exc, ServeError):
        return 4
    return 1
