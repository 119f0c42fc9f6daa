from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, Flask, Response, abort, current_app, render_template, request, send_from_directory
from jinja2 import TemplateError
from markupsafe import Markup

from ..config import EffectiveConfig
from ..errors import RecipeNotFoundError
from ..paths import resolve_server_paths
from ..store import RecipeStore
from .body_service import load_recipe

logger = logging.getLogger(__name__)

STORE_KEY = "recipeshelf.store"
CONFIG_KEY = "recipeshelf.config"

bp = Blueprint("recipes", __name__)


def create_app(cfg: EffectiveConfig, store: RecipeStore | None = None) -> Flask:
    paths = resolve_server_paths(cfg)
    app = Flask(__name__, template_folder=str(paths.templates_dir), static_folder=None)
    app.config["STATIC_DIR"] = str(paths.static_dir)
    app.extensions[CONFIG_KEY] = cfg
    app.extensions[STORE_KEY] = store if store is not None else RecipeStore(paths.recipes_dir)

    app.register_blueprint(bp)
    app.add_url_rule(cfg.static_url, "static_root", serve_static)
    app.add_url_rule(f"{cfg.static_url}<path:filename>", "static_file", serve_static)
    return app


def render_view(view: str, title: str, data: Any, status: int = 200, **extra: Any) -> Response:
    """Render ``<view>.html`` on top of ``base.html``.

    ``static_prefix`` always comes from the active config, whatever the
    caller passed in ``extra``.
    """
    cfg = _config()
    context = dict(extra)
    context.update(title=title, data=data, static_prefix=cfg.static_url)
    try:
        body = render_template(f"{view}.html", **context)
    except TemplateError:
        logger.exception("Template error rendering view %r", view)
        return Response("", status=500)
    return Response(body, status=status, mimetype="text/html")


@bp.route("/")
def home() -> Response:
    recipes = _store().rescan()
    return render_view("index", "Recipes", recipes)


@bp.route("/recipe/", methods=["GET", "POST"])
def recipe() -> Response:
    store = _store()
    if store.is_empty:
        store.rescan()

    title = request.values.get("title", "")
    try:
        entry = store.find_by_title(title)
    except RecipeNotFoundError as exc:
        logger.info("Failed to find recipe: %s", exc)
        return render_view("not_found", "Recipe not found", title, status=404, query=title)

    doc = load_recipe(entry, trusted_html=_config().trusted_html)
    return render_view("recipe", f"Recipe: {entry.name}", Markup(doc.html), meta=doc.meta)


def serve_static(filename: str = "") -> Response:
    if not filename:
        abort(404)
    return send_from_directory(current_app.config["STATIC_DIR"], filename)


def _store() -> RecipeStore:
    return current_app.extensions[STORE_KEY]


def _config() -> EffectiveConfig:
    return current_app.extensions[CONFIG_KEY]
