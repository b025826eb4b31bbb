"""Baby Accounts console application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield the import paths of modules exposing ``bp`` or ``blueprints``."""

    yield "babyaccounts.blueprints.home"
    yield "babyaccounts.blueprints.reference"
    yield "babyaccounts.blueprints.transactions"
    yield "babyaccounts.blueprints.reports"


def create_app(config_name: str | None = None, *, api=None) -> Flask:
    """Create and configure the Flask application instance.

    ``api`` replaces the HTTP backend client; the test-suite uses it to
    install an in-memory backend.
    """

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config["BABYACCOUNTS_CONFIG"] = config_obj

    from .logging_config import setup_logging

    setup_logging(config_obj)

    from .extensions import init_api

    init_api(app, api)
    _register_blueprints(app)
    _register_template_helpers(app, config_obj)

    from . import cli

    cli.init_app(app)

    app.logger.debug("Application created", extra={"config": config_cls.__name__})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprints = getattr(module, "blueprints", None) or [getattr(module, "bp")]
        for blueprint in blueprints:
            app.register_blueprint(blueprint)


def _register_template_helpers(app: Flask, config: BaseConfig) -> None:
    from .models.reference import ENTITY_KINDS
    from .services.formatting import format_currency, format_date

    symbol = config.CURRENCY_SYMBOL

    app.add_template_filter(lambda value: format_currency(value, symbol), "currency")
    app.add_template_filter(format_date, "display_date")

    @app.context_processor
    def _navigation() -> dict:
        return {"entity_kinds": ENTITY_KINDS, "app_name": config.APP_NAME}


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
