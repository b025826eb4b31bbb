"""Backend client wiring for the Baby Accounts console."""

from __future__ import annotations

import atexit

from flask import Flask, current_app

from .config import BaseConfig
from .domain.repositories import ReferenceRepository, TransactionRepository
from .infra.api import BackendAPI
from .infra.repositories import ApiReferenceRepository, ApiTransactionRepository
from .models.reference import ENTITY_KINDS_BY_KEY

EXTENSION_KEY = "babyaccounts_api"


def init_api(app: Flask, api: BackendAPI | None = None) -> BackendAPI:
    """Attach a backend client to the app.

    Tests pass their own ``api`` object; otherwise one pooled client is built
    from configuration and closed when the interpreter exits.
    """

    if api is None:
        config: BaseConfig = app.config["BABYACCOUNTS_CONFIG"]
        api = BackendAPI(
            config.API_BASE_URL,
            timeout=config.API_TIMEOUT,
            retries=config.API_RETRIES,
        )
        atexit.register(api.close)
    app.extensions[EXTENSION_KEY] = api
    return api


def get_api() -> BackendAPI:
    """Return the backend client bound to the current app."""

    api = current_app.extensions.get(EXTENSION_KEY)
    if api is None:  # pragma: no cover - create_app always installs one
        raise RuntimeError("Backend API client not initialized")
    return api


def transaction_repository() -> TransactionRepository:
    return ApiTransactionRepository(get_api())


def reference_repository(kind_key: str) -> ReferenceRepository:
    return ApiReferenceRepository(get_api(), ENTITY_KINDS_BY_KEY[kind_key])
