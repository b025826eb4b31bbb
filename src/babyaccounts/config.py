"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a whole number, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Baby Accounts"
    DEFAULT_API_BASE_URL = "http://127.0.0.1:8000/api"
    LOG_FILENAME = "babyaccounts.log"
    DEBUG = False
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("BABYACCOUNTS_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("BABYACCOUNTS_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.API_BASE_URL = self._normalize_base_url(
            os.getenv("BABYACCOUNTS_API_BASE_URL", self.DEFAULT_API_BASE_URL)
        )
        self.API_TIMEOUT = _env_float("BABYACCOUNTS_API_TIMEOUT", 10.0)
        self.API_RETRIES = _env_int("BABYACCOUNTS_API_RETRIES", 2)
        self.CURRENCY_SYMBOL = os.getenv("BABYACCOUNTS_CURRENCY_SYMBOL", "₹")
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("BABYACCOUNTS_SECRET_KEY must be set in non-dev mode.")
        if self.API_TIMEOUT <= 0:
            raise ValueError("BABYACCOUNTS_API_TIMEOUT must be greater than zero.")
        if self.API_RETRIES < 0:
            raise ValueError("BABYACCOUNTS_API_RETRIES cannot be negative.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("BABYACCOUNTS_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _normalize_base_url(raw: str) -> str:
        base = (raw or "").strip().rstrip("/")
        if not base.startswith(("http://", "https://")):
            raise ValueError(
                f"BABYACCOUNTS_API_BASE_URL must be an http(s) URL, got {raw!r}"
            )
        return base


class DevConfig(BaseConfig):
    """Development configuration pointing at a local backend."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; retries off to keep failures fast."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.API_RETRIES = 0
