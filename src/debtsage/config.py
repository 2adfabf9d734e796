"""Configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .errors import InvalidInput

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    """Read a numeric environment variable, rejecting malformed values."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise InvalidInput(f"{name} must be numeric, got {value!r}", field=name, value=value) from exc


def _env_int(name: str, default: int) -> int:
    value = _env_float(name, float(default))
    if value != int(value):
        raise InvalidInput(f"{name} must be a whole number, got {value}", field=name, value=value)
    return int(value)


class BaseConfig:
    """Base configuration shared across environments.

    Values are read from the environment when the object is created, so a
    config is an explicit value handed to the code that needs it.
    """

    APP_NAME = "DebtSage"
    LOG_FILENAME = "debtsage.log"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DEBTSAGE_DEV_MODE", default=True)
        self.SIMULATION_MONTH_CAP = _env_int("DEBTSAGE_SIMULATION_MONTH_CAP", 360)
        self.CARD_MIN_DUE_PERCENT = _env_float("DEBTSAGE_CARD_MIN_DUE_PERCENT", 5.0)
        self.CARD_MIN_DUE_FLOOR = _env_float("DEBTSAGE_CARD_MIN_DUE_FLOOR", 200.0)
        self.DEFAULT_CARD_APR = _env_float("DEBTSAGE_DEFAULT_CARD_APR", 36.0)
        self.HIGH_INTEREST_THRESHOLD = _env_float("DEBTSAGE_HIGH_INTEREST_THRESHOLD", 12.0)
        if self.SIMULATION_MONTH_CAP <= 0:
            raise InvalidInput(
                "DEBTSAGE_SIMULATION_MONTH_CAP must be positive",
                field="DEBTSAGE_SIMULATION_MONTH_CAP",
                value=self.SIMULATION_MONTH_CAP,
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory that holds the ``logs`` folder."""

        data_root = os.getenv("DEBTSAGE_DATA_DIR", "instance")
        return Path(data_root).expanduser().resolve()


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite."""

    DEBUG = False
    TESTING = True

    def __init__(self, data_dir: Path | None = None) -> None:
        super().__init__()
        if data_dir is not None:
            self.DATA_DIR = Path(data_dir)
