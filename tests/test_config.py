"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from debtsage.config import BaseConfig, DevConfig
from debtsage.errors import InvalidInput

_VARS = [
    "DEBTSAGE_DATA_DIR",
    "DEBTSAGE_DEV_MODE",
    "DEBTSAGE_SIMULATION_MONTH_CAP",
    "DEBTSAGE_CARD_MIN_DUE_PERCENT",
    "DEBTSAGE_CARD_MIN_DUE_FLOOR",
    "DEBTSAGE_DEFAULT_CARD_APR",
    "DEBTSAGE_HIGH_INTEREST_THRESHOLD",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = BaseConfig()

    assert config.DEV_MODE is True
    assert config.SIMULATION_MONTH_CAP == 360
    assert config.CARD_MIN_DUE_PERCENT == 5
    assert config.CARD_MIN_DUE_FLOOR == 200
    assert config.DEFAULT_CARD_APR == 36
    assert config.HIGH_INTEREST_THRESHOLD == 12
    assert config.DATA_DIR.name == "instance"


def test_environment_overrides(clean_env, tmp_path):
    clean_env.setenv("DEBTSAGE_DATA_DIR", str(tmp_path))
    clean_env.setenv("DEBTSAGE_DEV_MODE", "off")
    clean_env.setenv("DEBTSAGE_SIMULATION_MONTH_CAP", "480")
    clean_env.setenv("DEBTSAGE_CARD_MIN_DUE_FLOOR", "500")

    config = DevConfig()

    assert config.DATA_DIR == tmp_path.resolve()
    assert config.DEV_MODE is False
    assert config.SIMULATION_MONTH_CAP == 480
    assert config.CARD_MIN_DUE_FLOOR == 500


def test_config_reads_environment_per_instance(clean_env):
    first = BaseConfig()
    clean_env.setenv("DEBTSAGE_SIMULATION_MONTH_CAP", "60")
    second = BaseConfig()

    assert first.SIMULATION_MONTH_CAP == 360
    assert second.SIMULATION_MONTH_CAP == 60


@pytest.mark.parametrize(
    "name,value",
    [
        ("DEBTSAGE_SIMULATION_MONTH_CAP", "forever"),
        ("DEBTSAGE_SIMULATION_MONTH_CAP", "12.5"),
        ("DEBTSAGE_SIMULATION_MONTH_CAP", "0"),
        ("DEBTSAGE_CARD_MIN_DUE_PERCENT", "five"),
    ],
)
def test_malformed_values_rejected(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(InvalidInput) as excinfo:
        BaseConfig()
    assert excinfo.value.field == name
