"""Tests for environment-driven configuration."""

from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from nityam.config import BaseConfig, DevConfig


def test_defaults(tmp_path):
    cfg = BaseConfig()
    assert cfg.DATA_DIR == (tmp_path / "data").resolve()
    assert cfg.DATA_DIR.is_dir()
    assert cfg.DATABASE_URL == f"sqlite:///{cfg.DATA_DIR / 'nityam.db'}"
    assert cfg.ROLLOVER_INTERVAL_MINUTES == 15
    assert cfg.LOOKAHEAD_DAYS == 366
    assert cfg.tzinfo() == ZoneInfo("UTC")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("NITYAM_TIMEZONE", "Asia/Kolkata")
    monkeypatch.setenv("NITYAM_DATABASE_URL", "sqlite://")
    monkeypatch.setenv("NITYAM_ROLLOVER_INTERVAL_MINUTES", "5")
    monkeypatch.setenv("NITYAM_DEV_MODE", "off")

    cfg = BaseConfig()
    assert cfg.tzinfo() == ZoneInfo("Asia/Kolkata")
    assert cfg.DATABASE_URL == "sqlite://"
    assert cfg.ROLLOVER_INTERVAL_MINUTES == 5
    assert cfg.DEV_MODE is False


def test_unknown_timezone(monkeypatch):
    monkeypatch.setenv("NITYAM_TIMEZONE", "Mars/Olympus_Mons")
    with pytest.raises(ValueError, match="Unknown timezone"):
        BaseConfig()


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_interval(monkeypatch, value):
    monkeypatch.setenv("NITYAM_ROLLOVER_INTERVAL_MINUTES", value)
    with pytest.raises(ValueError):
        BaseConfig()


def test_sqlite_engine_options():
    assert BaseConfig().sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_dev_config():
    assert DevConfig().DEBUG is True
