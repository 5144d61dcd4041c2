"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

import pytest


@pytest.fixture
def moscow() -> tzinfo:
    """Europe/Moscow zone (fixed +03:00 since 2014)."""
    return ZoneInfo("Europe/Moscow")


@pytest.fixture
def plus_three() -> tzinfo:
    """Fixed UTC+3 offset without a zone name."""
    return timezone(timedelta(hours=3))


@pytest.fixture
def utc_instant() -> datetime:
    """A fixed instant in UTC."""
    return datetime(2018, 1, 25, 11, 24, 28, tzinfo=timezone.utc)


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""

    def write(content: str):
        path = tmp_path / "zonestamp.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return write
