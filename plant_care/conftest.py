# plant_care/conftest.py
"""Shared pytest fixtures: frozen clock, temporary data dir, app and client."""

from datetime import datetime, timedelta, timezone

import pytest

from plant_care import create_app
from plant_care.models.plant import Plant
from plant_care.utils.datetime_utils import DateTimeUtils

# Wednesday, mid-morning UTC
FIXED_NOW = datetime(2024, 5, 15, 10, 30, tzinfo=timezone.utc)


class FrozenClock:
    def __init__(self, current: datetime):
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.current += timedelta(days=days, hours=hours)


@pytest.fixture()
def clock(monkeypatch):
    frozen = FrozenClock(FIXED_NOW)
    monkeypatch.setattr(DateTimeUtils, 'now', staticmethod(frozen))
    return frozen


@pytest.fixture()
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture()
def app(clock, data_dir):
    return create_app('testing', overrides={'DATA_DIR': str(data_dir)})


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    return app.services['store']


@pytest.fixture()
def make_plant():
    """Factory for Plant objects; last actions default to FIXED_NOW minus N days."""
    def _make(plant_id="p1", name="Monstera", watering_interval=7, misting_interval=3,
              watered_days_ago=0, misted_days_ago=0, **extra):
        return Plant(
            id=plant_id,
            name=name,
            watering_interval=watering_interval,
            misting_interval=misting_interval,
            last_watered=FIXED_NOW - timedelta(days=watered_days_ago),
            last_misted=FIXED_NOW - timedelta(days=misted_days_ago),
            **extra
        )
    return _make
