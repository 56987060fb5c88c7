# plant_care/core/test_config.py
"""
Configuration, error mapping and app factory tests.

Usage: python -m pytest plant_care/core/test_config.py -v
"""

import pytest

from plant_care import create_app
from plant_care.core.config import getenv
from plant_care.core.errors import ConfigurationError, ConflictError, NotFoundError
from plant_care.repositories import create_store


@pytest.mark.parametrize("raw, expected", [
    ('"abc123"', "abc123"),
    ("'abc123'", "abc123"),
    ("abc123", "abc123"),
    ('"abc123', '"abc123'),
])
def test_getenv_strips_one_pair_of_quotes(monkeypatch, raw, expected):
    monkeypatch.setenv("PLANT_CARE_TEST_VALUE", raw)
    assert getenv("PLANT_CARE_TEST_VALUE") == expected

def test_getenv_default_for_missing_or_empty(monkeypatch):
    monkeypatch.delenv("PLANT_CARE_TEST_VALUE", raising=False)
    assert getenv("PLANT_CARE_TEST_VALUE", "fallback") == "fallback"
    monkeypatch.setenv("PLANT_CARE_TEST_VALUE", "")
    assert getenv("PLANT_CARE_TEST_VALUE", "fallback") == "fallback"

def test_unknown_backend_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        create_store({"STORAGE_BACKEND": "sqlite"})

def test_unknown_config_name():
    with pytest.raises(ValueError):
        create_app('staging')

def test_app_uses_file_backend_in_testing(app, data_dir):
    assert app.services['store'].backend_name == "json_file"
    assert app.services['store'].data_dir == str(data_dir)

def test_error_bodies():
    assert NotFoundError("Plant p1 not found").to_dict() == {
        "error_code": "PLANT_NOT_FOUND", "message": "Plant p1 not found"
    }
    assert ConflictError("Plant already watered today").status_code == 409
    assert "existingAction" not in ConflictError("x").to_dict()
