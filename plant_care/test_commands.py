# plant_care/test_commands.py
"""
CLI command tests (flask migrate-data / flask tasks-today).

Usage: python -m pytest plant_care/test_commands.py -v
"""

import pytest
from datetime import timedelta

from plant_care.conftest import FIXED_NOW
from plant_care.commands import migrate_data
from plant_care.models.care_action import CareAction, CareActionType
from plant_care.repositories.json_file import JsonFileStore


@pytest.fixture()
def source(tmp_path, make_plant):
    store = JsonFileStore(str(tmp_path / "source"))
    store.plants.upsert(make_plant("p1", "Monstera"))
    store.plants.upsert(make_plant("p2", "Fern"))
    store.actions.add(CareAction("a1", "p1", CareActionType.WATERING, FIXED_NOW - timedelta(days=1)))
    store.actions.add(CareAction("a2", "p2", CareActionType.MISTING, FIXED_NOW))
    return store


def test_migrate_copies_plants_and_actions(source, tmp_path):
    target = JsonFileStore(str(tmp_path / "target"))

    assert migrate_data(source, target) == (2, 2)
    assert [p.id for p in target.plants.list()] == ["p1", "p2"]
    assert [a.id for a in target.actions.list()] == ["a1", "a2"]

def test_migrate_is_repeatable(source, tmp_path):
    target = JsonFileStore(str(tmp_path / "target"))
    migrate_data(source, target)

    assert migrate_data(source, target) == (2, 0)
    assert len(target.actions.list()) == 2
    assert len(target.plants.list()) == 2

def test_dry_run_writes_nothing(source, tmp_path):
    target = JsonFileStore(str(tmp_path / "target"))

    assert migrate_data(source, target, dry_run=True) == (2, 2)
    assert target.plants.list() == []
    assert target.actions.list() == []

def test_migrate_command_rejects_same_backend(app):
    result = app.test_cli_runner().invoke(args=['migrate-data', '--source', 'json_file', '--target', 'json_file'])
    assert result.exit_code == 2
    assert "must differ" in result.output

def test_migrate_command_reports_missing_configuration(app):
    app.config['JSON_BIN_API_KEY'] = None
    result = app.test_cli_runner().invoke(args=['migrate-data', '--target', 'jsonbin'])
    assert result.exit_code == 1
    assert "JSON_BIN_API_KEY" in result.output

def test_tasks_today_without_plants(app):
    result = app.test_cli_runner().invoke(args=['tasks-today'])
    assert result.exit_code == 0
    assert "No care tasks for 2024-05-15." in result.output

def test_tasks_today_lists_due_and_overdue(app, store, make_plant):
    store.plants.upsert(make_plant("p1", "Monstera", watering_interval=7, watered_days_ago=9,
                                   misting_interval=3, misted_days_ago=3))
    result = app.test_cli_runner().invoke(args=['tasks-today'])

    assert result.exit_code == 0
    assert "2 care task(s) for 2024-05-15:" in result.output
    assert "[due]     Monstera: misting" in result.output
    assert "[overdue] Monstera: watering (since 2024-05-13)" in result.output
