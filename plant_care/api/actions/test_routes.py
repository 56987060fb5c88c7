# plant_care/api/actions/test_routes.py
"""
/api/actions endpoint tests: recording, duplicate protection and lookups.

Usage: python -m pytest plant_care/api/actions/test_routes.py -v
"""

import pytest


@pytest.fixture()
def plant(client):
    response = client.post('/api/plants', json={
        "id": "p1",
        "name": "Monstera",
        "wateringInterval": 7,
        "mistingInterval": 3,
        "lastWatered": "2024-05-07T09:00:00Z",
        "lastMisted": "2024-05-13T09:00:00Z",
    })
    assert response.status_code == 201
    return response.get_json()


def water(client, plant_id="p1", action_type="watering", prefix='/api/actions'):
    return client.post(prefix, json={"plantId": plant_id, "actionType": action_type})


def test_watering_updates_only_last_watered(client, plant):
    response = water(client)
    body = response.get_json()

    assert response.status_code == 201
    assert body["success"] is True
    assert body["plant"]["lastWatered"] == "2024-05-15T10:30:00Z"
    assert body["plant"]["lastMisted"] == plant["lastMisted"]
    assert body["action"]["plantId"] == "p1"
    assert body["action"]["type"] == "watering"
    assert body["action"]["date"] == "2024-05-15T10:30:00Z"

def test_second_watering_same_day_is_conflict_with_existing_action(client, plant, clock):
    first = water(client).get_json()
    clock.advance(hours=5)
    response = water(client)
    body = response.get_json()

    assert response.status_code == 409
    assert body["error_code"] == "ALREADY_PERFORMED"
    assert body["existingAction"] == first["action"]

    # nothing moved and only one action was stored
    stored = client.get('/api/plants/p1').get_json()
    assert stored["lastWatered"] == "2024-05-15T10:30:00Z"
    assert len(client.get('/api/actions?plantId=p1').get_json()) == 1

def test_watering_and_misting_same_day_are_independent(client, plant):
    assert water(client, action_type="watering").status_code == 201
    assert water(client, action_type="misting").status_code == 201

def test_next_day_is_allowed_again(client, plant, clock):
    assert water(client).status_code == 201
    clock.advance(days=1)
    assert water(client).status_code == 201

def test_invalid_action_type_is_400(client, plant):
    response = water(client, action_type="pruning")
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "VALIDATION_ERROR"

def test_missing_plant_is_404(client):
    response = water(client, plant_id="ghost")
    assert response.status_code == 404
    assert response.get_json()["error_code"] == "PLANT_NOT_FOUND"

def test_plants_actions_path_is_an_alias(client, plant):
    assert water(client, prefix='/api/plants/actions').status_code == 201
    assert water(client, prefix='/api/plants/actions').status_code == 409
    assert len(client.get('/api/plants/actions?plantId=p1').get_json()) == 1

def test_list_actions_filters_by_date(client, plant, clock):
    water(client)
    clock.advance(days=1)
    water(client)
    water(client, action_type="misting")

    all_actions = client.get('/api/actions?plantId=p1').get_json()
    tomorrow = client.get('/api/actions?plantId=p1&date=2024-05-16').get_json()

    assert len(all_actions) == 3
    assert [a["type"] for a in tomorrow] == ["watering", "misting"]

def test_list_actions_rejects_bad_date(client):
    response = client.get('/api/actions?date=15-05-2024')
    assert response.status_code == 400

def test_today_status(client, plant):
    water(client, action_type="misting")
    response = client.get('/api/actions/today?plantId=p1')
    body = response.get_json()

    assert response.status_code == 200
    assert [a["type"] for a in body["actions"]] == ["misting"]
    assert body["canPerform"] == {"watering": True, "misting": False}

def test_today_status_requires_plant_id(client):
    assert client.get('/api/actions/today').status_code == 400
