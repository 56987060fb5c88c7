# plant_care/api/tasks/test_routes.py
"""
/api/tasks endpoint tests.

Usage: python -m pytest plant_care/api/tasks/test_routes.py -v
"""

import pytest


@pytest.fixture()
def plants(client):
    bodies = [
        # watering overdue since 2024-05-14, misting due today
        {"id": "fern", "name": "Fern", "wateringInterval": 7, "mistingInterval": 3,
         "lastWatered": "2024-05-07T09:00:00Z", "lastMisted": "2024-05-12T09:00:00Z"},
        # nothing due before 2024-05-25
        {"id": "cactus", "name": "Cactus", "wateringInterval": 14, "mistingInterval": 30,
         "lastWatered": "2024-05-11T09:00:00Z", "lastMisted": "2024-05-11T09:00:00Z"},
    ]
    for body in bodies:
        assert client.post('/api/plants', json=body).status_code == 201


def test_today_lists_due_and_overdue(client, plants):
    body = client.get('/api/tasks/today').get_json()

    assert body["date"] == "2024-05-15"
    assert body["count"] == 2
    assert [(t["plantId"], t["type"], t["status"]) for t in body["due"]] == [("fern", "misting", "due")]
    assert [(t["plantId"], t["type"], t["date"]) for t in body["overdue"]] == [("fern", "watering", "2024-05-14")]

def test_today_clears_after_care(client, plants):
    client.post('/api/actions', json={"plantId": "fern", "actionType": "watering"})
    client.post('/api/actions', json={"plantId": "fern", "actionType": "misting"})

    body = client.get('/api/tasks/today').get_json()
    assert body["count"] == 0

def test_calendar_is_sorted_and_bounded(client, plants):
    body = client.get('/api/tasks?days=14').get_json()
    dates = [t["date"] for t in body["tasks"]]

    assert body["meta"]["start"] == "2024-05-15"
    assert body["meta"]["end"] == "2024-05-29"
    assert body["meta"]["window_days"] == 14
    assert body["meta"]["count"] == len(dates)
    assert dates == sorted(dates)
    assert all("2024-05-15" <= d < "2024-05-29" for d in dates)
    # overdue fern watering skips ahead to its next weekly slot
    fern_watering = [t["date"] for t in body["tasks"] if t["plantId"] == "fern" and t["type"] == "watering"]
    assert fern_watering == ["2024-05-21", "2024-05-28"]
    assert ("cactus", "watering", "2024-05-25") in [(t["plantId"], t["type"], t["date"]) for t in body["tasks"]]

def test_calendar_defaults_to_thirty_days(client, plants):
    body = client.get('/api/tasks').get_json()
    assert body["meta"]["window_days"] == 30
    assert body["meta"]["end"] == "2024-06-14"
    assert "grouped" not in body

def test_calendar_grouped_by_date(client, plants):
    body = client.get('/api/tasks?days=3&grouped=true').get_json()

    assert body["grouped"]["2024-05-15"][0]["plantId"] == "fern"
    assert sum(len(v) for v in body["grouped"].values()) == body["meta"]["count"]

@pytest.mark.parametrize("days", ["0", "400", "soon"])
def test_invalid_window_is_400(client, days):
    response = client.get(f'/api/tasks?days={days}')
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "VALIDATION_ERROR"
