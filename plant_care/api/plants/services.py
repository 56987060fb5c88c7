# plant_care/api/plants/services.py
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from plant_care.core.errors import InvalidDataError, NotFoundError
from plant_care.models.care_action import CareActionType
from plant_care.models.plant import Plant
from plant_care.repositories.base import CareDataStore
from plant_care.scheduling.calculator import care_status, days_until, next_occurrence
from plant_care.utils.datetime_utils import DateTimeUtils


class PlantService:
    """Plant CRUD and per-plant schedule summaries."""
    def __init__(self, store: CareDataStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or DateTimeUtils.now
        logging.info("PlantService initialized.")

    def list_plants(self) -> List[Plant]:
        return self.store.plants.list()

    def get_plant(self, plant_id: str) -> Plant:
        plant = self.store.plants.get(plant_id)
        if plant is None:
            raise NotFoundError(f"Plant {plant_id} not found")
        return plant

    def create_plant(self, plant_data: Dict[str, Any]) -> Plant:
        """
        Creates a plant from validated request data (camelCase keys).
        A missing id is generated; missing lastWatered/lastMisted default to now.
        """
        data = dict(plant_data)
        now = self.clock()
        data['id'] = data.get('id') or str(uuid.uuid4())
        data['lastWatered'] = data.get('lastWatered') or now
        data['lastMisted'] = data.get('lastMisted') or now

        if self.store.plants.get(data['id']) is not None:
            raise InvalidDataError(f"Plant {data['id']} already exists", error_code="PLANT_ALREADY_EXISTS")

        plant = self._build(data)
        self.store.plants.upsert(plant)
        logging.info(f"Plant created: {plant.id} ({plant.name})")
        return plant

    def update_plant(self, plant_id: str, update_data: Dict[str, Any]) -> Plant:
        """Merges the supplied fields into the stored plant."""
        if update_data.get('id') not in (None, plant_id):
            raise InvalidDataError("ID mismatch", error_code="ID_MISMATCH")

        current = self.get_plant(plant_id)
        merged = current.to_dict()
        merged.update({k: v for k, v in update_data.items() if k != 'id'})
        plant = self._build(merged)

        self.store.plants.upsert(plant)
        logging.info(f"Plant {plant_id} updated with fields: {list(update_data.keys())}")
        return plant

    def delete_plant(self, plant_id: str) -> None:
        if not self.store.plants.remove(plant_id):
            raise NotFoundError(f"Plant {plant_id} not found")
        logging.info(f"Plant deleted: {plant_id}")

    def get_schedule(self, plant_id: str) -> Dict[str, Any]:
        """Last action, next date, days remaining and status for each action type."""
        plant = self.get_plant(plant_id)
        today = DateTimeUtils.calendar_day(self.clock())
        schedule = {"plantId": plant.id, "date": DateTimeUtils.to_date_string(today)}
        for action_type in CareActionType:
            last = plant.last_performed(action_type)
            interval = plant.interval_for(action_type)
            schedule[action_type.value] = {
                "interval": interval,
                "lastPerformedAt": DateTimeUtils.to_iso_string(last),
                "nextDate": DateTimeUtils.to_date_string(next_occurrence(last, interval)),
                "daysUntil": days_until(last, interval, today),
                "status": care_status(last, interval, today).value,
            }
        return schedule

    @staticmethod
    def _build(data: Dict[str, Any]) -> Plant:
        try:
            return Plant.from_dict(data)
        except KeyError as e:
            raise InvalidDataError(f"Missing required field: {e.args[0]}")
        except ValueError as e:
            raise InvalidDataError(str(e))
