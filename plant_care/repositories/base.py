# plant_care/repositories/base.py
"""
Storage capability shared by every backend.

A backend provides a PlantRepository and a CareActionRepository and is
bundled into a CareDataStore. Services only ever talk to these interfaces, so
the JSON file, Firestore and JSONBin backends are interchangeable.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from plant_care.core.errors import StorageError
from plant_care.models.care_action import CareAction, CareActionType
from plant_care.models.plant import Plant
from plant_care.utils.datetime_utils import DateTimeUtils


class PlantRepository(ABC):
    """Concurrent writers on the same plant id: the last write wins."""

    @abstractmethod
    def list(self) -> List[Plant]:
        ...

    @abstractmethod
    def get(self, plant_id: str) -> Optional[Plant]:
        ...

    @abstractmethod
    def upsert(self, plant: Plant) -> Plant:
        ...

    @abstractmethod
    def remove(self, plant_id: str) -> bool:
        """True if a plant was removed, False if none had this id."""
        ...


class CareActionRepository(ABC):

    @abstractmethod
    def list(self, plant_id: Optional[str] = None, on_date: Optional[date] = None) -> List[CareAction]:
        """Actions in insertion order, optionally filtered by plant and UTC calendar day."""
        ...

    @abstractmethod
    def add(self, action: CareAction) -> CareAction:
        ...

    def find_for_day(self, plant_id: str, action_type: CareActionType, day: date) -> Optional[CareAction]:
        """The action of this kind recorded for the plant on `day`, if any."""
        for action in self.list(plant_id=plant_id, on_date=day):
            if action.type is action_type:
                return action
        return None


def matches(action: CareAction, plant_id: Optional[str], on_date: Optional[date]) -> bool:
    if plant_id is not None and action.plant_id != plant_id:
        return False
    if on_date is not None and not DateTimeUtils.is_same_day(action.date, on_date):
        return False
    return True


class CareDataStore:
    """A plant repository and an action repository living in the same backend."""
    backend_name = "base"

    def __init__(self, plants: PlantRepository, actions: CareActionRepository):
        self.plants = plants
        self.actions = actions

    def record_care_action(self, plant: Plant, action: CareAction, previous: Plant) -> None:
        """
        Persists a completed care action: the updated plant, then the action.
        If the action cannot be written the plant is put back to `previous`,
        so the last-action timestamp never moves without a logged action.
        """
        self.plants.upsert(plant)
        try:
            self.actions.add(action)
        except StorageError as e:
            logging.error(f"Action write failed for plant {plant.id}, restoring plant: {e}")
            try:
                self.plants.upsert(previous)
            except StorageError as restore_error:
                logging.error(f"Restoring plant {plant.id} failed: {restore_error}", exc_info=True)
            raise
