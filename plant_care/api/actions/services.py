# plant_care/api/actions/services.py
import logging
import threading
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from plant_care.core.errors import ConflictError, InvalidDataError, NotFoundError
from plant_care.models.care_action import CareAction, CareActionType
from plant_care.models.plant import Plant
from plant_care.repositories.base import CareDataStore
from plant_care.utils.datetime_utils import DateTimeUtils


def parse_action_type(value) -> CareActionType:
    try:
        return CareActionType(value)
    except ValueError:
        raise InvalidDataError(
            f"Invalid action type '{value}'. Expected one of: {', '.join(CareActionType.values())}",
            error_code="INVALID_ACTION_TYPE"
        )


class CareActionService:
    """
    Records watering/misting and answers questions about recorded actions.

    The "already performed today" check and the writes that follow run under
    one lock, so two requests in the same process cannot both pass the check.
    """
    def __init__(self, store: CareDataStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or DateTimeUtils.now
        self._lock = threading.Lock()
        logging.info("CareActionService initialized.")

    def _get_plant(self, plant_id: str) -> Plant:
        plant = self.store.plants.get(plant_id)
        if plant is None:
            raise NotFoundError(f"Plant {plant_id} not found")
        return plant

    def record_action(self, plant_id: str, action_type) -> Tuple[Plant, CareAction]:
        """
        Performs a care action on a plant.

        Returns:
            (updated plant, new action)
        Raises:
            InvalidDataError: unknown action type
            NotFoundError: no plant with this id
            ConflictError: the same action was already recorded today (carries it)
        """
        action_type = parse_action_type(action_type.value if isinstance(action_type, CareActionType) else action_type)

        with self._lock:
            plant = self._get_plant(plant_id)
            now = self.clock()
            today = DateTimeUtils.calendar_day(now)

            existing = self.store.actions.find_for_day(plant_id, action_type, today)
            if existing is not None:
                logging.info(f"Rejected duplicate {action_type.value} for plant {plant_id} on {today}")
                raise ConflictError(f"Plant already {action_type.past_tense} today", existing=existing)

            updated_plant = plant.with_action(action_type, now)
            action = CareAction(
                id=str(uuid.uuid4()),
                plant_id=plant_id,
                type=action_type,
                date=now,
            )
            self.store.record_care_action(updated_plant, action, previous=plant)

        logging.info(f"Care action recorded: {action_type.value} for plant {plant_id}")
        return updated_plant, action

    def list_actions(self, plant_id: Optional[str] = None, date_str: Optional[str] = None) -> List[CareAction]:
        """Actions filtered by plant and/or calendar date ('YYYY-MM-DD' or ISO timestamp)."""
        on_date = None
        if date_str:
            try:
                on_date = DateTimeUtils.validate_date_field(date_str, "date")
            except ValueError as e:
                raise InvalidDataError(f"{e} (expected YYYY-MM-DD)", error_code="INVALID_DATE_FORMAT")
        return self.store.actions.list(plant_id=plant_id, on_date=on_date)

    def get_todays_actions(self, plant_id: str) -> List[CareAction]:
        self._get_plant(plant_id)
        today = DateTimeUtils.calendar_day(self.clock())
        return self.store.actions.list(plant_id=plant_id, on_date=today)

    def can_perform_action(self, plant_id: str, action_type) -> bool:
        action_type = parse_action_type(action_type)
        today = DateTimeUtils.calendar_day(self.clock())
        return self.store.actions.find_for_day(plant_id, action_type, today) is None

    def get_today_status(self, plant_id: str) -> Dict[str, object]:
        """Today's actions for a plant and which action types are still available."""
        actions = self.get_todays_actions(plant_id)
        return {
            "plantId": plant_id,
            "actions": actions,
            "canPerform": {t.value: self.can_perform_action(plant_id, t) for t in CareActionType},
        }
