# plant_care/models/care_action.py
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Any

from plant_care.utils.datetime_utils import DateTimeUtils


class CareActionType(Enum):
    WATERING = "watering"
    MISTING = "misting"

    @property
    def past_tense(self) -> str:
        return "watered" if self is CareActionType.WATERING else "misted"

    @classmethod
    def values(cls):
        return [e.value for e in cls]


@dataclass
class CareAction:
    """
    A single completed care action ('actions' collection / actions.json entry).
    Created only when a plant is watered or misted; never edited afterwards.
    """
    id: str
    plant_id: str
    type: CareActionType
    date: datetime  # UTC moment the action was performed

    @property
    def search_date(self) -> str:
        """YYYY-MM-DD of the action, used for per-day lookups."""
        return DateTimeUtils.to_date_string(self.date)

    def to_dict(self) -> Dict[str, Any]:
        """JSON representation (ISO timestamp) used on the wire and in JSON files."""
        return {
            "id": self.id,
            "plantId": self.plant_id,
            "type": self.type.value,
            "date": DateTimeUtils.to_iso_string(self.date),
        }

    def to_record(self) -> Dict[str, Any]:
        """Document representation with a native timestamp, for Firestore."""
        record = self.to_dict()
        record["date"] = self.date
        record["searchDate"] = self.search_date
        return DateTimeUtils.for_firestore(record)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CareAction":
        """
        Builds a CareAction from a stored or received dict.
        Raises KeyError / ValueError when the data is incomplete or malformed.
        """
        return cls(
            id=str(data["id"]),
            plant_id=str(data["plantId"]),
            type=CareActionType(data["type"]),
            date=DateTimeUtils.validate_datetime_field(data.get("date"), "date"),
        )
