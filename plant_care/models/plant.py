# plant_care/models/plant.py
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Dict, Any

from plant_care.models.care_action import CareActionType
from plant_care.utils.datetime_utils import DateTimeUtils

# camelCase wire/storage key -> dataclass attribute
_FIELD_MAP = {
    "id": "id",
    "name": "name",
    "species": "species",
    "image": "image",
    "imageName": "image_name",
    "wateringInterval": "watering_interval",
    "mistingInterval": "misting_interval",
    "lastWatered": "last_watered",
    "lastMisted": "last_misted",
    "notes": "notes",
}


@dataclass
class Plant:
    """
    A houseplant and its care rhythm ('plants' collection / plants.json entry).
    Intervals are whole days and always >= 1.
    """
    id: str
    name: str
    watering_interval: int
    misting_interval: int
    last_watered: datetime
    last_misted: datetime
    species: Optional[str] = None
    image: Optional[str] = None  # base64 data or URL
    image_name: Optional[str] = None
    notes: Optional[str] = None

    def interval_for(self, action_type: CareActionType) -> int:
        if action_type is CareActionType.WATERING:
            return self.watering_interval
        return self.misting_interval

    def last_performed(self, action_type: CareActionType) -> datetime:
        if action_type is CareActionType.WATERING:
            return self.last_watered
        return self.last_misted

    def with_action(self, action_type: CareActionType, performed_at: datetime) -> "Plant":
        """Copy of the plant with only the matching last-action timestamp moved."""
        if action_type is CareActionType.WATERING:
            return replace(self, last_watered=performed_at)
        return replace(self, last_misted=performed_at)

    def to_dict(self) -> Dict[str, Any]:
        """JSON representation (camelCase keys, ISO timestamps)."""
        data = {key: getattr(self, attr) for key, attr in _FIELD_MAP.items()}
        data["lastWatered"] = DateTimeUtils.to_iso_string(self.last_watered)
        data["lastMisted"] = DateTimeUtils.to_iso_string(self.last_misted)
        return data

    def to_record(self) -> Dict[str, Any]:
        """Document representation with native timestamps, for Firestore."""
        data = {key: getattr(self, attr) for key, attr in _FIELD_MAP.items()}
        return DateTimeUtils.for_firestore(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Plant":
        """
        Builds a Plant from a camelCase dict (request body, JSON file or Firestore
        document). Timestamps may be ISO strings or datetimes.
        Raises KeyError / ValueError on missing or invalid fields.
        """
        kwargs = {attr: data.get(key) for key, attr in _FIELD_MAP.items() if key in data}
        for key in ("id", "name", "wateringInterval", "mistingInterval"):
            if data.get(key) in (None, ""):
                raise KeyError(key)

        kwargs["id"] = str(data["id"])
        kwargs["watering_interval"] = _positive_int(data["wateringInterval"], "wateringInterval")
        kwargs["misting_interval"] = _positive_int(data["mistingInterval"], "mistingInterval")
        kwargs["last_watered"] = DateTimeUtils.validate_datetime_field(data.get("lastWatered"), "lastWatered")
        kwargs["last_misted"] = DateTimeUtils.validate_datetime_field(data.get("lastMisted"), "lastMisted")
        return cls(**kwargs)


def _positive_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; JSON 'true' is not an interval
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be a positive integer")
    if number != value and not isinstance(value, str):
        raise ValueError(f"{field_name} must be a positive integer")
    if number < 1:
        raise ValueError(f"{field_name} must be a positive integer")
    return number
