# plant_care/scheduling/task_generator.py
"""
Task generator.

Expands every plant's watering and misting rhythm into dated occurrences
inside [today, today + window_days). Nothing is stored: each call recomputes
the sequence from the plants it is given.

A neglected schedule is caught up to its nearest present-or-future
occurrence; missed occurrences are not reported one by one.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, Dict, Any, List, Tuple

from plant_care.core.errors import InvalidDataError
from plant_care.models.care_action import CareActionType
from plant_care.models.plant import Plant
from plant_care.scheduling.calculator import (
    DateLike, CareStatus, next_occurrence, care_status, validate_interval
)
from plant_care.utils.datetime_utils import DateTimeUtils

DEFAULT_WINDOW_DAYS = 30


@dataclass(frozen=True)
class CareTask:
    plant_id: str
    plant_name: str
    action_type: CareActionType
    date: date
    status: CareStatus = CareStatus.UPCOMING

    @property
    def id(self) -> str:
        return f"{self.action_type.value}-{self.plant_id}-{DateTimeUtils.to_date_string(self.date)}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "plantId": self.plant_id,
            "plantName": self.plant_name,
            "type": self.action_type.value,
            "date": DateTimeUtils.to_date_string(self.date),
            "status": self.status.value,
        }


def iter_occurrences(last_performed_at: DateLike, interval_days: int,
                     today: DateLike, horizon_end: DateLike) -> Iterator[date]:
    """
    Yields occurrence days of one recurring action with today <= day < horizon_end.
    The first candidate is last_performed_at + interval_days, unless the last
    action is dated after today, in which case that day itself is the first one.
    """
    validate_interval(interval_days)
    today = DateTimeUtils.calendar_day(today)
    horizon_end = DateTimeUtils.calendar_day(horizon_end)

    last_day = DateTimeUtils.calendar_day(last_performed_at)
    if last_day > today:
        occurrence = last_day
    else:
        occurrence = next_occurrence(last_day, interval_days)
    if occurrence < today:
        # catch up in one step: smallest multiple of the interval reaching today
        missed_days = (today - occurrence).days
        steps = -(-missed_days // interval_days)
        occurrence = DateTimeUtils.add_days(occurrence, steps * interval_days)

    while occurrence < horizon_end:
        yield occurrence
        occurrence = DateTimeUtils.add_days(occurrence, interval_days)


def generate_tasks(plants: Iterable[Plant], today: DateLike,
                   window_days: int = DEFAULT_WINDOW_DAYS) -> Iterator[CareTask]:
    """
    Lazily yields the care tasks of all plants for the window starting today.
    Order: plant by plant, watering occurrences before misting ones.
    Callers that need chronological order must sort by date themselves.
    """
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days < 1:
        raise InvalidDataError(f"window_days must be a positive integer, got {window_days!r}")

    today = DateTimeUtils.calendar_day(today)
    horizon_end = DateTimeUtils.add_days(today, window_days)

    for plant in plants:
        for action_type in CareActionType:
            for day in iter_occurrences(plant.last_performed(action_type), plant.interval_for(action_type),
                                        today, horizon_end):
                yield CareTask(
                    plant_id=plant.id,
                    plant_name=plant.name,
                    action_type=action_type,
                    date=day,
                    status=CareStatus.DUE if day == today else CareStatus.UPCOMING,
                )


def todays_tasks(plants: Iterable[Plant], today: DateLike) -> Tuple[List[CareTask], List[CareTask]]:
    """
    Splits the plants' next occurrences into (due today, overdue).
    Overdue tasks keep the date they were originally due on.
    """
    today = DateTimeUtils.calendar_day(today)
    due, overdue = [], []
    for plant in plants:
        for action_type in CareActionType:
            last = plant.last_performed(action_type)
            interval = plant.interval_for(action_type)
            status = care_status(last, interval, today)
            if status is CareStatus.UPCOMING:
                continue
            task = CareTask(
                plant_id=plant.id,
                plant_name=plant.name,
                action_type=action_type,
                date=next_occurrence(last, interval),
                status=status,
            )
            (due if status is CareStatus.DUE else overdue).append(task)
    return due, overdue
