# plant_care/api/tasks/services.py
import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional

from plant_care.core.errors import InvalidDataError
from plant_care.repositories.base import CareDataStore
from plant_care.scheduling.task_generator import DEFAULT_WINDOW_DAYS, generate_tasks, todays_tasks
from plant_care.utils.datetime_utils import DateTimeUtils


class TaskService:
    """Builds task lists from the current plant state; nothing is cached."""
    def __init__(self, store: CareDataStore, clock: Optional[Callable[[], datetime]] = None,
                 window_days: int = DEFAULT_WINDOW_DAYS, max_window_days: int = 366):
        self.store = store
        self.clock = clock or DateTimeUtils.now
        self.window_days = window_days
        self.max_window_days = max_window_days
        logging.info("TaskService initialized.")

    def today(self) -> date:
        return DateTimeUtils.calendar_day(self.clock())

    def get_today_tasks(self) -> Dict[str, Any]:
        """Tasks due today plus overdue ones (the home-screen list)."""
        today = self.today()
        due, overdue = todays_tasks(self.store.plants.list(), today)
        return {
            "date": DateTimeUtils.to_date_string(today),
            "due": [task.to_dict() for task in due],
            "overdue": [task.to_dict() for task in overdue],
            "count": len(due) + len(overdue),
        }

    def get_upcoming_tasks(self, days: Optional[int] = None, grouped: bool = False) -> Dict[str, Any]:
        """
        All occurrences within [today, today + days), sorted by date
        (the calendar view). With grouped=True tasks are also keyed by date.
        """
        days = days or self.window_days
        if days < 1 or days > self.max_window_days:
            raise InvalidDataError(f"days must be between 1 and {self.max_window_days}", error_code="INVALID_WINDOW")

        today = self.today()
        tasks = sorted(generate_tasks(self.store.plants.list(), today, days), key=lambda t: t.date)
        task_dicts = [task.to_dict() for task in tasks]

        response = {
            "tasks": task_dicts,
            "meta": {
                "start": DateTimeUtils.to_date_string(today),
                "end": DateTimeUtils.to_date_string(DateTimeUtils.add_days(today, days)),
                "window_days": days,
                "count": len(task_dicts),
            },
        }
        if grouped:
            by_date: Dict[str, list] = {}
            for task in task_dicts:
                by_date.setdefault(task["date"], []).append(task)
            response["grouped"] = by_date
        return response
