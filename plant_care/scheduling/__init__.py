# plant_care/scheduling/__init__.py
"""
Care scheduling: due-date calculation and task generation.

Everything here is pure: results depend only on the arguments, never on
storage or on the wall clock.
"""

from .calculator import (
    CareStatus,
    next_occurrence, is_due_today, is_overdue, days_until, care_status
)
from .task_generator import CareTask, iter_occurrences, generate_tasks, todays_tasks

__all__ = [
    'CareStatus',
    'next_occurrence', 'is_due_today', 'is_overdue', 'days_until', 'care_status',
    'CareTask', 'iter_occurrences', 'generate_tasks', 'todays_tasks'
]
