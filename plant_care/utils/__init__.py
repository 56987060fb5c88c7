# plant_care/utils/__init__.py
"""
Utility helpers shared across the project.
"""

from .datetime_utils import DateTimeUtils

__all__ = ['DateTimeUtils']
