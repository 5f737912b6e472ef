"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .family import Family
from .rotation import RotationConfig
from .dinner import Dinner, DinnerResponse, MealLog

__all__ = [
    'db',
    'Family',
    'RotationConfig',
    'Dinner',
    'DinnerResponse',
    'MealLog',
]
