"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .records import Ingredient, WeatherSnapshot, ForecastDay, ScoreBreakdown
from .recipe import Recipe, Tag, recipe_tags
from .history import MealHistory
from .suggestion import Suggestion
from .weekplan import WeekPlanEntry

__all__ = [
    'db',
    'Ingredient',
    'WeatherSnapshot',
    'ForecastDay',
    'ScoreBreakdown',
    'Recipe',
    'Tag',
    'recipe_tags',
    'MealHistory',
    'Suggestion',
    'WeekPlanEntry',
]
