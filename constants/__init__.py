"""
Constants Package

Fixed taxonomies and lookup tables shared by models, services and routes.
"""

from .units import UNIT_MAPPINGS, DEFAULT_COUNT_UNIT, COMMON_FRACTIONS, UNICODE_FRACTIONS
from .validation import (
    RECIPE_CATEGORIES, DEFAULT_RECIPE_CATEGORY, SEASONS, WEATHER_TAGS, TAG_TYPES,
    STATUS_PENDING, STATUS_ACCEPTED, STATUS_REJECTED, STATUS_CLEARED,
    DEFAULT_SERVINGS, MIN_RATING, MAX_RATING, MAX_LENGTHS,
)
from .recipes import CATEGORY_DEFAULTS, DEFAULT_TAGS, DAY_NAMES
from .shopping import (
    SHOPPING_CATEGORIES, FALLBACK_CATEGORY, CATEGORY_ORDER,
    LEADING_DESCRIPTORS, TRAILING_DESCRIPTORS, SHOPPING_LIST_TITLE,
)
