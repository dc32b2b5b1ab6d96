"""
Services Package

Business logic modules for the meal planner.
"""

from .errors import (
    PlannerError,
    NotFound,
    InvalidInput,
    NoRecipesAvailable,
    UpstreamUnavailable,
)

from .clock import SystemClock, FixedClock, parse_date

from .parsing import (
    float_to_fraction,
    normalize_fractions,
    parse_amount,
    parse_ingredient,
)

from .weather import (
    WeatherService,
    derive_weather_tags,
    season_for,
)

from .scoring import (
    score_recipe,
    rank_recipes,
    quick_pick,
)

from .suggestions import (
    SuggestionDay,
    generate_suggestion,
    get_todays_suggestion,
    accept_suggestion,
    reject_suggestion,
)

from .weekplan import (
    resolve_week_plan,
    set_day_recipe,
    clear_day,
    regenerate_day,
)

from .shopping import (
    normalize_ingredient_name,
    categorize_ingredient,
    merge_ingredients,
    build_shopping_list,
    format_shopping_text,
)

__all__ = [
    # Errors
    'PlannerError',
    'NotFound',
    'InvalidInput',
    'NoRecipesAvailable',
    'UpstreamUnavailable',
    # Clock
    'SystemClock',
    'FixedClock',
    'parse_date',
    # Parsing
    'float_to_fraction',
    'normalize_fractions',
    'parse_amount',
    'parse_ingredient',
    # Weather
    'WeatherService',
    'derive_weather_tags',
    'season_for',
    # Scoring
    'score_recipe',
    'rank_recipes',
    'quick_pick',
    # Suggestions
    'SuggestionDay',
    'generate_suggestion',
    'get_todays_suggestion',
    'accept_suggestion',
    'reject_suggestion',
    # Week plan
    'resolve_week_plan',
    'set_day_recipe',
    'clear_day',
    'regenerate_day',
    # Shopping
    'normalize_ingredient_name',
    'categorize_ingredient',
    'merge_ingredients',
    'build_shopping_list',
    'format_shopping_text',
]
