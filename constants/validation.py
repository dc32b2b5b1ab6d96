"""
Validation Constants

Whitelists for the fixed taxonomies a recipe, suggestion or tag may use.
"""

# Valid recipe categories
RECIPE_CATEGORIES = (
    'curry', 'soep', 'pokebowl', 'salade',
    'plaattaart', 'pasta', 'wraps', 'shakshuka',
)
DEFAULT_RECIPE_CATEGORY = 'pasta'

SEASONS = ('lente', 'zomer', 'herfst', 'winter')

WEATHER_TAGS = ('koud', 'warm', 'regenachtig', 'zonnig')

# Tag types for the free-form recipe tags
TAG_TYPES = ('diet', 'difficulty', 'cuisine', 'mood', 'meal_type', 'main_ingredient', 'custom')

# Suggestion lifecycle
STATUS_PENDING = 'pending'
STATUS_ACCEPTED = 'accepted'
STATUS_REJECTED = 'rejected'
STATUS_CLEARED = 'cleared'

DEFAULT_SERVINGS = 2
MIN_RATING = 1
MAX_RATING = 5

# Maximum field lengths
MAX_LENGTHS = {
    'recipe_name': 200,
    'description': 5000,
    'instruction': 5000,
    'ingredient_name': 200,
    'source_url': 500,
    'tag_name': 50,
    'notes': 2000,
}
