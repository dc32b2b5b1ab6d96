"""
Scoring Service

Point-based ranking of recipes for a day. The main suggestion uses season,
weather and recency; week-plan fills and rerolls use a lighter season-plus-
jitter pick. Randomness always comes from the caller's random.Random so a
seeded generator gives repeatable results.
"""

from dataclasses import dataclass

from models.records import ScoreBreakdown

# Days since eaten for a recipe that was never eaten
NEVER_EATEN_DAYS = 999

# Season points
SEASON_MATCH = 30
SEASON_MISMATCH = 5
SEASON_NEUTRAL = 15

# Weather points
WEATHER_PER_TAG = 15
WEATHER_MAX = 30
WEATHER_NEUTRAL = 10

# Minimum days since eaten -> recency points, checked top to bottom
RECENCY_STEPS = ((14, 40), (7, 30), (3, 15))

# Number of best candidates the daily pick is drawn from
TOP_CANDIDATES = 3

PLAN_SEASON_MATCH = 30
PLAN_JITTER = 10
REGENERATE_JITTER = 20


def season_score(recipe_seasons, current_season):
    if not recipe_seasons:
        return SEASON_NEUTRAL
    return SEASON_MATCH if current_season in recipe_seasons else SEASON_MISMATCH


def weather_score(recipe_weather_tags, current_tags):
    if not recipe_weather_tags:
        return WEATHER_NEUTRAL
    matching = set(recipe_weather_tags) & set(current_tags)
    return min(WEATHER_MAX, len(matching) * WEATHER_PER_TAG)


def recency_score(days_since_eaten):
    for min_days, points in RECENCY_STEPS:
        if days_since_eaten >= min_days:
            return points
    return 0


def score_recipe(recipe, current_season, current_tags, days_since_eaten):
    """ScoreBreakdown for one recipe."""
    return ScoreBreakdown(
        season_score=season_score(recipe.season_list, current_season),
        weather_score=weather_score(recipe.weather_tag_list, current_tags),
        recency_score=recency_score(days_since_eaten),
    )


@dataclass
class ScoredRecipe:
    recipe: object
    breakdown: ScoreBreakdown

    @property
    def total(self):
        return self.breakdown.total


def rank_recipes(recipes, current_season, current_tags, days_since):
    """
    Score every recipe and sort best first.

    `days_since` maps recipe id -> days since last eaten; missing ids count
    as never eaten. Equal totals keep catalog order.
    """
    scored = [
        ScoredRecipe(recipe, score_recipe(recipe, current_season, current_tags,
                                          days_since.get(recipe.id, NEVER_EATEN_DAYS)))
        for recipe in recipes
    ]
    scored.sort(key=lambda s: s.total, reverse=True)
    return scored


def pick_from_top(ranked, rng, top_n=TOP_CANDIDATES):
    """Uniformly random choice among the best `top_n` ranked candidates."""
    if not ranked:
        return None
    return rng.choice(ranked[:top_n])


def quick_pick(recipes, season, rng, jitter):
    """
    Highest of season bonus plus random jitter in [0, jitter).

    Used where the full weather/recency scoring is not wanted: filling
    empty week-plan days and rerolling a single day.
    """
    best = None
    best_score = None
    for recipe in recipes:
        score = (PLAN_SEASON_MATCH if season in recipe.season_list else 0) + rng.random() * jitter
        if best_score is None or score > best_score:
            best, best_score = recipe, score
    return best
