"""
Meal History Service

Logging, listing and removing eaten meals, and the days-since-eaten lookup
the suggestion scoring needs.
"""

import logging
from datetime import datetime

from constants import DEFAULT_SERVINGS, MIN_RATING, MAX_RATING, MAX_LENGTHS
from models import db, MealHistory, Recipe
from .errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)


def days_since_eaten(now):
    """Map recipe id -> whole days since it was last eaten (recipes never eaten are absent)."""
    rows = db.session.query(MealHistory.recipe_id, db.func.max(MealHistory.eaten_at)) \
        .group_by(MealHistory.recipe_id).all()
    return {recipe_id: (now - last).days for recipe_id, last in rows if last is not None}


def find_most_recent(recipe_id):
    return MealHistory.query.filter_by(recipe_id=recipe_id) \
        .order_by(MealHistory.eaten_at.desc()).first()


def list_recent(limit=50):
    return MealHistory.query.order_by(MealHistory.eaten_at.desc(), MealHistory.id.desc()) \
        .limit(limit).all()


def list_for_recipe(recipe_id):
    return MealHistory.query.filter_by(recipe_id=recipe_id) \
        .order_by(MealHistory.eaten_at.desc()).all()


def get_entry(entry_id):
    entry = db.session.get(MealHistory, entry_id)
    if entry is None:
        raise NotFound('History entry not found')
    return entry


def _parse_eaten_at(value):
    if value is None or value == '':
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        raise InvalidInput('eatenAt must be an ISO date or datetime')
    if parsed.tzinfo is not None:
        # Stored times are local wall-clock times
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _validate_rating(rating):
    if rating is None or rating == '':
        return None
    try:
        rating = int(rating)
    except (TypeError, ValueError):
        raise InvalidInput('rating must be a number from 1 to 5')
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidInput('rating must be a number from 1 to 5')
    return rating


def _validate_servings(servings):
    if servings is None or servings == '':
        return DEFAULT_SERVINGS
    try:
        servings = int(servings)
    except (TypeError, ValueError):
        raise InvalidInput('servings must be a positive number')
    if servings < 1:
        raise InvalidInput('servings must be a positive number')
    return servings


def log_meal(recipe_id, clock, eaten_at=None, servings=None, notes=None, rating=None,
             suggestion_id=None):
    """Record an eaten meal and commit."""
    if recipe_id is None:
        raise InvalidInput('recipeId is required')
    if db.session.get(Recipe, recipe_id) is None:
        raise NotFound('Recipe not found')

    now = clock.now()
    entry = MealHistory(
        recipe_id=recipe_id,
        suggestion_id=suggestion_id,
        eaten_at=_parse_eaten_at(eaten_at) or now,
        servings=_validate_servings(servings),
        notes=(notes or '').strip()[:MAX_LENGTHS['notes']] or None,
        rating=_validate_rating(rating),
        created_at=now,
    )
    db.session.add(entry)
    db.session.commit()
    logger.info("Logged meal: recipe %s at %s", recipe_id, entry.eaten_at)
    return entry


def update_entry(entry_id, data):
    entry = get_entry(entry_id)
    if 'eatenAt' in data:
        eaten_at = _parse_eaten_at(data['eatenAt'])
        if eaten_at is not None:
            entry.eaten_at = eaten_at
    if 'servings' in data:
        entry.servings = _validate_servings(data['servings'])
    if 'notes' in data:
        entry.notes = (data['notes'] or '').strip()[:MAX_LENGTHS['notes']] or None
    if 'rating' in data:
        entry.rating = _validate_rating(data['rating'])
    db.session.commit()
    return entry


def delete_entry(entry_id):
    entry = get_entry(entry_id)
    db.session.delete(entry)
    db.session.commit()


def delete_for_suggestion(suggestion_id):
    """Remove entries logged by accepting the given suggestion. Does not commit."""
    return MealHistory.query.filter_by(suggestion_id=suggestion_id) \
        .delete(synchronize_session=False)


def delete_for_recipe_between(recipe_id, start, end):
    """Remove a recipe's entries with start <= eaten_at < end. Does not commit."""
    return MealHistory.query.filter(
        MealHistory.recipe_id == recipe_id,
        MealHistory.eaten_at >= start,
        MealHistory.eaten_at < end,
    ).delete(synchronize_session=False)
