"""
Recipe Service

Create, read, update, delete and search recipes, and store imported ones.
Slugs are derived from the name and must be unique.
"""

import logging
import re
import unicodedata

from sqlalchemy.exc import IntegrityError

from constants import (
    RECIPE_CATEGORIES, DEFAULT_RECIPE_CATEGORY, SEASONS, WEATHER_TAGS,
    DEFAULT_SERVINGS, MAX_LENGTHS, CATEGORY_DEFAULTS,
)
from models import db, Ingredient, Recipe
from utils import sanitize_text, sanitize_url, sanitize_recipe_name, sanitize_instructions
from . import history as history_service
from .errors import InvalidInput, NotFound
from .parsing import parse_ingredient

logger = logging.getLogger(__name__)

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 20


def slugify(name):
    """'Pasta Pesto & Crème' -> 'pasta-pesto-creme'."""
    text = unicodedata.normalize('NFD', name or '')
    text = ''.join(c for c in text if not unicodedata.combining(c)).lower()
    return re.sub(r'[^a-z0-9]+', '-', text).strip('-')


def get_recipe(recipe_id):
    recipe = db.session.get(Recipe, recipe_id)
    if recipe is None:
        raise NotFound('Recipe not found')
    return recipe


def find_by_slug(slug):
    return Recipe.query.filter_by(slug=slug).first()


def list_recipes(category=None):
    query = Recipe.query
    if category:
        query = query.filter_by(category=category)
    return query.order_by(Recipe.updated_at.desc(), Recipe.id.desc()).all()


def search_recipes(q):
    """Case-insensitive substring search on name and description."""
    q = (q or '').strip()
    if len(q) < SEARCH_MIN_LENGTH:
        return []
    pattern = f"%{q}%"
    return Recipe.query.filter(
        db.or_(Recipe.name.ilike(pattern), Recipe.description.ilike(pattern))
    ).order_by(Recipe.name).limit(SEARCH_LIMIT).all()


def recipe_detail(recipe):
    """Full recipe dict with tags and when it was last eaten."""
    data = recipe.to_dict()
    data['tags'] = [tag.to_dict() for tag in recipe.tags]
    last = history_service.find_most_recent(recipe.id)
    data['lastEaten'] = last.eaten_at.isoformat() if last else None
    return data


def _clean_ingredients(raw):
    if not isinstance(raw, list):
        raise InvalidInput('ingredients must be a list')
    items = []
    for entry in raw:
        # Plain strings are parsed like imported ingredient lines
        item = parse_ingredient(entry) if isinstance(entry, str) else Ingredient.from_dict(entry)
        if item is not None:
            item.name = sanitize_text(item.name, MAX_LENGTHS['ingredient_name'])
            items.append(item)
    return items


def _clean_positive_int(value, field_name, default=None):
    if value is None or value == '':
        return default
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{field_name} must be a whole number")
    if value < 1:
        raise InvalidInput(f"{field_name} must be positive")
    return value


def _only_known(values, allowed):
    if not isinstance(values, list):
        return []
    return [v for v in values if v in allowed]


def _apply_fields(recipe, data):
    """Copy camelCase payload fields onto a recipe."""
    if 'name' in data:
        recipe.name = sanitize_recipe_name(data['name'])
    if 'description' in data:
        recipe.description = sanitize_text(data['description'], MAX_LENGTHS['description']) or None
    if 'category' in data:
        category = data['category'] or DEFAULT_RECIPE_CATEGORY
        if category not in RECIPE_CATEGORIES:
            raise InvalidInput(f"category must be one of: {', '.join(RECIPE_CATEGORIES)}")
        recipe.category = category
    if 'ingredients' in data:
        recipe.ingredient_list = _clean_ingredients(data['ingredients'] or [])
    if 'instructions' in data:
        steps = data['instructions'] or []
        if isinstance(steps, str):
            steps = [steps]
        recipe.instruction_list = sanitize_instructions(steps)
    if 'defaultServings' in data:
        recipe.default_servings = _clean_positive_int(data['defaultServings'], 'defaultServings',
                                                      DEFAULT_SERVINGS)
    if 'imageUrl' in data:
        recipe.image_url = sanitize_url(data['imageUrl']) or None
    if 'sourceUrl' in data:
        recipe.source_url = sanitize_url(data['sourceUrl']) or None
    if 'sourceType' in data:
        recipe.source_type = (data['sourceType'] or 'manual')[:20]
    if 'seasons' in data:
        recipe.season_list = _only_known(data['seasons'], SEASONS)
    if 'weatherTags' in data:
        recipe.weather_tag_list = _only_known(data['weatherTags'], WEATHER_TAGS)
    if 'prepTimeMinutes' in data:
        recipe.prep_time_minutes = _clean_positive_int(data['prepTimeMinutes'], 'prepTimeMinutes')
    if 'cookTimeMinutes' in data:
        recipe.cook_time_minutes = _clean_positive_int(data['cookTimeMinutes'], 'cookTimeMinutes')


def _set_slug(recipe):
    slug = slugify(recipe.name)
    if not slug:
        raise InvalidInput('Recipe name must contain letters or digits')
    existing = find_by_slug(slug)
    if existing is not None and existing.id != recipe.id:
        raise InvalidInput(f"A recipe named '{recipe.name}' already exists")
    recipe.slug = slug


def _commit_recipe():
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise InvalidInput('A recipe with this name already exists') from e


def create_recipe(data, clock):
    if not (data.get('name') or '').strip():
        raise InvalidInput('name is required')

    now = clock.now()
    recipe = Recipe(
        category=DEFAULT_RECIPE_CATEGORY,
        default_servings=DEFAULT_SERVINGS,
        source_type='manual',
        ingredients='[]',
        created_at=now,
        updated_at=now,
    )
    _apply_fields(recipe, data)
    _set_slug(recipe)
    db.session.add(recipe)
    _commit_recipe()
    logger.info("Created recipe %s (%s)", recipe.id, recipe.slug)
    return recipe


def update_recipe(recipe_id, data, clock):
    recipe = get_recipe(recipe_id)
    if 'name' in data and not (data.get('name') or '').strip():
        raise InvalidInput('name cannot be empty')

    old_name = recipe.name
    _apply_fields(recipe, data)
    if recipe.name != old_name:
        _set_slug(recipe)
    recipe.updated_at = clock.now()
    _commit_recipe()
    logger.info("Updated recipe %s", recipe.id)
    return recipe


def delete_recipe(recipe_id):
    """Delete a recipe with its history, suggestions and plan entries."""
    recipe = get_recipe(recipe_id)
    db.session.delete(recipe)
    db.session.commit()
    logger.info("Deleted recipe %s", recipe_id)


def save_imported(imported, clock, category=None, recipe=None):
    """
    Store an ImportedRecipe.

    Updates `recipe` when given (rescrape), otherwise the recipe with the
    same slug, otherwise creates a new one with the category's season and
    weather defaults. Returns (recipe, created).
    """
    category = category if category in RECIPE_CATEGORIES else None
    if recipe is None:
        recipe = find_by_slug(slugify(imported.name))
    created = recipe is None
    now = clock.now()

    if created:
        category = category or DEFAULT_RECIPE_CATEGORY
        defaults = CATEGORY_DEFAULTS.get(category, {})
        recipe = Recipe(category=category, created_at=now)
        recipe.season_list = defaults.get('seasons', [])
        recipe.weather_tag_list = defaults.get('weather_tags', [])
    elif category:
        recipe.category = category

    if created or recipe.name != imported.name:
        recipe.name = imported.name
        _set_slug(recipe)
    if created:
        db.session.add(recipe)
    recipe.description = imported.description
    recipe.ingredient_list = imported.ingredients
    recipe.instruction_list = imported.instructions
    recipe.default_servings = imported.servings
    recipe.image_url = imported.image_url or recipe.image_url
    recipe.source_url = imported.source_url
    recipe.source_type = 'picnic' if 'picnic' in imported.source_url else 'other'
    recipe.prep_time_minutes = imported.prep_time_minutes
    recipe.cook_time_minutes = imported.cook_time_minutes
    recipe.updated_at = now
    _commit_recipe()
    logger.info("%s imported recipe %s from %s", 'Created' if created else 'Updated',
                recipe.slug, imported.source_url)
    return recipe, created
