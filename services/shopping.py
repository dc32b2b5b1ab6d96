"""
Shopping List Service

Functions for building the shopping list from the planned week: ingredient
names are normalized and merged, amounts combined where the units agree,
and every item is put in one of the fixed shopping categories.
"""

import logging
import math
import re
import unicodedata

from constants import (
    SHOPPING_CATEGORIES, FALLBACK_CATEGORY, CATEGORY_ORDER,
    LEADING_DESCRIPTORS, TRAILING_DESCRIPTORS, SHOPPING_LIST_TITLE,
)
from .parsing import float_to_fraction
from .weekplan import planned_recipes

logger = logging.getLogger(__name__)


def normalize_ingredient_name(name):
    """
    Comparison key for an ingredient name.

    'Verse  Spinazie' -> 'spinazie', 'rode ui' -> 'ui'. At most one leading
    and one trailing descriptor are removed.
    """
    text = re.sub(r'\s+', ' ', (name or '').lower().strip())
    words = text.split(' ')
    if len(words) > 1 and words[0] in LEADING_DESCRIPTORS:
        words = words[1:]
    if len(words) > 1 and words[-1] in TRAILING_DESCRIPTORS:
        words = words[:-1]
    return ' '.join(words)


def categorize_ingredient(name):
    """First shopping category with a keyword contained in the name."""
    lowered = (name or '').lower()
    for category, keywords in SHOPPING_CATEGORIES.items():
        for keyword in keywords:
            if keyword in lowered:
                return category
    return FALLBACK_CATEGORY


def _unit_key(unit):
    return (unit or '').strip().lower()


def _combine(sources):
    """(amount, unit) for a merge group."""
    first = sources[0]
    amounts = [s['amount'] for s in sources]
    units = {_unit_key(s['unit']) for s in sources}
    if all(a is not None for a in amounts) and len(units) == 1:
        total = sum(amounts)
        if not math.isfinite(total):
            return None, first['unit']
        if total == int(total):
            total = int(total)
        return total, first['unit'] or None
    return first['amount'], first['unit']


def merge_ingredients(lines):
    """
    Merge (Ingredient, Recipe) pairs into shopping items.

    Lines merge when their normalized names are equal. The first name seen is
    kept for display and every occurrence is listed under 'sources'. Returns
    items in first-seen order.
    """
    groups = {}
    for ingredient, recipe in lines:
        key = normalize_ingredient_name(ingredient.name)
        if not key:
            continue
        group = groups.get(key)
        if group is None:
            group = groups[key] = {
                'name': key,
                'displayName': ingredient.name,
                'category': categorize_ingredient(ingredient.name),
                'sources': [],
            }
        group['sources'].append({
            'recipeName': recipe.name,
            'recipeId': recipe.id,
            'amount': ingredient.amount,
            'unit': ingredient.unit,
        })

    items = []
    for group in groups.values():
        amount, unit = _combine(group['sources'])
        items.append({
            'name': group['name'],
            'displayName': group['displayName'],
            'amount': amount,
            'unit': unit,
            'category': group['category'],
            'sources': group['sources'],
        })
    return items


def dutch_sort_key(text):
    """Sort key approximating Dutch collation: accents ignored, case-insensitive."""
    decomposed = unicodedata.normalize('NFKD', text or '')
    stripped = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return (stripped.casefold(), text)


def group_by_category(items):
    """Category -> items sorted by display name, in fixed category order, empty ones left out."""
    grouped = {}
    for category in CATEGORY_ORDER:
        members = [item for item in items if item['category'] == category]
        if members:
            grouped[category] = sorted(members, key=lambda item: dutch_sort_key(item['displayName']))
    return grouped


def build_shopping_list(clock):
    """Shopping list for the stored week plan from today on."""
    planned = planned_recipes(clock)

    lines = []
    recipes = []
    for date_str, recipe in planned:
        recipes.append({
            'id': recipe.id,
            'name': recipe.name,
            'date': date_str,
            'servings': recipe.default_servings,
        })
        lines.extend((ingredient, recipe) for ingredient in recipe.ingredient_list)

    items = merge_ingredients(lines)
    logger.debug("Shopping list: %d lines merged into %d items from %d recipes",
                 len(lines), len(items), len(recipes))
    return {
        'items': items,
        'grouped': group_by_category(items),
        'recipes': recipes,
        'generatedAt': clock.now().isoformat(),
    }


def format_amount(amount, unit):
    """'1 1/2 el', '3', '' for display."""
    if amount is None or not math.isfinite(amount):
        return ''
    text = float_to_fraction(amount)
    return f"{text} {unit}" if unit else text


def format_shopping_text(shopping_list):
    """Plain-text rendering for pasting into a notes app or chat."""
    lines = [SHOPPING_LIST_TITLE, '']
    for category, items in shopping_list['grouped'].items():
        lines.append(f"## {category}")
        for item in items:
            qty = format_amount(item['amount'], item['unit'])
            lines.append(f"- {qty} {item['displayName']}" if qty else f"- {item['displayName']}")
        lines.append('')
    names = [r['name'] for r in shopping_list['recipes']]
    if names:
        lines.append(f"Recepten: {', '.join(names)}")
    return '\n'.join(lines).rstrip() + '\n'
