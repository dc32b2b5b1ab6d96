"""
Recipe Import Service

Fetches a recipe page and reads the schema.org Recipe JSON-LD most recipe
sites embed. Pages without it fall back to the <h1> title.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from constants import DEFAULT_SERVINGS, MAX_LENGTHS
from models.records import Ingredient
from utils import (
    safe_fetch, extract_url, SSRFError,
    sanitize_text, sanitize_url, sanitize_recipe_name, sanitize_instructions, strip_html,
)
from .errors import InvalidInput, UpstreamUnavailable
from .parsing import parse_ingredient

logger = logging.getLogger(__name__)

_DURATION = re.compile(r'^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$', re.IGNORECASE)


@dataclass
class ImportedRecipe:
    """Recipe fields read from a page, ready for create or update."""
    name: str
    source_url: str
    description: Optional[str] = None
    ingredients: List[Ingredient] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    servings: int = DEFAULT_SERVINGS
    image_url: Optional[str] = None
    prep_time_minutes: Optional[int] = None
    cook_time_minutes: Optional[int] = None
    found_structured_data: bool = True


def parse_duration(value):
    """ISO 8601 duration ('PT1H30M') -> minutes, or None."""
    if not value or not isinstance(value, str):
        return None
    match = _DURATION.match(value.strip())
    if not match or not any(match.groups()):
        return None
    days, hours, minutes, seconds = match.groups()
    total = int(days or 0) * 1440 + int(hours or 0) * 60 + int(minutes or 0)
    if seconds:
        total += round(float(seconds) / 60)
    return total or None


def parse_servings(value):
    """recipeYield ('4 personen', ['4', '4 porties'], 4) -> servings."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, bool):
        return DEFAULT_SERVINGS
    if isinstance(value, (int, float)):
        return int(value) if value >= 1 else DEFAULT_SERVINGS
    if isinstance(value, str):
        match = re.search(r'\d+', value)
        if match and int(match.group()) >= 1:
            return int(match.group())
    return DEFAULT_SERVINGS


def parse_image(value):
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get('url') or value.get('contentUrl')
    return sanitize_url(value) or None


def _instruction_texts(node):
    """Flatten recipeInstructions: strings, HowToStep and HowToSection."""
    if isinstance(node, str):
        return [node]
    if isinstance(node, list):
        texts = []
        for item in node:
            texts.extend(_instruction_texts(item))
        return texts
    if isinstance(node, dict):
        if 'itemListElement' in node:
            return _instruction_texts(node['itemListElement'])
        text = node.get('text') or node.get('name')
        return [text] if isinstance(text, str) else []
    return []


def _is_recipe(item):
    if not isinstance(item, dict):
        return False
    item_type = item.get('@type')
    return item_type == 'Recipe' or (isinstance(item_type, list) and 'Recipe' in item_type)


def find_recipe_json_ld(soup):
    """The first schema.org Recipe node in the page's JSON-LD blocks."""
    for script in soup.find_all('script', type='application/ld+json'):
        try:
            data = json.loads(script.string or '')
        except (json.JSONDecodeError, TypeError):
            continue

        candidates = data if isinstance(data, list) else [data]
        for candidate in candidates:
            if _is_recipe(candidate):
                return candidate
            if isinstance(candidate, dict):
                for item in candidate.get('@graph') or []:
                    if _is_recipe(item):
                        return item
    return None


def parse_recipe_html(html, source_url):
    """ImportedRecipe from a page's HTML."""
    soup = BeautifulSoup(html, 'html.parser')
    data = find_recipe_json_ld(soup)

    if data is None:
        title = soup.find('h1')
        logger.info("No Recipe JSON-LD found at %s", source_url)
        return ImportedRecipe(
            name=sanitize_recipe_name(title.get_text() if title else None),
            source_url=source_url,
            found_structured_data=False,
        )

    ingredients = []
    for line in data.get('recipeIngredient') or []:
        if not isinstance(line, str):
            continue
        parsed = parse_ingredient(sanitize_text(strip_html(line), MAX_LENGTHS['ingredient_name']))
        if parsed is not None:
            ingredients.append(parsed)

    description = strip_html(data.get('description') or '')
    return ImportedRecipe(
        name=sanitize_recipe_name(data.get('name')),
        source_url=source_url,
        description=sanitize_text(description, MAX_LENGTHS['description']) or None,
        ingredients=ingredients,
        instructions=sanitize_instructions(_instruction_texts(data.get('recipeInstructions'))),
        servings=parse_servings(data.get('recipeYield')),
        image_url=parse_image(data.get('image')),
        prep_time_minutes=parse_duration(data.get('prepTime')),
        cook_time_minutes=parse_duration(data.get('cookTime')) or parse_duration(data.get('totalTime')),
    )


def fetch_recipe(text, timeout=10, max_bytes=10 * 1024 * 1024):
    """
    Fetch and parse the recipe behind a URL or a shared message containing one.

    Raises InvalidInput for unusable or blocked URLs and UpstreamUnavailable
    when the site cannot be reached.
    """
    url = sanitize_url(extract_url(text or ''))
    if not url:
        raise InvalidInput('A valid http(s) URL is required')

    try:
        response = safe_fetch(url, timeout=timeout, max_size=max_bytes)
    except SSRFError as e:
        logger.warning("Blocked import from %s: %s", url, e)
        raise InvalidInput(f"URL blocked: {e}") from e
    except requests.RequestException as e:
        logger.warning("Could not fetch %s: %s", url, e)
        raise UpstreamUnavailable(f"Could not fetch URL: {e}") from e

    # Final URL after redirects, e.g. share short links
    final_url = sanitize_url(getattr(response, 'url', None) or '') or url
    return parse_recipe_html(response.text, final_url)
