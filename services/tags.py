"""
Tag Service

Recipe labels grouped by type, and the default Dutch tag set.
"""

import logging

from constants import TAG_TYPES, DEFAULT_TAGS, MAX_LENGTHS
from models import db, Tag
from utils import sanitize_text
from .errors import InvalidInput, NotFound
from .recipes import get_recipe, slugify

logger = logging.getLogger(__name__)


def list_grouped():
    """Type -> tags sorted by name, only types that have tags."""
    grouped = {}
    for tag in Tag.query.order_by(Tag.type, Tag.name).all():
        grouped.setdefault(tag.type, []).append(tag)
    return grouped


def list_by_type(tag_type):
    if tag_type not in TAG_TYPES:
        raise InvalidInput(f"type must be one of: {', '.join(TAG_TYPES)}")
    return Tag.query.filter_by(type=tag_type).order_by(Tag.name).all()


def create_tag(name, tag_type='custom'):
    name = sanitize_text(name, MAX_LENGTHS['tag_name']).lower()
    if not name:
        raise InvalidInput('name is required')
    tag_type = tag_type or 'custom'
    if tag_type not in TAG_TYPES:
        raise InvalidInput(f"type must be one of: {', '.join(TAG_TYPES)}")
    slug = slugify(name)
    if not slug:
        raise InvalidInput('Tag name must contain letters or digits')
    if Tag.query.filter(db.or_(Tag.name == name, Tag.slug == slug)).first() is not None:
        raise InvalidInput(f"Tag '{name}' already exists")

    tag = Tag(name=name, slug=slug, type=tag_type)
    db.session.add(tag)
    db.session.commit()
    return tag


def attach_tags(recipe_id, tag_ids):
    """Add tags to a recipe; tags it already has are skipped."""
    recipe = get_recipe(recipe_id)
    if not isinstance(tag_ids, list):
        raise InvalidInput('tagIds must be a list')

    current = {tag.id for tag in recipe.tags}
    for tag_id in tag_ids:
        if tag_id in current:
            continue
        tag = db.session.get(Tag, tag_id)
        if tag is None:
            raise NotFound(f"Tag {tag_id} not found")
        recipe.tags.append(tag)
        current.add(tag.id)
    db.session.commit()
    return recipe.tags


def detach_tag(recipe_id, tag_id):
    recipe = get_recipe(recipe_id)
    for tag in recipe.tags:
        if tag.id == tag_id:
            recipe.tags.remove(tag)
            db.session.commit()
            return
    raise NotFound('Tag is not on this recipe')


def seed_default_tags():
    """Insert the default tags that are not there yet. Returns the number added."""
    existing = {tag.name for tag in Tag.query.all()}
    added = 0
    for tag_type, names in DEFAULT_TAGS.items():
        for name in names:
            if name in existing:
                continue
            db.session.add(Tag(name=name, slug=slugify(name), type=tag_type))
            existing.add(name)
            added += 1
    db.session.commit()
    logger.info("Seeded %d default tags", added)
    return added
