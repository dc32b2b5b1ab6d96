"""
Recipe Models

Contains the Recipe aggregate root and the Tag model with its association
table. Ingredients, instructions, seasons and weather tags are stored as
JSON text and read back through parse_or_default.
"""

from datetime import datetime

from utils.json_fields import parse_or_default, dump_field
from .base import db
from .records import Ingredient


recipe_tags = db.Table(
    'recipe_tags',
    db.Column('recipe_id', db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tag_id', db.Integer, db.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
)


class Recipe(db.Model):
    """Recipe with ingredients, instructions and season/weather tags."""
    __tablename__ = 'recipes'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(20), nullable=False, default='pasta', index=True)
    ingredients = db.Column(db.Text, nullable=False, default='[]')
    instructions = db.Column(db.Text, nullable=True)
    default_servings = db.Column(db.Integer, default=2)
    image_url = db.Column(db.String(500), nullable=True)
    source_url = db.Column(db.String(500), nullable=True)
    source_type = db.Column(db.String(20), nullable=True)  # 'manual', 'picnic', 'other'
    seasons = db.Column(db.Text, nullable=True)
    weather_tags = db.Column(db.Text, nullable=True)
    prep_time_minutes = db.Column(db.Integer, nullable=True)
    cook_time_minutes = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.now)

    tags = db.relationship('Tag', secondary=recipe_tags, lazy='selectin', backref='recipes')
    # Dependent rows go with the recipe
    history = db.relationship('MealHistory', backref='recipe', lazy=True,
                              cascade='all, delete-orphan')
    suggestions = db.relationship('Suggestion', backref='recipe', lazy=True,
                                  cascade='all, delete-orphan')
    week_plan_entries = db.relationship('WeekPlanEntry', backref='recipe', lazy=True,
                                        cascade='all, delete')

    @property
    def ingredient_list(self):
        items = (Ingredient.from_dict(raw) for raw in parse_or_default(self.ingredients, []))
        return [item for item in items if item is not None]

    @ingredient_list.setter
    def ingredient_list(self, items):
        self.ingredients = dump_field([item.to_dict() for item in items])

    @property
    def instruction_list(self):
        return [str(step) for step in parse_or_default(self.instructions, []) if step]

    @instruction_list.setter
    def instruction_list(self, steps):
        self.instructions = dump_field(list(steps)) if steps else None

    @property
    def season_list(self):
        return [s for s in parse_or_default(self.seasons, []) if isinstance(s, str)]

    @season_list.setter
    def season_list(self, values):
        self.seasons = dump_field(list(values))

    @property
    def weather_tag_list(self):
        return [t for t in parse_or_default(self.weather_tags, []) if isinstance(t, str)]

    @weather_tag_list.setter
    def weather_tag_list(self, values):
        self.weather_tags = dump_field(list(values))

    def to_summary(self):
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'imageUrl': self.image_url,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'category': self.category,
            'ingredients': [item.to_dict() for item in self.ingredient_list],
            'instructions': self.instruction_list,
            'defaultServings': self.default_servings,
            'imageUrl': self.image_url,
            'sourceUrl': self.source_url,
            'sourceType': self.source_type,
            'seasons': self.season_list,
            'weatherTags': self.weather_tag_list,
            'prepTimeMinutes': self.prep_time_minutes,
            'cookTimeMinutes': self.cook_time_minutes,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }


class Tag(db.Model):
    """Free-form recipe label grouped by type (diet, cuisine, mood, ...)."""
    __tablename__ = 'tags'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    slug = db.Column(db.String(50), unique=True, nullable=False)
    type = db.Column(db.String(20), nullable=False, default='custom', index=True)

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'slug': self.slug, 'type': self.type}
