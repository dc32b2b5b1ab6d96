"""
Meal History Model

Records which recipe was eaten when. Entries logged by accepting a
suggestion keep a link to that suggestion so a later reject can undo them.
"""

from datetime import datetime

from .base import db


class MealHistory(db.Model):
    """A meal that was eaten."""
    __tablename__ = 'meal_history'

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    suggestion_id = db.Column(db.Integer, db.ForeignKey('suggestions.id', ondelete='SET NULL'),
                              nullable=True, index=True)
    eaten_at = db.Column(db.DateTime, nullable=False, index=True)
    servings = db.Column(db.Integer, default=2)
    notes = db.Column(db.Text, nullable=True)
    rating = db.Column(db.Integer, nullable=True)  # 1-5
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)

    def to_dict(self, include_recipe=False):
        data = {
            'id': self.id,
            'recipeId': self.recipe_id,
            'suggestionId': self.suggestion_id,
            'eatenAt': self.eaten_at.isoformat() if self.eaten_at else None,
            'servings': self.servings,
            'notes': self.notes,
            'rating': self.rating,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if include_recipe and self.recipe is not None:
            data['recipe'] = self.recipe.to_summary()
        return data
