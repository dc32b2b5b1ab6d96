"""
Suggestion Model

Append-only log of daily suggestions. Several rows may exist for one date;
the most recently created row is the authoritative state for that day.
Only the status column is ever updated in place.
"""

from datetime import datetime

from constants import STATUS_PENDING
from utils.json_fields import parse_or_default
from .base import db
from .records import WeatherSnapshot


class Suggestion(db.Model):
    """A proposed recipe for one calendar date."""
    __tablename__ = 'suggestions'

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    suggested_for = db.Column(db.String(10), nullable=False, index=True)  # YYYY-MM-DD, local
    status = db.Column(db.String(10), nullable=False, default=STATUS_PENDING)
    reason = db.Column(db.Text, nullable=True)  # score breakdown or {"manual": true}
    weather_data = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)

    @property
    def reason_data(self):
        return parse_or_default(self.reason, {})

    @property
    def weather(self):
        return WeatherSnapshot.from_dict(parse_or_default(self.weather_data, {}))

    def to_dict(self):
        weather = self.weather
        return {
            'id': self.id,
            'recipeId': self.recipe_id,
            'suggestedFor': self.suggested_for,
            'status': self.status,
            'reason': self.reason_data or None,
            'weatherData': weather.to_dict() if weather else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
