"""
Week Plan Model

One row per calendar date of the rolling plan. A cleared day keeps its row
with recipe_id NULL so it is not filled again automatically.
"""

from datetime import datetime

from .base import db


class WeekPlanEntry(db.Model):
    """Planned recipe for a non-today date, with the weather seen when it was planned."""
    __tablename__ = 'week_plan'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.String(10), unique=True, nullable=False)  # YYYY-MM-DD, local
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=True, index=True)
    cleared = db.Column(db.Boolean, nullable=False, default=False)
    # Weather cached at generation time
    temp = db.Column(db.Integer, nullable=True)
    icon = db.Column(db.String(10), nullable=True)
    description = db.Column(db.String(200), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
