"""
Suggestion Service

Picks today's recipe and moves it through its lifecycle:

    pending -> accepted
    pending -> rejected -> (new pending)
    pending / accepted -> cleared

Suggestion rows are an append-only log per date. SuggestionDay loads that
log in creation order and derives the authoritative state from its last row.
"""

import logging

from constants import (
    STATUS_PENDING, STATUS_ACCEPTED, STATUS_REJECTED, STATUS_CLEARED,
)
from models import db, Recipe, Suggestion
from utils.json_fields import dump_field
from . import history as history_service
from .errors import InvalidInput, NoRecipesAvailable, NotFound
from .scoring import rank_recipes, pick_from_top
from .weather import season_for, weather_tags

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (STATUS_PENDING, STATUS_ACCEPTED)


class SuggestionDay:
    """All suggestion rows for one date, oldest first."""

    def __init__(self, date, rows):
        self.date = date
        self.rows = rows

    @classmethod
    def load(cls, date):
        rows = Suggestion.query.filter_by(suggested_for=date) \
            .order_by(Suggestion.created_at, Suggestion.id).all()
        return cls(date, rows)

    @property
    def current(self):
        """The authoritative row: the most recently created one."""
        return self.rows[-1] if self.rows else None

    @property
    def status(self):
        current = self.current
        return current.status if current else None

    @property
    def is_active(self):
        return self.status in ACTIVE_STATUSES

    @property
    def recipe_ids(self):
        """Every recipe suggested for this date so far."""
        return {row.recipe_id for row in self.rows}

    def mark_all(self, status):
        """Set every row of the day to `status`. Does not commit."""
        for row in self.rows:
            row.status = status

    def reject_all(self):
        """Reject every row, dropping the meals logged by accepted ones. Does not commit."""
        for row in self.rows:
            if row.status == STATUS_ACCEPTED:
                removed = history_service.delete_for_suggestion(row.id)
                logger.info("Removed %d history entries for suggestion %s", removed, row.id)
        self.mark_all(STATUS_REJECTED)

    def append(self, recipe_id, status, reason, weather, created_at):
        """Add a new row to the log. Does not commit."""
        row = Suggestion(
            recipe_id=recipe_id,
            suggested_for=self.date,
            status=status,
            reason=dump_field(reason),
            weather_data=dump_field(weather.to_dict()) if weather else None,
            created_at=created_at,
        )
        db.session.add(row)
        self.rows.append(row)
        return row


def generate_suggestion(weather_service, clock, rng, exclude_ids=()):
    """
    Score the catalog for right now and pick one of the best three.

    Returns (recipe, breakdown, snapshot). Nothing is persisted.
    """
    exclude_ids = set(exclude_ids)
    recipes = Recipe.query.order_by(Recipe.id).all()
    pool = [r for r in recipes if r.id not in exclude_ids]
    if not pool:
        if not exclude_ids:
            raise NoRecipesAvailable('No recipes available')
        # Everything was suggested today already; start over with the full catalog
        logger.info("All recipes excluded, falling back to full catalog")
        pool = recipes

    snapshot = weather_service.get_current_weather()
    now = clock.now()
    ranked = rank_recipes(pool, season_for(now), weather_tags(snapshot),
                          history_service.days_since_eaten(now))
    choice = pick_from_top(ranked, rng)
    logger.debug("Picked %s (score %s) from %d candidates",
                 choice.recipe.name, choice.total, len(ranked))
    return choice.recipe, choice.breakdown, snapshot


def _append_generated(day, weather_service, clock, rng):
    recipe, breakdown, snapshot = generate_suggestion(
        weather_service, clock, rng, exclude_ids=day.recipe_ids)
    row = day.append(recipe.id, STATUS_PENDING, breakdown.to_dict(), snapshot, clock.now())
    db.session.commit()
    logger.info("New suggestion for %s: %s", day.date, recipe.name)
    return row


def get_suggestion(suggestion_id):
    suggestion = db.session.get(Suggestion, suggestion_id)
    if suggestion is None:
        raise NotFound('Suggestion not found')
    return suggestion


def get_todays_suggestion(weather_service, clock, rng, suppress_after_clear=False):
    """
    Today's pending or accepted suggestion, generating a new one when there is none.

    With `suppress_after_clear` a cleared day stays empty and None is returned.
    """
    day = SuggestionDay.load(clock.today())
    if day.is_active:
        return day.current
    if suppress_after_clear and day.status == STATUS_CLEARED:
        return None
    return _append_generated(day, weather_service, clock, rng)


def accept_suggestion(suggestion_id, clock):
    """Mark a suggestion accepted and log it as eaten now."""
    suggestion = get_suggestion(suggestion_id)
    if suggestion.status == STATUS_ACCEPTED:
        return suggestion
    if suggestion.status != STATUS_PENDING:
        raise InvalidInput(f"Cannot accept a {suggestion.status} suggestion")

    suggestion.status = STATUS_ACCEPTED
    db.session.flush()
    history_service.log_meal(suggestion.recipe_id, clock, suggestion_id=suggestion.id)
    logger.info("Accepted suggestion %s", suggestion.id)
    return suggestion


def reject_suggestion(suggestion_id, weather_service, clock, rng):
    """
    Reject a suggestion and return a fresh pending one for today.

    Rejecting an accepted suggestion removes the history entry its accept created.
    Nothing is stored when no replacement can be generated.
    """
    suggestion = get_suggestion(suggestion_id)
    day = SuggestionDay.load(clock.today())
    recipe, breakdown, snapshot = generate_suggestion(
        weather_service, clock, rng, exclude_ids=day.recipe_ids | {suggestion.recipe_id})

    if suggestion.status == STATUS_ACCEPTED:
        removed = history_service.delete_for_suggestion(suggestion.id)
        logger.info("Removed %d history entries for suggestion %s", removed, suggestion.id)
    suggestion.status = STATUS_REJECTED
    row = day.append(recipe.id, STATUS_PENDING, breakdown.to_dict(), snapshot, clock.now())
    db.session.commit()
    logger.info("Rejected suggestion %s, new suggestion for %s: %s", suggestion.id, day.date, recipe.name)
    return row


def preview_suggestion(weather_service, clock, rng):
    """A scored pick for today that is not stored."""
    day = SuggestionDay.load(clock.today())
    return generate_suggestion(weather_service, clock, rng, exclude_ids=day.recipe_ids)


def recent_suggestions(limit=30):
    return Suggestion.query.order_by(Suggestion.created_at.desc(), Suggestion.id.desc()) \
        .limit(limit).all()


def suggestion_payload(suggestion):
    """Suggestion dict with its recipe embedded."""
    data = suggestion.to_dict()
    data['recipe'] = suggestion.recipe.to_dict() if suggestion.recipe else None
    return data
