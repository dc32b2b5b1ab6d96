"""
Week Plan Service

Resolves the rolling seven-day plan (today plus forecast days) and applies
manual day edits. Today is governed by the suggestion log; every other day
by its WeekPlanEntry row. Days without any record are filled on read and
the pick is stored so the plan stays stable between requests.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from constants import STATUS_PENDING, STATUS_ACCEPTED, STATUS_CLEARED
from models import db, Recipe, WeekPlanEntry
from . import history as history_service
from .clock import DATE_FORMAT, parse_date
from .errors import InvalidInput, NoRecipesAvailable, NotFound
from .scoring import quick_pick, score_recipe, NEVER_EATEN_DAYS, PLAN_JITTER, REGENERATE_JITTER
from .suggestions import SuggestionDay
from .weather import day_name, season_for, weather_tags

logger = logging.getLogger(__name__)

WINDOW_DAYS = 7

# Cached weather for a day picked by hand before it was ever planned
DEFAULT_TEMP = 0
DEFAULT_ICON = '01d'
DEFAULT_DESCRIPTION = ''


def _season_of(date_str):
    return season_for(datetime.strptime(date_str, DATE_FORMAT))


def _validate_date(date_str):
    if parse_date(date_str) is None:
        raise InvalidInput('Date must be in YYYY-MM-DD format')
    return date_str


def _window_days(weather_service, clock):
    """[{date, temp, icon, description}] for today and the following forecast days."""
    today = clock.today()
    current = weather_service.get_current_weather()
    days = [{
        'date': today,
        'temp': current.temp,
        'icon': current.icon,
        'description': current.description,
    }]
    for forecast in weather_service.get_week_forecast():
        if forecast.date == today:
            continue
        days.append({
            'date': forecast.date,
            'temp': forecast.temp,
            'icon': forecast.icon,
            'description': forecast.description,
        })
    return days[:WINDOW_DAYS]


def _day_output(day, recipe=None, entry=None, **extra):
    # Live forecast fields win, the entry's cached weather fills the gaps
    def pick(field):
        value = day.get(field)
        if value is None and entry is not None:
            value = getattr(entry, field)
        return value

    data = {
        'date': day['date'],
        'dayName': day_name(day['date']),
        'temp': pick('temp'),
        'icon': pick('icon'),
        'description': pick('description'),
        'recipe': recipe.to_summary() if recipe is not None else None,
    }
    data.update(extra)
    return data


def _insert_entry_ignore_conflict(entry):
    """Store a new plan row unless the date was planned concurrently."""
    if WeekPlanEntry.query.filter_by(date=entry.date).first() is not None:
        return False
    db.session.add(entry)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.info("Plan entry for %s already exists, keeping stored one", entry.date)
        return False
    return True


def _upsert_entry(date_str, clock, **fields):
    """Update the plan row for a date, creating it with default weather when missing. Does not commit."""
    entry = WeekPlanEntry.query.filter_by(date=date_str).first()
    if entry is None:
        entry = WeekPlanEntry(date=date_str, temp=DEFAULT_TEMP, icon=DEFAULT_ICON,
                              description=DEFAULT_DESCRIPTION, created_at=clock.now())
        db.session.add(entry)
    for name, value in fields.items():
        setattr(entry, name, value)
    return entry


def resolve_week_plan(weather_service, clock, rng):
    """
    The ordered plan for today and up to six more days.

    Each day is, in order of preference: today's suggestion, the stored plan
    entry, or a fresh pick that is then stored. Fresh picks never reuse a
    recipe already placed elsewhere in the window; earlier days win.
    """
    today = clock.today()
    days = _window_days(weather_service, clock)
    dates = [day['date'] for day in days]

    today_log = SuggestionDay.load(today)
    entries = {e.date: e for e in WeekPlanEntry.query.filter(WeekPlanEntry.date.in_(dates)).all()}
    recipes = Recipe.query.order_by(Recipe.id).all()
    by_id = {r.id: r for r in recipes}

    # Recipes pinned by stored records are off limits for generated days
    used = set()
    if today_log.current is not None and today_log.status != STATUS_CLEARED:
        used.add(today_log.current.recipe_id)
    for date_str, entry in entries.items():
        if date_str == today and today_log.current is not None:
            continue
        if not entry.cleared and entry.recipe_id is not None:
            used.add(entry.recipe_id)

    plan = []
    for day in days:
        date_str = day['date']

        if date_str == today and today_log.current is not None:
            current = today_log.current
            if current.status == STATUS_CLEARED:
                plan.append(_day_output(day, status=STATUS_CLEARED, cleared=True))
            else:
                plan.append(_day_output(day, by_id.get(current.recipe_id),
                                        status=current.status, cleared=False))
            continue

        entry = entries.get(date_str)
        if entry is not None:
            if entry.cleared or entry.recipe_id is None:
                plan.append(_day_output(day, entry=entry, cleared=True))
            else:
                plan.append(_day_output(day, by_id.get(entry.recipe_id), entry=entry, cleared=False))
            continue

        available = [r for r in recipes if r.id not in used]
        recipe = quick_pick(available, _season_of(date_str), rng, PLAN_JITTER)
        if recipe is None:
            plan.append(_day_output(day, cleared=False))
            continue

        used.add(recipe.id)
        _insert_entry_ignore_conflict(WeekPlanEntry(
            date=date_str,
            recipe_id=recipe.id,
            cleared=False,
            temp=day['temp'],
            icon=day['icon'],
            description=day['description'],
            created_at=clock.now(),
        ))
        plan.append(_day_output(day, recipe, cleared=False))

    return plan


def _get_recipe(recipe_id):
    if recipe_id is None or recipe_id == '':
        raise InvalidInput('recipeId is required')
    try:
        recipe_id = int(recipe_id)
    except (TypeError, ValueError):
        raise InvalidInput('recipeId must be a number')
    recipe = db.session.get(Recipe, recipe_id)
    if recipe is None:
        raise NotFound('Recipe not found')
    return recipe


def set_day_recipe(date_str, recipe_id, weather_service, clock):
    """Pin a recipe to a day. Today's pick is stored as an accepted suggestion."""
    _validate_date(date_str)
    recipe = _get_recipe(recipe_id)

    if date_str == clock.today():
        snapshot = weather_service.get_current_weather()
        today_log = SuggestionDay.load(date_str)
        today_log.reject_all()
        today_log.append(recipe.id, STATUS_ACCEPTED, {'manual': True}, snapshot, clock.now())
        db.session.commit()
        logger.info("Today set to %s by hand", recipe.name)
        return {'date': date_str, 'recipe': recipe.to_summary(), 'status': STATUS_ACCEPTED}

    _upsert_entry(date_str, clock, recipe_id=recipe.id, cleared=False)
    db.session.commit()
    logger.info("Plan for %s set to %s", date_str, recipe.name)
    return {'date': date_str, 'recipe': recipe.to_summary()}


def clear_day(date_str, clock):
    """Leave a day empty. It is not filled again until set or regenerated."""
    _validate_date(date_str)
    if date_str == clock.today():
        SuggestionDay.load(date_str).mark_all(STATUS_CLEARED)
    _upsert_entry(date_str, clock, recipe_id=None, cleared=True)
    db.session.commit()
    logger.info("Cleared plan for %s", date_str)
    return {'date': date_str, 'recipe': None, 'cleared': True}


def regenerate_day(date_str, weather_service, clock, rng):
    """Reroll one day with a recipe not used elsewhere in the plan."""
    _validate_date(date_str)
    today = clock.today()
    is_today = date_str == today

    other_entries = WeekPlanEntry.query.filter(
        WeekPlanEntry.date != date_str,
        WeekPlanEntry.date >= today,
        WeekPlanEntry.recipe_id.isnot(None),
    ).all()
    used = {e.recipe_id for e in other_entries}
    today_log = SuggestionDay.load(today) if is_today else None
    if today_log is not None:
        used |= today_log.recipe_ids

    available = [r for r in Recipe.query.order_by(Recipe.id).all() if r.id not in used]
    recipe = quick_pick(available, _season_of(date_str), rng, REGENERATE_JITTER)
    if recipe is None:
        raise NoRecipesAvailable('No other recipes available for this day')

    if is_today:
        snapshot = weather_service.get_current_weather()
        days_since = history_service.days_since_eaten(clock.now()).get(recipe.id, NEVER_EATEN_DAYS)
        reason = score_recipe(recipe, season_for(clock.now()), weather_tags(snapshot), days_since).to_dict()
        reason['regenerated'] = True
        today_log.reject_all()
        today_log.append(recipe.id, STATUS_PENDING, reason, snapshot, clock.now())
        db.session.commit()
        logger.info("Regenerated today: %s", recipe.name)
        return {'date': date_str, 'recipe': recipe.to_summary(), 'status': STATUS_PENDING}

    _upsert_entry(date_str, clock, recipe_id=recipe.id, cleared=False)
    db.session.commit()
    logger.info("Regenerated %s: %s", date_str, recipe.name)
    return {'date': date_str, 'recipe': recipe.to_summary()}


def planned_recipes(clock):
    """
    (date, recipe) pairs for the stored plan from today on, at most seven.

    Reads only; nothing is generated. Today comes from the suggestion log
    when it has rows, otherwise from today's plan entry.
    """
    today = clock.today()
    rows = WeekPlanEntry.query.filter(WeekPlanEntry.date >= today).all()
    by_date = {e.date: e.recipe_id for e in rows if not e.cleared and e.recipe_id is not None}

    today_log = SuggestionDay.load(today)
    if today_log.current is not None:
        if today_log.is_active:
            by_date[today] = today_log.current.recipe_id
        else:
            by_date.pop(today, None)

    result = []
    for date_str in sorted(by_date)[:WINDOW_DAYS]:
        recipe = db.session.get(Recipe, by_date[date_str])
        if recipe is not None:
            result.append((date_str, recipe))
    return result
