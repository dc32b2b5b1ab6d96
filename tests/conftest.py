"""Shared fixtures: an in-memory app with a pinned clock, seeded randomness and canned weather."""

import os

os.environ['FLASK_ENV'] = 'testing'

import random
from datetime import datetime, timedelta

import pytest

from app import app as flask_app, install_planner
from models import db, Recipe
from models.records import ForecastDay, Ingredient, WeatherSnapshot
from services.clock import FixedClock, DATE_FORMAT
from services.parsing import parse_ingredient
from services.recipes import slugify
from services.weather import day_name, derive_weather_tags, describe_weather

# Wednesday in winter
NOW = datetime(2026, 1, 14, 18, 0)
TODAY = NOW.strftime(DATE_FORMAT)


def day(offset):
    """YYYY-MM-DD `offset` days from TODAY."""
    return (NOW + timedelta(days=offset)).strftime(DATE_FORMAT)


class StubWeather:
    """Stands in for WeatherService without network access."""

    location_name = 'Utrecht'

    def __init__(self, snapshot, forecast):
        self.snapshot = snapshot
        self.forecast = forecast
        self.current_calls = 0

    def get_current_weather(self):
        self.current_calls += 1
        return self.snapshot

    def get_week_forecast(self):
        return self.forecast

    def describe(self, snapshot):
        return describe_weather(snapshot, self.location_name)


def make_forecast(days=7, temp=6, condition='Clouds'):
    forecast = []
    for offset in range(days):
        date_str = day(offset)
        forecast.append(ForecastDay(
            date=date_str,
            day_name=day_name(date_str),
            temp=temp,
            icon='04d',
            description='bewolkt',
            weather_tags=tuple(derive_weather_tags(temp, condition)),
        ))
    return forecast


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def weather():
    snapshot = WeatherSnapshot(temp=5, feels_like=2, condition='Rain', description='lichte regen',
                               humidity=88, wind_speed=22, icon='10d')
    return StubWeather(snapshot, make_forecast())


@pytest.fixture
def app(clock, rng, weather):
    with flask_app.app_context():
        db.create_all()
        install_planner(flask_app, clock=clock, rng=rng, weather=weather)
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_recipe(app, clock):
    """Factory for stored recipes; ingredients may be lines like '2 el olijfolie'."""

    def _make(name, seasons=(), weather_tags=(), ingredients=(), category='pasta', servings=2):
        recipe = Recipe(
            name=name,
            slug=slugify(name),
            category=category,
            default_servings=servings,
            created_at=clock.now(),
            updated_at=clock.now(),
        )
        recipe.season_list = list(seasons)
        recipe.weather_tag_list = list(weather_tags)
        recipe.ingredient_list = [
            item if isinstance(item, Ingredient) else parse_ingredient(item)
            for item in ingredients
        ]
        db.session.add(recipe)
        db.session.commit()
        return recipe

    return _make
