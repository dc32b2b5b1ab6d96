"""
Structured Records

Typed shapes for the values stored as JSON text on the models: recipe
ingredients, weather snapshots and suggestion score breakdowns. Each record
knows how to build itself from a possibly malformed dict and how to render
the camelCase dict the API exposes.
"""

import math
from dataclasses import dataclass
from typing import Optional


def _number(value, default=None):
    """Finite int/float from a number or numeric string; NaN and infinity give `default`."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.replace(',', '.'))
        except ValueError:
            return default
    else:
        return default
    if not math.isfinite(number):
        return default
    return number


@dataclass
class Ingredient:
    """One ingredient line of a recipe."""
    name: str
    amount: Optional[float] = None
    unit: Optional[str] = None
    scalable: bool = True
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        if isinstance(data, str):
            return cls(name=data.strip(), scalable=False)
        if not isinstance(data, dict):
            return None
        name = str(data.get('name') or '').strip()
        if not name:
            return None
        amount = _number(data.get('amount'))
        if amount is not None and amount <= 0:
            amount = None
        unit = data.get('unit') or None
        return cls(
            name=name,
            amount=amount,
            unit=str(unit) if unit is not None else None,
            scalable=bool(data.get('scalable', amount is not None)),
            notes=data.get('notes') or None,
        )

    def to_dict(self):
        data = {
            'name': self.name,
            'amount': self.amount,
            'unit': self.unit,
            'scalable': self.scalable,
        }
        if self.notes:
            data['notes'] = self.notes
        return data


@dataclass
class WeatherSnapshot:
    """Current conditions as reported by the weather provider."""
    temp: int
    feels_like: int
    condition: str
    description: str
    humidity: int
    wind_speed: int
    icon: str

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            return None
        temp = _number(data.get('temp'))
        if temp is None:
            return None
        return cls(
            temp=int(round(temp)),
            feels_like=int(round(_number(data.get('feelsLike'), temp))),
            condition=str(data.get('condition') or 'Unknown'),
            description=str(data.get('description') or ''),
            humidity=int(_number(data.get('humidity'), 0)),
            wind_speed=int(_number(data.get('windSpeed'), 0)),
            icon=str(data.get('icon') or '01d'),
        )

    def to_dict(self):
        return {
            'temp': self.temp,
            'feelsLike': self.feels_like,
            'condition': self.condition,
            'description': self.description,
            'humidity': self.humidity,
            'windSpeed': self.wind_speed,
            'icon': self.icon,
        }


@dataclass
class ForecastDay:
    """One representative forecast reading for a calendar day."""
    date: str
    day_name: str
    temp: Optional[int]
    icon: Optional[str]
    description: Optional[str]
    weather_tags: tuple = ()

    def to_dict(self):
        return {
            'date': self.date,
            'dayName': self.day_name,
            'temp': self.temp,
            'icon': self.icon,
            'description': self.description,
            'weatherTags': list(self.weather_tags),
        }


@dataclass
class ScoreBreakdown:
    """Per-factor points behind a suggestion (0-30, 0-30, 0-40)."""
    season_score: int
    weather_score: int
    recency_score: int

    @property
    def total(self):
        return self.season_score + self.weather_score + self.recency_score

    def to_dict(self):
        return {
            'seasonScore': self.season_score,
            'weatherScore': self.weather_score,
            'recencyScore': self.recency_score,
        }
