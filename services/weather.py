"""
Weather Service

Current conditions and a one-reading-per-day forecast from OpenWeatherMap,
plus the season and weather-tag derivations the suggestion scoring uses.

Responses are cached to stay under the free plan's rate limit. A cached
value is stale after WEATHER_CACHE_SECONDS or as soon as the local calendar
day changes, whichever comes first. A stale cache means a blocking request
on the caller's thread.
"""

import logging
from datetime import datetime

import requests

from constants import DAY_NAMES
from models.records import ForecastDay, WeatherSnapshot
from .clock import DATE_FORMAT, SystemClock
from .errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

API_BASE = 'https://api.openweathermap.org/data/2.5'

# Forecast hours preferred as the day's representative reading, best first
PREFERRED_FORECAST_HOURS = (12, 15)


def derive_weather_tags(temp, condition):
    """
    Weather tags for a temperature and an OpenWeatherMap condition ("Rain", "Clear", ...).

    Tags are not exclusive: 5 degrees and rain gives ['koud', 'regenachtig'].
    """
    tags = []
    if temp is not None:
        if temp < 10:
            tags.append('koud')
        if temp > 20:
            tags.append('warm')

    condition = (condition or '').lower()
    if 'rain' in condition or 'drizzle' in condition or 'thunder' in condition:
        tags.append('regenachtig')
    if 'clear' in condition or 'sun' in condition or condition == 'clouds':
        tags.append('zonnig')
    return tags


def weather_tags(snapshot):
    """Weather tags for a WeatherSnapshot."""
    if snapshot is None:
        return []
    return derive_weather_tags(snapshot.temp, snapshot.condition)


def season_for(when):
    """Season for a date or datetime: Mar-May lente, Jun-Aug zomer, Sep-Nov herfst, else winter."""
    month = when.month
    if 3 <= month <= 5:
        return 'lente'
    if 6 <= month <= 8:
        return 'zomer'
    if 9 <= month <= 11:
        return 'herfst'
    return 'winter'


def describe_weather(snapshot, location='Utrecht'):
    """Short Dutch description, e.g. '8°C in Utrecht - lichte regen (koud)'."""
    if snapshot.temp < 10:
        feel = 'koud'
    elif snapshot.temp > 20:
        feel = 'warm'
    else:
        feel = 'aangenaam'
    return f"{snapshot.temp}°C in {location} - {snapshot.description} ({feel})"


def day_name(date_str):
    """Dutch weekday name for a YYYY-MM-DD string."""
    return DAY_NAMES[datetime.strptime(date_str, DATE_FORMAT).weekday()]


class WeatherService:
    """OpenWeatherMap client with a time- and day-bounded cache."""

    def __init__(self, api_key, lat, lon, location_name='Utrecht',
                 cache_seconds=1800, timeout=10, clock=None):
        self.api_key = api_key
        self.lat = lat
        self.lon = lon
        self.location_name = location_name
        self.cache_seconds = cache_seconds
        self.timeout = timeout
        self.clock = clock or SystemClock()
        self._current = None   # (snapshot, fetched_at)
        self._forecast = None  # (days, fetched_at)

    @classmethod
    def from_config(cls, config, clock=None):
        return cls(
            api_key=config.get('OPENWEATHERMAP_API_KEY'),
            lat=config.get('WEATHER_LAT'),
            lon=config.get('WEATHER_LON'),
            location_name=config.get('WEATHER_LOCATION_NAME', 'Utrecht'),
            cache_seconds=config.get('WEATHER_CACHE_SECONDS', 1800),
            timeout=config.get('WEATHER_TIMEOUT', 10),
            clock=clock,
        )

    def _is_fresh(self, entry):
        if entry is None:
            return False
        fetched_at = entry[1]
        now = self.clock.now()
        if fetched_at.date() != now.date():
            return False
        return (now - fetched_at).total_seconds() < self.cache_seconds

    def clear_cache(self):
        self._current = None
        self._forecast = None

    def _request(self, endpoint):
        if not self.api_key:
            raise UpstreamUnavailable('Weather API key is not configured')

        params = {
            'lat': self.lat,
            'lon': self.lon,
            'appid': self.api_key,
            'units': 'metric',
            'lang': 'nl',
        }
        try:
            response = requests.get(f"{API_BASE}/{endpoint}", params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.warning("Weather API request to %s failed: %s", endpoint, e)
            raise UpstreamUnavailable(f"Weather API error: {e}") from e
        except ValueError as e:
            raise UpstreamUnavailable(f"Weather API returned invalid JSON: {e}") from e

    def get_current_weather(self):
        """Current conditions as a WeatherSnapshot."""
        if self._is_fresh(self._current):
            logger.debug("Weather cache hit")
            return self._current[0]

        data = self._request('weather')
        snapshot = parse_current_weather(data)
        self._current = (snapshot, self.clock.now())
        logger.info("Fetched current weather: %s°C %s", snapshot.temp, snapshot.condition)
        return snapshot

    def get_week_forecast(self):
        """Up to 7 ForecastDay entries, one per date, oldest first."""
        if self._is_fresh(self._forecast):
            logger.debug("Forecast cache hit")
            return self._forecast[0]

        data = self._request('forecast')
        days = parse_forecast(data)
        self._forecast = (days, self.clock.now())
        logger.info("Fetched forecast for %d days", len(days))
        return days

    def describe(self, snapshot):
        return describe_weather(snapshot, self.location_name)


def parse_current_weather(data):
    """Build a WeatherSnapshot from an OpenWeatherMap /weather response."""
    try:
        main = data['main']
        condition = (data.get('weather') or [{}])[0]
        return WeatherSnapshot(
            temp=int(round(main['temp'])),
            feels_like=int(round(main.get('feels_like', main['temp']))),
            condition=condition.get('main') or 'Unknown',
            description=condition.get('description') or '',
            humidity=int(main.get('humidity', 0)),
            wind_speed=int(round(data.get('wind', {}).get('speed', 0) * 3.6)),  # m/s -> km/h
            icon=condition.get('icon') or '01d',
        )
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamUnavailable(f"Unexpected weather response: {e}") from e


def parse_forecast(data):
    """
    Collapse a 3-hourly /forecast response to one reading per date.

    12:00 is preferred, then 15:00, otherwise the first reading of the day.
    """
    chosen = {}
    try:
        for item in data.get('list', []):
            date_str, time_str = item['dt_txt'].split(' ')
            hour = int(time_str.split(':')[0])
            rank = PREFERRED_FORECAST_HOURS.index(hour) if hour in PREFERRED_FORECAST_HOURS \
                else len(PREFERRED_FORECAST_HOURS)

            current = chosen.get(date_str)
            if current is not None and current[0] <= rank:
                continue

            condition = (item.get('weather') or [{}])[0]
            temp = int(round(item['main']['temp']))
            chosen[date_str] = (rank, ForecastDay(
                date=date_str,
                day_name=day_name(date_str),
                temp=temp,
                icon=condition.get('icon') or '01d',
                description=condition.get('description') or '',
                weather_tags=tuple(derive_weather_tags(temp, condition.get('main'))),
            ))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise UpstreamUnavailable(f"Unexpected forecast response: {e}") from e

    return [chosen[d][1] for d in sorted(chosen)][:7]
