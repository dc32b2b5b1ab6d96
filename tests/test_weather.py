"""Unit tests for the weather adapter and the season/tag derivations."""

from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest
import requests

from models.records import WeatherSnapshot
from services.clock import FixedClock
from services.errors import UpstreamUnavailable
from services.weather import (
    WeatherService, derive_weather_tags, describe_weather, day_name, season_for,
    parse_current_weather, parse_forecast,
)

CURRENT_RESPONSE = {
    'main': {'temp': 4.6, 'feels_like': 1.2, 'humidity': 87},
    'weather': [{'main': 'Drizzle', 'description': 'motregen', 'icon': '09d'}],
    'wind': {'speed': 5.0},
}


def forecast_item(dt_txt, temp, main='Clouds', icon='04d'):
    return {
        'dt_txt': dt_txt,
        'main': {'temp': temp},
        'weather': [{'main': main, 'description': main.lower(), 'icon': icon}],
    }


def mock_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class TestDerivations:

    @pytest.mark.parametrize('temp,condition,expected', [
        (5, 'Rain', ['koud', 'regenachtig']),
        (25, 'Clear', ['warm', 'zonnig']),
        (15, 'Clouds', ['zonnig']),
        (15, 'Thunderstorm', ['regenachtig']),
        (10, 'Mist', []),
        (20, 'Snow', []),
    ])
    def test_weather_tags(self, temp, condition, expected):
        assert derive_weather_tags(temp, condition) == expected

    @pytest.mark.parametrize('month,season', [
        (1, 'winter'), (2, 'winter'), (3, 'lente'), (5, 'lente'), (6, 'zomer'),
        (8, 'zomer'), (9, 'herfst'), (11, 'herfst'), (12, 'winter'),
    ])
    def test_season(self, month, season):
        assert season_for(date(2026, month, 15)) == season

    def test_day_name(self):
        assert day_name('2026-01-14') == 'woensdag'
        assert day_name('2026-01-18') == 'zondag'

    def test_description(self):
        snapshot = WeatherSnapshot(8, 6, 'Rain', 'lichte regen', 80, 10, '10d')
        assert describe_weather(snapshot) == '8°C in Utrecht - lichte regen (koud)'
        snapshot.temp = 15
        assert describe_weather(snapshot).endswith('(aangenaam)')


class TestParsing:

    def test_current_weather(self):
        snapshot = parse_current_weather(CURRENT_RESPONSE)
        assert snapshot.temp == 5
        assert snapshot.feels_like == 1
        assert snapshot.condition == 'Drizzle'
        assert snapshot.wind_speed == 18  # 5 m/s in km/h

    def test_current_weather_malformed(self):
        with pytest.raises(UpstreamUnavailable):
            parse_current_weather({'weather': []})

    def test_forecast_prefers_noon_then_afternoon(self):
        data = {'list': [
            forecast_item('2026-01-14 09:00:00', 3),
            forecast_item('2026-01-14 15:00:00', 7),
            forecast_item('2026-01-14 12:00:00', 6),
            forecast_item('2026-01-15 09:00:00', 2),
            forecast_item('2026-01-15 15:00:00', 4, main='Rain', icon='10d'),
            forecast_item('2026-01-16 21:00:00', 1),
        ]}
        days = parse_forecast(data)
        assert [d.date for d in days] == ['2026-01-14', '2026-01-15', '2026-01-16']
        assert days[0].temp == 6
        assert days[1].temp == 4
        assert days[1].weather_tags == ('koud', 'regenachtig')
        assert days[2].temp == 1
        assert days[1].day_name == 'donderdag'

    def test_forecast_limited_to_seven_days(self):
        data = {'list': [forecast_item(f'2026-01-{d:02d} 12:00:00', 5) for d in range(10, 20)]}
        assert len(parse_forecast(data)) == 7


class TestWeatherService:

    def make_service(self, clock, api_key='key'):
        return WeatherService(api_key=api_key, lat=52.09, lon=5.12, cache_seconds=1800, clock=clock)

    def test_caches_within_interval(self):
        clock = FixedClock(datetime(2026, 1, 14, 10, 0))
        service = self.make_service(clock)
        with patch('services.weather.requests.get', return_value=mock_response(CURRENT_RESPONSE)) as get:
            service.get_current_weather()
            clock.advance(minutes=20)
            service.get_current_weather()
        assert get.call_count == 1
        params = get.call_args.kwargs['params']
        assert params['units'] == 'metric'
        assert params['lang'] == 'nl'

    def test_refetches_after_interval(self):
        clock = FixedClock(datetime(2026, 1, 14, 10, 0))
        service = self.make_service(clock)
        with patch('services.weather.requests.get', return_value=mock_response(CURRENT_RESPONSE)) as get:
            service.get_current_weather()
            clock.advance(minutes=31)
            service.get_current_weather()
        assert get.call_count == 2

    def test_refetches_when_day_changes(self):
        clock = FixedClock(datetime(2026, 1, 14, 23, 50))
        service = self.make_service(clock)
        with patch('services.weather.requests.get', return_value=mock_response(CURRENT_RESPONSE)) as get:
            service.get_current_weather()
            clock.advance(minutes=15)
            service.get_current_weather()
        assert get.call_count == 2

    def test_clear_cache_forces_refetch(self):
        service = self.make_service(FixedClock(datetime(2026, 1, 14, 10, 0)))
        with patch('services.weather.requests.get', return_value=mock_response(CURRENT_RESPONSE)) as get:
            service.get_current_weather()
            service.clear_cache()
            service.get_current_weather()
        assert get.call_count == 2

    def test_network_error_is_upstream_unavailable(self):
        service = self.make_service(FixedClock(datetime(2026, 1, 14, 10, 0)))
        with patch('services.weather.requests.get', side_effect=requests.ConnectionError('down')):
            with pytest.raises(UpstreamUnavailable):
                service.get_current_weather()

    def test_missing_api_key(self):
        service = self.make_service(FixedClock(datetime(2026, 1, 14, 10, 0)), api_key='')
        with pytest.raises(UpstreamUnavailable):
            service.get_week_forecast()
