"""Unit tests for Dutch ingredient and amount parsing, and stored JSON fields."""

import pytest

from models.records import Ingredient, WeatherSnapshot
from services.parsing import float_to_fraction, normalize_fractions, parse_amount, parse_ingredient
from utils.json_fields import dump_field, parse_or_default


class TestParseIngredient:

    def test_amount_unit_name(self):
        assert parse_ingredient('750 g spinazie') == Ingredient('spinazie', 750, 'g', True)

    def test_amount_without_unit_counts_pieces(self):
        assert parse_ingredient('2 uien') == Ingredient('uien', 2, 'stuk', True)

    def test_no_amount_is_not_scalable(self):
        assert parse_ingredient('peper naar smaak') == Ingredient('peper naar smaak', None, None, False)

    @pytest.mark.parametrize('line,amount,unit,name', [
        ('1,5 el olijfolie', 1.5, 'el', 'olijfolie'),
        ('1 1/2 kopje rijst', 1.5, 'kop', 'rijst'),
        ('½ citroen', 0.5, 'stuk', 'citroen'),
        ('2 teentjes knoflook', 2, 'teen', 'knoflook'),
        ('1 blik kokosmelk', 1, 'blik', 'kokosmelk'),
        ('200 g feta (verkruimeld)', 200, 'g', 'feta'),
        ('1 rode ui', 1, 'stuk', 'rode ui'),
    ])
    def test_variants(self, line, amount, unit, name):
        parsed = parse_ingredient(line)
        assert parsed.amount == pytest.approx(amount)
        assert parsed.unit == unit
        assert parsed.name == name

    def test_unit_word_alone_is_the_name(self):
        parsed = parse_ingredient('2 el')
        assert parsed.name == 'el'
        assert parsed.unit == 'stuk'

    def test_empty(self):
        assert parse_ingredient('') is None
        assert parse_ingredient('   ') is None


class TestAmounts:

    @pytest.mark.parametrize('text,expected', [
        ('2', 2), ('1,5', 1.5), ('1.5', 1.5), ('1/2', 0.5), ('1 1/2', 1.5),
        ('½', 0.5), ('1½', 1.5),
    ])
    def test_parse_amount(self, text, expected):
        assert parse_amount(text) == pytest.approx(expected)

    @pytest.mark.parametrize('text', ['0', '-1', 'abc', '1/0', '', None, 'inf', 'nan', '9' * 400])
    def test_invalid_amounts(self, text):
        assert parse_amount(text) is None

    def test_non_breaking_space(self):
        assert normalize_fractions('1\u00a0kg') == '1 kg'

    @pytest.mark.parametrize('value,expected', [
        (2, '2'), (0.5, '1/2'), (1.25, '1 1/4'), (1 / 3, '1/3'), (0.4, '0,4'), (None, '0'),
    ])
    def test_float_to_fraction(self, value, expected):
        assert float_to_fraction(value) == expected


class TestStoredFields:

    def test_parse_or_default_handles_bad_data(self):
        assert parse_or_default(None, []) == []
        assert parse_or_default('', {}) == {}
        assert parse_or_default('not json', []) == []
        assert parse_or_default('{"a": 1}', []) == []
        assert parse_or_default('[1, 2]', []) == [1, 2]

    def test_parse_or_default_double_encoded(self):
        assert parse_or_default('"[\\"lente\\"]"', []) == ['lente']

    def test_dump_field_keeps_accents(self):
        assert dump_field(['crème fraîche']) == '["crème fraîche"]'
        assert dump_field(None) is None

    def test_ingredient_from_loose_dict(self):
        assert Ingredient.from_dict({'name': ' ui ', 'amount': '2', 'unit': ''}) == Ingredient('ui', 2.0, None, True)
        assert Ingredient.from_dict({'name': 'zout', 'amount': 0}).amount is None
        assert Ingredient.from_dict({'amount': 2}) is None
        assert Ingredient.from_dict(42) is None

    @pytest.mark.parametrize('amount', ['nan', 'inf', '-Infinity', float('nan'), float('inf')])
    def test_ingredient_non_finite_amount_dropped(self, amount):
        ingredient = Ingredient.from_dict({'name': 'ui', 'amount': amount, 'unit': 'g'})
        assert ingredient.amount is None
        assert ingredient.scalable is False

    def test_weather_snapshot_from_camel_case(self):
        snapshot = WeatherSnapshot.from_dict({'temp': '7', 'condition': 'Rain', 'windSpeed': 12})
        assert snapshot.temp == 7
        assert snapshot.feels_like == 7
        assert snapshot.wind_speed == 12
        assert WeatherSnapshot.from_dict({'condition': 'Rain'}) is None
