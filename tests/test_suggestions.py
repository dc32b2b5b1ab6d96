"""Tests for today's suggestion lifecycle."""

from datetime import timedelta
from unittest.mock import patch

import pytest

from conftest import TODAY
from models import db, MealHistory, Suggestion
from services import history as history_service
from services.errors import InvalidInput, NoRecipesAvailable, NotFound, UpstreamUnavailable
from services.suggestions import (
    SuggestionDay, accept_suggestion, get_todays_suggestion, preview_suggestion, reject_suggestion,
)


@pytest.fixture
def catalog(make_recipe):
    return [
        make_recipe('Linzensoep', seasons=['herfst', 'winter'], weather_tags=['koud', 'regenachtig'],
                    category='soep'),
        make_recipe('Rode curry', seasons=['winter'], weather_tags=['koud'], category='curry'),
        make_recipe('Pokebowl zalm', seasons=['zomer'], weather_tags=['warm'], category='pokebowl'),
    ]


class TestGetTodaysSuggestion:

    def test_creates_pending_with_score_and_weather(self, catalog, weather, clock, rng):
        suggestion = get_todays_suggestion(weather, clock, rng)
        assert suggestion.status == 'pending'
        assert suggestion.suggested_for == TODAY
        assert set(suggestion.reason_data) == {'seasonScore', 'weatherScore', 'recencyScore'}
        assert suggestion.weather.condition == 'Rain'

    def test_idempotent_while_pending(self, catalog, weather, clock, rng):
        first = get_todays_suggestion(weather, clock, rng)
        second = get_todays_suggestion(weather, clock, rng)
        assert first.id == second.id
        assert Suggestion.query.count() == 1

    def test_idempotent_while_accepted(self, catalog, weather, clock, rng):
        first = get_todays_suggestion(weather, clock, rng)
        accept_suggestion(first.id, clock)
        assert get_todays_suggestion(weather, clock, rng).id == first.id

    def test_new_day_gets_new_suggestion(self, catalog, weather, clock, rng):
        first = get_todays_suggestion(weather, clock, rng)
        clock.advance(days=1)
        second = get_todays_suggestion(weather, clock, rng)
        assert second.id != first.id
        assert second.suggested_for != first.suggested_for

    def test_empty_catalog(self, app, weather, clock, rng):
        with pytest.raises(NoRecipesAvailable):
            get_todays_suggestion(weather, clock, rng)

    def test_cleared_day_regenerates_by_default(self, catalog, weather, clock, rng):
        first = get_todays_suggestion(weather, clock, rng)
        SuggestionDay.load(TODAY).mark_all('cleared')
        db.session.commit()
        second = get_todays_suggestion(weather, clock, rng)
        assert second.id != first.id
        assert second.status == 'pending'
        assert second.recipe_id != first.recipe_id

    def test_cleared_day_can_stay_empty(self, catalog, weather, clock, rng):
        get_todays_suggestion(weather, clock, rng)
        SuggestionDay.load(TODAY).mark_all('cleared')
        db.session.commit()
        assert get_todays_suggestion(weather, clock, rng, suppress_after_clear=True) is None
        assert Suggestion.query.count() == 1


class TestAccept:

    def test_logs_history_once(self, catalog, weather, clock, rng):
        suggestion = get_todays_suggestion(weather, clock, rng)
        accept_suggestion(suggestion.id, clock)
        accept_suggestion(suggestion.id, clock)
        entries = MealHistory.query.all()
        assert len(entries) == 1
        assert entries[0].recipe_id == suggestion.recipe_id
        assert entries[0].suggestion_id == suggestion.id
        assert entries[0].eaten_at == clock.now()

    def test_unknown_id(self, app, clock):
        with pytest.raises(NotFound):
            accept_suggestion(999, clock)

    def test_rejected_cannot_be_accepted(self, catalog, weather, clock, rng):
        suggestion = get_todays_suggestion(weather, clock, rng)
        reject_suggestion(suggestion.id, weather, clock, rng)
        with pytest.raises(InvalidInput):
            accept_suggestion(suggestion.id, clock)


class TestReject:

    def test_returns_fresh_pending_with_other_recipe(self, catalog, weather, clock, rng):
        first = get_todays_suggestion(weather, clock, rng)
        fresh = reject_suggestion(first.id, weather, clock, rng)
        assert fresh.id != first.id
        assert fresh.status == 'pending'
        assert fresh.recipe_id != first.recipe_id
        assert db.session.get(Suggestion, first.id).status == 'rejected'
        assert get_todays_suggestion(weather, clock, rng).id == fresh.id

    def test_never_repeats_within_the_day_until_exhausted(self, catalog, weather, clock, rng):
        seen = []
        suggestion = get_todays_suggestion(weather, clock, rng)
        for _ in range(len(catalog) - 1):
            seen.append(suggestion.recipe_id)
            suggestion = reject_suggestion(suggestion.id, weather, clock, rng)
        seen.append(suggestion.recipe_id)
        assert sorted(seen) == sorted(r.id for r in catalog)

        # Everything was suggested today, so the full catalog is used again
        again = reject_suggestion(suggestion.id, weather, clock, rng)
        assert again.recipe_id in {r.id for r in catalog}

    def test_undoes_only_the_accepted_entry(self, catalog, weather, clock, rng):
        suggestion = get_todays_suggestion(weather, clock, rng)
        recipe_id = suggestion.recipe_id
        history_service.log_meal(recipe_id, clock, eaten_at=(clock.now() - timedelta(days=3)).isoformat())
        accept_suggestion(suggestion.id, clock)
        # Logged by hand earlier the same day, not by the accept
        manual = history_service.log_meal(recipe_id, clock,
                                          eaten_at=(clock.now() - timedelta(hours=5)).isoformat())
        assert MealHistory.query.count() == 3

        reject_suggestion(suggestion.id, weather, clock, rng)

        remaining = MealHistory.query.order_by(MealHistory.eaten_at).all()
        assert len(remaining) == 2
        assert all(e.suggestion_id is None for e in remaining)
        assert manual.id in {e.id for e in remaining}

    def test_reject_pending_keeps_history(self, catalog, weather, clock, rng):
        suggestion = get_todays_suggestion(weather, clock, rng)
        history_service.log_meal(suggestion.recipe_id, clock)
        reject_suggestion(suggestion.id, weather, clock, rng)
        assert MealHistory.query.count() == 1

    def test_weather_failure_leaves_log_untouched(self, catalog, weather, clock, rng):
        suggestion = get_todays_suggestion(weather, clock, rng)
        accept_suggestion(suggestion.id, clock)

        with patch.object(weather, 'get_current_weather', side_effect=UpstreamUnavailable('down')):
            with pytest.raises(UpstreamUnavailable):
                reject_suggestion(suggestion.id, weather, clock, rng)

        db.session.rollback()
        log = SuggestionDay.load(TODAY)
        assert [row.status for row in log.rows] == ['accepted']
        assert MealHistory.query.filter_by(suggestion_id=suggestion.id).count() == 1


class TestSuggestionDay:

    def test_latest_row_is_authoritative(self, catalog, weather, clock, rng):
        first = get_todays_suggestion(weather, clock, rng)
        fresh = reject_suggestion(first.id, weather, clock, rng)
        day = SuggestionDay.load(TODAY)
        assert [row.id for row in day.rows] == [first.id, fresh.id]
        assert day.current.id == fresh.id
        assert day.status == 'pending'
        assert day.recipe_ids == {first.recipe_id, fresh.recipe_id}

    def test_preview_does_not_persist(self, catalog, weather, clock, rng):
        recipe, breakdown, snapshot = preview_suggestion(weather, clock, rng)
        assert recipe.id in {r.id for r in catalog}
        assert 0 <= breakdown.total <= 100
        assert snapshot.temp == 5
        assert Suggestion.query.count() == 0

    def test_recent_history_biases_away(self, make_recipe, weather, clock, rng):
        soup = make_recipe('Erwtensoep', seasons=['winter'], weather_tags=['koud', 'regenachtig'])
        others = [make_recipe(f'Pasta {i}') for i in range(3)]
        history_service.log_meal(soup.id, clock)
        # Soup: 30 + 30 + 0 = 60, untagged pasta: 15 + 10 + 40 = 65
        suggestion = get_todays_suggestion(weather, clock, rng)
        assert suggestion.recipe_id in {r.id for r in others}
