"""HTTP tests for the JSON API."""

import pytest

from conftest import TODAY, day
from models import MealHistory


@pytest.fixture
def recipes(make_recipe):
    return [
        make_recipe('Linzensoep', seasons=['winter'], weather_tags=['koud'], category='soep',
                    ingredients=['250 g rode linzen', '1 ui']),
        make_recipe('Pasta Pesto', ingredients=['300 g spaghetti', '1 rode ui']),
        make_recipe('Kipcurry', category='curry', ingredients=['300 g kipfilet']),
    ]


class TestErrors:

    def test_not_found_is_json(self, client):
        response = client.get('/api/recipes/999')
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Recipe not found', 'type': 'NotFound'}

    def test_unknown_route_is_json(self, client):
        response = client.get('/api/nope')
        assert response.status_code == 404
        assert 'error' in response.get_json()

    def test_no_recipes(self, client):
        response = client.get('/api/suggestions/today')
        assert response.status_code == 400
        assert response.get_json()['type'] == 'NoRecipesAvailable'


class TestRecipeRoutes:

    def test_crud(self, client):
        response = client.post('/api/recipes', json={
            'name': 'Shakshuka', 'category': 'shakshuka', 'ingredients': ['4 eieren', '1 blik tomaten'],
        })
        assert response.status_code == 201
        created = response.get_json()
        assert created['slug'] == 'shakshuka'
        assert created['ingredients'][1] == {'name': 'tomaten', 'amount': 1, 'unit': 'blik', 'scalable': True}
        assert created['tags'] == []

        response = client.put(f"/api/recipes/{created['id']}", json={'defaultServings': 4})
        assert response.get_json()['defaultServings'] == 4

        assert client.get('/api/recipes/search?q=shak').get_json()[0]['id'] == created['id']
        assert client.delete(f"/api/recipes/{created['id']}").status_code == 200
        assert client.get(f"/api/recipes/{created['id']}").status_code == 404

    def test_invalid_body(self, client):
        response = client.post('/api/recipes', json={'category': 'pasta'})
        assert response.status_code == 400


class TestSuggestionRoutes:

    def test_today_accept_reject(self, client, recipes):
        today = client.get('/api/suggestions/today').get_json()
        assert today['status'] == 'pending'
        assert today['suggestedFor'] == TODAY
        assert set(today['reason']) == {'seasonScore', 'weatherScore', 'recencyScore'}
        assert today['recipe']['id'] == today['recipeId']
        assert client.get('/api/suggestions/today').get_json()['id'] == today['id']

        accepted = client.put(f"/api/suggestions/{today['id']}/accept").get_json()
        assert accepted['status'] == 'accepted'
        assert MealHistory.query.count() == 1

        fresh = client.put(f"/api/suggestions/{today['id']}/reject").get_json()
        assert fresh['status'] == 'pending'
        assert fresh['recipeId'] != today['recipeId']
        assert MealHistory.query.count() == 0

        history = client.get('/api/suggestions/history').get_json()
        assert [s['id'] for s in history] == [fresh['id'], today['id']]
        assert history[1]['status'] == 'rejected'

    def test_preview(self, client, recipes):
        data = client.post('/api/suggestions/generate').get_json()
        assert data['totalScore'] == sum(data['reason'].values())
        assert data['weatherData']['condition'] == 'Rain'
        assert client.get('/api/suggestions/history').get_json() == []

    def test_cleared_day_can_return_nothing(self, app, client, recipes):
        client.get('/api/suggestions/today')
        client.delete(f'/api/weekplan/{TODAY}')
        app.config['CLEARED_SUPPRESSES_REGENERATION'] = True
        try:
            response = client.get('/api/suggestions/today')
        finally:
            app.config['CLEARED_SUPPRESSES_REGENERATION'] = False
        assert response.status_code == 200
        assert response.get_json() is None


class TestWeekPlanRoutes:

    def test_plan_and_edits(self, client, recipes):
        plan = client.get('/api/weekplan').get_json()
        assert plan['today'] == TODAY
        assert len(plan['days']) == 7
        assert plan['days'][0]['dayName'] == 'woensdag'

        response = client.put(f'/api/weekplan/{day(2)}', json={'recipeId': recipes[1].id})
        assert response.get_json()['recipe']['id'] == recipes[1].id

        cleared = client.delete(f'/api/weekplan/{day(2)}').get_json()
        assert cleared == {'date': day(2), 'recipe': None, 'cleared': True}

        # days 0 and 1 still hold two of the three recipes
        taken = {d['recipe']['id'] for d in plan['days'][:2]}
        regenerated = client.post(f'/api/weekplan/{day(2)}/regenerate').get_json()
        assert regenerated['recipe']['id'] not in taken
        assert plan['days'][3]['recipe'] is None

    def test_missing_recipe_id(self, client, recipes):
        response = client.put(f'/api/weekplan/{day(1)}', json={})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'recipeId is required'

    def test_bad_date(self, client, recipes):
        assert client.delete('/api/weekplan/morgen').status_code == 400


class TestShoppingRoutes:

    def test_json_and_text(self, client, recipes):
        client.put(f'/api/weekplan/{day(1)}', json={'recipeId': recipes[0].id})
        client.put(f'/api/weekplan/{day(2)}', json={'recipeId': recipes[1].id})

        data = client.get('/api/shopping').get_json()
        assert [r['name'] for r in data['recipes']] == ['Linzensoep', 'Pasta Pesto']
        assert list(data['grouped'])[0] == 'Groente & Fruit'
        onion = next(i for i in data['items'] if i['name'] == 'ui')
        assert onion['amount'] == 2

        response = client.get('/api/shopping/text')
        assert response.mimetype == 'text/plain'
        text = response.get_data(as_text=True)
        assert '- 2 stuk ui' in text
        assert text.rstrip().endswith('Recepten: Linzensoep, Pasta Pesto')

    def test_non_finite_amounts_are_dropped(self, client):
        created = client.post('/api/recipes', json={
            'name': 'Rijst', 'ingredients': [
                {'name': 'rijst', 'amount': 'nan', 'unit': 'g'},
                {'name': 'ui', 'amount': 'inf', 'unit': 'stuk'},
            ],
        }).get_json()
        assert [i['amount'] for i in created['ingredients']] == [None, None]

        client.put(f'/api/weekplan/{day(1)}', json={'recipeId': created['id']})
        response = client.get('/api/shopping')
        assert response.status_code == 200
        assert {i['name']: i['amount'] for i in response.get_json()['items']} == {'rijst': None, 'ui': None}
        assert client.get('/api/shopping/text').status_code == 200


class TestHistoryAndTagRoutes:

    def test_history(self, client, recipes):
        response = client.post('/api/history', json={'recipeId': recipes[0].id, 'rating': 5})
        assert response.status_code == 201
        entry = response.get_json()
        assert entry['recipe']['name'] == 'Linzensoep'

        assert client.put(f"/api/history/{entry['id']}", json={'rating': 9}).status_code == 400
        assert client.get('/api/history?limit=10').get_json()[0]['id'] == entry['id']
        assert len(client.get(f'/api/history/recipe/{recipes[0].id}').get_json()) == 1
        assert client.delete(f"/api/history/{entry['id']}").status_code == 200
        assert client.delete(f"/api/history/{entry['id']}").status_code == 404

    def test_tags(self, client, recipes):
        tag = client.post('/api/tags', json={'name': 'comfortfood', 'type': 'mood'}).get_json()
        assert client.get('/api/tags').get_json() == {'mood': [tag]}
        assert client.get('/api/tags/mood').get_json() == [tag]
        assert client.get('/api/tags/kleur').status_code == 400

        attached = client.post(f'/api/tags/recipe/{recipes[0].id}', json={'tagIds': [tag['id']]})
        assert attached.get_json() == [tag]
        assert client.get(f'/api/recipes/{recipes[0].id}').get_json()['tags'] == [tag]
        assert client.delete(f"/api/tags/recipe/{recipes[0].id}/{tag['id']}").status_code == 200


class TestMiscRoutes:

    def test_weather(self, client):
        data = client.get('/api/weather').get_json()
        assert data['temp'] == 5
        assert data['weatherTags'] == ['koud', 'regenachtig']
        assert data['season'] == 'winter'
        assert data['summary'] == '5°C in Utrecht - lichte regen (koud)'

    def test_health(self, client):
        assert client.get('/api/health').get_json()['status'] == 'ok'
