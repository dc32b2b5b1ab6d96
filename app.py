import logging
import random
import sqlite3
from dataclasses import dataclass

import click
from flask import Flask, Response, current_app, jsonify, request
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine
from werkzeug.exceptions import HTTPException

from config import get_config
from models import db
from services import history as history_service
from services import importer
from services import recipes as recipe_service
from services import shopping as shopping_service
from services import suggestions as suggestion_service
from services import tags as tag_service
from services import weekplan as weekplan_service
from services.clock import SystemClock
from services.errors import PlannerError, InvalidInput
from services.weather import WeatherService, season_for, weather_tags

app = Flask(__name__)
app.config.from_object(get_config())
app.json.sort_keys = False

logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

db.init_app(app)
migrate = Migrate(app, db)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    # Enable SQLite foreign key enforcement
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@dataclass
class Planner:
    """Per-app collaborators the services are called with."""
    clock: object
    rng: random.Random
    weather: WeatherService


def install_planner(flask_app, clock=None, rng=None, weather=None):
    clock = clock or SystemClock()
    flask_app.extensions['weekmenu'] = Planner(
        clock=clock,
        rng=rng or random.Random(),
        weather=weather or WeatherService.from_config(flask_app.config, clock),
    )
    return flask_app.extensions['weekmenu']


def planner():
    return current_app.extensions['weekmenu']


install_planner(app)


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput('Request body must be a JSON object')
    return data


def query_int(name, default, min_val=1, max_val=None):
    """Read a bounded integer query parameter, falling back to the default."""
    try:
        value = int(request.args.get(name, default))
    except (TypeError, ValueError):
        return default
    value = max(min_val, value)
    if max_val is not None:
        value = min(max_val, value)
    return value


# ============================================
# ERROR HANDLERS
# ============================================

@app.errorhandler(PlannerError)
def handle_planner_error(error):
    if error.status_code >= 500:
        logger.error("%s: %s", type(error).__name__, error.message)
    else:
        logger.info("%s: %s", type(error).__name__, error.message)
    return jsonify({'error': error.message, 'type': type(error).__name__}), error.status_code


@app.errorhandler(HTTPException)
def handle_http_error(error):
    return jsonify({'error': error.description, 'type': error.name}), error.code


# ============================================
# RECIPE ROUTES
# ============================================

@app.route('/api/recipes', methods=['GET'])
def recipe_list():
    category = request.args.get('category') or None
    return jsonify([r.to_dict() for r in recipe_service.list_recipes(category)])


@app.route('/api/recipes', methods=['POST'])
def recipe_create():
    recipe = recipe_service.create_recipe(json_body(), planner().clock)
    return jsonify(recipe_service.recipe_detail(recipe)), 201


@app.route('/api/recipes/search', methods=['GET'])
def recipe_search():
    results = recipe_service.search_recipes(request.args.get('q', ''))
    return jsonify([r.to_dict() for r in results])


@app.route('/api/recipes/<int:recipe_id>', methods=['GET'])
def recipe_view(recipe_id):
    recipe = recipe_service.get_recipe(recipe_id)
    return jsonify(recipe_service.recipe_detail(recipe))


@app.route('/api/recipes/<int:recipe_id>', methods=['PUT'])
def recipe_update(recipe_id):
    recipe = recipe_service.update_recipe(recipe_id, json_body(), planner().clock)
    return jsonify(recipe_service.recipe_detail(recipe))


@app.route('/api/recipes/<int:recipe_id>', methods=['DELETE'])
def recipe_delete(recipe_id):
    recipe_service.delete_recipe(recipe_id)
    return jsonify({'success': True})


@app.route('/api/recipes/import/url', methods=['POST'])
def recipe_import_url():
    data = json_body()
    imported = importer.fetch_recipe(
        data.get('url') or data.get('text'),
        timeout=app.config['IMPORT_TIMEOUT'],
        max_bytes=app.config['IMPORT_MAX_BYTES'],
    )
    recipe, created = recipe_service.save_imported(imported, planner().clock,
                                                   category=data.get('category'))
    return jsonify({
        'recipe': recipe_service.recipe_detail(recipe),
        'created': created,
        'structuredData': imported.found_structured_data,
    }), 201 if created else 200


@app.route('/api/recipes/<int:recipe_id>/rescrape', methods=['POST'])
def recipe_rescrape(recipe_id):
    recipe = recipe_service.get_recipe(recipe_id)
    if not recipe.source_url:
        raise InvalidInput('Recipe has no source URL')
    imported = importer.fetch_recipe(
        recipe.source_url,
        timeout=app.config['IMPORT_TIMEOUT'],
        max_bytes=app.config['IMPORT_MAX_BYTES'],
    )
    recipe, _ = recipe_service.save_imported(imported, planner().clock, recipe=recipe)
    return jsonify({
        'recipe': recipe_service.recipe_detail(recipe),
        'structuredData': imported.found_structured_data,
    })


# ============================================
# MEAL HISTORY ROUTES
# ============================================

@app.route('/api/history', methods=['GET'])
def history_list():
    limit = query_int('limit', 50, max_val=500)
    return jsonify([e.to_dict(include_recipe=True) for e in history_service.list_recent(limit)])


@app.route('/api/history', methods=['POST'])
def history_create():
    data = json_body()
    entry = history_service.log_meal(
        data.get('recipeId'),
        planner().clock,
        eaten_at=data.get('eatenAt'),
        servings=data.get('servings'),
        notes=data.get('notes'),
        rating=data.get('rating'),
    )
    return jsonify(entry.to_dict(include_recipe=True)), 201


@app.route('/api/history/<int:entry_id>', methods=['PUT'])
def history_update(entry_id):
    entry = history_service.update_entry(entry_id, json_body())
    return jsonify(entry.to_dict(include_recipe=True))


@app.route('/api/history/<int:entry_id>', methods=['DELETE'])
def history_delete(entry_id):
    history_service.delete_entry(entry_id)
    return jsonify({'success': True})


@app.route('/api/history/recipe/<int:recipe_id>', methods=['GET'])
def history_for_recipe(recipe_id):
    recipe_service.get_recipe(recipe_id)
    return jsonify([e.to_dict() for e in history_service.list_for_recipe(recipe_id)])


# ============================================
# SUGGESTION ROUTES
# ============================================

@app.route('/api/suggestions/today', methods=['GET'])
def suggestion_today():
    p = planner()
    suggestion = suggestion_service.get_todays_suggestion(
        p.weather, p.clock, p.rng,
        suppress_after_clear=app.config['CLEARED_SUPPRESSES_REGENERATION'],
    )
    if suggestion is None:
        return jsonify(None)
    return jsonify(suggestion_service.suggestion_payload(suggestion))


@app.route('/api/suggestions/generate', methods=['POST'])
def suggestion_generate():
    p = planner()
    recipe, breakdown, snapshot = suggestion_service.preview_suggestion(p.weather, p.clock, p.rng)
    return jsonify({
        'recipe': recipe.to_dict(),
        'reason': breakdown.to_dict(),
        'totalScore': breakdown.total,
        'weatherData': snapshot.to_dict(),
    })


@app.route('/api/suggestions/<int:suggestion_id>/accept', methods=['PUT'])
def suggestion_accept(suggestion_id):
    suggestion = suggestion_service.accept_suggestion(suggestion_id, planner().clock)
    return jsonify(suggestion_service.suggestion_payload(suggestion))


@app.route('/api/suggestions/<int:suggestion_id>/reject', methods=['PUT'])
def suggestion_reject(suggestion_id):
    p = planner()
    suggestion = suggestion_service.reject_suggestion(suggestion_id, p.weather, p.clock, p.rng)
    return jsonify(suggestion_service.suggestion_payload(suggestion))


@app.route('/api/suggestions/history', methods=['GET'])
def suggestion_history():
    rows = suggestion_service.recent_suggestions(limit=30)
    result = []
    for row in rows:
        data = row.to_dict()
        data['recipe'] = row.recipe.to_summary() if row.recipe else None
        result.append(data)
    return jsonify(result)


# ============================================
# WEATHER & HEALTH
# ============================================

@app.route('/api/weather', methods=['GET'])
def weather_current():
    p = planner()
    snapshot = p.weather.get_current_weather()
    data = snapshot.to_dict()
    data['weatherTags'] = weather_tags(snapshot)
    data['season'] = season_for(p.clock.now())
    data['location'] = p.weather.location_name
    data['summary'] = p.weather.describe(snapshot)
    return jsonify(data)


@app.route('/api/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'time': planner().clock.now().isoformat()})


# ============================================
# WEEK PLAN ROUTES
# ============================================

@app.route('/api/weekplan', methods=['GET'])
def weekplan_view():
    p = planner()
    days = weekplan_service.resolve_week_plan(p.weather, p.clock, p.rng)
    return jsonify({'today': p.clock.today(), 'days': days})


@app.route('/api/weekplan/<date>', methods=['PUT'])
def weekplan_set_day(date):
    p = planner()
    result = weekplan_service.set_day_recipe(date, json_body().get('recipeId'), p.weather, p.clock)
    return jsonify(result)


@app.route('/api/weekplan/<date>', methods=['DELETE'])
def weekplan_clear_day(date):
    return jsonify(weekplan_service.clear_day(date, planner().clock))


@app.route('/api/weekplan/<date>/regenerate', methods=['POST'])
def weekplan_regenerate_day(date):
    p = planner()
    return jsonify(weekplan_service.regenerate_day(date, p.weather, p.clock, p.rng))


# ============================================
# SHOPPING LIST ROUTES
# ============================================

@app.route('/api/shopping', methods=['GET'])
def shopping_list():
    return jsonify(shopping_service.build_shopping_list(planner().clock))


@app.route('/api/shopping/text', methods=['GET'])
def shopping_list_text():
    data = shopping_service.build_shopping_list(planner().clock)
    return Response(shopping_service.format_shopping_text(data), mimetype='text/plain; charset=utf-8')


# ============================================
# TAG ROUTES
# ============================================

@app.route('/api/tags', methods=['GET'])
def tag_list():
    grouped = tag_service.list_grouped()
    return jsonify({tag_type: [t.to_dict() for t in tags] for tag_type, tags in grouped.items()})


@app.route('/api/tags', methods=['POST'])
def tag_create():
    data = json_body()
    tag = tag_service.create_tag(data.get('name'), data.get('type') or 'custom')
    return jsonify(tag.to_dict()), 201


@app.route('/api/tags/<tag_type>', methods=['GET'])
def tag_list_by_type(tag_type):
    return jsonify([t.to_dict() for t in tag_service.list_by_type(tag_type)])


@app.route('/api/tags/recipe/<int:recipe_id>', methods=['POST'])
def tag_attach(recipe_id):
    tags = tag_service.attach_tags(recipe_id, json_body().get('tagIds'))
    return jsonify([t.to_dict() for t in tags])


@app.route('/api/tags/recipe/<int:recipe_id>/<int:tag_id>', methods=['DELETE'])
def tag_detach(recipe_id, tag_id):
    tag_service.detach_tag(recipe_id, tag_id)
    return jsonify({'success': True})


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db():
    with app.app_context():
        db.create_all()


@app.cli.command('init-db')
def init_db_command():
    """Create all tables."""
    init_db()
    click.echo('Database initialized.')


@app.cli.command('seed-tags')
def seed_tags_command():
    """Insert the default tag set."""
    added = tag_service.seed_default_tags()
    click.echo(f'Added {added} tags.')


if __name__ == '__main__':
    init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
