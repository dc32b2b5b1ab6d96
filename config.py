"""
Application Configuration

Centralizes all Flask and application configuration settings.
"""

import os

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')
    JSON_SORT_KEYS = False

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///weekmenu.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Weather provider (OpenWeatherMap, free plan allows 60 calls/min)
    OPENWEATHERMAP_API_KEY = os.environ.get('OPENWEATHERMAP_API_KEY', '')
    WEATHER_LAT = float(os.environ.get('WEATHER_LAT', '52.0907'))
    WEATHER_LON = float(os.environ.get('WEATHER_LON', '5.1214'))
    WEATHER_LOCATION_NAME = os.environ.get('WEATHER_LOCATION_NAME', 'Utrecht')
    WEATHER_CACHE_SECONDS = int(os.environ.get('WEATHER_CACHE_SECONDS', '1800'))
    WEATHER_TIMEOUT = 10

    # Recipe import settings
    IMPORT_TIMEOUT = 10
    IMPORT_MAX_BYTES = 10 * 1024 * 1024

    # When True, a day cleared by the user stays empty until an explicit action
    CLEARED_SUPPRESSES_REGENERATION = os.environ.get(
        'CLEARED_SUPPRESSES_REGENERATION', 'false').lower() in ('1', 'true', 'yes')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    OPENWEATHERMAP_API_KEY = 'test-key'
    CLEARED_SUPPRESSES_REGENERATION = False
    LOG_LEVEL = 'DEBUG'


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
