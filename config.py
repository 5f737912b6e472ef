"""
Application Configuration

Centralizes all Flask and application configuration settings.
"""

import os


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///sunday_table.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Schedule settings
    WINDOW_MONTHS = int(os.environ.get('WINDOW_MONTHS', 3))

    # Number of times a read-modify-write is re-run after losing a version race
    STORE_CONFLICT_RETRIES = int(os.environ.get('STORE_CONFLICT_RETRIES', 3))

    # Live stream settings
    SYNC_HEARTBEAT_SECONDS = float(os.environ.get('SYNC_HEARTBEAT_SECONDS', 15))

    # Meal suggestion service
    ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY', '')
    SUGGESTION_API_URL = os.environ.get('SUGGESTION_API_URL', 'https://api.anthropic.com/v1/messages')
    SUGGESTION_MODEL = os.environ.get('SUGGESTION_MODEL', 'claude-sonnet-4-20250514')
    SUGGESTION_TIMEOUT = float(os.environ.get('SUGGESTION_TIMEOUT', 20))
    SUGGESTION_MAX_TOKENS = int(os.environ.get('SUGGESTION_MAX_TOKENS', 1200))


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
    ANTHROPIC_API_KEY = 'test-key'
    SYNC_HEARTBEAT_SECONDS = 0.1


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
        env = os.environ.get('SUNDAY_TABLE_ENV') or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
