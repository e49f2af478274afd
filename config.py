"""
Configuration Module - Environment-specific settings
Selected through FLASK_ENV, or forced with create_app(config_name)
"""

import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _database_url():
    """DATABASE_URL, or a URL assembled from the PG* variables, or None"""
    url = os.environ.get('DATABASE_URL')
    if not url:
        parts = [os.environ.get(name) for name in ('PGUSER', 'PGPASSWORD', 'PGHOST', 'PGPORT', 'PGDATABASE')]
        if all(parts):
            url = "postgresql://{}:{}@{}:{}/{}".format(*parts)

    # SQLAlchemy only accepts the postgresql:// scheme
    if url and url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


class Config:
    """Shared settings for every environment"""

    SECRET_KEY = os.environ.get('SESSION_SECRET', 'dev-only-portfolio-secret')

    # Content store
    SQLALCHEMY_DATABASE_URI = _database_url() or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    CONTENT_DIR = os.environ.get('CONTENT_DIR', os.path.join(BASE_DIR, 'content'))
    PROJECTS_PER_PAGE = 12
    POSTS_PER_PAGE = 6
    FEATURED_PROJECTS_LIMIT = 6

    # Sanity import source (optional)
    SANITY_PROJECT_ID = os.environ.get('SANITY_PROJECT_ID')
    SANITY_DATASET = os.environ.get('SANITY_DATASET')
    SANITY_API_VERSION = os.environ.get('SANITY_API_VERSION', '2024-10-28')
    SANITY_API_READ_TOKEN = os.environ.get('SANITY_API_READ_TOKEN')

    # Masonry grid
    MASONRY_COLUMNS = {'sm': 1, 'md': 2, 'lg': 3, 'xl': 3}
    MASONRY_GAP = 24
    MASONRY_BREAKPOINTS = {'sm': 640, 'md': 768, 'lg': 1024, 'xl': 1280}
    MASONRY_ENABLE_LAZY_LOADING = True
    MASONRY_ANIMATION_DELAY = 50
    MASONRY_ESTIMATED_ITEM_HEIGHT = 300

    SITE_TITLE = os.environ.get('SITE_TITLE', 'Portfolio')
    SITE_DESCRIPTION = os.environ.get(
        'SITE_DESCRIPTION',
        'Coding projects, photography, creative content, data analysis, animations, and design work.')


class DevelopmentConfig(Config):
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # SQLite's StaticPool rejects pool options
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CONTENT_DIR = os.path.join(BASE_DIR, 'content')
    SANITY_PROJECT_ID = None
    SANITY_DATASET = None


config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}


def get_config(config_name=None):
    """Config class for config_name, falling back to FLASK_ENV and then development"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config_by_name.get(env, DevelopmentConfig)
