"""
Shared pytest fixtures: application, test client and seeded content store
"""
import json
import os

import pytest

from app import create_app
from extensions import db
from migrations.seed_content import seed_content
from masonry import ScrollIntersectionObserver

SEED_FILE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'content', 'seed.json')


@pytest.fixture
def app():
    """Application built with TestingConfig on a fresh in-memory database."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def seed_data():
    with open(SEED_FILE, 'r', encoding='utf-8') as f:
        return json.load(f)


@pytest.fixture
def seeded(app, seed_data):
    """Content store loaded with the bundled seed documents."""
    seed_content(seed_data)
    return seed_data


@pytest.fixture
def observers():
    """Observer factory that keeps every ScrollIntersectionObserver it creates."""
    created = []

    def factory(callback, **kwargs):
        observer = ScrollIntersectionObserver(callback, **kwargs)
        created.append(observer)
        return observer

    factory.created = created
    return factory
