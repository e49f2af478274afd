"""
Extensions Module - Flask extensions shared across the app
Created unbound here and attached in create_app(), so models and
blueprints can import them without importing the app.
"""

from flask_sqlalchemy import SQLAlchemy

# Content store session and model base
db = SQLAlchemy()

__all__ = ['db']
