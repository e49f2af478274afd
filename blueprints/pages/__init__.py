"""
Pages Blueprint - Public marketing pages
Handles: Home page, resume
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
