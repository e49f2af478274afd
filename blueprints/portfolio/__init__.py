"""
Portfolio Blueprint - Public portfolio views
Handles: Project grid with filters and pagination, project details, layout JSON
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='')

from . import routes
