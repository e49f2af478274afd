"""
Posts Blueprint - Public blog views
Handles: Paginated post listing, post details
"""

from flask import Blueprint

posts_bp = Blueprint('posts', __name__, url_prefix='')

from . import routes
