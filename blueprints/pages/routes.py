"""
Pages Routes - Public static pages
"""

from flask import render_template, abort, current_app
from sqlalchemy.exc import SQLAlchemyError
from utils.data import get_featured_projects, get_paginated_posts, load_resume
from . import pages_bp


@pages_bp.route('/')
def index():
    """Home page - featured projects and latest posts"""
    try:
        featured = get_featured_projects(limit=current_app.config['FEATURED_PROJECTS_LIMIT'])
        latest_posts = get_paginated_posts(offset=0, limit=3)
    except SQLAlchemyError as e:
        # The home page still renders without content
        current_app.logger.error(f"Error loading home page content: {str(e)}")
        featured, latest_posts = [], []

    return render_template('pages/home.html',
                           featured_projects=featured,
                           latest_posts=latest_posts)


@pages_bp.route('/resume')
def resume():
    """Resume page"""
    data = load_resume()
    if not data:
        abort(404)
    return render_template('pages/resume.html', resume=data)
