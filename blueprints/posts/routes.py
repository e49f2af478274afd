"""
Posts Routes - Public blog views
"""

from flask import render_template, request, abort, current_app
from sqlalchemy.exc import SQLAlchemyError
from masonry import optimal_columns
from utils.data import paginate, get_paginated_posts, count_posts, get_post_by_slug, get_more_posts
from utils.ui_helpers import build_masonry_grid, get_viewport_width
from . import posts_bp


@posts_bp.route('/posts')
def index():
    """Paginated blog listing"""
    per_page = current_app.config['POSTS_PER_PAGE']
    try:
        pagination = paginate(request.args.get('page', 1), per_page, count_posts())
        posts = get_paginated_posts(offset=pagination['offset'], limit=pagination['limit'])
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error loading posts: {str(e)}")
        abort(404)

    # Short pages get fewer columns so none is left sparse
    grid = build_masonry_grid(posts, width=get_viewport_width(),
                              columns=optimal_columns(len(posts)))
    grid_layout = grid.render()
    grid.unmount()

    return render_template('posts/index.html', posts=posts, grid=grid_layout,
                           pagination=pagination)


@posts_bp.route('/posts/<slug>')
def detail(slug):
    """Post detail with a couple of more recent posts"""
    try:
        post = get_post_by_slug(slug)
        more_posts = get_more_posts(skip_id=post['id'], limit=2) if post else []
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error loading post {slug}: {str(e)}")
        abort(404)

    if not post:
        abort(404)

    return render_template('posts/detail.html', post=post, more_posts=more_posts)
