"""
Portfolio Routes - Public portfolio views
Handles: Filterable project grid, project details, masonry layout resolution
"""

from flask import render_template, request, jsonify, abort, current_app
from sqlalchemy.exc import SQLAlchemyError
from utils.data import (
    paginate, get_portfolio_projects, count_portfolio_projects,
    get_category_counts, get_technologies, get_project_by_slug
)
from utils.helpers import category_label
from utils.ui_helpers import build_masonry_grid, get_viewport_width
from models import PROJECT_CATEGORIES
from . import portfolio_bp

LAYOUTS = ('grid', 'masonry')
MAX_LAYOUT_ITEMS = 500
DEFAULT_SKELETON_ITEMS = 6


def _current_filters():
    """Filters from the query string, normalized the way the listing queries expect"""
    category = request.args.get('category') or None
    if category not in PROJECT_CATEGORIES:
        category = None
    search = (request.args.get('search') or '').strip() or None
    featured = True if request.args.get('featured') == 'true' else None
    technologies = [t for t in request.args.getlist('tech') if t] or None
    return {
        'category': category,
        'search': search,
        'featured': featured,
        'technologies': technologies,
    }


def _filter_query_args(filters, **extra):
    """Query args that preserve the active filters, for pagination and filter links"""
    args = {}
    if filters['category']:
        args['category'] = filters['category']
    if filters['search']:
        args['search'] = filters['search']
    if filters['featured']:
        args['featured'] = 'true'
    if filters['technologies']:
        args['tech'] = filters['technologies']
    args.update({k: v for k, v in extra.items() if v is not None})
    return args


@portfolio_bp.route('/portfolio')
def index():
    """Filterable, paginated project listing"""
    filters = _current_filters()
    layout = request.args.get('layout', 'masonry')
    if layout not in LAYOUTS:
        layout = 'masonry'
    per_page = current_app.config['PROJECTS_PER_PAGE']

    try:
        total = count_portfolio_projects(**filters)
        pagination = paginate(request.args.get('page', 1), per_page, total)
        projects = get_portfolio_projects(offset=pagination['offset'],
                                          limit=pagination['limit'], **filters)
        category_counts = get_category_counts()
        technologies = get_technologies()
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error loading portfolio: {str(e)}")
        abort(404)

    width = get_viewport_width() if layout == 'masonry' else None
    grid = build_masonry_grid(projects, width=width)
    grid_layout = grid.render()
    grid.unmount()

    return render_template('portfolio/index.html',
                           projects=projects,
                           grid=grid_layout,
                           layout=layout,
                           pagination=pagination,
                           filters=filters,
                           filter_args=_filter_query_args(filters, layout=layout),
                           category_counts=category_counts,
                           categories=[(c, category_label(c)) for c in PROJECT_CATEGORIES],
                           technologies=technologies)


@portfolio_bp.route('/portfolio/layout.json')
def layout_json():
    """Masonry layout for a viewport width and item count, with skeleton heights for the loading state"""
    width = request.args.get('width')
    try:
        count = int(request.args.get('count', 0))
        width = int(width) if width not in (None, '') else None
    except ValueError:
        return jsonify({'error': 'width and count must be integers'}), 400
    if count < 0 or count > MAX_LAYOUT_ITEMS or (width is not None and width <= 0):
        return jsonify({'error': f'count must be 0-{MAX_LAYOUT_ITEMS} and width positive'}), 400

    grid = build_masonry_grid(range(count), width=width)
    data = grid.render().to_dict()
    data['skeleton'] = grid.skeleton(count or DEFAULT_SKELETON_ITEMS)
    grid.unmount()
    return jsonify(data)


@portfolio_bp.route('/portfolio/<slug>')
def project_detail(slug):
    """Project detail page with related projects"""
    try:
        project = get_project_by_slug(slug)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error loading project {slug}: {str(e)}")
        abort(404)

    if not project:
        abort(404)

    return render_template('portfolio/detail.html', project=project,
                           category=category_label(project['category']))
