"""
Utils Package - Centralized utility modules initialization
"""

from .data import (
    paginate,
    get_portfolio_projects,
    count_portfolio_projects,
    get_category_counts,
    get_technologies,
    get_featured_projects,
    get_project_by_slug,
    get_paginated_posts,
    count_posts,
    get_post_by_slug,
    get_more_posts,
    load_resume
)
from .helpers import format_date, truncate_text, category_label, render_rich_text
from .sanity import ContentStoreError, SanityClient, check_connection
from .ui_helpers import (
    get_blueprint_styles,
    inject_blueprint_assets,
    get_page_specific_class,
    get_masonry_options,
    get_viewport_width,
    build_masonry_grid
)

__all__ = [
    # Data
    'paginate',
    'get_portfolio_projects',
    'count_portfolio_projects',
    'get_category_counts',
    'get_technologies',
    'get_featured_projects',
    'get_project_by_slug',
    'get_paginated_posts',
    'count_posts',
    'get_post_by_slug',
    'get_more_posts',
    'load_resume',

    # Helpers
    'format_date',
    'truncate_text',
    'category_label',
    'render_rich_text',

    # Content store
    'ContentStoreError',
    'SanityClient',
    'check_connection',

    # UI Helpers
    'get_blueprint_styles',
    'inject_blueprint_assets',
    'get_page_specific_class',
    'get_masonry_options',
    'get_viewport_width',
    'build_masonry_grid'
]
