"""
UI Helper Functions - Blueprint assets and masonry grid construction
=====================================================================

Each blueprint can register its own CSS files; they are injected into the
templates by the context processor. The masonry helpers build a grid from
the application's MASONRY_* settings for a given viewport width.
"""

from flask import current_app, request
from typing import Dict, List, Optional, Sequence

from masonry import MasonryGrid, MasonryOptions, Viewport

VIEWPORT_WIDTH_HEADERS = ('Sec-CH-Viewport-Width', 'Viewport-Width')


def get_blueprint_styles(blueprint_name: Optional[str]) -> List[str]:
    """
    CSS files for a blueprint

    Example:
        >>> get_blueprint_styles('portfolio')
        ['css/pages/portfolio.css', 'css/masonry.css']
    """
    if not blueprint_name:
        return []

    blueprint_css_map = {
        'pages': [
            'css/pages/home.css',
        ],
        'portfolio': [
            'css/pages/portfolio.css',
            'css/masonry.css',
        ],
        'posts': [
            'css/pages/posts.css',
            'css/masonry.css',
        ],
    }

    return blueprint_css_map.get(blueprint_name, [])


def inject_blueprint_assets() -> Dict[str, object]:
    """Assets of the blueprint handling the current request, for the context processor"""
    blueprint_name = request.blueprint if request.blueprint else None

    return {
        'blueprint_styles': get_blueprint_styles(blueprint_name),
        'current_blueprint': blueprint_name,
    }


def get_page_specific_class(blueprint_name: Optional[str], route_name: Optional[str] = None) -> str:
    """
    CSS class for the body of a page

    Example:
        >>> get_page_specific_class('portfolio', 'index')
        'page-portfolio page-portfolio-index'
    """
    if not blueprint_name:
        return 'page-default'

    classes = [f'page-{blueprint_name}']

    if route_name:
        classes.append(f'page-{blueprint_name}-{route_name}')

    return ' '.join(classes)


# ========== MASONRY GRID ========== #

def get_masonry_options(**overrides) -> MasonryOptions:
    """MasonryOptions from the MASONRY_* settings, with per-call overrides"""
    conf = current_app.config
    settings = {
        'columns': conf['MASONRY_COLUMNS'],
        'gap': conf['MASONRY_GAP'],
        'breakpoints': conf['MASONRY_BREAKPOINTS'],
        'enable_lazy_loading': conf['MASONRY_ENABLE_LAZY_LOADING'],
        'animation_delay': conf['MASONRY_ANIMATION_DELAY'],
        'estimated_item_height': conf['MASONRY_ESTIMATED_ITEM_HEIGHT'],
    }
    return MasonryOptions.from_mapping(settings, **overrides)


def get_viewport_width() -> Optional[int]:
    """Viewport width sent by the browser as a client hint, if any"""
    for header in VIEWPORT_WIDTH_HEADERS:
        value = request.headers.get(header)
        if not value:
            continue
        try:
            width = int(float(value))
        except (ValueError, OverflowError):
            current_app.logger.debug(f"Ignoring invalid {header} header: {value}")
            continue
        if width > 0:
            return width
    return None


def build_masonry_grid(items: Sequence, width: Optional[int] = None, **overrides) -> MasonryGrid:
    """
    Mounted grid for server-side rendering

    With a known width the grid uses column flow; the server has no
    intersection capability, so every item is rendered visible. Without a
    width it renders the plain-grid fallback.
    """
    viewport = Viewport(width) if width is not None else None
    grid = MasonryGrid(items, get_masonry_options(**overrides), viewport=viewport)
    grid.mount()
    return grid
