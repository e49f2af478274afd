"""
Masonry Package - Responsive masonry layout engine
Column/gap resolver, visibility tracker and layout renderer, independent of Flask
"""

from .viewport import (
    Signal,
    Viewport,
    IntersectionEntry,
    parse_root_margin,
    ScrollIntersectionObserver
)
from .columns import (
    ColumnConfig,
    GapConfig,
    BreakpointConfig,
    resolve_breakpoint,
    resolve_columns,
    resolve_gap,
    optimal_columns,
    ResponsiveColumns
)
from .visibility import VisibilityTracker
from .renderer import (
    entrance_delay,
    style_attr,
    MasonryOptions,
    GridLayout,
    MasonryGrid
)

__all__ = [
    # Event sources
    'Signal',
    'Viewport',
    'IntersectionEntry',
    'parse_root_margin',
    'ScrollIntersectionObserver',

    # Columns
    'ColumnConfig',
    'GapConfig',
    'BreakpointConfig',
    'resolve_breakpoint',
    'resolve_columns',
    'resolve_gap',
    'optimal_columns',
    'ResponsiveColumns',

    # Visibility
    'VisibilityTracker',

    # Rendering
    'entrance_delay',
    'style_attr',
    'MasonryOptions',
    'GridLayout',
    'MasonryGrid'
]
