"""
Renderer Module - Arranges items into a CSS multi-column flow

Column balancing is left to the browser (column-fill: balance); this module
only decides the container style, each item's reveal state and its staggered
entrance delay.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .columns import BreakpointConfig, ColumnConfig, GapConfig, ResponsiveColumns, DEFAULT_COLUMNS
from .viewport import Signal, Viewport
from .visibility import DEFAULT_ROOT_MARGIN, DEFAULT_THRESHOLD, VisibilityTracker

MAX_ENTRANCE_DELAY_MS = 1000
SKELETON_HEIGHTS = (200, 250, 300, 350, 280, 320, 240, 380)

_TRANSITION = 'all 0.4s cubic-bezier(0.25, 0.46, 0.45, 0.94)'
_HIDDEN_TRANSFORM = 'translateY(20px) scale(0.98)'
_VISIBLE_TRANSFORM = 'translateY(0) scale(1)'

_CAMEL_CASE_KEYS = {
    'enableLazyLoading': 'enable_lazy_loading',
    'animationDelay': 'animation_delay',
    'estimatedItemHeight': 'estimated_item_height',
    'rootMargin': 'root_margin',
    'triggerOnce': 'trigger_once',
    'className': 'class_name',
}


def entrance_delay(index: int, animation_delay: float) -> float:
    """Transition delay in ms for the item at position index, capped at one second"""
    return min(index * animation_delay, MAX_ENTRANCE_DELAY_MS)


def style_attr(style: Mapping[str, Any]) -> str:
    """
    Serialize a style mapping into an inline CSS declaration list.

    Example:
        >>> style_attr({'opacity': 0, 'column-count': 3})
        'opacity: 0; column-count: 3'
    """
    return '; '.join(f'{prop}: {value}' for prop, value in style.items())


@dataclass
class MasonryOptions:
    columns: ColumnConfig = DEFAULT_COLUMNS
    gap: Any = 24
    breakpoints: Optional[BreakpointConfig] = None
    enable_lazy_loading: bool = True
    animation_delay: float = 50
    estimated_item_height: int = 300
    root_margin: str = DEFAULT_ROOT_MARGIN
    threshold: float = DEFAULT_THRESHOLD
    trigger_once: bool = True
    class_name: str = ''

    def __post_init__(self):
        self.columns = ColumnConfig.coerce(self.columns)
        self.gap = GapConfig.coerce(self.gap)
        self.breakpoints = BreakpointConfig.coerce(self.breakpoints)
        if self.animation_delay < 0:
            raise ValueError(f"animation_delay must be >= 0, got {self.animation_delay!r}")
        if self.estimated_item_height <= 0:
            raise ValueError(f"estimated_item_height must be > 0, got {self.estimated_item_height!r}")

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None, **overrides):
        """Build options from snake_case or camelCase keys; unknown keys are ignored"""
        values = {}
        for key, value in dict(mapping or {}, **overrides).items():
            key = _CAMEL_CASE_KEYS.get(key, key)
            if key in cls.__dataclass_fields__:
                values[key] = value
        return cls(**values)


@dataclass
class RenderedItem:
    index: int
    item: Any
    visible: bool
    delay_ms: float
    style: Dict[str, Any] = field(default_factory=dict)

    @property
    def style_attr(self) -> str:
        return style_attr(self.style)


@dataclass
class GridLayout:
    mode: str
    breakpoint: str
    columns: int
    gap: float
    container_style: Dict[str, Any]
    items: List[RenderedItem]
    class_name: str = ''

    @property
    def container_style_attr(self) -> str:
        return style_attr(self.container_style)

    @property
    def visible_count(self) -> int:
        return sum(1 for item in self.items if item.visible)

    def to_dict(self):
        return {
            'mode': self.mode,
            'breakpoint': self.breakpoint,
            'columns': self.columns,
            'gap': self.gap,
            'container_style': self.container_style,
            'items': [
                {'index': item.index, 'visible': item.visible, 'delay_ms': item.delay_ms}
                for item in self.items
            ],
        }


class MasonryGrid:
    """
    Responsive masonry grid owning its own column resolver and visibility tracker.

    Both are created with the grid, acquired by mount() and released by
    unmount(). Without a measurable viewport the grid renders as a plain
    uniform grid using the 'lg' column count, with every item shown.
    """

    def __init__(self, items: Sequence[Any], options: Optional[MasonryOptions] = None,
                 viewport: Optional[Viewport] = None,
                 observer_factory: Optional[Callable] = None):
        self.items = list(items)
        self.options = options or MasonryOptions()
        self.viewport = viewport

        self.resolver = ResponsiveColumns(self.options.columns, self.options.gap,
                                          self.options.breakpoints, viewport)
        self.tracker = VisibilityTracker(observer_factory,
                                         root_margin=self.options.root_margin,
                                         threshold=self.options.threshold,
                                         trigger_once=self.options.trigger_once)
        self.mounted = False
        self.render_count = 0

        self._changed = Signal()
        self._subscriptions = []

    @property
    def interactive(self) -> bool:
        return self.viewport is not None and self.viewport.is_measurable

    @property
    def animated(self) -> bool:
        return self.interactive and self.options.enable_lazy_loading and self.tracker.capable

    def mount(self, geometry: Optional[Mapping[int, Mapping[str, float]]] = None):
        """
        Acquire observers and start tracking.

        Args:
            geometry: optional {index: {'top': ..., 'height': ...}} passed to
                the intersection observer for each item
        """
        if self.mounted:
            return
        self.mounted = True
        self.resolver.mount()
        self._subscriptions = [
            self.resolver.subscribe(self._on_change),
            self.tracker.subscribe(self._on_change),
        ]
        self._track(geometry)

    def _track(self, geometry=None):
        if not self.options.enable_lazy_loading:
            self.tracker.reveal_all(range(len(self.items)))
            return
        if not self.interactive:
            return

        self.tracker.mount()
        geometry = geometry or {}
        for index in range(len(self.items)):
            self.tracker.observe(index, **dict(geometry.get(index, {})))

    def _release(self):
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions = []
        self.tracker.teardown()
        self.resolver.teardown()
        self.mounted = False

    def unmount(self):
        self._release()
        self.tracker.reset()

    def set_items(self, items: Sequence[Any],
                  geometry: Optional[Mapping[int, Mapping[str, float]]] = None):
        """
        Replace the items and observe them again.

        Reveals for indices still present are kept; a mounted grid gets a
        fresh observer and requests a re-render.
        """
        self.items = list(items)
        self.tracker.teardown()
        self.tracker.truncate(len(self.items))
        if self.mounted:
            self._track(geometry)
            self._changed.emit(self)

    def reconfigure(self, options: Optional[MasonryOptions] = None,
                    geometry: Optional[Mapping[int, Mapping[str, float]]] = None):
        """
        Apply new options, recreating the column resolver and the observer.

        Invalid options raise ValueError and leave the grid untouched.
        """
        options = options or MasonryOptions()
        resolver = ResponsiveColumns(options.columns, options.gap,
                                     options.breakpoints, self.viewport)
        VisibilityTracker._validate(options.root_margin, options.threshold)

        was_mounted = self.mounted
        if was_mounted:
            self._release()
        self.options = options
        self.resolver = resolver
        self.tracker.reconfigure(root_margin=options.root_margin,
                                 threshold=options.threshold,
                                 trigger_once=options.trigger_once)
        if was_mounted:
            self.mount(geometry)
            self._changed.emit(self)

    def subscribe(self, callback: Callable[['MasonryGrid'], None]) -> Callable[[], None]:
        """Listen for re-render requests caused by resize or reveal events"""
        return self._changed.subscribe(callback)

    def _on_change(self, _source):
        self._changed.emit(self)

    def is_visible(self, index: int) -> bool:
        if not self.interactive or not self.options.enable_lazy_loading:
            return True
        if not self.tracker.capable:
            return True
        return self.tracker.is_revealed(index)

    def render(self) -> GridLayout:
        self.render_count += 1
        if not self.interactive:
            return self._render_static()

        columns = self.resolver.current_columns
        gap = self.resolver.current_gap
        animated = self.animated
        items = []
        for index, item in enumerate(self.items):
            visible = self.is_visible(index)
            delay = entrance_delay(index, self.options.animation_delay) if animated else 0
            style = {
                'break-inside': 'avoid',
                'margin-bottom': f'{gap}px',
                'transform': _VISIBLE_TRANSFORM if visible else _HIDDEN_TRANSFORM,
                'opacity': 1 if visible else 0,
            }
            if animated:
                style['transition'] = f'{_TRANSITION} {delay}ms'
                style['will-change'] = 'auto' if visible else 'transform, opacity'
            items.append(RenderedItem(index=index, item=item, visible=visible,
                                      delay_ms=delay, style=style))

        return GridLayout(
            mode='masonry',
            breakpoint=self.resolver.current_breakpoint,
            columns=columns,
            gap=gap,
            container_style={
                'column-count': columns,
                'column-gap': f'{gap}px',
                'column-fill': 'balance',
            },
            items=items,
            class_name=self.options.class_name,
        )

    def _render_static(self) -> GridLayout:
        columns = self.options.columns.lg
        gap = self.options.gap.lg
        items = [RenderedItem(index=index, item=item, visible=True, delay_ms=0)
                 for index, item in enumerate(self.items)]
        return GridLayout(
            mode='grid',
            breakpoint='lg',
            columns=columns,
            gap=gap,
            container_style={
                'display': 'grid',
                'grid-template-columns': f'repeat({columns}, 1fr)',
                'gap': f'{gap}px',
            },
            items=items,
            class_name=self.options.class_name,
        )

    def skeleton(self, count: int) -> List[int]:
        """Placeholder heights around estimated_item_height while content loads"""
        base = self.options.estimated_item_height
        return [round(base * SKELETON_HEIGHTS[i % len(SKELETON_HEIGHTS)] / 300)
                for i in range(count)]


__all__ = [
    'MAX_ENTRANCE_DELAY_MS',
    'entrance_delay',
    'style_attr',
    'MasonryOptions',
    'RenderedItem',
    'GridLayout',
    'MasonryGrid'
]
