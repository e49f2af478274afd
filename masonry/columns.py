"""
Columns Module - Maps viewport width to a column count and gap size
"""

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Union

from .viewport import Signal, Viewport

TIERS = ('sm', 'md', 'lg', 'xl')

# Used whenever no measurable width exists
FALLBACK_TIER = 'lg'


@dataclass(frozen=True)
class _TierValues:
    sm: int
    md: int
    lg: int
    xl: int

    def get(self, tier: str) -> int:
        if tier not in TIERS:
            raise KeyError(tier)
        return getattr(self, tier)

    def values(self):
        return tuple(getattr(self, tier) for tier in TIERS)

    def to_dict(self):
        return {tier: getattr(self, tier) for tier in TIERS}

    @classmethod
    def from_mapping(cls, value: Mapping[str, int]):
        missing = [tier for tier in TIERS if tier not in value]
        if missing:
            raise ValueError(f"{cls.__name__} missing tiers: {', '.join(missing)}")
        return cls(**{tier: value[tier] for tier in TIERS})


@dataclass(frozen=True)
class ColumnConfig(_TierValues):
    """Column count per breakpoint tier"""

    def __post_init__(self):
        for tier in TIERS:
            value = getattr(self, tier)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ValueError(f"Column count for '{tier}' must be a positive integer, got {value!r}")

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        return cls.from_mapping(value)


@dataclass(frozen=True)
class GapConfig(_TierValues):
    """Gap in pixels per breakpoint tier"""

    def __post_init__(self):
        for tier in TIERS:
            value = getattr(self, tier)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                raise ValueError(f"Gap for '{tier}' must be a non-negative number, got {value!r}")

    @classmethod
    def uniform(cls, gap):
        return cls(sm=gap, md=gap, lg=gap, xl=gap)

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        return cls.uniform(value)


@dataclass(frozen=True)
class BreakpointConfig(_TierValues):
    """Pixel-width thresholds, strictly increasing from sm to xl"""
    sm: int = 640
    md: int = 768
    lg: int = 1024
    xl: int = 1280

    def __post_init__(self):
        values = self.values()
        if any(b <= a for a, b in zip(values, values[1:])):
            raise ValueError(f"Breakpoints must increase strictly, got {self.to_dict()}")

    @classmethod
    def coerce(cls, value):
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        return cls.from_mapping(value)


DEFAULT_BREAKPOINTS = BreakpointConfig()
DEFAULT_COLUMNS = ColumnConfig(sm=1, md=2, lg=3, xl=3)
DEFAULT_GAPS = GapConfig(sm=16, md=20, lg=24, xl=32)


def resolve_breakpoint(width: Optional[float], breakpoints: BreakpointConfig = DEFAULT_BREAKPOINTS) -> str:
    """
    Select the breakpoint tier for a viewport width.

    Widths below 'sm' and widths between 'sm' and 'md' both land on the 'sm'
    tier. Without a measurable width the 'lg' tier is used.
    """
    if width is None:
        return FALLBACK_TIER
    if width < breakpoints.sm:
        return 'sm'
    if width < breakpoints.md:
        return 'sm'
    if width < breakpoints.lg:
        return 'md'
    if width < breakpoints.xl:
        return 'lg'
    return 'xl'


def resolve_columns(width, columns, breakpoints=DEFAULT_BREAKPOINTS) -> int:
    return ColumnConfig.coerce(columns).get(resolve_breakpoint(width, breakpoints))


def resolve_gap(width, gap, breakpoints=DEFAULT_BREAKPOINTS):
    return GapConfig.coerce(gap).get(resolve_breakpoint(width, breakpoints))


def optimal_columns(item_count: int, min_items_per_column: int = 3) -> ColumnConfig:
    """Column configuration that avoids sparse columns for short lists"""
    if item_count <= min_items_per_column:
        return ColumnConfig(sm=1, md=1, lg=1, xl=1)
    if item_count <= min_items_per_column * 2:
        return ColumnConfig(sm=1, md=2, lg=2, xl=2)
    if item_count <= min_items_per_column * 3:
        return ColumnConfig(sm=1, md=2, lg=3, xl=3)
    return ColumnConfig(sm=1, md=2, lg=3, xl=4)


class ResponsiveColumns:
    """
    Live column/gap resolver bound to a viewport.

    The width is read once on mount, then re-evaluated on every resize.
    Listeners only hear about changes of the resolved columns or gap.
    """

    def __init__(self, columns: Union[ColumnConfig, Mapping] = DEFAULT_COLUMNS,
                 gap: Union[int, Mapping, GapConfig] = 24,
                 breakpoints: Union[BreakpointConfig, Mapping, None] = None,
                 viewport: Optional[Viewport] = None):
        self.columns = ColumnConfig.coerce(columns)
        self.gap = GapConfig.coerce(gap)
        self.breakpoints = BreakpointConfig.coerce(breakpoints)
        self.viewport = viewport

        self.current_breakpoint = FALLBACK_TIER
        self.current_columns = self.columns.get(FALLBACK_TIER)
        self.current_gap = self.gap.get(FALLBACK_TIER)

        self._changed = Signal()
        self._unsubscribe_viewport = None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe_viewport is not None

    def mount(self):
        if self.mounted:
            return
        if self.viewport is None:
            self._apply(None)
            return
        self._apply(self.viewport.width)
        self._unsubscribe_viewport = self.viewport.subscribe(self._on_resize)

    def teardown(self):
        if self._unsubscribe_viewport is not None:
            self._unsubscribe_viewport()
            self._unsubscribe_viewport = None

    def subscribe(self, callback: Callable[['ResponsiveColumns'], None]) -> Callable[[], None]:
        return self._changed.subscribe(callback)

    def _on_resize(self, width):
        if self._apply(width):
            self._changed.emit(self)

    def _apply(self, width) -> bool:
        tier = resolve_breakpoint(width, self.breakpoints)
        columns = self.columns.get(tier)
        gap = self.gap.get(tier)
        self.current_breakpoint = tier
        if columns == self.current_columns and gap == self.current_gap:
            return False
        self.current_columns = columns
        self.current_gap = gap
        return True


__all__ = [
    'TIERS',
    'ColumnConfig',
    'GapConfig',
    'BreakpointConfig',
    'DEFAULT_BREAKPOINTS',
    'DEFAULT_COLUMNS',
    'DEFAULT_GAPS',
    'resolve_breakpoint',
    'resolve_columns',
    'resolve_gap',
    'optimal_columns',
    'ResponsiveColumns'
]
