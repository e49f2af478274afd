"""
Viewport Module - Event sources the layout engine listens to
Provides: subscription signal, viewport width notifier, intersection entries
and a scroll-driven intersection observer that works from known item geometry.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple


class Signal:
    """Minimal publish/subscribe primitive: subscribe(callback) -> unsubscribe()"""

    def __init__(self):
        self._listeners: List[Callable] = []

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def emit(self, *args):
        # Copy so a listener may unsubscribe while being notified
        for callback in list(self._listeners):
            callback(*args)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


class Viewport:
    """
    Platform-provided viewport width notifier.

    A width of None means there is no measurable viewport (server render,
    headless evaluation); consumers fall back to their deterministic defaults.
    """

    def __init__(self, width: Optional[int] = None):
        self.width = width
        self._resized = Signal()

    @property
    def is_measurable(self) -> bool:
        return self.width is not None

    def subscribe(self, callback: Callable[[Optional[int]], None]) -> Callable[[], None]:
        return self._resized.subscribe(callback)

    def resize(self, width: Optional[int]):
        self.width = width
        self._resized.emit(width)

    @property
    def listener_count(self) -> int:
        return self._resized.listener_count


@dataclass(frozen=True)
class IntersectionEntry:
    index: int
    is_intersecting: bool
    intersection_ratio: float = 0.0


_MARGIN_TOKEN = re.compile(r'^(-?\d+(?:\.\d+)?)(px)?$')


def parse_root_margin(text: str) -> Tuple[float, float, float, float]:
    """
    Parse a CSS margin shorthand into (top, right, bottom, left) pixels.

    Args:
        text (str): One to four values, e.g. '50px', '50px 0px', '10 0 20 0'

    Returns:
        tuple: (top, right, bottom, left)

    Example:
        >>> parse_root_margin('50px 0px')
        (50.0, 0.0, 50.0, 0.0)
    """
    parts = (text or '').split()
    if not 1 <= len(parts) <= 4:
        raise ValueError(f"Invalid root margin: {text!r}")

    values = []
    for part in parts:
        match = _MARGIN_TOKEN.match(part)
        if not match:
            raise ValueError(f"Invalid root margin value: {part!r}")
        values.append(float(match.group(1)))

    if len(values) == 1:
        top = right = bottom = left = values[0]
    elif len(values) == 2:
        top = bottom = values[0]
        right = left = values[1]
    elif len(values) == 3:
        top, right, bottom = values
        left = right
    else:
        top, right, bottom, left = values
    return top, right, bottom, left


class ScrollIntersectionObserver:
    """
    Intersection capability driven by explicit scroll positions.

    Items are registered with their vertical geometry; scroll_to() moves the
    viewport window and delivers one batch of entries for every observed item
    whose qualifying state changed. The window is grown by the root margin
    before ratios are computed, so items inside the margin count as visible.
    """

    def __init__(self, callback: Callable[[List[IntersectionEntry]], None],
                 root_margin: str = '50px 0px', threshold: float = 0.1):
        self._callback = callback
        self.margin = parse_root_margin(root_margin)
        self.threshold = threshold
        self._boxes: Dict[int, Tuple[float, float]] = {}
        self._states: Dict[int, bool] = {}
        self._window: Optional[Tuple[float, float]] = None
        self.connected = True
        self.disconnect_calls = 0

    @property
    def observed(self) -> List[int]:
        return sorted(self._boxes)

    def observe(self, index: int, top: float = 0.0, height: float = 0.0):
        if not self.connected:
            return
        self._boxes[index] = (float(top), float(height))
        self._states.pop(index, None)
        if self._window is not None:
            self._deliver([index])

    def unobserve(self, index: int):
        self._boxes.pop(index, None)
        self._states.pop(index, None)

    def disconnect(self):
        self.disconnect_calls += 1
        self.connected = False
        self._boxes.clear()
        self._states.clear()

    def scroll_to(self, top: float, height: float):
        self._window = (float(top), float(height))
        if self.connected:
            self._deliver(list(self._boxes))

    def ratio_for(self, index: int) -> float:
        """Visible fraction of an observed item inside the margin-expanded window"""
        if self._window is None or index not in self._boxes:
            return 0.0
        item_top, item_height = self._boxes[index]
        window_top, window_height = self._window
        margin_top, _, margin_bottom, _ = self.margin

        low = window_top - margin_top
        high = window_top + window_height + margin_bottom
        overlap = min(item_top + item_height, high) - max(item_top, low)
        if item_height <= 0:
            # Zero-height items count as fully visible when inside the window
            return 1.0 if low <= item_top <= high else 0.0
        return max(0.0, min(1.0, overlap / item_height))

    def _deliver(self, indices):
        entries = []
        for index in indices:
            ratio = self.ratio_for(index)
            qualifies = ratio > 0 and ratio >= self.threshold
            if self._states.get(index) == qualifies:
                continue
            self._states[index] = qualifies
            entries.append(IntersectionEntry(index=index,
                                             is_intersecting=qualifies,
                                             intersection_ratio=ratio))
        if entries:
            self._callback(entries)


__all__ = [
    'Signal',
    'Viewport',
    'IntersectionEntry',
    'parse_root_margin',
    'ScrollIntersectionObserver'
]
