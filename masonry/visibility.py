"""
Visibility Module - Tracks which grid items have scrolled into view

An observer factory stands in for the platform intersection capability:

    factory(callback, root_margin=..., threshold=...) -> observer

where the observer exposes observe(index, **geometry), unobserve(index) and
disconnect(), and calls callback(entries) with IntersectionEntry batches.
Without a factory (or if it fails) every item counts as visible immediately.
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from .viewport import IntersectionEntry, Signal, parse_root_margin

logger = logging.getLogger(__name__)

DEFAULT_ROOT_MARGIN = '50px 0px'
DEFAULT_THRESHOLD = 0.1


class VisibilityTracker:
    """
    Marks item indices as revealed when they intersect the viewport.

    revealed only ever grows. With trigger_once each item stops being observed
    after its first qualifying intersection; otherwise intersecting follows
    every entry and exit while revealed keeps the history.
    """

    def __init__(self, observer_factory: Optional[Callable] = None,
                 root_margin: str = DEFAULT_ROOT_MARGIN,
                 threshold: float = DEFAULT_THRESHOLD,
                 trigger_once: bool = True):
        self._validate(root_margin, threshold)
        self.observer_factory = observer_factory
        self.root_margin = root_margin
        self.threshold = threshold
        self.trigger_once = trigger_once

        self.revealed = set()
        self.intersecting = set()
        self.capable = False
        self.mounted = False

        self._pending: Dict[int, dict] = {}
        self._observer = None
        self._generation = 0
        self._changed = Signal()

    @staticmethod
    def _validate(root_margin, threshold):
        parse_root_margin(root_margin)
        if not 0 <= threshold <= 1:
            raise ValueError(f"threshold must be between 0 and 1, got {threshold!r}")

    # Lifecycle

    def mount(self):
        if self.mounted:
            return
        self.mounted = True
        self._connect()

    def teardown(self):
        """Release the observer; queued callbacks from it are ignored afterwards"""
        self._generation += 1
        if self._observer is not None:
            self._observer.disconnect()
            self._observer = None
        self.mounted = False

    def reset(self):
        """Forget every reveal and queued item; the owning grid calls this on unmount"""
        self.revealed = set()
        self.intersecting = set()
        self._pending.clear()

    def truncate(self, count: int):
        """Forget reveals at or beyond count and drop every queued item"""
        self.revealed = {index for index in self.revealed if index < count}
        self.intersecting = {index for index in self.intersecting if index < count}
        self._pending.clear()

    def reconfigure(self, root_margin: Optional[str] = None,
                    threshold: Optional[float] = None,
                    trigger_once: Optional[bool] = None):
        root_margin = self.root_margin if root_margin is None else root_margin
        threshold = self.threshold if threshold is None else threshold
        self._validate(root_margin, threshold)
        self.root_margin = root_margin
        self.threshold = threshold
        if trigger_once is not None:
            self.trigger_once = trigger_once

        if self.mounted:
            self.teardown()
            self.mount()

    def _connect(self):
        if self.observer_factory is None:
            self._fall_back('no intersection observer available')
            return
        try:
            self._observer = self.observer_factory(
                self._make_callback(),
                root_margin=self.root_margin,
                threshold=self.threshold)
        except Exception as e:
            self._fall_back(f'intersection observer setup failed: {str(e)}')
            return

        self.capable = True
        for index, geometry in list(self._pending.items()):
            self._observer.observe(index, **geometry)

    def _fall_back(self, reason):
        logger.debug(f"Visibility tracking disabled, showing all items ({reason})")
        self.capable = False
        self._observer = None
        pending = list(self._pending)
        self._pending.clear()
        self._reveal(pending)

    def _make_callback(self):
        generation = self._generation

        def callback(entries):
            if generation != self._generation or not self.mounted:
                return
            self._handle_entries(entries)

        return callback

    # Observation

    def observe(self, index: int, **geometry):
        if self.trigger_once and index in self.revealed:
            return
        self._pending[index] = geometry
        if not self.mounted:
            return
        if not self.capable:
            self._pending.pop(index, None)
            self._reveal([index])
            return
        self._observer.observe(index, **geometry)

    def unobserve(self, index: int):
        self._pending.pop(index, None)
        if self._observer is not None:
            self._observer.unobserve(index)

    def reveal_all(self, indices: Iterable[int]):
        indices = list(indices)
        for index in indices:
            self._pending.pop(index, None)
            if self._observer is not None and self.trigger_once:
                self._observer.unobserve(index)
        self._reveal(indices)

    def _reveal(self, indices):
        new = set(indices) - self.revealed
        if new:
            self.revealed = self.revealed | new
            self._changed.emit(self)

    def _handle_entries(self, entries: Iterable[IntersectionEntry]):
        revealed = set(self.revealed)
        intersecting = set(self.intersecting)

        for entry in entries:
            index = entry.index
            if self.trigger_once and index in revealed:
                continue
            qualifies = entry.is_intersecting and entry.intersection_ratio >= self.threshold
            if qualifies:
                revealed.add(index)
                intersecting.add(index)
                if self.trigger_once:
                    self._pending.pop(index, None)
                    self._observer.unobserve(index)
            else:
                intersecting.discard(index)

        if revealed != self.revealed or intersecting != self.intersecting:
            # Merge rather than replace so concurrent batches never drop reveals
            self.revealed = self.revealed | revealed
            self.intersecting = intersecting
            self._changed.emit(self)

    # Queries

    def is_revealed(self, index: int) -> bool:
        return index in self.revealed

    def is_intersecting(self, index: int) -> bool:
        return index in self.intersecting

    @property
    def pending(self):
        return sorted(self._pending)

    def subscribe(self, callback: Callable[['VisibilityTracker'], None]) -> Callable[[], None]:
        return self._changed.subscribe(callback)


__all__ = [
    'DEFAULT_ROOT_MARGIN',
    'DEFAULT_THRESHOLD',
    'VisibilityTracker'
]
