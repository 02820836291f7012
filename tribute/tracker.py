"""Scroll-section tracker for snap-scrolling containers.

Maps a continuous scroll offset to a discrete current section and offers
imperative navigation (jump/next/prev) that stays consistent with scroll
driven by the user. The tracker observes a ScrollSource and schedules its
settle timer on a Scheduler, so it can be driven by synthetic offsets and a
virtual clock in tests.
"""

import abc
import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY = 0.5  # seconds

ScrollListener = Callable[[float], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class TrackerState:
    current_section: int = 0
    is_adjusting: bool = False


StateListener = Callable[[TrackerState], None]


# --- Host abstractions ---


class ScrollSource(abc.ABC):
    """A scrollable container divided into equally sized sections."""

    @abc.abstractmethod
    def subscribe(self, listener: ScrollListener) -> Unsubscribe:
        """Register for scroll offset notifications. Returns an unsubscribe callable."""
        ...

    @property
    @abc.abstractmethod
    def section_size(self) -> float:
        """Size of one section along the scroll axis (the viewport height)."""
        ...

    @abc.abstractmethod
    def scroll_to(self, offset: float) -> None:
        """Start a smooth scroll to offset."""
        ...


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class InMemoryScrollSource(ScrollSource):
    """Scroll source fed with synthetic offsets.

    emit() simulates the user scrolling. scroll_to() records the request and
    jumps straight to the target, notifying listeners like the last frame
    of a smooth scroll would.
    """

    def __init__(self, section_size: float = 1.0) -> None:
        self._section_size = section_size
        self._listeners: list[ScrollListener] = []
        self.offset = 0.0
        self.scroll_requests: list[float] = []

    @property
    def section_size(self) -> float:
        return self._section_size

    def resize(self, section_size: float) -> None:
        self._section_size = section_size

    def subscribe(self, listener: ScrollListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, offset: float) -> None:
        self.offset = offset
        for listener in list(self._listeners):
            listener(offset)

    def scroll_to(self, offset: float) -> None:
        self.scroll_requests.append(offset)
        self.emit(offset)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


# --- Tracker ---


class SectionTracker:
    """Tracks the active section of a snap-scrolling container.

    While a programmatic jump is in flight (is_adjusting) organic scroll
    events are ignored, so the smooth-scroll animation never fights the
    optimistic section update. A jump issued before the previous one has
    settled cancels its timer; the newest target wins.
    """

    def __init__(
        self,
        source: ScrollSource,
        scheduler: Scheduler,
        total_sections: int,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
    ) -> None:
        if total_sections < 0:
            raise ValueError(f"total_sections must be >= 0, got {total_sections}")
        self._source = source
        self._scheduler = scheduler
        self._total = total_sections
        self._settle_delay = settle_delay
        self._state = TrackerState()
        self._settle_handle: Cancellable | None = None
        self._listeners: list[StateListener] = []
        self._unsubscribe: Unsubscribe | None = source.subscribe(self._on_scroll)

    # --- Observable state ---

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def current_section(self) -> int:
        return self._state.current_section

    @property
    def is_adjusting(self) -> bool:
        return self._state.is_adjusting

    @property
    def total_sections(self) -> int:
        return self._total

    def subscribe(self, listener: StateListener) -> Unsubscribe:
        """Call listener with the new state on every state change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, current_section: int, is_adjusting: bool) -> None:
        new_state = TrackerState(current_section, is_adjusting)
        if new_state == self._state:
            return
        self._state = new_state
        logger.debug("Section state -> %s", new_state)
        for listener in list(self._listeners):
            listener(new_state)

    # --- Organic scroll ---

    def section_for_offset(self, offset: float) -> int:
        """Nearest section boundary to offset, clamped to valid sections."""
        size = self._source.section_size
        if self._total == 0 or size <= 0 or not math.isfinite(offset):
            return 0
        index = math.floor(offset / size + 0.5)
        return max(0, min(index, self._total - 1))

    def _on_scroll(self, offset: float) -> None:
        if self._state.is_adjusting:
            return
        if not math.isfinite(offset):
            return
        if self._total == 0 or self._source.section_size <= 0:
            return
        self._set_state(self.section_for_offset(offset), False)

    # --- Programmatic navigation ---

    def jump(self, index: int) -> None:
        """Smooth-scroll to section index. Out-of-range indices are ignored."""
        if not 0 <= index < self._total:
            logger.debug("Ignoring jump to %d (total %d)", index, self._total)
            return

        self._cancel_settle()
        # Adjusting must be set before scroll_to: a source may report
        # offsets synchronously.
        self._set_state(index, True)
        self._source.scroll_to(index * self._source.section_size)
        self._settle_handle = self._scheduler.call_later(self._settle_delay, self._settle)

    def next(self) -> None:
        if self._state.current_section < self._total - 1:
            self.jump(self._state.current_section + 1)

    def prev(self) -> None:
        if self._state.current_section > 0:
            self.jump(self._state.current_section - 1)

    def _settle(self) -> None:
        self._settle_handle = None
        self._set_state(self._state.current_section, False)

    def _cancel_settle(self) -> None:
        if self._settle_handle is not None:
            self._settle_handle.cancel()
            self._settle_handle = None

    # --- Lifecycle ---

    def set_total_sections(self, total_sections: int) -> None:
        """Resize the tracker, clamping the current section into range."""
        if total_sections < 0:
            raise ValueError(f"total_sections must be >= 0, got {total_sections}")
        self._total = total_sections
        current = min(self._state.current_section, max(total_sections - 1, 0))
        self._set_state(current, self._state.is_adjusting)

    def close(self) -> None:
        """Detach from the scroll source and drop any pending settle timer."""
        self._cancel_settle()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._state.is_adjusting:
            self._set_state(self._state.current_section, False)
