"""Keyboard bindings for section navigation."""

import logging
from collections.abc import Callable

from tribute.tracker import SectionTracker

logger = logging.getLogger(__name__)

ARROW_LEFT = "ArrowLeft"
ARROW_RIGHT = "ArrowRight"
SPACE = " "
ESCAPE = "Escape"


class KeyboardNavigator:
    """Maps key names (DOM KeyboardEvent.key values) to tracker actions."""

    def __init__(
        self,
        tracker: SectionTracker,
        on_space: Callable[[], None] | None = None,
        on_escape: Callable[[], None] | None = None,
    ) -> None:
        self._bindings: dict[str, Callable[[], None]] = {
            ARROW_LEFT: tracker.prev,
            ARROW_RIGHT: tracker.next,
        }
        if on_space is not None:
            self._bindings[SPACE] = on_space
        if on_escape is not None:
            self._bindings[ESCAPE] = on_escape

    def handle_key(self, key: str) -> bool:
        """Run the action bound to key.

        Returns True when the key was handled and the host should suppress
        its default action.
        """
        action = self._bindings.get(key)
        if action is None:
            return False
        logger.debug("Key %r", key)
        action()
        return True
