"""Static password gate in front of the site.

The secret ships to the client, so this only keeps casual visitors out.
"""

import logging

from tribute.config import Config

logger = logging.getLogger(__name__)


class PasswordGate:
    def __init__(self, secret: str | None = None) -> None:
        self._secret = secret or ""

    @classmethod
    def from_config(cls, config: Config) -> "PasswordGate":
        return cls(config.gate.site_password)

    @property
    def enabled(self) -> bool:
        return bool(self._secret)

    def check(self, attempt: str) -> bool:
        """Whether attempt lets the visitor through. Always true when disabled."""
        if not self.enabled:
            return True
        if attempt == self._secret:
            return True
        logger.info("Incorrect site password")
        return False
