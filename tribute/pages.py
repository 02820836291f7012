"""Per-page controllers for the journey and the message wall.

Each controller owns its page's state for the page's lifetime; views get
the controller passed in rather than reaching for module globals.
"""

import logging

from tribute.config import Config
from tribute.fixtures import FixtureRepository
from tribute.keyboard import KeyboardNavigator
from tribute.models import Chapter, Message
from tribute.tracker import DEFAULT_SETTLE_DELAY, Scheduler, ScrollSource, SectionTracker

logger = logging.getLogger(__name__)


class JourneyController:
    """Scroll-snapped journey through the chapters, one section per chapter."""

    def __init__(
        self,
        repo: FixtureRepository,
        source: ScrollSource,
        scheduler: Scheduler,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
    ) -> None:
        self.chapters: list[Chapter] = repo.list_chapters()
        self.tracker = SectionTracker(
            source, scheduler, len(self.chapters), settle_delay=settle_delay,
        )
        self.keyboard = KeyboardNavigator(self.tracker)

    @classmethod
    def from_config(
        cls,
        repo: FixtureRepository,
        source: ScrollSource,
        scheduler: Scheduler,
        config: Config,
    ) -> "JourneyController":
        return cls(repo, source, scheduler, settle_delay=config.tracker.settle_delay)

    @property
    def current_chapter(self) -> Chapter | None:
        if not self.chapters:
            return None
        return self.chapters[self.tracker.current_section]

    def go_to_chapter(self, chapter_id: str) -> bool:
        """Jump to the chapter with chapter_id. Returns False if it is not in the journey."""
        for i, chapter in enumerate(self.chapters):
            if chapter.id == chapter_id:
                self.tracker.jump(i)
                return True
        logger.debug("No chapter %s in journey", chapter_id)
        return False

    def close(self) -> None:
        self.tracker.close()


class MessageWall:
    """Filterable message wall with one snap section per visible message.

    Changing a filter rebuilds the visible list and returns to the first
    message.
    """

    def __init__(
        self,
        repo: FixtureRepository,
        source: ScrollSource,
        scheduler: Scheduler,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
    ) -> None:
        self._repo = repo
        self.relations: list[str] = repo.list_relations()
        self.relation: str | None = None
        self.curated_only = False
        self.messages: list[Message] = repo.list_messages()
        self.tracker = SectionTracker(
            source, scheduler, len(self.messages), settle_delay=settle_delay,
        )

    @classmethod
    def from_config(
        cls,
        repo: FixtureRepository,
        source: ScrollSource,
        scheduler: Scheduler,
        config: Config,
    ) -> "MessageWall":
        return cls(repo, source, scheduler, settle_delay=config.tracker.settle_delay)

    @property
    def current_message(self) -> Message | None:
        if not self.messages:
            return None
        return self.messages[self.tracker.current_section]

    def set_relation(self, relation: str | None) -> None:
        """Show only messages from relation, or all relations for None."""
        self.relation = relation
        self._refresh()

    def show_curated(self, curated_only: bool) -> None:
        self.curated_only = curated_only
        self._refresh()

    def _refresh(self) -> None:
        self.messages = self._repo.list_messages(
            relation=self.relation,
            curated=True if self.curated_only else None,
        )
        logger.debug(
            "Message filter relation=%s curated_only=%s: %d messages",
            self.relation, self.curated_only, len(self.messages),
        )
        self.tracker.set_total_sections(len(self.messages))
        self.tracker.jump(0)

    def close(self) -> None:
        self.tracker.close()
