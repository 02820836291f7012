"""Admin draft: in-memory edits to chapters and messages.

Edits live only as long as the draft; nothing is written back to the
fixtures and the repository is never modified.
"""

import logging

from tribute.fixtures import FixtureRepository
from tribute.models import Chapter, Message

logger = logging.getLogger(__name__)


class AdminDraft:
    def __init__(self, repo: FixtureRepository) -> None:
        self.chapters: list[Chapter] = repo.list_chapters()
        self.messages: list[Message] = repo.list_messages()
        self._dirty = False

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def toggle_curated(self, message_id: str, curated: bool) -> bool:
        """Set a message's curated flag. Returns False for an unknown id."""
        for i, msg in enumerate(self.messages):
            if msg.id == message_id:
                if msg.curated != curated:
                    self.messages[i] = msg.model_copy(update={"curated": curated})
                    self._dirty = True
                    logger.debug("Message %s curated=%s", message_id, curated)
                return True
        return False

    def curated_messages(self) -> list[Message]:
        return [m for m in self.messages if m.curated]

    def save_chapter(self, chapter: Chapter) -> None:
        """Replace the chapter with the same id, or append a new one."""
        for i, existing in enumerate(self.chapters):
            if existing.id == chapter.id:
                self.chapters[i] = chapter
                break
        else:
            self.chapters.append(chapter)
        self._dirty = True

    def move_chapter(self, old_index: int, new_index: int) -> None:
        """Move a chapter to a new position in the journey order."""
        n = len(self.chapters)
        if not (0 <= old_index < n and 0 <= new_index < n):
            raise IndexError(
                f"Cannot move chapter {old_index} -> {new_index} in {n} chapters"
            )
        if old_index == new_index:
            return
        chapter = self.chapters.pop(old_index)
        self.chapters.insert(new_index, chapter)
        self._dirty = True
