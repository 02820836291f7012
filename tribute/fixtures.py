"""Fixture repository: read-only queries over the static site collections."""

import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from tribute.config import Config, FixtureConfig
from tribute.models import Audio, Chapter, Message, Video

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class FixtureError(ValueError):
    """Fixture data breaks the load-time contract."""


def _parse_records(
    model: type[ModelT], records: Iterable[Any], source: str,
) -> list[ModelT]:
    """Validate raw records into models, failing on the first bad one."""
    if isinstance(records, (str, bytes, dict)):
        raise FixtureError(f"{source}: expected an array of records")
    parsed: list[ModelT] = []
    for i, record in enumerate(records):
        if isinstance(record, model):
            parsed.append(record)
            continue
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            raise FixtureError(f"{source}[{i}]: {e}") from e
    return parsed


def _index_by_id(items: Sequence[ModelT], source: str) -> dict[str, ModelT]:
    index: dict[str, ModelT] = {}
    for item in items:
        item_id = item.id  # type: ignore[attr-defined]
        if item_id in index:
            raise FixtureError(f"{source}: duplicate id {item_id!r}")
        index[item_id] = item
    return index


def _read_document(path: Path, required: bool = True) -> list[Any]:
    if not path.exists():
        if required:
            raise FixtureError(f"Fixture file not found: {path}")
        logger.info("Optional fixture %s missing, using an empty collection", path)
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise FixtureError(f"Cannot read fixture {path}: {e}") from e
    if not isinstance(data, list):
        raise FixtureError(f"{path.name}: expected an array of records")
    return data


class FixtureRepository:
    """Owns the canonical chapter, message, video and audio collections.

    Collections are loaded and validated once. Every query returns a fresh
    list of immutable models, so callers never hold an alias into the
    canonical data.
    """

    def __init__(
        self,
        chapters: Sequence[Chapter] = (),
        messages: Sequence[Message] = (),
        videos: Sequence[Video] = (),
        audio: Sequence[Audio] = (),
        allowed_relations: Iterable[str] | None = None,
    ) -> None:
        self._chapters = tuple(chapters)
        self._messages = tuple(messages)
        self._videos = tuple(videos)
        self._audio = tuple(audio)

        self._chapters_by_id = _index_by_id(self._chapters, "chapters")
        self._messages_by_id = _index_by_id(self._messages, "messages")
        self._videos_by_id = _index_by_id(self._videos, "videos")
        self._audio_by_id = _index_by_id(self._audio, "audio")

        if allowed_relations is not None:
            allowed = set(allowed_relations)
            for msg in self._messages:
                if msg.relation not in allowed:
                    raise FixtureError(
                        f"messages: {msg.id!r} has unknown relation {msg.relation!r}"
                    )

        for msg in self._messages:
            if msg.chapter_id is not None and msg.chapter_id not in self._chapters_by_id:
                logger.warning(
                    "Message %s references unknown chapter %s", msg.id, msg.chapter_id,
                )

        # sorted() is stable with reverse=True, so equal dates keep fixture order
        self._messages_newest_first = tuple(
            sorted(self._messages, key=lambda m: m.date, reverse=True)
        )
        self._relations = tuple(sorted({m.relation for m in self._messages}))

        logger.info(
            "Loaded fixtures: %d chapters, %d messages, %d videos, %d audio clips",
            len(self._chapters), len(self._messages), len(self._videos), len(self._audio),
        )

    # --- Construction ---

    @classmethod
    def from_records(
        cls,
        chapters: Iterable[Any] = (),
        messages: Iterable[Any] = (),
        videos: Iterable[Any] = (),
        audio: Iterable[Any] = (),
        allowed_relations: Iterable[str] | None = None,
    ) -> "FixtureRepository":
        """Validate raw JSON-like records. Raises FixtureError on bad data."""
        return cls(
            chapters=_parse_records(Chapter, chapters, "chapters"),
            messages=_parse_records(Message, messages, "messages"),
            videos=_parse_records(Video, videos, "videos"),
            audio=_parse_records(Audio, audio, "audio"),
            allowed_relations=allowed_relations,
        )

    @classmethod
    def from_dir(
        cls,
        fixtures_dir: Path,
        settings: FixtureConfig | None = None,
    ) -> "FixtureRepository":
        """Load the four JSON documents from a directory.

        Chapters, messages and videos are required. A missing audio
        document gives an empty audio collection.
        """
        settings = settings or FixtureConfig()
        fixtures_dir = Path(fixtures_dir)
        logger.debug("Loading fixtures from %s", fixtures_dir)
        return cls.from_records(
            chapters=_read_document(fixtures_dir / settings.chapters_file),
            messages=_read_document(fixtures_dir / settings.messages_file),
            videos=_read_document(fixtures_dir / settings.videos_file),
            audio=_read_document(fixtures_dir / settings.audio_file, required=False),
            allowed_relations=settings.allowed_relations,
        )

    @classmethod
    def from_config(cls, config: Config) -> "FixtureRepository":
        return cls.from_dir(config.resolved_fixtures_dir, config.fixtures)

    # --- Chapters ---

    def list_chapters(self) -> list[Chapter]:
        """All chapters in journey order (fixture order, never re-sorted)."""
        return list(self._chapters)

    def get_chapter(self, chapter_id: str) -> Chapter | None:
        return self._chapters_by_id.get(chapter_id)

    # --- Messages ---

    def list_messages(
        self,
        chapter_id: str | None = None,
        relation: str | None = None,
        curated: bool | None = None,
    ) -> list[Message]:
        """Messages matching every given predicate, newest first.

        Each predicate is an exact match and None skips it. Messages with
        the same date keep their fixture order.
        """
        return [
            m for m in self._messages_newest_first
            if (chapter_id is None or m.chapter_id == chapter_id)
            and (relation is None or m.relation == relation)
            and (curated is None or m.curated == curated)
        ]

    def get_message(self, message_id: str) -> Message | None:
        return self._messages_by_id.get(message_id)

    def list_relations(self) -> list[str]:
        """Distinct relations over all messages, lexicographically ordered."""
        return list(self._relations)

    # --- Media ---

    def list_videos(self) -> list[Video]:
        return list(self._videos)

    def get_video(self, video_id: str) -> Video | None:
        return self._videos_by_id.get(video_id)

    def list_audio(self) -> list[Audio]:
        return list(self._audio)

    def get_audio(self, audio_id: str) -> Audio | None:
        return self._audio_by_id.get(audio_id)
