"""Pydantic models for tribute fixtures.

Attribute names are snake_case; the camelCase fixture field names are kept
as aliases so records load and serialize with the names the site expects.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class InteractionType(str, Enum):
    NONE = "none"
    FLIP = "flip"
    SLIDER = "slider"
    QUIZ = "quiz"


class LayoutHint(str, Enum):
    FULL_BLEED = "full-bleed"
    TWO_COLUMN_LEFT = "two-column-left"
    TWO_COLUMN_RIGHT = "two-column-right"
    CENTERED = "centered"


class FixtureModel(BaseModel):
    """Immutable fixture record with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_fixture(self) -> dict:
        """Dump using the fixture field names, JSON-compatible."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DatedModel(FixtureModel):
    date: datetime

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Date-only fixture values have no zone; mixing naive and aware
        # instants would make sorting raise.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# --- Journey ---


class Quiz(FixtureModel):
    question: str
    options: tuple[str, ...]
    answer_index: int

    @model_validator(mode="after")
    def _answer_in_range(self) -> "Quiz":
        if not 0 <= self.answer_index < len(self.options):
            raise ValueError(
                f"answerIndex {self.answer_index} is out of range "
                f"for {len(self.options)} options"
            )
        return self


class Chapter(DatedModel):
    id: str = Field(min_length=1)
    title: str
    text: str
    photos: tuple[str, ...] = ()
    audio_clip_url: str | None = None
    interaction_type: InteractionType = InteractionType.NONE
    quiz: Quiz | None = None
    place: str | None = None
    layout_hint: LayoutHint

    @model_validator(mode="after")
    def _quiz_present(self) -> "Chapter":
        if self.interaction_type is InteractionType.QUIZ and self.quiz is None:
            raise ValueError(f"chapter {self.id!r} is a quiz but has no quiz data")
        return self


# --- Message wall ---


class Message(DatedModel):
    id: str = Field(min_length=1)
    author: str
    relation: str = Field(min_length=1)
    text: str
    chapter_id: str | None = None
    avatar_url: str | None = None
    curated: bool = False


# --- Media gallery ---


class Video(DatedModel):
    id: str = Field(min_length=1)
    author: str
    thumbnail: str
    video_url: str
    duration_sec: float = Field(ge=0)
    transcript: str | None = None


class Audio(DatedModel):
    id: str = Field(min_length=1)
    author: str
    audio_url: str
    duration_sec: float | None = Field(default=None, ge=0)
    transcript: str | None = None
