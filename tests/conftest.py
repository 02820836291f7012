"""Shared test fixtures for tribute tests."""

import json

import pytest

from tribute.fixtures import FixtureRepository
from tribute.tracker import InMemoryScrollSource


class ManualTimer:
    def __init__(self, due: float, callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler on a virtual clock, advanced explicitly by tests."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def call_later(self, delay, callback) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = [t for t in self.timers if t.due <= self.now and not t.cancelled]
        self.timers = [t for t in self.timers if t not in due and not t.cancelled]
        for timer in sorted(due, key=lambda t: t.due):
            timer.callback()

    @property
    def pending(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]


CHAPTERS = [
    {
        "id": "c1", "title": "First meeting", "date": "1999-06-12",
        "text": "Rainy afternoon.", "photos": ["/p/1.jpg"],
        "interactionType": "quiz",
        "quiz": {"question": "Q", "options": ["A", "B"], "answerIndex": 1},
        "layoutHint": "full-bleed",
    },
    {
        "id": "c2", "title": "Wedding", "date": "2001-09-22",
        "text": "Thunderstorm.", "photos": ["/p/2.jpg", "/p/3.jpg"],
        "audioClipUrl": "/a/dance.mp3", "interactionType": "flip",
        "place": "Sintra", "layoutHint": "two-column-left",
    },
    {
        "id": "c3", "title": "Yellow house", "date": "2004-03-01",
        "text": "Leaky roof.", "interactionType": "slider",
        "layoutHint": "two-column-right",
    },
]

MESSAGES = [
    {
        "id": "m1", "author": "Ana", "relation": "Family", "text": "Hi",
        "chapterId": "c1", "date": "2020-01-01", "curated": True,
    },
    {
        "id": "m2", "author": "Joao", "relation": "Friends", "text": "Hello",
        "chapterId": "c2", "date": "2021-01-01", "curated": False,
    },
    {
        "id": "m3", "author": "Rita", "relation": "Neighbors", "text": "Hey",
        "chapterId": "c2", "date": "2020-06-01", "curated": True,
    },
    # same date as m3, listed later in the fixture
    {
        "id": "m4", "author": "Pedro", "relation": "Family", "text": "Yo",
        "chapterId": "c2", "date": "2020-06-01", "curated": False,
    },
    {
        "id": "m5", "author": "Clara", "relation": "Family", "text": "Cheers",
        "date": "2019-12-31T23:00:00Z", "curated": True,
    },
]

VIDEOS = [
    {
        "id": "v1", "author": "Kids", "thumbnail": "/t/1.jpg", "videoUrl": "/v/1.mp4",
        "durationSec": 90, "date": "2024-09-05", "transcript": "Happy anniversary!",
    },
    {
        "id": "v2", "author": "Friends", "thumbnail": "/t/2.jpg", "videoUrl": "/v/2.mp4",
        "durationSec": 30, "date": "2024-09-01",
    },
]

AUDIO = [
    {"id": "a1", "author": "Aunt", "audioUrl": "/a/1.mp3", "date": "2024-09-03"},
]


@pytest.fixture()
def records():
    """Fresh copies of the raw fixture records."""
    return {
        "chapters": json.loads(json.dumps(CHAPTERS)),
        "messages": json.loads(json.dumps(MESSAGES)),
        "videos": json.loads(json.dumps(VIDEOS)),
        "audio": json.loads(json.dumps(AUDIO)),
    }


@pytest.fixture()
def repo(records):
    return FixtureRepository.from_records(**records)


@pytest.fixture()
def fixtures_dir(tmp_path, records):
    """Directory with the four fixture documents written as JSON."""
    for name in ("chapters", "messages", "videos", "audio"):
        (tmp_path / f"{name}.json").write_text(json.dumps(records[name]))
    return tmp_path


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def source():
    return InMemoryScrollSource(section_size=800.0)
