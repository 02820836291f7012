#!/usr/bin/env python3
"""Tribute MCP Server — read-only queries over the site fixtures."""

import json
import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from tribute.config import Config, load_config
from tribute.fixtures import FixtureRepository
from tribute.gate import PasswordGate

mcp = FastMCP("tribute")
logger = logging.getLogger(__name__)

# Redirect all logging to stderr so stdout stays clean for MCP stdio transport
logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_repo: FixtureRepository | None = None
_config: Config | None = None


def _get_config() -> Config:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _get_repo() -> FixtureRepository:
    global _repo
    if _repo is None:
        _repo = FixtureRepository.from_config(_get_config())
    return _repo


def _dump(items: list) -> str:
    return json.dumps([item.to_fixture() for item in items])


@mcp.tool()
def list_chapters() -> str:
    """List the journey chapters in order."""
    try:
        return _dump(_get_repo().list_chapters())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def get_chapter(chapter_id: str) -> str:
    """Get one chapter by id."""
    try:
        chapter = _get_repo().get_chapter(chapter_id)
        if chapter is None:
            return json.dumps({"error": f"Chapter not found: {chapter_id}"})
        return json.dumps(chapter.to_fixture())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def list_messages(
    chapter_id: Optional[str] = None,
    relation: Optional[str] = None,
    curated: Optional[bool] = None,
) -> str:
    """List messages, newest first. Filters are exact matches and combine with AND."""
    try:
        return _dump(_get_repo().list_messages(
            chapter_id=chapter_id, relation=relation, curated=curated,
        ))
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def get_message(message_id: str) -> str:
    """Get one message by id."""
    try:
        message = _get_repo().get_message(message_id)
        if message is None:
            return json.dumps({"error": f"Message not found: {message_id}"})
        return json.dumps(message.to_fixture())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def list_relations() -> str:
    """List the distinct relations of message authors."""
    try:
        return json.dumps(_get_repo().list_relations())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def list_videos() -> str:
    """List the video gallery."""
    try:
        return _dump(_get_repo().list_videos())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def get_video(video_id: str) -> str:
    """Get one video by id."""
    try:
        video = _get_repo().get_video(video_id)
        if video is None:
            return json.dumps({"error": f"Video not found: {video_id}"})
        return json.dumps(video.to_fixture())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def list_audio() -> str:
    """List the audio clips."""
    try:
        return _dump(_get_repo().list_audio())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def get_audio(audio_id: str) -> str:
    """Get one audio clip by id."""
    try:
        clip = _get_repo().get_audio(audio_id)
        if clip is None:
            return json.dumps({"error": f"Audio clip not found: {audio_id}"})
        return json.dumps(clip.to_fixture())
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def check_password(attempt: str) -> str:
    """Check an attempt against the site password gate."""
    gate = PasswordGate.from_config(_get_config())
    return json.dumps({"enabled": gate.enabled, "allowed": gate.check(attempt)})


if __name__ == "__main__":
    mcp.run()
