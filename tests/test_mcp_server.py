"""Tests for tribute MCP server tool registration and basic returns."""

import json

from tribute.mcp_server import mcp
import tribute.mcp_server as mcp_mod


EXPECTED_TOOLS = {
    "list_chapters",
    "get_chapter",
    "list_messages",
    "get_message",
    "list_relations",
    "list_videos",
    "get_video",
    "list_audio",
    "get_audio",
    "check_password",
}


class TestMCPToolRegistration:
    def test_all_tools_registered(self):
        """All expected tools are registered on the mcp object."""
        # FastMCP stores tools in _tool_manager._tools dict
        registered = set(mcp._tool_manager._tools.keys())
        assert EXPECTED_TOOLS.issubset(registered), (
            f"Missing tools: {EXPECTED_TOOLS - registered}"
        )


class TestMCPToolReturns:
    def test_list_messages_returns_fixture_json(self, repo, monkeypatch):
        monkeypatch.setattr(mcp_mod, "_repo", repo)
        data = json.loads(mcp_mod.list_messages(curated=True))
        assert [m["id"] for m in data] == ["m3", "m1", "m5"]
        assert "chapterId" in data[0]

    def test_list_relations(self, repo, monkeypatch):
        monkeypatch.setattr(mcp_mod, "_repo", repo)
        assert json.loads(mcp_mod.list_relations()) == ["Family", "Friends", "Neighbors"]

    def test_missing_chapter_returns_json_error(self, repo, monkeypatch):
        monkeypatch.setattr(mcp_mod, "_repo", repo)
        data = json.loads(mcp_mod.get_chapter(chapter_id="nope"))
        assert "error" in data

    def test_fixture_error_returns_json_error(self, tmp_path, monkeypatch):
        """Tools return {"error": ...} when the fixtures fail to load."""
        from tribute.config import Config, FixtureConfig

        monkeypatch.setattr(mcp_mod, "_repo", None)
        monkeypatch.setattr(
            mcp_mod, "_config", Config(fixtures=FixtureConfig(fixtures_dir=str(tmp_path))),
        )
        data = json.loads(mcp_mod.list_chapters())
        assert "not found" in data["error"]

    def test_get_message_video_audio(self, repo, monkeypatch):
        monkeypatch.setattr(mcp_mod, "_repo", repo)
        assert json.loads(mcp_mod.get_message(message_id="m3"))["author"] == "Rita"
        assert json.loads(mcp_mod.get_video(video_id="v1"))["videoUrl"] == "/v/1.mp4"
        assert json.loads(mcp_mod.get_audio(audio_id="a1"))["audioUrl"] == "/a/1.mp3"

    def test_missing_media_returns_json_error(self, repo, monkeypatch):
        monkeypatch.setattr(mcp_mod, "_repo", repo)
        assert "error" in json.loads(mcp_mod.get_message(message_id="nope"))
        assert "error" in json.loads(mcp_mod.get_video(video_id="nope"))
        assert "error" in json.loads(mcp_mod.get_audio(audio_id="nope"))
