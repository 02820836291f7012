"""Tests for the tribute CLI."""

import json

from tribute.cli import main


class TestCLI:
    def test_validate(self, fixtures_dir, capsys):
        assert main(["--fixtures-dir", str(fixtures_dir), "validate"]) == 0
        out = capsys.readouterr().out
        assert "3 chapters" in out
        assert "5 messages (3 curated)" in out

    def test_messages_filtered(self, fixtures_dir, capsys):
        code = main([
            "--fixtures-dir", str(fixtures_dir), "messages", "--relation", "Family", "--uncurated",
        ])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert [m["id"] for m in data] == ["m4"]
        assert data[0]["chapterId"] == "c2"

    def test_relations(self, fixtures_dir, capsys):
        main(["--fixtures-dir", str(fixtures_dir), "relations"])
        assert capsys.readouterr().out.split() == ["Family", "Friends", "Neighbors"]

    def test_bad_fixtures_exit_nonzero(self, fixtures_dir, capsys):
        (fixtures_dir / "chapters.json").write_text('[{"id": "c2", "interactionType": "quiz"}]')
        assert main(["--fixtures-dir", str(fixtures_dir), "validate"]) == 1
        assert "Fixture error" in capsys.readouterr().err

    def test_check_password(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("TRIBUTE_SITE_PASSWORD", "umbrella")
        config = str(tmp_path / "absent.yaml")
        assert main(["-c", config, "check-password", "umbrella"]) == 0
        assert main(["-c", config, "check-password", "wrong"]) == 1
