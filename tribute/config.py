"""Configuration loading for the tribute site core."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

PASSWORD_ENV_VAR = "TRIBUTE_SITE_PASSWORD"


class FixtureConfig(BaseModel):
    fixtures_dir: str = "data"
    chapters_file: str = "chapters.json"
    messages_file: str = "messages.json"
    videos_file: str = "videos.json"
    audio_file: str = "audio.json"
    # None accepts any non-empty relation string
    allowed_relations: list[str] | None = None


class TrackerConfig(BaseModel):
    settle_delay: float = Field(default=0.5, ge=0.0)  # seconds


class GateConfig(BaseModel):
    site_password: str = ""


class Config(BaseModel):
    fixtures: FixtureConfig = Field(default_factory=FixtureConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    gate: GateConfig = Field(default_factory=GateConfig)

    @property
    def resolved_fixtures_dir(self) -> Path:
        """Resolve fixtures_dir relative to project root."""
        p = Path(self.fixtures.fixtures_dir).expanduser()
        if p.is_absolute():
            return p
        return _project_root() / p


def _project_root() -> Path:
    """Return the tribute project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing.

    The site password can be overridden with $TRIBUTE_SITE_PASSWORD.
    """
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        config = Config(**raw)
    else:
        config = Config()

    password = os.environ.get(PASSWORD_ENV_VAR)
    if password is not None:
        config.gate.site_password = password
    return config
