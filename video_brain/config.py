"""Configuration loading and management."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class VideoConfig(BaseModel):
    """Frame timing shared with the renderer."""

    fps: int = 30


class LLMConfig(BaseModel):
    """Text-generation provider configuration."""

    provider: str = "anthropic"
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 8000
    temperature: float = 0.7
    timeout: float = 120.0
    api_key: Optional[str] = None


class BrainConfig(BaseModel):
    """Decision-and-repair pipeline configuration."""

    auto_fix: bool = True
    inject_breathing: bool = True
    brand_color: Optional[str] = None
    industry: Optional[str] = None
    mood: Optional[str] = None


class Config(BaseModel):
    """Main application configuration."""

    video: VideoConfig = Field(default_factory=VideoConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    brain: BrainConfig = Field(default_factory=BrainConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()

        return cls(**data)

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(exclude={"llm": {"api_key"}})
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)


def load_config(config_path: Path | str | None = None) -> Config:
    """Load configuration from file or use defaults."""
    if config_path is None:
        # Look for config.yaml in current directory or project root
        candidates = [Path("config.yaml"), Path(__file__).parent.parent / "config.yaml"]
        for candidate in candidates:
            if candidate.exists():
                config_path = candidate
                break

    if config_path is not None:
        return Config.from_yaml(config_path)

    return Config()
