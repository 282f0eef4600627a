"""Shared test fixtures."""

import pytest

from video_brain.config import Config
from video_brain.models import (
    Background,
    BackgroundAnimation,
    Beat,
    BeatAnimation,
    BeatContent,
    BeatType,
    EntryAnimation,
    HoldAnimation,
    RhythmDecision,
    Scene,
    SceneIntention,
    SceneType,
    TextStyle,
    Texture,
)
from video_brain.understanding.llm_provider import MockLLMProvider


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config()


@pytest.fixture
def mock_config() -> Config:
    """Provide a test configuration with mock LLM provider."""
    config = Config()
    config.llm.provider = "mock"
    return config


@pytest.fixture
def mock_llm(mock_config) -> MockLLMProvider:
    """Provide a mock LLM returning the canned video."""
    return MockLLMProvider(mock_config.llm)


@pytest.fixture
def make_beat():
    """Factory for beats with sensible defaults."""

    def _make(
        beat_id="beat_1",
        beat_type=BeatType.TEXT_APPEAR,
        start_frame=0,
        duration_frames=30,
        text="Ship faster",
        text_style=TextStyle.PRIMARY,
        entry=EntryAnimation.FADE_IN,
        entry_duration=15,
        hold=HoldAnimation.SUBTLE_FLOAT,
        image_id=None,
        position=None,
    ):
        content = None
        if text is not None or image_id is not None:
            content = BeatContent(text=text, text_style=text_style, image_id=image_id)
        return Beat(
            beat_id=beat_id,
            beat_type=beat_type,
            start_frame=start_frame,
            duration_frames=duration_frames,
            content=content,
            animation=BeatAnimation(entry=entry, entry_duration=entry_duration, hold=hold),
            position=position,
        )

    return _make


@pytest.fixture
def make_scene(make_beat):
    """Factory for scenes; beats default to two staggered text beats."""

    def _make(
        scene_id="scene_1",
        scene_type=SceneType.SOLUTION,
        intention=SceneIntention.REVEAL_SOLUTION,
        beats=None,
        duration_frames=90,
        texture=Texture.GRAIN,
        animation=BackgroundAnimation.SUBTLE_DRIFT,
        colors=None,
        images=None,
        rhythm=None,
    ):
        if beats is None:
            beats = [
                make_beat("beat_1", start_frame=0, duration_frames=45, entry=EntryAnimation.SCALE_IN),
                make_beat(
                    "beat_2",
                    start_frame=40,
                    duration_frames=40,
                    text="Without the chaos",
                    text_style=TextStyle.SECONDARY,
                ),
            ]
        return Scene(
            scene_id=scene_id,
            scene_type=scene_type,
            intention=intention,
            rhythm=rhythm or RhythmDecision(needs_multiple_beats=len(beats) > 1, suggested_beat_count=len(beats)),
            beats=beats,
            duration_frames=duration_frames,
            background=Background(
                colors=colors or ["#0f0f14", "#1a1a2e"],
                texture=texture,
                texture_opacity=0.04 if texture != Texture.NONE else 0.0,
                animation=animation,
            ),
            images=images or [],
        )

    return _make
