"""Narrative arc planning, tempo profiles and LLM prompts."""

from .prompts import VIDEO_SYSTEM_PROMPT, build_user_prompt
from .tempo import (
    adjust_video_tempo,
    get_scene_phase,
    plan_narrative_arc,
    validate_video_tempo,
)

__all__ = [
    "VIDEO_SYSTEM_PROMPT",
    "build_user_prompt",
    "adjust_video_tempo",
    "get_scene_phase",
    "plan_narrative_arc",
    "validate_video_tempo",
]
