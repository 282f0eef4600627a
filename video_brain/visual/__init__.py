"""Palette, transition and image pattern systems."""

from .image_patterns import assign_image_patterns, select_pattern
from .palette import apply_palette_to_video, select_palette, validate_palette_consistency
from .transitions import decide_transition, plan_transition_sequence

__all__ = [
    "assign_image_patterns",
    "select_pattern",
    "apply_palette_to_video",
    "select_palette",
    "validate_palette_consistency",
    "decide_transition",
    "plan_transition_sequence",
]
