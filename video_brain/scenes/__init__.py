"""Per-scene passes: beat timing, quality judging, hierarchy and breathing."""

from .beats import enhance_beats, fix_slidelike_scene, is_slidelike
from .breathing import analyze_video_breathing, auto_inject_breathing, validate_video_breathing
from .hierarchy import analyze_hierarchy, enforce_hierarchy
from .quality import assess_scene, assess_video, auto_fix_scene

__all__ = [
    "enhance_beats",
    "fix_slidelike_scene",
    "is_slidelike",
    "auto_inject_breathing",
    "analyze_video_breathing",
    "validate_video_breathing",
    "analyze_hierarchy",
    "enforce_hierarchy",
    "assess_scene",
    "assess_video",
    "auto_fix_scene",
]
