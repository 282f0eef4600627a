"""Generation orchestrator and progress reporting."""

from .brain import VideoBrain, detect_style, generate_video
from .progress import ProgressTracker, stream_generation

__all__ = ["VideoBrain", "detect_style", "generate_video", "ProgressTracker", "stream_generation"]
