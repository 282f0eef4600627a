"""Video brain: turns a marketing brief into a timed, validated scene graph."""

from .config import Config, load_config
from .models import GenerationRequest, GenerationResult, ImageInput, Scene, VideoStyle
from .pipeline import VideoBrain, generate_video
from .understanding import LLMProviderError, ParseError, StructuralError, VideoBrainError

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "GenerationRequest",
    "GenerationResult",
    "ImageInput",
    "Scene",
    "VideoStyle",
    "VideoBrain",
    "generate_video",
    "VideoBrainError",
    "LLMProviderError",
    "ParseError",
    "StructuralError",
]
