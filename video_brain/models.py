"""
Core data models used across the video brain.

Includes models for:
- Generation requests and results
- Scenes, beats and their visual specs
- Style, tempo, palette, breathing, image pattern and transition profiles
- Progress events

All models are frozen: every pass produces a new value with
``model_copy(update=...)`` instead of mutating the one it received.
Field names are snake_case in Python and camelCase on the wire.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BrainModel(BaseModel):
    """Frozen base model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# ENUMERATIONS
# ============================================================================


class VideoStyle(str, Enum):
    """Pacing and visual-density archetype for a whole video."""

    PREMIUM_SAAS = "premium_saas"
    SOCIAL_SHORT = "social_short"


class SceneType(str, Enum):
    """Narrative type of a scene."""

    HOOK = "HOOK"
    PROBLEM = "PROBLEM"
    SOLUTION = "SOLUTION"
    PROOF = "PROOF"
    CTA = "CTA"
    TRANSITION = "TRANSITION"


class SceneIntention(str, Enum):
    """Marketing intention driving a scene."""

    CAPTURE_ATTENTION = "capture_attention"
    CREATE_TENSION = "create_tension"
    AMPLIFY_PAIN = "amplify_pain"
    REVEAL_SOLUTION = "reveal_solution"
    DEMONSTRATE_VALUE = "demonstrate_value"
    BUILD_CREDIBILITY = "build_credibility"
    DRIVE_ACTION = "drive_action"
    CREATE_TRANSITION = "create_transition"
    BREATHING_MOMENT = "breathing_moment"


class BeatStrategy(str, Enum):
    """How a scene's beats unfold."""

    PROGRESSIVE_REVEAL = "progressive_reveal"
    EMPHASIS_SHIFT = "emphasis_shift"
    VISUAL_LAYERING = "visual_layering"
    SINGLE_MOMENT = "single_moment"
    BREATHING_PAUSE = "breathing_pause"


# Strategies where simultaneous or lone beats are intentional
INTENTIONAL_STATIC_STRATEGIES = frozenset(
    {BeatStrategy.SINGLE_MOMENT, BeatStrategy.BREATHING_PAUSE}
)


class BeatType(str, Enum):
    """Kind of visual action a beat performs."""

    TEXT_APPEAR = "text_appear"
    TEXT_REPLACE = "text_replace"
    TEXT_EMPHASIZE = "text_emphasize"
    IMAGE_ENTER = "image_enter"
    IMAGE_REVEAL = "image_reveal"
    IMAGE_REFRAME = "image_reframe"
    VISUAL_PAUSE = "visual_pause"
    BREATHING_MOMENT = "breathing_moment"


class EntryAnimation(str, Enum):
    """How a beat's content enters."""

    FADE_IN = "fade_in"
    SLIDE_UP = "slide_up"
    SLIDE_DOWN = "slide_down"
    SLIDE_LEFT = "slide_left"
    SLIDE_RIGHT = "slide_right"
    SCALE_IN = "scale_in"
    SCALE_UP = "scale_up"
    REVEAL = "reveal"
    MASK_REVEAL = "mask_reveal"
    POP = "pop"


class HoldAnimation(str, Enum):
    """What a beat's content does once it has entered."""

    STATIC = "static"
    NONE = "none"
    SUBTLE_FLOAT = "subtle_float"
    SUBTLE_ZOOM = "subtle_zoom"
    BREATHING = "breathing"
    PULSE = "pulse"


class TextStyle(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ACCENT = "accent"
    EMPHASIS = "emphasis"


class ImageAction(str, Enum):
    ENTER = "enter"
    EXIT = "exit"
    ZOOM = "zoom"
    PAN = "pan"
    REVEAL = "reveal"


class ImageKind(str, Enum):
    """Kind of image supplied with a request."""

    SCREENSHOT = "screenshot"
    LOGO = "logo"
    PHOTO = "photo"
    GRAPHIC = "graphic"
    ICON = "icon"


class ImageRole(str, Enum):
    """Narrative role an image plays inside a scene."""

    HERO = "hero"
    PROOF = "proof"
    ILLUSTRATION = "illustration"
    BACKGROUND = "background"
    ACCENT = "accent"
    LOGO = "logo"


class ImageFrame(str, Enum):
    NONE = "none"
    DEVICE = "device"
    BROWSER = "browser"
    ROUNDED = "rounded"
    SHADOW = "shadow"


class ShadowLevel(str, Enum):
    NONE = "none"
    SUBTLE = "subtle"
    MEDIUM = "medium"
    STRONG = "strong"


class ImageLayering(str, Enum):
    BELOW_TEXT = "below_text"
    ABOVE_TEXT = "above_text"
    INTEGRATED = "integrated"


class ImagePatternId(str, Enum):
    """Fixed library of image presentation patterns."""

    PRODUCT_FOCUS = "product_focus"
    FLOATING_MOCKUP = "floating_mockup"
    SPLIT_LAYOUT = "split_layout"
    STACKED_PROOF = "stacked_proof"
    LOGO_SIGNATURE = "logo_signature"


class TransitionId(str, Enum):
    """Transition behaviors between two scenes."""

    CROSSFADE = "crossfade"
    SLIDE_CONTINUE = "slide_continue"
    SCALE_MORPH = "scale_morph"
    POSITION_FLOW = "position_flow"
    SEAMLESS_BLEND = "seamless_blend"


class BackgroundType(str, Enum):
    GRADIENT = "gradient"
    SOLID = "solid"
    RADIAL = "radial"
    MESH = "mesh"


class Texture(str, Enum):
    GRAIN = "grain"
    NOISE = "noise"
    DOTS = "dots"
    NONE = "none"


class BackgroundAnimation(str, Enum):
    STATIC = "static"
    SUBTLE_DRIFT = "subtle_drift"
    BREATHING = "breathing"
    PULSE = "pulse"


class FocusRole(str, Enum):
    """Role of an element in a scene's visual hierarchy."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    AMBIENT = "ambient"


class VideoPhase(str, Enum):
    """Coarse position in the narrative arc."""

    OPENING = "opening"
    DEVELOPMENT = "development"
    CLIMAX = "climax"
    RESOLUTION = "resolution"


class GenerationPhase(str, Enum):
    """States of the generation pipeline, in emission order."""

    ANALYZING_INTENT = "analyzing_intent"
    DETECTING_STYLE = "detecting_style"
    PLANNING_NARRATIVE = "planning_narrative"
    STRUCTURING_SCENES = "structuring_scenes"
    CREATING_BEATS = "creating_beats"
    VALIDATING_QUALITY = "validating_quality"
    FINALIZING = "finalizing"
    COMPLETE = "complete"


class MotionDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


class LayoutPosition(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Pacing(str, Enum):
    """Pacing descriptor shared by style and tempo profiles."""

    FAST = "fast"
    CALM = "calm"
    MEASURED = "measured"
    MODERATE = "moderate"
    CONFIDENT = "confident"


class MotionIntensity(str, Enum):
    """Motion intensity of a style profile."""

    RESTRAINED = "restrained"
    MODERATE = "moderate"
    DYNAMIC = "dynamic"


class TempoMotion(str, Enum):
    """Motion intensity allowed by a tempo profile."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Density(str, Enum):
    MINIMAL = "minimal"
    BALANCED = "balanced"
    RICH = "rich"


class ArcStrategy(str, Enum):
    """Informational tag describing the overall narrative shape."""

    HOOK_HEAVY = "hook_heavy"
    BALANCED = "balanced"
    BUILD_UP = "build_up"


class BreathingType(str, Enum):
    VISUAL_PAUSE = "visual_pause"
    TRANSITION_REST = "transition_rest"
    EMPHASIS_HOLD = "emphasis_hold"
    ABSORPTION_MOMENT = "absorption_moment"


class BreathingPlacement(str, Enum):
    AFTER_BEAT = "after_beat"
    BEFORE_TRANSITION = "before_transition"
    SCENE_END = "scene_end"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


# ============================================================================
# REQUEST MODELS
# ============================================================================


class ImageInput(BrainModel):
    """An image supplied by the user."""

    id: str
    kind: ImageKind = Field(default=ImageKind.SCREENSHOT, alias="type")
    description: Optional[str] = None


class GenerationRequest(BrainModel):
    """One user ask. Immutable once submitted."""

    prompt: str
    product_description: Optional[str] = None
    target_audience: Optional[str] = None
    images: list[ImageInput] = Field(default_factory=list)
    language: Optional[str] = None
    force_style: Optional[VideoStyle] = None


# ============================================================================
# PROFILE MODELS
# ============================================================================


class IntRange(BrainModel):
    """Inclusive integer range."""

    min: int
    max: int

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def clamp(self, value: int) -> int:
        return max(self.min, min(self.max, value))

    @property
    def mean(self) -> float:
        return (self.min + self.max) / 2


class StyleProfile(BrainModel):
    """Pacing and density archetype for a video style."""

    style: VideoStyle
    base_rhythm: int = Field(description="Frames per beat")
    beats_per_scene: IntRange
    motion_intensity: MotionIntensity
    pacing: Pacing
    density: Density
    scene_duration: IntRange


class TempoProfile(BrainModel):
    """Pacing target for one (phase, style) pair."""

    phase: VideoPhase
    target_beats: IntRange
    scene_duration: IntRange
    pacing: Pacing
    motion_intensity: TempoMotion
    allow_breathing: bool


class PhaseAssignment(BrainModel):
    scene_index: int
    phase: VideoPhase


class NarrativeArc(BrainModel):
    """Phase assignment for a scene sequence."""

    total_scenes: int
    phases: list[PhaseAssignment]
    strategy: ArcStrategy


class BreathingPreset(BrainModel):
    """Idle-beat recipe for one breathing type and style."""

    type: BreathingType
    duration: int
    background: BackgroundAnimation
    elements: str = Field(description="hold, subtle_float or fade_maintain")
    placement: BreathingPlacement
    opacity_shift: Optional[float] = None


# ============================================================================
# SCENE MODELS
# ============================================================================


class RhythmDecision(BrainModel):
    """Whether a scene needs internal rhythm, and how its beats unfold."""

    needs_multiple_beats: bool = False
    reason: str = ""
    suggested_beat_count: int = 1
    beat_strategy: BeatStrategy = BeatStrategy.PROGRESSIVE_REVEAL

    @property
    def is_intentionally_static(self) -> bool:
        return self.beat_strategy in INTENTIONAL_STATIC_STRATEGIES


class BeatContent(BrainModel):
    text: Optional[str] = None
    text_style: Optional[TextStyle] = None
    image_id: Optional[str] = None
    image_action: Optional[ImageAction] = None


class BeatAnimation(BrainModel):
    """Entry and hold descriptors for a beat. Every field may be missing."""

    entry: Optional[EntryAnimation] = None
    entry_duration: Optional[int] = None
    hold: Optional[HoldAnimation] = None


class BeatPosition(BrainModel):
    x: Union[int, float, str] = "center"
    y: Union[int, float, str] = "center"
    width: Optional[Union[int, float, str]] = None
    height: Optional[Union[int, float, str]] = None


class Beat(BrainModel):
    """One atomic, independently timed visual action inside a scene."""

    beat_id: str
    beat_type: BeatType = Field(alias="type")
    start_frame: int = Field(default=0, ge=0)
    duration_frames: int = Field(default=30, ge=0)
    content: Optional[BeatContent] = None
    animation: BeatAnimation = Field(default_factory=BeatAnimation)
    position: Optional[BeatPosition] = None

    @property
    def end_frame(self) -> int:
        return self.start_frame + self.duration_frames

    @property
    def is_text(self) -> bool:
        return self.beat_type.value.startswith("text_")

    @property
    def is_image(self) -> bool:
        return self.beat_type.value.startswith("image_")

    @property
    def is_breathing(self) -> bool:
        return self.beat_type == BeatType.BREATHING_MOMENT

    @property
    def text(self) -> str:
        if self.content is None or self.content.text is None:
            return ""
        return self.content.text


class Background(BrainModel):
    bg_type: BackgroundType = Field(default=BackgroundType.GRADIENT, alias="type")
    colors: list[str] = Field(default_factory=list)
    angle: Optional[int] = None
    texture: Texture = Texture.NONE
    texture_opacity: float = 0.0
    animation: BackgroundAnimation = BackgroundAnimation.STATIC


class Typography(BrainModel):
    primary_font: str = "Space Grotesk"
    primary_weight: int = 700
    primary_color: str = "#ffffff"
    secondary_font: str = "Inter"
    secondary_color: str = "rgba(255, 255, 255, 0.7)"


class CropBox(BrainModel):
    x: float
    y: float
    width: float
    height: float


class ImageTreatment(BrainModel):
    crop: Optional[CropBox] = None
    frame: ImageFrame = ImageFrame.ROUNDED
    corner_radius: int = 12
    shadow: ShadowLevel = ShadowLevel.SUBTLE


class SceneImage(BrainModel):
    """An image placed in a scene with a role and presentation pattern."""

    image_id: str
    role: ImageRole = ImageRole.ILLUSTRATION
    kind: Optional[ImageKind] = None
    pattern: Optional[ImagePatternId] = None
    treatment: ImageTreatment = Field(default_factory=ImageTreatment)
    layering: ImageLayering = ImageLayering.INTEGRATED


class SceneTransition(BrainModel):
    transition_type: TransitionId = Field(alias="type")
    reason: str


class Scene(BrainModel):
    """One contiguous timed segment of the video."""

    scene_id: str
    scene_type: SceneType
    intention: SceneIntention
    rhythm: RhythmDecision = Field(default_factory=RhythmDecision)
    beats: list[Beat] = Field(default_factory=list)
    duration_frames: int = 75
    background: Background = Field(default_factory=Background)
    typography: Typography = Field(default_factory=Typography)
    images: list[SceneImage] = Field(default_factory=list)
    transition: Optional[SceneTransition] = None
    quality_validated: bool = False

    @property
    def text_beats(self) -> list[Beat]:
        return [b for b in self.beats if b.is_text]

    @property
    def has_images(self) -> bool:
        return len(self.images) > 0


# ============================================================================
# PALETTE MODELS
# ============================================================================


class NeutralColors(BrainModel):
    dark: str
    light: str
    mid: str


class TextColors(BrainModel):
    primary: str
    secondary: str
    muted: str


class ColorSet(BrainModel):
    """Primary, neutral triplet, optional accent and derived text colors."""

    primary: str
    neutral: NeutralColors
    accent: Optional[str] = None
    text: TextColors


class GradientSpec(BrainModel):
    gradient_type: str = Field(default="linear", alias="type")
    colors: list[str]
    angle: Optional[int] = None


class TextureSpec(BrainModel):
    texture_type: Texture = Field(alias="type")
    opacity: float


class ShadowSpec(BrainModel):
    color: str
    blur: int
    opacity: float


class DepthLayer(BrainModel):
    gradient: GradientSpec
    texture: TextureSpec
    shadow: ShadowSpec


class VideoPalette(BrainModel):
    """Locked color system for a whole video."""

    name: str
    colors: ColorSet
    depth: DepthLayer
    style: VideoStyle


# ============================================================================
# IMAGE PATTERN MODELS
# ============================================================================


class PatternPosition(BrainModel):
    horizontal: LayoutPosition
    vertical: str
    offset_x: int = 0
    offset_y: int = 0


class PatternSize(BrainModel):
    mode: str
    max_width: Union[int, str]
    max_height: Optional[Union[int, str]] = None
    scale: float = 1.0


class PatternSpacing(BrainModel):
    margin: int
    padding: int = 0


class PatternLayout(BrainModel):
    position: PatternPosition
    size: PatternSize
    spacing: PatternSpacing


class PatternShadow(BrainModel):
    enabled: bool
    color: str
    blur: int
    offset_x: int = 0
    offset_y: int = 0
    spread: int = 0


class PatternBorder(BrainModel):
    enabled: bool = False
    width: int = 0
    color: str = "transparent"


class PatternTreatment(BrainModel):
    corner_radius: int
    shadow: PatternShadow
    border: PatternBorder = Field(default_factory=PatternBorder)
    frame: str = "none"


class PatternEntry(BrainModel):
    entry_type: str = Field(alias="type")
    duration: int
    easing: str
    delay: int


class PatternHold(BrainModel):
    hold_type: str = Field(alias="type")
    intensity: float
    duration: int


class PatternExit(BrainModel):
    exit_type: str = Field(alias="type")
    duration: int


class PatternMotion(BrainModel):
    entry: PatternEntry
    hold: PatternHold
    exit: PatternExit


class TextRelation(BrainModel):
    position: str
    alignment: str
    gap: int


class ImagePattern(BrainModel):
    """A professional image composition: layout, treatment and motion."""

    id: ImagePatternId
    name: str
    description: str
    suited_for: list[ImageRole]
    layout: PatternLayout
    treatment: PatternTreatment
    motion: PatternMotion
    text_relation: TextRelation


# ============================================================================
# TRANSITION MODELS
# ============================================================================


class CurveRange(BrainModel):
    start: float = Field(alias="from")
    end: float = Field(alias="to")


class Offset(BrainModel):
    x: float = 0
    y: float = 0


class TransitionCurves(BrainModel):
    """Opacity, scale, position and blur for one side of a transition."""

    opacity: CurveRange
    scale: CurveRange
    position: Offset = Field(default_factory=Offset)
    blur: CurveRange


class TransitionSpec(BrainModel):
    """Behavior between two scenes."""

    id: TransitionId
    name: str
    description: str
    duration: int
    easing: str
    overlap: bool = True
    outgoing: TransitionCurves
    incoming: TransitionCurves
    motion_direction: MotionDirection = MotionDirection.NONE


# ============================================================================
# RESULT MODELS
# ============================================================================


class QualityReport(BrainModel):
    all_scenes_valid: bool
    invalid_scenes: list[int] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class VisualFlow(BrainModel):
    coherence_score: int
    patterns_used: list[ImagePatternId] = Field(default_factory=list)
    transitions_used: list[TransitionId] = Field(default_factory=list)


class GenerationProgress(BrainModel):
    """One progress event emitted by the pipeline."""

    phase: GenerationPhase
    phase_progress: int
    overall_progress: int
    message: str
    current_scene: Optional[int] = None
    total_scenes: Optional[int] = None


class GenerationResult(BrainModel):
    """Finalized, validated video specification."""

    style: VideoStyle
    style_profile: StyleProfile
    concept: str = ""
    emotional_arc: list[str] = Field(default_factory=list)
    scenes: list[Scene]
    total_duration_frames: int
    quality_report: QualityReport
    visual_flow: Optional[VisualFlow] = None
    palette: Optional[VideoPalette] = None
    hierarchy_issues: list[str] = Field(default_factory=list)
    tempo_issues: list[str] = Field(default_factory=list)
    palette_issues: list[str] = Field(default_factory=list)
    breathing_issues: list[str] = Field(default_factory=list)
    parse_issues: list[str] = Field(default_factory=list)
    video_issues: list[str] = Field(default_factory=list)

    def to_render_payload(self) -> dict:
        """Dump the camelCase shape consumed by the renderer."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
