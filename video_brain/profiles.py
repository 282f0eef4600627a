"""Immutable profile tables: styles, tempo, palettes, breathing, patterns, transitions.

Tables are exposed read-only and bundled into a ``ProfileTables`` value so
every component can take them as an explicit argument and tests can swap in
substitutes.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .models import (
    BackgroundAnimation,
    BeatType,
    BreathingPlacement,
    BreathingPreset,
    BreathingType,
    ColorSet,
    CurveRange,
    Density,
    DepthLayer,
    EntryAnimation,
    GenerationPhase,
    GradientSpec,
    HoldAnimation,
    ImagePattern,
    ImagePatternId,
    ImageRole,
    IntRange,
    LayoutPosition,
    MotionDirection,
    MotionIntensity,
    NeutralColors,
    Offset,
    Pacing,
    PatternBorder,
    PatternEntry,
    PatternExit,
    PatternHold,
    PatternLayout,
    PatternMotion,
    PatternPosition,
    PatternShadow,
    PatternSize,
    PatternSpacing,
    PatternTreatment,
    ShadowSpec,
    StyleProfile,
    TempoMotion,
    TempoProfile,
    TextColors,
    TextRelation,
    Texture,
    TextureSpec,
    TransitionCurves,
    TransitionId,
    TransitionSpec,
    VideoPalette,
    VideoPhase,
    VideoStyle,
)

PREMIUM = VideoStyle.PREMIUM_SAAS
SOCIAL = VideoStyle.SOCIAL_SHORT


# ============================================================================
# STYLE PROFILES
# ============================================================================

STYLE_PROFILES: Mapping[VideoStyle, StyleProfile] = MappingProxyType({
    PREMIUM: StyleProfile(
        style=PREMIUM,
        base_rhythm=30,  # 1 second per beat
        beats_per_scene=IntRange(min=1, max=3),
        motion_intensity=MotionIntensity.RESTRAINED,
        pacing=Pacing.CALM,
        density=Density.MINIMAL,
        scene_duration=IntRange(min=75, max=120),
    ),
    SOCIAL: StyleProfile(
        style=SOCIAL,
        base_rhythm=20,
        beats_per_scene=IntRange(min=2, max=5),
        motion_intensity=MotionIntensity.DYNAMIC,
        pacing=Pacing.FAST,
        density=Density.BALANCED,
        scene_duration=IntRange(min=45, max=75),
    ),
})


# ============================================================================
# TEMPO PROFILES (phase x style)
# ============================================================================


def _tempo(phase, beats, duration, pacing, motion, allow_breathing) -> TempoProfile:
    return TempoProfile(
        phase=phase,
        target_beats=IntRange(min=beats[0], max=beats[1]),
        scene_duration=IntRange(min=duration[0], max=duration[1]),
        pacing=pacing,
        motion_intensity=motion,
        allow_breathing=allow_breathing,
    )


TEMPO_PROFILES: Mapping[VideoPhase, Mapping[VideoStyle, TempoProfile]] = MappingProxyType({
    VideoPhase.OPENING: MappingProxyType({
        PREMIUM: _tempo(VideoPhase.OPENING, (2, 3), (60, 90), Pacing.FAST, TempoMotion.HIGH, False),
        SOCIAL: _tempo(VideoPhase.OPENING, (3, 5), (40, 60), Pacing.FAST, TempoMotion.HIGH, False),
    }),
    VideoPhase.DEVELOPMENT: MappingProxyType({
        PREMIUM: _tempo(VideoPhase.DEVELOPMENT, (1, 2), (75, 120), Pacing.CALM, TempoMotion.LOW, True),
        SOCIAL: _tempo(VideoPhase.DEVELOPMENT, (2, 3), (50, 75), Pacing.MODERATE, TempoMotion.MEDIUM, True),
    }),
    VideoPhase.CLIMAX: MappingProxyType({
        PREMIUM: _tempo(VideoPhase.CLIMAX, (2, 3), (75, 105), Pacing.MODERATE, TempoMotion.MEDIUM, False),
        SOCIAL: _tempo(VideoPhase.CLIMAX, (2, 4), (45, 65), Pacing.MODERATE, TempoMotion.MEDIUM, False),
    }),
    VideoPhase.RESOLUTION: MappingProxyType({
        PREMIUM: _tempo(VideoPhase.RESOLUTION, (1, 2), (60, 90), Pacing.CONFIDENT, TempoMotion.LOW, True),
        SOCIAL: _tempo(VideoPhase.RESOLUTION, (1, 2), (45, 60), Pacing.CONFIDENT, TempoMotion.LOW, False),
    }),
})

PHASE_DESCRIPTIONS: Mapping[VideoPhase, str] = MappingProxyType({
    VideoPhase.OPENING: "Fast, hook-driven - capture attention immediately",
    VideoPhase.DEVELOPMENT: "Calm, explanatory - build understanding",
    VideoPhase.CLIMAX: "Moderate, proof-driven - demonstrate value",
    VideoPhase.RESOLUTION: "Confident, clear - drive action",
})


# ============================================================================
# PRESET PALETTES
# ============================================================================


def _palette(name, primary, neutral, accent, text, gradient, texture, shadow, style) -> VideoPalette:
    gradient_type, colors, angle = gradient
    return VideoPalette(
        name=name,
        colors=ColorSet(
            primary=primary,
            neutral=NeutralColors(dark=neutral[0], light=neutral[1], mid=neutral[2]),
            accent=accent,
            text=TextColors(primary=text[0], secondary=text[1], muted=text[2]),
        ),
        depth=DepthLayer(
            gradient=GradientSpec(gradient_type=gradient_type, colors=list(colors), angle=angle),
            texture=TextureSpec(texture_type=texture[0], opacity=texture[1]),
            shadow=ShadowSpec(color=shadow[0], blur=shadow[1], opacity=shadow[2]),
        ),
        style=style,
    )


PRESET_PALETTES: Mapping[str, VideoPalette] = MappingProxyType({
    # Premium dark, the B2B SaaS default
    "premium_dark": _palette(
        "premium_dark",
        "#6366f1",
        ("#0f0f14", "#fafafa", "#27272a"),
        "#22d3ee",
        ("#ffffff", "rgba(255, 255, 255, 0.7)", "rgba(255, 255, 255, 0.4)"),
        ("linear", ("#0f0f14", "#1a1a2e"), 135),
        (Texture.GRAIN, 0.04),
        ("#000000", 40, 0.3),
        PREMIUM,
    ),
    "premium_light": _palette(
        "premium_light",
        "#2563eb",
        ("#18181b", "#fafafa", "#e4e4e7"),
        "#f59e0b",
        ("#18181b", "rgba(24, 24, 27, 0.7)", "rgba(24, 24, 27, 0.4)"),
        ("linear", ("#fafafa", "#f4f4f5"), 180),
        (Texture.NOISE, 0.02),
        ("#18181b", 30, 0.08),
        PREMIUM,
    ),
    "social_vibrant": _palette(
        "social_vibrant",
        "#ec4899",
        ("#0c0a09", "#fafaf9", "#292524"),
        "#facc15",
        ("#ffffff", "rgba(255, 255, 255, 0.8)", "rgba(255, 255, 255, 0.5)"),
        ("radial", ("#1c1917", "#0c0a09"), None),
        (Texture.GRAIN, 0.06),
        ("#000000", 25, 0.4),
        SOCIAL,
    ),
    # Developer tools and infrastructure
    "tech_minimal": _palette(
        "tech_minimal",
        "#10b981",
        ("#09090b", "#f4f4f5", "#27272a"),
        None,
        ("#ffffff", "rgba(255, 255, 255, 0.65)", "rgba(255, 255, 255, 0.35)"),
        ("linear", ("#09090b", "#18181b"), 160),
        (Texture.DOTS, 0.03),
        ("#10b981", 60, 0.1),
        PREMIUM,
    ),
    # Consultancy and services
    "warm_trust": _palette(
        "warm_trust",
        "#f97316",
        ("#1c1917", "#fafaf9", "#44403c"),
        "#14b8a6",
        ("#fafaf9", "rgba(250, 250, 249, 0.7)", "rgba(250, 250, 249, 0.4)"),
        ("linear", ("#1c1917", "#292524"), 145),
        (Texture.GRAIN, 0.05),
        ("#f97316", 50, 0.08),
        PREMIUM,
    ),
})


# ============================================================================
# BREATHING PRESETS (type x style)
# ============================================================================


def _breath(kind, duration, background, elements, placement, opacity_shift=None) -> BreathingPreset:
    return BreathingPreset(
        type=kind,
        duration=duration,
        background=background,
        elements=elements,
        placement=placement,
        opacity_shift=opacity_shift,
    )


BREATHING_PRESETS: Mapping[BreathingType, Mapping[VideoStyle, BreathingPreset]] = MappingProxyType({
    BreathingType.VISUAL_PAUSE: MappingProxyType({
        PREMIUM: _breath(BreathingType.VISUAL_PAUSE, 20, BackgroundAnimation.SUBTLE_DRIFT, "hold", BreathingPlacement.AFTER_BEAT),
        SOCIAL: _breath(BreathingType.VISUAL_PAUSE, 12, BackgroundAnimation.STATIC, "hold", BreathingPlacement.AFTER_BEAT),
    }),
    BreathingType.TRANSITION_REST: MappingProxyType({
        PREMIUM: _breath(
            BreathingType.TRANSITION_REST, 15, BackgroundAnimation.BREATHING, "fade_maintain",
            BreathingPlacement.BEFORE_TRANSITION, opacity_shift=-0.1,
        ),
        SOCIAL: _breath(BreathingType.TRANSITION_REST, 8, BackgroundAnimation.STATIC, "hold", BreathingPlacement.BEFORE_TRANSITION),
    }),
    BreathingType.EMPHASIS_HOLD: MappingProxyType({
        PREMIUM: _breath(BreathingType.EMPHASIS_HOLD, 25, BackgroundAnimation.BREATHING, "subtle_float", BreathingPlacement.AFTER_BEAT),
        SOCIAL: _breath(BreathingType.EMPHASIS_HOLD, 15, BackgroundAnimation.SUBTLE_DRIFT, "hold", BreathingPlacement.AFTER_BEAT),
    }),
    BreathingType.ABSORPTION_MOMENT: MappingProxyType({
        PREMIUM: _breath(BreathingType.ABSORPTION_MOMENT, 30, BackgroundAnimation.BREATHING, "subtle_float", BreathingPlacement.SCENE_END),
        SOCIAL: _breath(BreathingType.ABSORPTION_MOMENT, 18, BackgroundAnimation.SUBTLE_DRIFT, "hold", BreathingPlacement.SCENE_END),
    }),
})


# ============================================================================
# IMAGE PATTERNS
# ============================================================================


def _shadow(color, blur, offset_y, spread) -> PatternShadow:
    return PatternShadow(enabled=True, color=color, blur=blur, offset_y=offset_y, spread=spread)


NO_SHADOW = PatternShadow(enabled=False, color="transparent", blur=0)

IMAGE_PATTERNS: Mapping[ImagePatternId, ImagePattern] = MappingProxyType({
    # App screenshots and product UI, never fullscreen
    ImagePatternId.PRODUCT_FOCUS: ImagePattern(
        id=ImagePatternId.PRODUCT_FOCUS,
        name="Product Focus",
        description="Clean product presentation with breathing space and subtle depth",
        suited_for=[ImageRole.HERO, ImageRole.ILLUSTRATION],
        layout=PatternLayout(
            position=PatternPosition(horizontal=LayoutPosition.CENTER, vertical="center"),
            size=PatternSize(mode="contain", max_width="75%", max_height="70%", scale=0.92),
            spacing=PatternSpacing(margin=48),
        ),
        treatment=PatternTreatment(
            corner_radius=12,
            shadow=_shadow("rgba(0, 0, 0, 0.15)", 40, 20, -10),
            frame="rounded",
        ),
        motion=PatternMotion(
            entry=PatternEntry(entry_type="scale_in", duration=20, easing="cubic-bezier(0.16, 1, 0.3, 1)", delay=5),
            hold=PatternHold(hold_type="subtle_zoom", intensity=0.02, duration=60),
            exit=PatternExit(exit_type="fade", duration=10),
        ),
        text_relation=TextRelation(position="above", alignment="center", gap=32),
    ),
    ImagePatternId.FLOATING_MOCKUP: ImagePattern(
        id=ImagePatternId.FLOATING_MOCKUP,
        name="Floating Mockup",
        description="Modern floating presentation with subtle motion",
        suited_for=[ImageRole.HERO, ImageRole.ILLUSTRATION, ImageRole.PROOF],
        layout=PatternLayout(
            position=PatternPosition(horizontal=LayoutPosition.CENTER, vertical="center", offset_y=-10),
            size=PatternSize(mode="contain", max_width="70%", max_height="65%", scale=0.95),
            spacing=PatternSpacing(margin=56),
        ),
        treatment=PatternTreatment(
            corner_radius=16,
            shadow=_shadow("rgba(0, 0, 0, 0.2)", 60, 30, -15),
            frame="none",
        ),
        motion=PatternMotion(
            entry=PatternEntry(entry_type="slide_up", duration=25, easing="cubic-bezier(0.16, 1, 0.3, 1)", delay=8),
            hold=PatternHold(hold_type="subtle_float", intensity=0.015, duration=90),
            exit=PatternExit(exit_type="fade", duration=12),
        ),
        text_relation=TextRelation(position="below", alignment="center", gap=40),
    ),
    # Text on one side, image on the other
    ImagePatternId.SPLIT_LAYOUT: ImagePattern(
        id=ImagePatternId.SPLIT_LAYOUT,
        name="Split Layout",
        description="Balanced text-image composition with strong alignment",
        suited_for=[ImageRole.HERO, ImageRole.ILLUSTRATION, ImageRole.PROOF],
        layout=PatternLayout(
            position=PatternPosition(horizontal=LayoutPosition.RIGHT, vertical="center", offset_x=-40),
            size=PatternSize(mode="contain", max_width="45%", max_height="75%", scale=1),
            spacing=PatternSpacing(margin=32),
        ),
        treatment=PatternTreatment(
            corner_radius=10,
            shadow=_shadow("rgba(0, 0, 0, 0.12)", 30, 15, -8),
            frame="rounded",
        ),
        motion=PatternMotion(
            entry=PatternEntry(entry_type="slide_left", duration=22, easing="cubic-bezier(0.16, 1, 0.3, 1)", delay=10),
            hold=PatternHold(hold_type="static", intensity=0, duration=0),
            exit=PatternExit(exit_type="fade", duration=10),
        ),
        text_relation=TextRelation(position="beside", alignment="center", gap=48),
    ),
    ImagePatternId.STACKED_PROOF: ImagePattern(
        id=ImagePatternId.STACKED_PROOF,
        name="Stacked Proof",
        description="Structured vertical arrangement for credibility",
        suited_for=[ImageRole.PROOF, ImageRole.ILLUSTRATION, ImageRole.ACCENT],
        layout=PatternLayout(
            position=PatternPosition(horizontal=LayoutPosition.CENTER, vertical="bottom", offset_y=-60),
            size=PatternSize(mode="contain", max_width="60%", max_height="50%", scale=0.9),
            spacing=PatternSpacing(margin=40),
        ),
        treatment=PatternTreatment(
            corner_radius=8,
            shadow=_shadow("rgba(0, 0, 0, 0.1)", 25, 12, -6),
            border=PatternBorder(enabled=True, width=1, color="rgba(255, 255, 255, 0.1)"),
            frame="none",
        ),
        motion=PatternMotion(
            entry=PatternEntry(entry_type="fade", duration=18, easing="cubic-bezier(0.4, 0, 0.2, 1)", delay=12),
            hold=PatternHold(hold_type="breathing", intensity=0.01, duration=60),
            exit=PatternExit(exit_type="fade", duration=10),
        ),
        text_relation=TextRelation(position="above", alignment="center", gap=28),
    ),
    # Brand presence only, never dominant
    ImagePatternId.LOGO_SIGNATURE: ImagePattern(
        id=ImagePatternId.LOGO_SIGNATURE,
        name="Logo Signature",
        description="Minimal brand presence, never dominant",
        suited_for=[ImageRole.LOGO, ImageRole.ACCENT],
        layout=PatternLayout(
            position=PatternPosition(horizontal=LayoutPosition.CENTER, vertical="center"),
            size=PatternSize(mode="fixed", max_width=180, max_height=80, scale=1),
            spacing=PatternSpacing(margin=80),
        ),
        treatment=PatternTreatment(corner_radius=0, shadow=NO_SHADOW, frame="none"),
        motion=PatternMotion(
            entry=PatternEntry(entry_type="fade", duration=20, easing="cubic-bezier(0.4, 0, 0.2, 1)", delay=0),
            hold=PatternHold(hold_type="static", intensity=0, duration=0),
            exit=PatternExit(exit_type="fade", duration=15),
        ),
        text_relation=TextRelation(position="below", alignment="center", gap=24),
    ),
})


# ============================================================================
# TRANSITIONS
# ============================================================================


def _curves(opacity, scale, blur, x=0, y=0) -> TransitionCurves:
    return TransitionCurves(
        opacity=CurveRange(start=opacity[0], end=opacity[1]),
        scale=CurveRange(start=scale[0], end=scale[1]),
        position=Offset(x=x, y=y),
        blur=CurveRange(start=blur[0], end=blur[1]),
    )


TRANSITIONS: Mapping[TransitionId, TransitionSpec] = MappingProxyType({
    TransitionId.CROSSFADE: TransitionSpec(
        id=TransitionId.CROSSFADE,
        name="Crossfade",
        description="Soft opacity blend with minimal motion",
        duration=15,
        easing="cubic-bezier(0.4, 0, 0.2, 1)",
        outgoing=_curves((1, 0), (1, 1.01), (0, 2)),
        incoming=_curves((0, 1), (0.99, 1), (2, 0)),
    ),
    TransitionId.SLIDE_CONTINUE: TransitionSpec(
        id=TransitionId.SLIDE_CONTINUE,
        name="Slide Continue",
        description="Continues motion direction between scenes",
        duration=20,
        easing="cubic-bezier(0.16, 1, 0.3, 1)",
        outgoing=_curves((1, 0.8), (1, 0.98), (0, 1), y=-30),
        incoming=_curves((0.8, 1), (0.98, 1), (1, 0), y=30),
        motion_direction=MotionDirection.UP,
    ),
    TransitionId.SCALE_MORPH: TransitionSpec(
        id=TransitionId.SCALE_MORPH,
        name="Scale Morph",
        description="Subtle scale transition for depth continuity",
        duration=18,
        easing="cubic-bezier(0.33, 1, 0.68, 1)",
        outgoing=_curves((1, 0), (1, 1.05), (0, 3)),
        incoming=_curves((0, 1), (0.95, 1), (3, 0)),
    ),
    TransitionId.POSITION_FLOW: TransitionSpec(
        id=TransitionId.POSITION_FLOW,
        name="Position Flow",
        description="Smooth position interpolation",
        duration=22,
        easing="cubic-bezier(0.22, 1, 0.36, 1)",
        outgoing=_curves((1, 0.6), (1, 1), (0, 1), x=-20),
        incoming=_curves((0.6, 1), (1, 1), (1, 0), x=20),
        motion_direction=MotionDirection.LEFT,
    ),
    TransitionId.SEAMLESS_BLEND: TransitionSpec(
        id=TransitionId.SEAMLESS_BLEND,
        name="Seamless Blend",
        description="Nearly invisible blend for high visual continuity",
        duration=12,
        easing="cubic-bezier(0.4, 0, 0.2, 1)",
        outgoing=_curves((1, 0), (1, 1), (0, 0)),
        incoming=_curves((0, 1), (1, 1), (0, 0)),
    ),
})


# ============================================================================
# PIPELINE AND BEAT TABLES
# ============================================================================

PHASE_WEIGHTS: Mapping[GenerationPhase, tuple[int, int]] = MappingProxyType({
    GenerationPhase.ANALYZING_INTENT: (0, 10),
    GenerationPhase.DETECTING_STYLE: (10, 15),
    GenerationPhase.PLANNING_NARRATIVE: (15, 30),
    GenerationPhase.STRUCTURING_SCENES: (30, 50),
    GenerationPhase.CREATING_BEATS: (50, 75),
    GenerationPhase.VALIDATING_QUALITY: (75, 90),
    GenerationPhase.FINALIZING: (90, 100),
    GenerationPhase.COMPLETE: (100, 100),
})

# Default (entry, hold) per beat type
BEAT_ANIMATIONS: Mapping[BeatType, tuple[EntryAnimation, HoldAnimation]] = MappingProxyType({
    BeatType.TEXT_APPEAR: (EntryAnimation.SLIDE_UP, HoldAnimation.SUBTLE_FLOAT),
    BeatType.TEXT_REPLACE: (EntryAnimation.FADE_IN, HoldAnimation.NONE),
    BeatType.TEXT_EMPHASIZE: (EntryAnimation.SCALE_UP, HoldAnimation.PULSE),
    BeatType.IMAGE_ENTER: (EntryAnimation.SLIDE_UP, HoldAnimation.SUBTLE_ZOOM),
    BeatType.IMAGE_REVEAL: (EntryAnimation.MASK_REVEAL, HoldAnimation.NONE),
    BeatType.IMAGE_REFRAME: (EntryAnimation.SCALE_UP, HoldAnimation.SUBTLE_ZOOM),
    BeatType.VISUAL_PAUSE: (EntryAnimation.FADE_IN, HoldAnimation.BREATHING),
    BeatType.BREATHING_MOMENT: (EntryAnimation.FADE_IN, HoldAnimation.BREATHING),
})


@dataclass(frozen=True)
class ProfileTables:
    """Bundle of every configuration table the pipeline reads."""

    style_profiles: Mapping[VideoStyle, StyleProfile] = field(default_factory=lambda: STYLE_PROFILES)
    tempo_profiles: Mapping[VideoPhase, Mapping[VideoStyle, TempoProfile]] = field(default_factory=lambda: TEMPO_PROFILES)
    phase_descriptions: Mapping[VideoPhase, str] = field(default_factory=lambda: PHASE_DESCRIPTIONS)
    palettes: Mapping[str, VideoPalette] = field(default_factory=lambda: PRESET_PALETTES)
    breathing_presets: Mapping[BreathingType, Mapping[VideoStyle, BreathingPreset]] = field(
        default_factory=lambda: BREATHING_PRESETS
    )
    image_patterns: Mapping[ImagePatternId, ImagePattern] = field(default_factory=lambda: IMAGE_PATTERNS)
    transitions: Mapping[TransitionId, TransitionSpec] = field(default_factory=lambda: TRANSITIONS)
    phase_weights: Mapping[GenerationPhase, tuple[int, int]] = field(default_factory=lambda: PHASE_WEIGHTS)
    beat_animations: Mapping[BeatType, tuple[EntryAnimation, HoldAnimation]] = field(
        default_factory=lambda: BEAT_ANIMATIONS
    )

    def style_profile(self, style: VideoStyle) -> StyleProfile:
        return self.style_profiles[style]

    def tempo_profile(self, phase: VideoPhase, style: VideoStyle) -> TempoProfile:
        return self.tempo_profiles[phase][style]

    def breathing_preset(self, kind: BreathingType, style: VideoStyle) -> BreathingPreset:
        return self.breathing_presets[kind][style]


DEFAULT_TABLES = ProfileTables()
