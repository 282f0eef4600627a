"""
Narrative arc planning and per-phase tempo.

Splits a scene sequence into opening, development, climax and resolution,
resolves the tempo profile each scene should follow, and validates or
adjusts scenes against that profile.
"""

import math
from dataclasses import dataclass, field
from typing import NamedTuple

from ..models import (
    ArcStrategy,
    Beat,
    BeatAnimation,
    BeatType,
    EntryAnimation,
    HoldAnimation,
    NarrativeArc,
    Pacing,
    PhaseAssignment,
    Scene,
    SceneIntention,
    TempoMotion,
    TempoProfile,
    VideoPhase,
    VideoStyle,
)
from ..profiles import DEFAULT_TABLES, ProfileTables

# Fractions of the scene count at which each phase ends
OPENING_SHARE = 0.2
DEVELOPMENT_SHARE = 0.6
CLIMAX_SHARE = 0.85

AUTO_BEAT_DURATION = 20
MIN_LOW_MOTION_ENTRY = 15

# Scenes whose content always earns absorption time, whatever the phase
ABSORPTION_INTENTIONS = frozenset({
    SceneIntention.REVEAL_SOLUTION,
    SceneIntention.DEMONSTRATE_VALUE,
    SceneIntention.BUILD_CREDIBILITY,
    SceneIntention.AMPLIFY_PAIN,
})


class BeatTiming(NamedTuple):
    """Recommended start and length of one beat, in frames."""

    start_frame: int
    duration: int


@dataclass
class TempoCheck:
    """Result of checking one scene against its tempo profile."""

    valid: bool
    issues: list[str] = field(default_factory=list)


# ============================================================================
# NARRATIVE ARC
# ============================================================================


def plan_narrative_arc(total_scenes: int) -> NarrativeArc:
    """Assign a narrative phase to every scene index.

    Args:
        total_scenes: Number of scenes in the video.

    Returns:
        NarrativeArc with one phase per scene and an informational strategy tag.
    """
    opening_end = max(1, math.floor(total_scenes * OPENING_SHARE))
    development_end = math.floor(total_scenes * DEVELOPMENT_SHARE)
    climax_end = math.floor(total_scenes * CLIMAX_SHARE)

    phases = []
    for index in range(total_scenes):
        if index < opening_end:
            phase = VideoPhase.OPENING
        elif index < development_end:
            phase = VideoPhase.DEVELOPMENT
        elif index < climax_end:
            phase = VideoPhase.CLIMAX
        else:
            phase = VideoPhase.RESOLUTION
        phases.append(PhaseAssignment(scene_index=index, phase=phase))

    if total_scenes <= 4:
        strategy = ArcStrategy.HOOK_HEAVY
    elif total_scenes <= 7:
        strategy = ArcStrategy.BALANCED
    else:
        strategy = ArcStrategy.BUILD_UP

    return NarrativeArc(total_scenes=total_scenes, phases=phases, strategy=strategy)


def get_scene_phase(scene_index: int, arc: NarrativeArc) -> VideoPhase:
    """Phase of a scene, or development when the index is not in the arc."""
    for assignment in arc.phases:
        if assignment.scene_index == scene_index:
            return assignment.phase
    return VideoPhase.DEVELOPMENT


def get_scene_tempo_profile(
    scene_index: int,
    arc: NarrativeArc,
    style: VideoStyle,
    tables: ProfileTables = DEFAULT_TABLES,
) -> TempoProfile:
    return tables.tempo_profile(get_scene_phase(scene_index, arc), style)


def breathing_permitted(scene: Scene, profile: TempoProfile) -> bool:
    """Whether a scene may carry breathing beats under its tempo profile."""
    return profile.allow_breathing or scene.intention in ABSORPTION_INTENTIONS


def get_phase_description(phase: VideoPhase, tables: ProfileTables = DEFAULT_TABLES) -> str:
    return tables.phase_descriptions[phase]


# ============================================================================
# BEAT TIMING BY PACING
# ============================================================================


def pacing_timings(beat_count: int, total_duration: float, pacing: Pacing) -> list[BeatTiming]:
    """Distribute beats over a duration according to pacing.

    Fast pacing steps each beat at 70% of its own length. Calm pacing
    spaces beats at duration/(count+1) with a half-beat lead-in. Every
    other pacing steps at 85% of duration/count.

    Raises:
        ValueError: If beat_count is below 1.
    """
    if beat_count < 1:
        raise ValueError(f"beat_count must be at least 1, got {beat_count}")

    if pacing == Pacing.FAST:
        beat_duration = math.floor(total_duration / beat_count)
        step = math.floor(beat_duration * 0.7)
        return [BeatTiming(i * step, beat_duration) for i in range(beat_count)]

    if pacing == Pacing.CALM:
        beat_duration = math.floor(total_duration / (beat_count + 1))
        lead_in = math.floor(beat_duration * 0.5)
        return [BeatTiming(lead_in + i * beat_duration, beat_duration) for i in range(beat_count)]

    beat_duration = math.floor(total_duration / beat_count)
    step = math.floor(beat_duration * 0.85)
    return [BeatTiming(i * step, beat_duration) for i in range(beat_count)]


def get_recommended_beat_timing(profile: TempoProfile, beat_count: int) -> list[BeatTiming]:
    """Recommended beat timings for a phase, over the profile's mean duration."""
    return pacing_timings(beat_count, profile.scene_duration.mean, profile.pacing)


# ============================================================================
# TEMPO VALIDATION
# ============================================================================


def validate_scene_tempo(scene: Scene, profile: TempoProfile) -> TempoCheck:
    """Check a scene against its tempo profile.

    The beat minimum counts every beat; the maximum counts content beats
    only, so an injected breathing moment never pushes a scene over it.
    """
    issues: list[str] = []

    beat_count = len(scene.beats)
    content_count = len([b for b in scene.beats if not b.is_breathing])
    if beat_count < profile.target_beats.min:
        issues.append(f"Scene has {beat_count} beats, minimum is {profile.target_beats.min}")
    if content_count > profile.target_beats.max:
        issues.append(f"Scene has {content_count} beats, maximum is {profile.target_beats.max}")

    if scene.duration_frames < profile.scene_duration.min:
        issues.append(
            f"Scene duration {scene.duration_frames}f is below minimum {profile.scene_duration.min}f"
        )
    if scene.duration_frames > profile.scene_duration.max:
        issues.append(
            f"Scene duration {scene.duration_frames}f exceeds maximum {profile.scene_duration.max}f"
        )

    if not breathing_permitted(scene, profile) and any(b.is_breathing for b in scene.beats):
        issues.append("Breathing moments not allowed in this phase")

    return TempoCheck(valid=not issues, issues=issues)


def validate_video_tempo(
    scenes: list[Scene],
    style: VideoStyle,
    tables: ProfileTables = DEFAULT_TABLES,
) -> dict[int, list[str]]:
    """Tempo issues keyed by scene index. Empty when every scene conforms."""
    arc = plan_narrative_arc(len(scenes))
    issues: dict[int, list[str]] = {}
    for index, scene in enumerate(scenes):
        check = validate_scene_tempo(scene, get_scene_tempo_profile(index, arc, style, tables))
        if not check.valid:
            issues[index] = check.issues
    return issues


# ============================================================================
# TEMPO ADJUSTMENT
# ============================================================================


def adjust_scene_to_tempo(scene: Scene, profile: TempoProfile) -> tuple[Scene, list[str]]:
    """Bring a scene in line with its tempo profile.

    Args:
        scene: Scene to adjust.
        profile: Tempo profile for the scene's phase and style.

    Returns:
        Tuple of (adjusted scene, human-readable adjustments).
    """
    adjustments: list[str] = []
    beats = list(scene.beats)

    duration = profile.scene_duration.clamp(scene.duration_frames)
    if duration > scene.duration_frames:
        adjustments.append(f"Extended duration to {duration}f")
    elif duration < scene.duration_frames:
        adjustments.append(f"Reduced duration to {duration}f")

    if len(beats) < profile.target_beats.min:
        start = 0
        if beats:
            latest_end = max(b.end_frame for b in beats)
            start = min(latest_end, max(0, duration - AUTO_BEAT_DURATION))
        beats.append(
            Beat(
                beat_id=f"beat_auto_{len(beats) + 1}",
                beat_type=BeatType.VISUAL_PAUSE,
                start_frame=start,
                duration_frames=AUTO_BEAT_DURATION,
                animation=BeatAnimation(
                    entry=EntryAnimation.FADE_IN,
                    entry_duration=10,
                    hold=HoldAnimation.BREATHING,
                ),
            )
        )
        adjustments.append("Added visual beat to meet minimum")

    content = [b for b in beats if not b.is_breathing]
    if len(content) > profile.target_beats.max:
        dropped = {b.beat_id for b in content[profile.target_beats.max:]}
        beats = [b for b in beats if b.beat_id not in dropped]
        adjustments.append(f"Trimmed {len(dropped)} beat(s) beyond maximum")

    if profile.motion_intensity == TempoMotion.LOW:
        softened = any(b.animation.entry == EntryAnimation.POP for b in beats)
        beats = [_soften_entry(b) for b in beats]
        if softened:
            adjustments.append("Reduced motion intensity")

    if not breathing_permitted(scene, profile):
        kept = [b for b in beats if not b.is_breathing]
        if len(kept) < len(beats):
            beats = kept
            adjustments.append("Removed breathing moments")

    return scene.model_copy(update={"beats": beats, "duration_frames": duration}), adjustments


def _soften_entry(beat: Beat) -> Beat:
    entry = beat.animation.entry
    if entry == EntryAnimation.POP:
        entry = EntryAnimation.FADE_IN
    animation = beat.animation.model_copy(
        update={
            "entry": entry,
            "entry_duration": max(beat.animation.entry_duration or 0, MIN_LOW_MOTION_ENTRY),
        }
    )
    return beat.model_copy(update={"animation": animation})


def adjust_video_tempo(
    scenes: list[Scene],
    style: VideoStyle,
    tables: ProfileTables = DEFAULT_TABLES,
) -> tuple[list[Scene], list[str]]:
    """Adjust every scene to the tempo profile of its phase."""
    arc = plan_narrative_arc(len(scenes))
    adjusted: list[Scene] = []
    adjustments: list[str] = []
    for index, scene in enumerate(scenes):
        profile = get_scene_tempo_profile(index, arc, style, tables)
        new_scene, changes = adjust_scene_to_tempo(scene, profile)
        adjusted.append(new_scene)
        adjustments.extend(f"Scene {index}: {change}" for change in changes)
    return adjusted, adjustments
