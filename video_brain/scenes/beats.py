"""
Beat timing engine.

Schedules beats inside a scene so it never reads as a static slide:
computes start/length distributions, spreads beats that share one start,
fills in default animations and repairs slide-like scenes.
"""

import math

from ..models import (
    BackgroundAnimation,
    Beat,
    HoldAnimation,
    Pacing,
    Scene,
    Texture,
    VideoStyle,
)
from ..planning.tempo import BeatTiming, pacing_timings
from ..profiles import DEFAULT_TABLES, ProfileTables

# Lead and trail pad around a lone beat
SINGLE_BEAT_PAD = 10
SLIDE_FIX_TEXTURE_OPACITY = 0.05


def default_entry_duration(style: VideoStyle) -> int:
    return 10 if style == VideoStyle.SOCIAL_SHORT else 15


def calculate_beat_timing(beat_count: int, scene_duration: int, pacing: Pacing) -> list[BeatTiming]:
    """Compute start and length for each beat of a scene.

    Args:
        beat_count: Number of beats, at least 1.
        scene_duration: Scene length in frames.
        pacing: Scene pacing; anything other than fast or calm is balanced.

    Returns:
        One BeatTiming per beat, in order.

    Raises:
        ValueError: If beat_count is below 1.
    """
    if beat_count == 1:
        return [BeatTiming(SINGLE_BEAT_PAD, max(1, scene_duration - 2 * SINGLE_BEAT_PAD))]
    return pacing_timings(beat_count, scene_duration, pacing)


def ensure_temporal_progression(beats: list[Beat], scene_duration: int) -> list[Beat]:
    """Spread beats evenly when every one of them shares a single start frame."""
    if len(beats) <= 1:
        return beats

    if any(b.start_frame != beats[0].start_frame for b in beats):
        return beats

    beat_duration = math.floor(scene_duration / len(beats))
    return [
        beat.model_copy(update={"start_frame": i * beat_duration, "duration_frames": beat_duration})
        for i, beat in enumerate(beats)
    ]


def enhance_beats(
    beats: list[Beat],
    style: VideoStyle,
    tables: ProfileTables = DEFAULT_TABLES,
) -> list[Beat]:
    """Fill missing animations from the beat-type defaults and stagger starts.

    Each beat after the first starts no earlier than halfway through the
    previous one.
    """
    enhanced: list[Beat] = []
    for beat in beats:
        update = {}

        entry, hold = tables.beat_animations[beat.beat_type]
        animation = beat.animation
        if animation.entry is None:
            animation = animation.model_copy(
                update={
                    "entry": entry,
                    "entry_duration": animation.entry_duration or default_entry_duration(style),
                    "hold": animation.hold or hold,
                }
            )
            update["animation"] = animation

        if enhanced:
            previous = enhanced[-1]
            earliest = previous.start_frame + math.floor(previous.duration_frames * 0.5)
            if beat.start_frame < earliest:
                update["start_frame"] = earliest

        enhanced.append(beat.model_copy(update=update) if update else beat)
    return enhanced


def fit_scene_to_beats(scene: Scene) -> Scene:
    """Grow a scene so that no beat runs past its end."""
    if not scene.beats:
        return scene
    latest_end = max(b.end_frame for b in scene.beats)
    if latest_end <= scene.duration_frames:
        return scene
    return scene.model_copy(update={"duration_frames": latest_end})


# ============================================================================
# SLIDE DETECTION AND REPAIR
# ============================================================================


def has_temporal_progression(scene: Scene) -> bool:
    """True unless a multi-beat scene starts every beat at the same frame.

    Scenes whose rhythm strategy is single-moment or breathing-pause are
    simultaneous on purpose and always pass.
    """
    if len(scene.beats) <= 1:
        return True
    if scene.rhythm.is_intentionally_static:
        return True
    return len({b.start_frame for b in scene.beats}) > 1


def is_slidelike(scene: Scene) -> bool:
    """True when nothing in the scene changes over time."""
    if not scene.beats:
        return True

    background = scene.background
    if (
        background.animation == BackgroundAnimation.STATIC
        and background.texture == Texture.NONE
        and all(b.animation.hold in (None, HoldAnimation.STATIC) for b in scene.beats)
    ):
        return True

    if len(scene.beats) > 1:
        first = scene.beats[0]
        same_start = all(b.start_frame == first.start_frame for b in scene.beats)
        same_type = all(b.beat_type == first.beat_type for b in scene.beats)
        if same_start and same_type:
            return True

    return False


def fix_slidelike_scene(scene: Scene, style: VideoStyle) -> Scene:
    """Add texture and drift, spread simultaneous beats and give beats a hold."""
    background = scene.background
    bg_update = {}
    if background.texture == Texture.NONE:
        bg_update["texture"] = Texture.GRAIN
        bg_update["texture_opacity"] = SLIDE_FIX_TEXTURE_OPACITY
    if background.animation == BackgroundAnimation.STATIC:
        bg_update["animation"] = BackgroundAnimation.SUBTLE_DRIFT

    beats = scene.beats
    if len(beats) > 1:
        beats = ensure_temporal_progression(beats, scene.duration_frames)

    beats = [
        b if b.animation.hold is not None
        else b.model_copy(
            update={"animation": b.animation.model_copy(update={"hold": HoldAnimation.SUBTLE_FLOAT})}
        )
        for b in beats
    ]

    return scene.model_copy(
        update={
            "background": background.model_copy(update=bg_update) if bg_update else background,
            "beats": beats,
        }
    )
