"""
Breathing injector.

Decides when a scene needs an intentionally idle beat, places one according
to the preset for the active style, and keeps the share of idle time across
the whole video between 5% and 15%.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from ..models import (
    Beat,
    BeatAnimation,
    BeatType,
    BreathingPlacement,
    BreathingPreset,
    BreathingType,
    EntryAnimation,
    HoldAnimation,
    Scene,
    SceneIntention,
    SceneType,
    VideoStyle,
)
from ..planning.tempo import (
    ABSORPTION_INTENTIONS,
    breathing_permitted,
    get_scene_tempo_profile,
    plan_narrative_arc,
)
from ..profiles import DEFAULT_TABLES, ProfileTables

# Beats per second above which a scene needs rest
DENSITY_THRESHOLD = 1.5
LONG_TEXT_CHARS = 50

MIN_BREATHING_RATIO = 0.05
MAX_BREATHING_RATIO = 0.15
MIN_BREATHING_SCENE_SHARE = 0.3

# Frames kept clear before the scene's outgoing transition
TRANSITION_PAD = 5

NO_BREATHING_INTENTIONS = frozenset({
    SceneIntention.CAPTURE_ATTENTION,
    SceneIntention.DRIVE_ACTION,
})
BREATHING_AFTER_INTENTIONS = ABSORPTION_INTENTIONS


@dataclass
class BreathingNeed:
    needs_breathing: bool
    recommended_type: Optional[BreathingType]
    reason: str


@dataclass
class VideoBreathing:
    """Video-wide breathing distribution."""

    total_breathing_frames: int
    breathing_ratio: float
    scenes_with_breathing: list[bool] = field(default_factory=list)
    is_balanced: bool = False


def analyze_breathing_need(scene: Scene, fps: int = 30) -> BreathingNeed:
    """Classify whether a scene needs a breathing beat and which kind.

    Args:
        scene: Scene to classify.
        fps: Frames per second used to compute beat density.

    Returns:
        BreathingNeed with the recommended breathing type, if any.
    """
    if scene.intention in NO_BREATHING_INTENTIONS:
        return BreathingNeed(False, None, "Scene type requires momentum, no breathing")

    seconds = scene.duration_frames / fps
    if seconds > 0 and len(scene.beats) / seconds > DENSITY_THRESHOLD:
        return BreathingNeed(True, BreathingType.VISUAL_PAUSE, "High beat density needs visual rest")

    if scene.intention in BREATHING_AFTER_INTENTIONS:
        kind = BreathingType.EMPHASIS_HOLD if scene.scene_type == SceneType.PROOF else BreathingType.ABSORPTION_MOMENT
        return BreathingNeed(True, kind, "Important information needs absorption time")

    if any(len(b.text) > LONG_TEXT_CHARS for b in scene.text_beats):
        return BreathingNeed(True, BreathingType.ABSORPTION_MOMENT, "Long text needs reading time")

    return BreathingNeed(False, None, "Scene has natural pacing")


def create_breathing_beat(preset: BreathingPreset, start_frame: int, beat_id: str) -> Beat:
    hold = HoldAnimation.SUBTLE_FLOAT if preset.elements == "subtle_float" else HoldAnimation.STATIC
    return Beat(
        beat_id=beat_id,
        beat_type=BeatType.BREATHING_MOMENT,
        start_frame=start_frame,
        duration_frames=preset.duration,
        animation=BeatAnimation(
            entry=EntryAnimation.FADE_IN,
            entry_duration=math.floor(preset.duration * 0.3),
            hold=hold,
        ),
    )


def inject_breathing_moment(scene: Scene, preset: BreathingPreset) -> Scene:
    """Add one breathing beat at the preset's placement.

    The scene grows when the beat plus the transition pad would overrun it;
    it never shrinks.
    """
    if preset.placement == BreathingPlacement.AFTER_BEAT:
        content = [b for b in scene.beats if not b.is_breathing]
        start = content[-1].end_frame if content else 0
    elif preset.placement == BreathingPlacement.BEFORE_TRANSITION:
        start = scene.duration_frames - preset.duration - TRANSITION_PAD
    else:
        start = scene.duration_frames - preset.duration
    start = max(0, start)

    beat = create_breathing_beat(preset, start, f"breathing_{len(scene.beats) + 1}")
    duration = max(scene.duration_frames, start + preset.duration + TRANSITION_PAD)

    return scene.model_copy(
        update={
            "beats": [*scene.beats, beat],
            "duration_frames": duration,
            "background": scene.background.model_copy(update={"animation": preset.background}),
        }
    )


# ============================================================================
# VIDEO-LEVEL BALANCE
# ============================================================================


def analyze_video_breathing(scenes: list[Scene]) -> VideoBreathing:
    with_breathing = [any(b.is_breathing for b in s.beats) for s in scenes]
    breathing_frames = sum(b.duration_frames for s in scenes for b in s.beats if b.is_breathing)
    total_frames = sum(s.duration_frames for s in scenes)
    ratio = breathing_frames / total_frames if total_frames > 0 else 0.0

    balanced = (
        MIN_BREATHING_RATIO <= ratio <= MAX_BREATHING_RATIO
        and sum(with_breathing) >= math.floor(len(scenes) * MIN_BREATHING_SCENE_SHARE)
    )
    return VideoBreathing(
        total_breathing_frames=breathing_frames,
        breathing_ratio=ratio,
        scenes_with_breathing=with_breathing,
        is_balanced=balanced,
    )


def validate_video_breathing(scenes: list[Scene]) -> list[str]:
    """Issues for a video whose breathing is out of balance. Empty when balanced."""
    analysis = analyze_video_breathing(scenes)
    if analysis.is_balanced:
        return []

    issues: list[str] = []
    ratio = analysis.breathing_ratio
    if ratio < MIN_BREATHING_RATIO:
        issues.append(f"Breathing ratio {ratio:.1%} is below the {MIN_BREATHING_RATIO:.0%} minimum")
    elif ratio > MAX_BREATHING_RATIO:
        issues.append(f"Breathing ratio {ratio:.1%} exceeds the {MAX_BREATHING_RATIO:.0%} maximum")

    required = math.floor(len(scenes) * MIN_BREATHING_SCENE_SHARE)
    breathing_scenes = sum(analysis.scenes_with_breathing)
    if breathing_scenes < required:
        issues.append(f"Only {breathing_scenes} of {len(scenes)} scenes breathe, at least {required} needed")
    return issues


def strip_breathing(
    scenes: list[Scene],
    style: VideoStyle,
    tables: ProfileTables = DEFAULT_TABLES,
) -> tuple[list[Scene], int]:
    """Remove breathing beats from scenes that may not carry them.

    A scene keeps its breathing when its phase allows breathing or its
    intention always earns absorption time.
    """
    arc = plan_narrative_arc(len(scenes))
    result: list[Scene] = []
    removed = 0
    for index, scene in enumerate(scenes):
        if breathing_permitted(scene, get_scene_tempo_profile(index, arc, style, tables)):
            result.append(scene)
            continue
        kept = [b for b in scene.beats if not b.is_breathing]
        removed += len(scene.beats) - len(kept)
        result.append(scene.model_copy(update={"beats": kept}) if len(kept) < len(scene.beats) else scene)
    return result, removed


def auto_inject_breathing(
    scenes: list[Scene],
    style: VideoStyle,
    fps: int = 30,
    tables: ProfileTables = DEFAULT_TABLES,
) -> tuple[list[Scene], int]:
    """Inject breathing beats until the video is balanced.

    Only middle scenes are touched, and only those whose phase allows
    breathing or whose intention always earns absorption time. Scenes that
    need rest go first; other eligible scenes get a visual pause only while
    the video is still short of rest. An injection that would push the ratio
    above the upper bound is skipped.

    Returns:
        Tuple of (scenes, number of beats injected).
    """
    scenes, _ = strip_breathing(scenes, style, tables)
    if analyze_video_breathing(scenes).is_balanced:
        return scenes, 0

    arc = plan_narrative_arc(len(scenes))
    candidates = []
    for index in range(1, len(scenes) - 1):
        scene = scenes[index]
        if any(b.is_breathing for b in scene.beats):
            continue
        if scene.intention in NO_BREATHING_INTENTIONS:
            continue
        if not breathing_permitted(scene, get_scene_tempo_profile(index, arc, style, tables)):
            continue
        candidates.append(index)

    current = list(scenes)
    injected = 0
    needs = {i: analyze_breathing_need(current[i], fps) for i in candidates}
    first_pass = [i for i in candidates if needs[i].needs_breathing]
    second_pass = [i for i in candidates if not needs[i].needs_breathing]

    for index in first_pass + second_pass:
        analysis = analyze_video_breathing(current)
        if analysis.is_balanced:
            break

        kind = needs[index].recommended_type or BreathingType.VISUAL_PAUSE
        trial = list(current)
        trial[index] = inject_breathing_moment(current[index], tables.breathing_preset(kind, style))
        if analyze_video_breathing(trial).breathing_ratio > MAX_BREATHING_RATIO:
            continue
        current = trial
        injected += 1

    return current, injected


# ============================================================================
# SILENCE
# ============================================================================


def create_silence_beat(duration: int, beat_id: str, start_frame: int) -> Beat:
    """A content-free rest beat."""
    return Beat(
        beat_id=beat_id,
        beat_type=BeatType.VISUAL_PAUSE,
        start_frame=start_frame,
        duration_frames=duration,
        animation=BeatAnimation(entry=EntryAnimation.FADE_IN, entry_duration=5, hold=HoldAnimation.BREATHING),
    )


def is_silence_beat(beat: Beat) -> bool:
    if beat.beat_type in (BeatType.VISUAL_PAUSE, BeatType.BREATHING_MOMENT):
        return True
    content = beat.content
    return content is None or (not content.text and not content.image_id)


def calculate_silence_ratio(scene: Scene) -> float:
    if scene.duration_frames <= 0:
        return 0.0
    silent = sum(b.duration_frames for b in scene.beats if is_silence_beat(b))
    return silent / scene.duration_frames
