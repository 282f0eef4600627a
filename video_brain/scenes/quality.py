"""
Quality judge - structural self-judgment for scenes and whole videos.

Every scene is checked against a fixed, ordered battery of criteria.
Errors fail the scene, warnings only flag it. Some criteria carry a
deterministic repair; ``auto_fix_scene`` applies each one at most once.
Nothing here mutates its input.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from ..models import (
    BackgroundAnimation,
    BeatType,
    EntryAnimation,
    HoldAnimation,
    ImageFrame,
    ImageKind,
    ImageRole,
    IntRange,
    Scene,
    SceneType,
    Severity,
    Texture,
    VideoStyle,
)
from .beats import (
    default_entry_duration,
    fix_slidelike_scene,
    has_temporal_progression,
    is_slidelike,
)

# Allowed scene length per style, looser than the style profile itself
DURATION_BANDS = {
    VideoStyle.PREMIUM_SAAS: IntRange(min=60, max=150),
    VideoStyle.SOCIAL_SHORT: IntRange(min=30, max=90),
}
MIN_ARC_STOPS = 3


@dataclass(frozen=True)
class QualityCriterion:
    """A named structural check with an optional deterministic repair."""

    id: str
    name: str
    severity: Severity
    check: Callable[[Scene, VideoStyle], bool]
    auto_fix: Optional[Callable[[Scene, VideoStyle], Scene]] = None


def _add_grain(scene: Scene, style: VideoStyle) -> Scene:
    opacity = 0.04 if style == VideoStyle.PREMIUM_SAAS else 0.06
    background = scene.background.model_copy(
        update={"texture": Texture.GRAIN, "texture_opacity": opacity}
    )
    return scene.model_copy(update={"background": background})


def _default_animations(scene: Scene, style: VideoStyle) -> Scene:
    beats = []
    for beat in scene.beats:
        animation = beat.animation.model_copy(
            update={
                "entry": beat.animation.entry or EntryAnimation.FADE_IN,
                "entry_duration": beat.animation.entry_duration or default_entry_duration(style),
                "hold": beat.animation.hold or HoldAnimation.SUBTLE_FLOAT,
            }
        )
        beats.append(beat.model_copy(update={"animation": animation}))
    return scene.model_copy(update={"beats": beats})


def _is_fullscreen_logo(scene: Scene) -> bool:
    return any(
        img.role == ImageRole.HERO and img.treatment.frame == ImageFrame.NONE and img.kind == ImageKind.LOGO
        for img in scene.images
    )


QUALITY_CRITERIA: tuple[QualityCriterion, ...] = (
    QualityCriterion(
        id="not_slidelike",
        name="Scene must not look like a slide",
        severity=Severity.ERROR,
        check=lambda scene, style: not is_slidelike(scene),
        auto_fix=fix_slidelike_scene,
    ),
    QualityCriterion(
        id="has_beats",
        name="Scene must have at least one beat",
        severity=Severity.ERROR,
        check=lambda scene, style: len(scene.beats) > 0,
    ),
    QualityCriterion(
        id="has_temporal_progression",
        name="Multi-beat scenes must have temporal progression",
        severity=Severity.ERROR,
        check=lambda scene, style: has_temporal_progression(scene),
    ),
    QualityCriterion(
        id="has_texture_or_animation",
        name="Scene must have texture or animation for depth",
        severity=Severity.WARNING,
        check=lambda scene, style: (
            scene.background.texture != Texture.NONE
            or scene.background.animation != BackgroundAnimation.STATIC
        ),
        auto_fix=_add_grain,
    ),
    QualityCriterion(
        id="beats_have_animation",
        name="All beats must have entry animation",
        severity=Severity.WARNING,
        check=lambda scene, style: all(b.animation.entry is not None for b in scene.beats),
        auto_fix=_default_animations,
    ),
    QualityCriterion(
        id="proper_duration",
        name="Scene duration must be within style guidelines",
        severity=Severity.WARNING,
        check=lambda scene, style: DURATION_BANDS[style].contains(scene.duration_frames),
    ),
    QualityCriterion(
        id="images_have_purpose",
        name="Images must have a defined role",
        severity=Severity.WARNING,
        check=lambda scene, style: all(img.role != ImageRole.ACCENT for img in scene.images),
    ),
    QualityCriterion(
        id="no_logo_fullscreen",
        name="Logos must not be fullscreen",
        severity=Severity.ERROR,
        check=lambda scene, style: not _is_fullscreen_logo(scene),
    ),
)


# ============================================================================
# SCENE ASSESSMENT
# ============================================================================


@dataclass
class SceneAssessment:
    """Judge verdict for one scene."""

    scene_index: int
    scene_type: SceneType
    passed: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    auto_fixed: bool = False

    @property
    def issues(self) -> list[str]:
        return self.errors + self.warnings


def assess_scene(
    scene: Scene,
    index: int,
    style: VideoStyle,
    criteria: tuple[QualityCriterion, ...] = QUALITY_CRITERIA,
) -> SceneAssessment:
    """Run every criterion against a scene.

    Args:
        scene: Scene to judge.
        index: Position of the scene in the video.
        style: Active video style.
        criteria: Criteria to apply, in order.

    Returns:
        SceneAssessment; the scene passes when no error-level criterion fails.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for criterion in criteria:
        if criterion.check(scene, style):
            continue
        if criterion.severity == Severity.ERROR:
            errors.append(criterion.name)
        else:
            warnings.append(criterion.name)

    return SceneAssessment(
        scene_index=index,
        scene_type=scene.scene_type,
        passed=not errors,
        errors=errors,
        warnings=warnings,
    )


def auto_fix_scene(
    scene: Scene,
    style: VideoStyle,
    criteria: tuple[QualityCriterion, ...] = QUALITY_CRITERIA,
) -> tuple[Scene, list[str]]:
    """Apply the repair of every failing criterion once, in declaration order.

    Returns:
        Tuple of (fixed scene, ids of the criteria whose repair ran).
    """
    current = scene
    applied: list[str] = []

    for criterion in criteria:
        if criterion.auto_fix is None or criterion.check(current, style):
            continue
        current = criterion.auto_fix(current, style)
        applied.append(criterion.id)

    return current, applied


# ============================================================================
# VIDEO ASSESSMENT
# ============================================================================


@dataclass
class VideoAssessment:
    """Per-scene verdicts plus cross-scene issues."""

    scene_assessments: list[SceneAssessment]
    global_issues: list[str] = field(default_factory=list)
    auto_fix_applied: bool = False

    @property
    def total_scenes(self) -> int:
        return len(self.scene_assessments)

    @property
    def passed_scenes(self) -> int:
        return len([a for a in self.scene_assessments if a.passed])

    @property
    def failed_scenes(self) -> int:
        return self.total_scenes - self.passed_scenes

    @property
    def total_errors(self) -> int:
        return sum(len(a.errors) for a in self.scene_assessments)

    @property
    def total_warnings(self) -> int:
        return sum(len(a.warnings) for a in self.scene_assessments)

    @property
    def overall_passed(self) -> bool:
        return self.total_errors == 0 and not self.global_issues


def _silhouette(scene: Scene) -> str:
    return "multi" if len(scene.beats) > 1 else "single"


def assess_video(
    scenes: list[Scene],
    style: VideoStyle,
    emotional_arc: list[str],
) -> VideoAssessment:
    """Assess every scene and check cross-scene structure."""
    assessments = [assess_scene(scene, i, style) for i, scene in enumerate(scenes)]
    issues: list[str] = []

    silhouettes = [_silhouette(s) for s in scenes]
    if any(silhouettes[i] == silhouettes[i - 1] for i in range(1, len(silhouettes))):
        issues.append("Consecutive scenes have similar structures")

    if not scenes or scenes[0].scene_type != SceneType.HOOK:
        issues.append("First scene should be a HOOK")
    if not scenes or scenes[-1].scene_type != SceneType.CTA:
        issues.append("Last scene should be a CTA")

    if len(emotional_arc) < MIN_ARC_STOPS:
        issues.append("Emotional arc is too simple - needs more progression")

    return VideoAssessment(scene_assessments=assessments, global_issues=issues)


def auto_fix_video(
    scenes: list[Scene],
    style: VideoStyle,
    emotional_arc: list[str],
) -> tuple[list[Scene], VideoAssessment]:
    """Auto-fix every scene once and re-assess the whole video."""
    fixed_scenes: list[Scene] = []
    fixed_indices: set[int] = set()
    for index, scene in enumerate(scenes):
        fixed, applied = auto_fix_scene(scene, style)
        fixed_scenes.append(fixed)
        if applied:
            fixed_indices.add(index)

    assessment = assess_video(fixed_scenes, style, emotional_arc)
    for scene_assessment in assessment.scene_assessments:
        scene_assessment.auto_fixed = scene_assessment.scene_index in fixed_indices
    assessment.auto_fix_applied = bool(fixed_indices)
    return fixed_scenes, assessment


# ============================================================================
# SELF-JUDGMENT QUESTIONS
# ============================================================================


@dataclass(frozen=True)
class QualityQuestion:
    id: str
    question: str
    check: Callable[[Scene], bool]


def _feels_alive(scene: Scene) -> bool:
    return bool(scene.beats) and (
        scene.background.animation != BackgroundAnimation.STATIC
        or scene.background.texture != Texture.NONE
        or any(b.animation.hold not in (None, HoldAnimation.STATIC) for b in scene.beats)
    )


def _avoids_template_vibes(scene: Scene) -> bool:
    lone_static_text = (
        len(scene.beats) == 1
        and scene.beats[0].beat_type == BeatType.TEXT_APPEAR
        and scene.background.animation == BackgroundAnimation.STATIC
    )
    return not is_slidelike(scene) and bool(scene.beats) and not lone_static_text


SELF_JUDGMENT_QUESTIONS: tuple[QualityQuestion, ...] = (
    QualityQuestion("feels_alive", "Does this feel alive or flat?", _feels_alive),
    QualityQuestion(
        "looks_professional",
        "Does this look like a real paid SaaS ad?",
        lambda scene: (
            scene.background.texture != Texture.NONE
            and all(b.animation.entry is not None for b in scene.beats)
            and not is_slidelike(scene)
        ),
    ),
    QualityQuestion(
        "worth_paying_for",
        "Would a real company pay for this?",
        lambda scene: scene.quality_validated and has_temporal_progression(scene),
    ),
    QualityQuestion("avoids_template_vibes", "Does this avoid template vibes?", _avoids_template_vibes),
)


@dataclass
class SelfJudgment:
    passed: bool
    failed_questions: list[str] = field(default_factory=list)


def self_judge_scene(scene: Scene) -> SelfJudgment:
    """Ask the four self-judgment questions of a finished scene."""
    failed = [q.question for q in SELF_JUDGMENT_QUESTIONS if not q.check(scene)]
    return SelfJudgment(passed=not failed, failed_questions=failed)
