"""
Transition planner.

Scores visual continuity between adjacent scenes and picks the transition
that preserves the right amount of it, then adapts the chosen spec to the
video style and the shared motion direction.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..models import (
    EntryAnimation,
    LayoutPosition,
    MotionDirection,
    Offset,
    Scene,
    SceneIntention,
    SceneTransition,
    SceneType,
    TransitionId,
    TransitionSpec,
    VideoStyle,
)
from ..profiles import DEFAULT_TABLES, ProfileTables

LAYOUT_SCORE = 30
MOTION_SCORE = 25
BACKGROUND_SCORE = 20
IMAGE_SCORE = 15
RELATED_PAIR_SCORE = 10
MAX_SCORE = 100

SEAMLESS_THRESHOLD = 70
COLOR_FAMILY_PREFIX = 4
DIRECTION_DISTANCE = 30

# Horizontal pixel bounds for left/right layout detection
LEFT_EDGE = 400
RIGHT_EDGE = 680

SOCIAL_DURATION_SCALE = 0.7
SOCIAL_OFFSET_SCALE = 1.2

RELATED_PAIRS = (
    (SceneType.PROBLEM, SceneType.SOLUTION),
    (SceneType.HOOK, SceneType.PROBLEM),
    (SceneType.SOLUTION, SceneType.PROOF),
    (SceneType.PROOF, SceneType.CTA),
)

_SLIDE_DIRECTIONS = (
    (EntryAnimation.SLIDE_UP, MotionDirection.UP),
    (EntryAnimation.SLIDE_DOWN, MotionDirection.DOWN),
    (EntryAnimation.SLIDE_LEFT, MotionDirection.LEFT),
    (EntryAnimation.SLIDE_RIGHT, MotionDirection.RIGHT),
)

_DIRECTION_VECTORS = {
    MotionDirection.UP: (0, -1),
    MotionDirection.DOWN: (0, 1),
    MotionDirection.LEFT: (-1, 0),
    MotionDirection.RIGHT: (1, 0),
}


@dataclass
class SceneContext:
    """What the planner knows about one side of a transition.

    Fields left as None are undeclared and never contribute to a score.
    """

    scene_type: Optional[SceneType] = None
    intention: Optional[SceneIntention] = None
    has_images: Optional[bool] = None
    layout_position: Optional[LayoutPosition] = None
    dominant_motion: Optional[MotionDirection] = None
    background_colors: list[str] = field(default_factory=list)


@dataclass
class TransitionDecision:
    transition_id: TransitionId
    reason: str
    continuity_score: int
    should_transition: bool = True


@dataclass
class PlannedTransition:
    from_index: int
    to_index: int
    decision: TransitionDecision
    spec: TransitionSpec


@dataclass
class TransitionSequence:
    transitions: list[PlannedTransition]
    coherence_score: int

    @property
    def transitions_used(self) -> list[TransitionId]:
        return [t.decision.transition_id for t in self.transitions]


# ============================================================================
# SCENE CONTEXT
# ============================================================================


def determine_layout_position(scene: Scene) -> LayoutPosition:
    """Horizontal placement of a scene's first beat."""
    if not scene.beats or scene.beats[0].position is None:
        return LayoutPosition.CENTER

    x = scene.beats[0].position.x
    numeric = isinstance(x, (int, float)) and not isinstance(x, bool)
    if x == "left" or (numeric and x < LEFT_EDGE):
        return LayoutPosition.LEFT
    if x == "right" or (numeric and x > RIGHT_EDGE):
        return LayoutPosition.RIGHT
    return LayoutPosition.CENTER


def determine_dominant_motion(scene: Scene) -> MotionDirection:
    """First slide direction used by any beat entry, checked up, down, left, right."""
    entries = {b.animation.entry for b in scene.beats}
    for entry, direction in _SLIDE_DIRECTIONS:
        if entry in entries:
            return direction
    return MotionDirection.NONE


def scene_context(scene: Scene) -> SceneContext:
    return SceneContext(
        scene_type=scene.scene_type,
        intention=scene.intention,
        has_images=scene.has_images,
        layout_position=determine_layout_position(scene),
        dominant_motion=determine_dominant_motion(scene),
        background_colors=list(scene.background.colors),
    )


# ============================================================================
# DECISION
# ============================================================================


def _declared_equal(a, b) -> bool:
    return a is not None and b is not None and a == b


def analyze_visual_continuity(from_scene: SceneContext, to_scene: SceneContext) -> int:
    """Continuity score between two scenes, 0 to 100."""
    score = 0

    if _declared_equal(from_scene.layout_position, to_scene.layout_position):
        score += LAYOUT_SCORE

    if _declared_equal(from_scene.dominant_motion, to_scene.dominant_motion):
        score += MOTION_SCORE

    if from_scene.background_colors and to_scene.background_colors:
        from_first = from_scene.background_colors[0].lower()
        to_first = to_scene.background_colors[0].lower()
        if from_first[:COLOR_FAMILY_PREFIX] == to_first[:COLOR_FAMILY_PREFIX]:
            score += BACKGROUND_SCORE

    if _declared_equal(from_scene.has_images, to_scene.has_images):
        score += IMAGE_SCORE

    pair = (from_scene.scene_type, to_scene.scene_type)
    if pair in RELATED_PAIRS or pair[::-1] in RELATED_PAIRS:
        score += RELATED_PAIR_SCORE

    return min(MAX_SCORE, score)


def decide_transition(from_scene: SceneContext, to_scene: SceneContext) -> TransitionDecision:
    """Pick the transition for a scene pair.

    Checked in order: high continuity, a shared motion direction, a layout
    change, an emphasis destination, and finally the default crossfade.
    """
    score = analyze_visual_continuity(from_scene, to_scene)

    if score >= SEAMLESS_THRESHOLD:
        return TransitionDecision(
            TransitionId.SEAMLESS_BLEND, "High visual continuity - minimal transition needed", score
        )

    motion = from_scene.dominant_motion
    if motion not in (None, MotionDirection.NONE) and motion == to_scene.dominant_motion:
        return TransitionDecision(
            TransitionId.SLIDE_CONTINUE, "Shared motion direction - continue visual flow", score
        )

    if from_scene.layout_position != to_scene.layout_position:
        return TransitionDecision(
            TransitionId.POSITION_FLOW, "Layout shift - smooth position interpolation", score
        )

    if to_scene.scene_type in (SceneType.PROOF, SceneType.CTA):
        return TransitionDecision(TransitionId.SCALE_MORPH, "Emphasis moment - subtle scale shift", score)

    return TransitionDecision(TransitionId.CROSSFADE, "Default soft transition", score)


def get_transition(transition_id: TransitionId, tables: ProfileTables = DEFAULT_TABLES) -> TransitionSpec:
    return tables.transitions[transition_id]


# ============================================================================
# ADAPTATION
# ============================================================================


def _scaled(offset: Offset, factor: float) -> Offset:
    return Offset(x=offset.x * factor, y=offset.y * factor)


def adapt_transition_for_style(spec: TransitionSpec, style: VideoStyle) -> TransitionSpec:
    """Shorter, more pronounced transitions for social video."""
    if style != VideoStyle.SOCIAL_SHORT:
        return spec

    return spec.model_copy(
        update={
            "duration": round(spec.duration * SOCIAL_DURATION_SCALE),
            "outgoing": spec.outgoing.model_copy(
                update={"position": _scaled(spec.outgoing.position, SOCIAL_OFFSET_SCALE)}
            ),
            "incoming": spec.incoming.model_copy(
                update={"position": _scaled(spec.incoming.position, SOCIAL_OFFSET_SCALE)}
            ),
        }
    )


def adapt_transition_direction(spec: TransitionSpec, direction: MotionDirection) -> TransitionSpec:
    """Point the outgoing offset along the direction and mirror the incoming one.

    Raises:
        ValueError: If direction is NONE.
    """
    if direction not in _DIRECTION_VECTORS:
        raise ValueError(f"Cannot orient a transition towards {direction.value!r}")

    dx, dy = _DIRECTION_VECTORS[direction]
    return spec.model_copy(
        update={
            "motion_direction": direction,
            "outgoing": spec.outgoing.model_copy(
                update={"position": Offset(x=dx * DIRECTION_DISTANCE, y=dy * DIRECTION_DISTANCE)}
            ),
            "incoming": spec.incoming.model_copy(
                update={"position": Offset(x=-dx * DIRECTION_DISTANCE, y=-dy * DIRECTION_DISTANCE)}
            ),
        }
    )


# ============================================================================
# SEQUENCE
# ============================================================================


def plan_transition_sequence(
    scenes: list[Scene],
    style: VideoStyle,
    tables: ProfileTables = DEFAULT_TABLES,
) -> TransitionSequence:
    """Plan a transition for every adjacent scene pair.

    Returns:
        TransitionSequence whose coherence score is the rounded mean
        continuity, or 100 when there is nothing to transition between.
    """
    planned: list[PlannedTransition] = []
    total = 0

    for index in range(len(scenes) - 1):
        from_context = scene_context(scenes[index])
        to_context = scene_context(scenes[index + 1])

        decision = decide_transition(from_context, to_context)
        spec = adapt_transition_for_style(get_transition(decision.transition_id, tables), style)
        if spec.motion_direction != MotionDirection.NONE and from_context.dominant_motion != MotionDirection.NONE:
            spec = adapt_transition_direction(spec, from_context.dominant_motion)

        planned.append(PlannedTransition(index, index + 1, decision, spec))
        total += decision.continuity_score

    coherence = round(total / (len(scenes) - 1)) if len(scenes) > 1 else MAX_SCORE
    return TransitionSequence(transitions=planned, coherence_score=coherence)


def apply_transitions(scenes: list[Scene], sequence: TransitionSequence) -> list[Scene]:
    """Record each planned transition on its outgoing scene."""
    result = list(scenes)
    for planned in sequence.transitions:
        scene = result[planned.from_index]
        result[planned.from_index] = scene.model_copy(
            update={
                "transition": SceneTransition(
                    transition_type=planned.decision.transition_id,
                    reason=planned.decision.reason,
                )
            }
        )
    return result
