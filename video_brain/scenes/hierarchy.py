"""
Visual hierarchy enforcement.

Scores the visual weight of every candidate element in a scene and assigns
exactly one primary, at most two secondary and any number of ambient
elements. Competing or overcrowded scenes are rebalanced once by changing
entry animations and timing.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..models import (
    Beat,
    EntryAnimation,
    FocusRole,
    ImageRole,
    Scene,
    TextStyle,
    VideoStyle,
)

TEXT_WEIGHTS = {
    TextStyle.PRIMARY: 80,
    TextStyle.SECONDARY: 45,
    TextStyle.ACCENT: 60,
    TextStyle.EMPHASIS: 75,
}
IMAGE_BEAT_WEIGHT = 60
IMAGE_ROLE_WEIGHTS = {
    ImageRole.HERO: 85,
    ImageRole.PROOF: 65,
    ImageRole.ILLUSTRATION: 55,
    ImageRole.BACKGROUND: 20,
    ImageRole.ACCENT: 35,
    ImageRole.LOGO: 40,
}
ANIMATION_BONUS = {
    EntryAnimation.SCALE_IN: 15,
    EntryAnimation.SLIDE_UP: 10,
    EntryAnimation.FADE_IN: 5,
    EntryAnimation.REVEAL: 12,
    EntryAnimation.POP: 18,
}
DEFAULT_ANIMATION_BONUS = 5
FIRST_FRAME_BONUS = 10
MAX_WEIGHT = 100

MIN_WEIGHT_GAP = 15
SECONDARY_MIN_WEIGHT = 50
MAX_SECONDARY = 2

# Image elements rank after beats when weights tie
IMAGE_PRIORITY_OFFSET = 100
DEMOTION_DELAY = 15

NO_PRIMARY = "No primary focus element defined"
COMPETING_WEIGHT = "Primary and secondary elements have competing visual weight"
TOO_MANY_SECONDARY = "Too many secondary elements - simplify the scene"


@dataclass
class FocusElement:
    """A candidate focus element: a beat or a scene image."""

    element_id: str
    element_type: str  # "text", "image" or "shape"
    weight: int
    priority: int = 0
    role: FocusRole = FocusRole.AMBIENT
    is_beat: bool = True


@dataclass
class HierarchySpec:
    """Focus-role assignment for one scene."""

    scene_id: str
    primary: Optional[FocusElement]
    secondary: list[FocusElement] = field(default_factory=list)
    ambient: list[FocusElement] = field(default_factory=list)
    overflow: list[FocusElement] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues


def calculate_beat_weight(beat: Beat) -> int:
    """Visual weight of a beat: content base, entry bonus and first-frame bonus."""
    weight = 0
    if beat.is_text:
        text_style = beat.content.text_style if beat.content else None
        weight += TEXT_WEIGHTS[text_style or TextStyle.SECONDARY]
    elif beat.is_image:
        weight += IMAGE_BEAT_WEIGHT

    entry = beat.animation.entry or EntryAnimation.FADE_IN
    weight += ANIMATION_BONUS.get(entry, DEFAULT_ANIMATION_BONUS)

    if beat.start_frame == 0:
        weight += FIRST_FRAME_BONUS

    return min(MAX_WEIGHT, weight)


def rank_elements(elements: list[FocusElement], scene_id: str = "") -> HierarchySpec:
    """Assign focus roles by descending weight and validate the result.

    The heaviest element becomes primary. The next elements weighing at
    least 50 become secondary, up to two; any further element that would
    have qualified is recorded as overflow and kept ambient.
    """
    ranked = sorted(elements, key=lambda el: (-el.weight, el.priority))

    primary: Optional[FocusElement] = None
    secondary: list[FocusElement] = []
    ambient: list[FocusElement] = []
    overflow: list[FocusElement] = []

    for element in ranked:
        if primary is None:
            element.role = FocusRole.PRIMARY
            primary = element
        elif element.weight >= SECONDARY_MIN_WEIGHT and len(secondary) < MAX_SECONDARY:
            element.role = FocusRole.SECONDARY
            secondary.append(element)
        else:
            element.role = FocusRole.AMBIENT
            ambient.append(element)
            if element.weight >= SECONDARY_MIN_WEIGHT:
                overflow.append(element)

    issues: list[str] = []
    if primary is None:
        issues.append(NO_PRIMARY)
    elif secondary and primary.weight - secondary[0].weight < MIN_WEIGHT_GAP:
        issues.append(COMPETING_WEIGHT)
    if overflow:
        issues.append(TOO_MANY_SECONDARY)

    return HierarchySpec(
        scene_id=scene_id,
        primary=primary,
        secondary=secondary,
        ambient=ambient,
        overflow=overflow,
        issues=issues,
    )


def analyze_hierarchy(scene: Scene) -> HierarchySpec:
    """Collect every beat and image of a scene and rank them."""
    elements: list[FocusElement] = []

    for index, beat in enumerate(scene.beats):
        if beat.is_text:
            element_type = "text"
        elif beat.is_image:
            element_type = "image"
        else:
            element_type = "shape"
        elements.append(
            FocusElement(
                element_id=beat.beat_id,
                element_type=element_type,
                weight=calculate_beat_weight(beat),
                priority=index,
            )
        )

    for index, image in enumerate(scene.images):
        elements.append(
            FocusElement(
                element_id=image.image_id,
                element_type="image",
                weight=IMAGE_ROLE_WEIGHTS[image.role],
                priority=index + IMAGE_PRIORITY_OFFSET,
                is_beat=False,
            )
        )

    return rank_elements(elements, scene_id=scene.scene_id)


def _restyle(beats: list[Beat], beat_id: str, entry: EntryAnimation, duration: int, delay: int = 0) -> list[Beat]:
    result = []
    for beat in beats:
        if beat.beat_id == beat_id:
            animation = beat.animation.model_copy(update={"entry": entry, "entry_duration": duration})
            beat = beat.model_copy(
                update={"animation": animation, "start_frame": beat.start_frame + delay}
            )
        result.append(beat)
    return result


def enforce_hierarchy(scene: Scene, style: VideoStyle) -> tuple[Scene, list[str]]:
    """Rebalance a scene whose hierarchy is invalid.

    Returns:
        Tuple of (rebalanced scene, fixes applied). The scene is returned
        unchanged when its hierarchy is already valid or when none of the
        offending elements is a beat.
    """
    spec = analyze_hierarchy(scene)
    if spec.is_valid:
        return scene, []

    premium = style == VideoStyle.PREMIUM_SAAS
    beats = list(scene.beats)
    fixes: list[str] = []

    if COMPETING_WEIGHT in spec.issues:
        if spec.primary is not None and spec.primary.is_beat:
            beats = _restyle(beats, spec.primary.element_id, EntryAnimation.SCALE_IN, 18 if premium else 12)
            fixes.append("Boosted primary element animation")
        softened = [el for el in spec.secondary if el.is_beat]
        for element in softened:
            beats = _restyle(beats, element.element_id, EntryAnimation.FADE_IN, 15 if premium else 10)
        if softened:
            fixes.append("Reduced secondary element prominence")

    if TOO_MANY_SECONDARY in spec.issues:
        # Scene images carry no animation, so only overflow beats can be demoted
        demoted = [el for el in spec.overflow if el.is_beat]
        for element in demoted:
            beats = _restyle(beats, element.element_id, EntryAnimation.FADE_IN, 20, delay=DEMOTION_DELAY)
        if demoted:
            fixes.append("Demoted excess secondary elements to ambient")

    if not fixes:
        return scene, []
    return scene.model_copy(update={"beats": beats}), fixes


def validate_video_hierarchy(scenes: list[Scene]) -> dict[int, list[str]]:
    """Hierarchy issues keyed by scene index."""
    issues: dict[int, list[str]] = {}
    for index, scene in enumerate(scenes):
        spec = analyze_hierarchy(scene)
        if not spec.is_valid:
            issues[index] = spec.issues
    return issues


def auto_fix_video_hierarchy(scenes: list[Scene], style: VideoStyle) -> tuple[list[Scene], int]:
    """Enforce hierarchy on every scene once. Returns the scenes and the fix count."""
    fixed_scenes = []
    total = 0
    for scene in scenes:
        fixed, fixes = enforce_hierarchy(scene, style)
        fixed_scenes.append(fixed)
        total += len(fixes)
    return fixed_scenes, total
