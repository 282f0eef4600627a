"""Image presentation patterns: selection, style adaptation and mirroring."""

from dataclasses import dataclass

from ..models import (
    ImagePattern,
    ImagePatternId,
    ImageRole,
    LayoutPosition,
    Scene,
    SceneType,
    VideoStyle,
)
from ..profiles import DEFAULT_TABLES, ProfileTables

_MIRRORED_ENTRIES = {"slide_left": "slide_right", "slide_right": "slide_left"}


@dataclass
class PatternSelectionContext:
    image_role: ImageRole
    scene_type: SceneType
    has_text: bool
    image_count: int
    style: VideoStyle


def select_pattern(context: PatternSelectionContext) -> ImagePatternId:
    """Choose the presentation pattern for one image."""
    role = context.image_role

    if role == ImageRole.LOGO:
        return ImagePatternId.LOGO_SIGNATURE

    if context.image_count > 1:
        return ImagePatternId.STACKED_PROOF

    if context.scene_type == SceneType.PROOF or role == ImageRole.PROOF:
        return ImagePatternId.SPLIT_LAYOUT if context.has_text else ImagePatternId.STACKED_PROOF

    if role == ImageRole.HERO and context.has_text:
        return ImagePatternId.SPLIT_LAYOUT

    if context.style == VideoStyle.PREMIUM_SAAS and role in (ImageRole.HERO, ImageRole.ILLUSTRATION):
        return ImagePatternId.FLOATING_MOCKUP

    if context.style == VideoStyle.SOCIAL_SHORT:
        return ImagePatternId.PRODUCT_FOCUS

    return ImagePatternId.FLOATING_MOCKUP


def get_pattern(pattern_id: ImagePatternId, tables: ProfileTables = DEFAULT_TABLES) -> ImagePattern:
    return tables.image_patterns[pattern_id]


def get_patterns_for_role(role: ImageRole, tables: ProfileTables = DEFAULT_TABLES) -> list[ImagePattern]:
    return [p for p in tables.image_patterns.values() if role in p.suited_for]


def adapt_pattern_for_style(pattern: ImagePattern, style: VideoStyle) -> ImagePattern:
    """Quicker entries and exits with a stronger hold for social video."""
    if style != VideoStyle.SOCIAL_SHORT:
        return pattern

    motion = pattern.motion
    adapted = motion.model_copy(
        update={
            "entry": motion.entry.model_copy(
                update={
                    "duration": round(motion.entry.duration * 0.7),
                    "delay": round(motion.entry.delay * 0.5),
                }
            ),
            "hold": motion.hold.model_copy(update={"intensity": motion.hold.intensity * 1.3}),
            "exit": motion.exit.model_copy(update={"duration": round(motion.exit.duration * 0.7)}),
        }
    )
    return pattern.model_copy(update={"motion": adapted})


def mirror_pattern(pattern: ImagePattern) -> ImagePattern:
    """Flip a pattern horizontally, including its slide direction."""
    position = pattern.layout.position
    if position.horizontal == LayoutPosition.LEFT:
        horizontal = LayoutPosition.RIGHT
    elif position.horizontal == LayoutPosition.RIGHT:
        horizontal = LayoutPosition.LEFT
    else:
        horizontal = LayoutPosition.CENTER

    layout = pattern.layout.model_copy(
        update={"position": position.model_copy(update={"horizontal": horizontal, "offset_x": -position.offset_x})}
    )
    entry = pattern.motion.entry
    motion = pattern.motion.model_copy(
        update={
            "entry": entry.model_copy(
                update={"entry_type": _MIRRORED_ENTRIES.get(entry.entry_type, entry.entry_type)}
            )
        }
    )
    return pattern.model_copy(update={"layout": layout, "motion": motion})


def assign_image_patterns(scene: Scene, style: VideoStyle) -> Scene:
    """Give every image in the scene a presentation pattern."""
    if not scene.images:
        return scene

    has_text = bool(scene.text_beats)
    images = [
        image.model_copy(
            update={
                "pattern": select_pattern(
                    PatternSelectionContext(
                        image_role=image.role,
                        scene_type=scene.scene_type,
                        has_text=has_text,
                        image_count=len(scene.images),
                        style=style,
                    )
                )
            }
        )
        for image in scene.images
    ]
    return scene.model_copy(update={"images": images})
