"""Tests for image presentation patterns."""

import pytest

from video_brain.models import (
    ImagePatternId,
    ImageRole,
    LayoutPosition,
    SceneImage,
    SceneType,
    VideoStyle,
)
from video_brain.visual.image_patterns import (
    PatternSelectionContext,
    adapt_pattern_for_style,
    assign_image_patterns,
    get_pattern,
    get_patterns_for_role,
    mirror_pattern,
    select_pattern,
)

PREMIUM = VideoStyle.PREMIUM_SAAS
SOCIAL = VideoStyle.SOCIAL_SHORT


def context(role, scene_type=SceneType.SOLUTION, has_text=False, image_count=1, style=PREMIUM):
    return PatternSelectionContext(
        image_role=role,
        scene_type=scene_type,
        has_text=has_text,
        image_count=image_count,
        style=style,
    )


class TestSelectPattern:
    """Tests for pattern selection rules."""

    @pytest.mark.parametrize(
        "ctx,expected",
        [
            (context(ImageRole.LOGO, image_count=3), ImagePatternId.LOGO_SIGNATURE),
            (context(ImageRole.HERO, image_count=2), ImagePatternId.STACKED_PROOF),
            (context(ImageRole.ILLUSTRATION, SceneType.PROOF, has_text=True), ImagePatternId.SPLIT_LAYOUT),
            (context(ImageRole.PROOF), ImagePatternId.STACKED_PROOF),
            (context(ImageRole.HERO, has_text=True), ImagePatternId.SPLIT_LAYOUT),
            (context(ImageRole.HERO), ImagePatternId.FLOATING_MOCKUP),
            (context(ImageRole.ILLUSTRATION, style=SOCIAL), ImagePatternId.PRODUCT_FOCUS),
            (context(ImageRole.BACKGROUND, style=SOCIAL), ImagePatternId.PRODUCT_FOCUS),
            (context(ImageRole.BACKGROUND), ImagePatternId.FLOATING_MOCKUP),
        ],
    )
    def test_selection(self, ctx, expected):
        """Test rules apply in order: logo, multiple, proof, hero with text, style."""
        assert select_pattern(ctx) == expected


class TestPatternLibrary:
    """Tests for pattern lookup."""

    def test_get_pattern(self):
        """Test patterns are looked up by id."""
        assert get_pattern(ImagePatternId.SPLIT_LAYOUT).name == "Split Layout"

    def test_patterns_for_role(self):
        """Test role filtering uses each pattern's suited roles."""
        assert [p.id for p in get_patterns_for_role(ImageRole.LOGO)] == [ImagePatternId.LOGO_SIGNATURE]
        assert {p.id for p in get_patterns_for_role(ImageRole.PROOF)} == {
            ImagePatternId.FLOATING_MOCKUP,
            ImagePatternId.SPLIT_LAYOUT,
            ImagePatternId.STACKED_PROOF,
        }
        assert get_patterns_for_role(ImageRole.BACKGROUND) == []


class TestAdaptPattern:
    """Tests for style adaptation and mirroring."""

    def test_premium_unchanged(self):
        """Test premium style keeps the library pattern."""
        pattern = get_pattern(ImagePatternId.PRODUCT_FOCUS)
        assert adapt_pattern_for_style(pattern, PREMIUM) is pattern

    def test_social_timing(self):
        """Test social entries and exits are quicker."""
        adapted = adapt_pattern_for_style(get_pattern(ImagePatternId.SPLIT_LAYOUT), SOCIAL)
        assert adapted.motion.entry.duration == 15
        assert adapted.motion.entry.delay == 5
        assert adapted.motion.exit.duration == 7

    def test_social_hold_intensity(self):
        """Test social holds are stronger."""
        adapted = adapt_pattern_for_style(get_pattern(ImagePatternId.FLOATING_MOCKUP), SOCIAL)
        assert adapted.motion.hold.intensity == pytest.approx(0.0195)

    def test_mirror_split_layout(self):
        """Test mirroring flips side, offset and slide direction."""
        mirrored = mirror_pattern(get_pattern(ImagePatternId.SPLIT_LAYOUT))
        assert mirrored.layout.position.horizontal == LayoutPosition.LEFT
        assert mirrored.layout.position.offset_x == 40
        assert mirrored.motion.entry.entry_type == "slide_right"

    def test_mirror_twice_is_identity(self):
        """Test mirroring is its own inverse."""
        pattern = get_pattern(ImagePatternId.SPLIT_LAYOUT)
        assert mirror_pattern(mirror_pattern(pattern)) == pattern

    def test_mirror_centered_pattern(self):
        """Test centered patterns stay centered."""
        mirrored = mirror_pattern(get_pattern(ImagePatternId.STACKED_PROOF))
        assert mirrored.layout.position.horizontal == LayoutPosition.CENTER
        assert mirrored.motion.entry.entry_type == "fade"


class TestAssignPatterns:
    """Tests for assigning patterns to scene images."""

    def test_scene_without_images(self, make_scene):
        """Test scenes without images are returned as-is."""
        scene = make_scene()
        assert assign_image_patterns(scene, PREMIUM) is scene

    def test_hero_with_text(self, make_scene):
        """Test a hero next to text is split."""
        scene = make_scene(images=[SceneImage(image_id="app", role=ImageRole.HERO)])
        assigned = assign_image_patterns(scene, PREMIUM)
        assert assigned.images[0].pattern == ImagePatternId.SPLIT_LAYOUT

    def test_logo_and_screenshot(self, make_scene):
        """Test logos keep their signature while other images stack."""
        images = [
            SceneImage(image_id="logo", role=ImageRole.LOGO),
            SceneImage(image_id="app", role=ImageRole.HERO),
        ]
        assigned = assign_image_patterns(make_scene(images=images), SOCIAL)
        assert [img.pattern for img in assigned.images] == [
            ImagePatternId.LOGO_SIGNATURE,
            ImagePatternId.STACKED_PROOF,
        ]
