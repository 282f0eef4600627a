"""Tests for palette selection, application and validation."""

import pytest

from video_brain.models import BackgroundType, SceneType, Texture, VideoStyle
from video_brain.profiles import PRESET_PALETTES
from video_brain.visual.palette import (
    apply_palette_to_background,
    apply_palette_to_video,
    depth_shadow_css,
    generate_palette_from_color,
    gradient_css,
    hex_to_rgb,
    palette_color_set,
    relative_luminance,
    select_palette,
    validate_palette_consistency,
)

PREMIUM = VideoStyle.PREMIUM_SAAS
SOCIAL = VideoStyle.SOCIAL_SHORT


class TestColorHelpers:
    """Tests for hex parsing and luminance."""

    def test_hex_to_rgb(self):
        """Test six-digit colors parse with or without a hash."""
        assert hex_to_rgb("#6366f1") == (99, 102, 241)
        assert hex_to_rgb("FFFFFF") == (255, 255, 255)

    @pytest.mark.parametrize("value", ["#fff", "red", "#12345g", ""])
    def test_invalid_hex(self, value):
        """Test malformed colors raise ValueError."""
        with pytest.raises(ValueError):
            hex_to_rgb(value)

    def test_luminance_extremes(self):
        """Test black and white sit at the ends of the scale."""
        assert relative_luminance("#000000") == 0
        assert relative_luminance("#ffffff") == pytest.approx(1.0)


class TestSelectPalette:
    """Tests for palette selection."""

    def test_social_always_vibrant(self):
        """Test social videos use the vibrant palette regardless of industry."""
        assert select_palette(SOCIAL, industry="tech").name == "social_vibrant"

    @pytest.mark.parametrize(
        "industry,mood,expected",
        [
            ("tech", None, "tech_minimal"),
            ("developer", "warm", "tech_minimal"),
            ("consulting", None, "warm_trust"),
            (None, "warm", "warm_trust"),
            (None, "light", "premium_light"),
            (None, "clean", "premium_light"),
            (None, None, "premium_dark"),
            ("retail", "bold", "premium_dark"),
        ],
    )
    def test_premium_selection(self, industry, mood, expected):
        """Test premium selection by industry and mood."""
        assert select_palette(PREMIUM, industry=industry, mood=mood).name == expected

    def test_brand_color_wins(self):
        """Test a brand color derives a palette even for social videos."""
        palette = select_palette(SOCIAL, brand_color="#FACC15")
        assert palette.name == "brand"
        assert palette.colors.primary == "#facc15"
        assert palette.depth.texture.opacity == 0.06


class TestBrandPalette:
    """Tests for palettes derived from a brand color."""

    def test_bright_color_gets_dark_base(self):
        """Test a bright brand color sits on a dark base with white text."""
        palette = generate_palette_from_color("#facc15", PREMIUM)
        assert palette.colors.text.primary == "#ffffff"
        assert palette.depth.gradient.colors == ["#0f0f14", "#1a1a2e"]
        assert palette.depth.texture.opacity == 0.04

    def test_dark_color_gets_light_base(self):
        """Test a dark brand color sits on a light base with dark text."""
        palette = generate_palette_from_color("#1e3a8a", PREMIUM)
        assert palette.colors.text.primary == "#18181b"
        assert palette.depth.gradient.colors == ["#fafafa", "#f4f4f5"]

    def test_primary_in_color_set(self):
        """Test the brand color itself is an allowed background color."""
        palette = generate_palette_from_color("#6366F1", PREMIUM)
        assert "#6366f1" in palette_color_set(palette)


class TestApplyPalette:
    """Tests for applying a palette to scenes."""

    def test_backgrounds_within_palette(self, make_scene):
        """Test every applied background uses only palette colors."""
        palette = PRESET_PALETTES["warm_trust"]
        scenes = [make_scene(colors=["#123456", "#abcdef"]) for _ in range(5)]
        applied = apply_palette_to_video(scenes, palette)

        allowed = palette_color_set(palette)
        for scene in applied:
            assert set(scene.background.colors) <= allowed
        assert validate_palette_consistency(applied, palette) == []

    def test_angles_vary_per_scene(self, make_scene):
        """Test gradient angles cycle through three offsets."""
        scenes = [make_scene() for _ in range(4)]
        applied = apply_palette_to_video(scenes, PRESET_PALETTES["premium_dark"])
        assert [s.background.angle for s in applied] == [135, 150, 165, 135]

    def test_texture_and_typography(self, make_scene):
        """Test texture and text colors come from the palette."""
        palette = PRESET_PALETTES["tech_minimal"]
        scene = apply_palette_to_background(make_scene(texture=Texture.NONE), palette)
        assert scene.background.bg_type == BackgroundType.GRADIENT
        assert scene.background.texture == Texture.DOTS
        assert scene.background.texture_opacity == 0.03
        assert scene.typography.primary_color == "#ffffff"
        assert scene.typography.secondary_color == "rgba(255, 255, 255, 0.65)"

    def test_radial_palette(self, make_scene):
        """Test radial palettes produce radial backgrounds at the default angle."""
        scene = apply_palette_to_background(make_scene(), PRESET_PALETTES["social_vibrant"], angle_offset=15)
        assert scene.background.bg_type == BackgroundType.RADIAL
        assert scene.background.angle == 150

    def test_other_fields_preserved(self, make_scene):
        """Test applying a palette leaves beats and identity alone."""
        scene = make_scene(scene_type=SceneType.PROOF)
        applied = apply_palette_to_background(scene, PRESET_PALETTES["premium_dark"])
        assert applied.beats == scene.beats
        assert applied.scene_type == SceneType.PROOF


class TestPaletteValidation:
    """Tests for palette conformance reporting."""

    def test_stray_background(self, make_scene):
        """Test colors outside the palette are reported, not corrected."""
        scene = make_scene(colors=["#ff0000", "#0f0f14"])
        issues = validate_palette_consistency([scene], PRESET_PALETTES["premium_dark"])
        assert issues == ["Scene 0: Background colors don't match palette (#ff0000)"]
        assert scene.background.colors[0] == "#ff0000"

    def test_text_color_mismatch(self, make_scene):
        """Test text colors are checked against the palette."""
        issues = validate_palette_consistency([make_scene(colors=["#fafafa"])], PRESET_PALETTES["premium_light"])
        assert issues == [
            "Scene 0: Primary text color doesn't match palette",
            "Scene 0: Secondary text color doesn't match palette",
        ]

    def test_case_insensitive(self, make_scene):
        """Test background colors are compared case-insensitively."""
        scene = make_scene(colors=["#0F0F14", "#1A1A2E"])
        assert validate_palette_consistency([scene], PRESET_PALETTES["premium_dark"]) == []


class TestCss:
    """Tests for CSS helpers."""

    def test_linear_gradient(self):
        """Test linear gradients render with their angle."""
        assert gradient_css(PRESET_PALETTES["premium_dark"]) == "linear-gradient(135deg, #0f0f14, #1a1a2e)"

    def test_radial_gradient(self):
        """Test radial gradients render as a centered ellipse."""
        assert gradient_css(PRESET_PALETTES["social_vibrant"]) == "radial-gradient(ellipse at center, #1c1917, #0c0a09)"

    def test_depth_shadow(self):
        """Test shadows render as offset, blur and rgba."""
        assert depth_shadow_css(PRESET_PALETTES["premium_dark"]) == "0 20px 40px rgba(0, 0, 0, 0.3)"
