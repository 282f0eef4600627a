"""
Palette and depth system.

One locked palette per video: a primary color, a neutral triplet, an
optional accent, derived text colors and a depth layer (gradient, texture,
shadow). The palette is applied to every scene and conformance is reported,
never silently corrected.
"""

import re
from typing import Optional

from ..models import (
    BackgroundType,
    ColorSet,
    DepthLayer,
    GradientSpec,
    NeutralColors,
    Scene,
    ShadowSpec,
    TextColors,
    Texture,
    TextureSpec,
    VideoPalette,
    VideoStyle,
)
from ..profiles import DEFAULT_TABLES, ProfileTables

HEX_COLOR = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)

DEFAULT_ANGLE = 135
ANGLE_STEP = 15
ANGLE_SPREAD = 45

# Brand colors at least this bright sit on a dark base
LIGHT_COLOR_LUMINANCE = 0.18


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse a ``#rrggbb`` color.

    Raises:
        ValueError: If the string is not a six-digit hex color.
    """
    match = HEX_COLOR.match(color.strip())
    if not match:
        raise ValueError(f"Not a hex color: {color!r}")
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def relative_luminance(color: str) -> float:
    """WCAG relative luminance of a hex color, 0 (black) to 1 (white)."""

    def channel(value: int) -> float:
        c = value / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = hex_to_rgb(color)
    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def generate_palette_from_color(primary_color: str, style: VideoStyle) -> VideoPalette:
    """Derive a full palette from a single brand color.

    Bright brand colors get a dark neutral base with light text; dark brand
    colors get a light base with dark text.
    """
    dark_theme = relative_luminance(primary_color) >= LIGHT_COLOR_LUMINANCE

    if dark_theme:
        neutral = NeutralColors(dark="#0f0f14", light="#fafafa", mid="#27272a")
        text = TextColors(
            primary="#ffffff",
            secondary="rgba(255, 255, 255, 0.7)",
            muted="rgba(255, 255, 255, 0.4)",
        )
        gradient = ["#0f0f14", "#1a1a2e"]
        shadow = ShadowSpec(color="#000000", blur=40, opacity=0.3)
    else:
        neutral = NeutralColors(dark="#18181b", light="#fafafa", mid="#e4e4e7")
        text = TextColors(
            primary="#18181b",
            secondary="rgba(24, 24, 27, 0.7)",
            muted="rgba(24, 24, 27, 0.4)",
        )
        gradient = ["#fafafa", "#f4f4f5"]
        shadow = ShadowSpec(color="#18181b", blur=40, opacity=0.08)

    return VideoPalette(
        name="brand",
        colors=ColorSet(primary=primary_color.lower(), neutral=neutral, text=text),
        depth=DepthLayer(
            gradient=GradientSpec(gradient_type="linear", colors=gradient, angle=DEFAULT_ANGLE),
            texture=TextureSpec(
                texture_type=Texture.GRAIN,
                opacity=0.06 if style == VideoStyle.SOCIAL_SHORT else 0.04,
            ),
            shadow=shadow,
        ),
        style=style,
    )


def select_palette(
    style: VideoStyle,
    industry: Optional[str] = None,
    mood: Optional[str] = None,
    brand_color: Optional[str] = None,
    tables: ProfileTables = DEFAULT_TABLES,
) -> VideoPalette:
    """Pick a preset palette for the context, or derive one from a brand color."""
    if brand_color:
        return generate_palette_from_color(brand_color, style)

    if style == VideoStyle.SOCIAL_SHORT:
        return tables.palettes["social_vibrant"]

    if industry in ("tech", "developer"):
        return tables.palettes["tech_minimal"]

    if mood == "warm" or industry == "consulting":
        return tables.palettes["warm_trust"]

    if mood in ("light", "clean"):
        return tables.palettes["premium_light"]

    return tables.palettes["premium_dark"]


def palette_color_set(palette: VideoPalette) -> set[str]:
    """Every color a background may use under this palette, lowercased."""
    colors = palette.colors
    declared = [
        colors.primary,
        colors.neutral.dark,
        colors.neutral.mid,
        colors.neutral.light,
        *palette.depth.gradient.colors,
    ]
    if colors.accent:
        declared.append(colors.accent)
    return {c.lower() for c in declared}


# ============================================================================
# PALETTE APPLICATION
# ============================================================================


def apply_palette_to_background(scene: Scene, palette: VideoPalette, angle_offset: int = 0) -> Scene:
    """Rewrite a scene's background and text colors from the palette."""
    gradient = palette.depth.gradient
    background = scene.background.model_copy(
        update={
            "bg_type": BackgroundType.GRADIENT if gradient.gradient_type == "linear" else BackgroundType.RADIAL,
            "colors": list(gradient.colors),
            "angle": (gradient.angle or DEFAULT_ANGLE) + angle_offset,
            "texture": palette.depth.texture.texture_type,
            "texture_opacity": palette.depth.texture.opacity,
        }
    )
    typography = scene.typography.model_copy(
        update={
            "primary_color": palette.colors.text.primary,
            "secondary_color": palette.colors.text.secondary,
        }
    )
    return scene.model_copy(update={"background": background, "typography": typography})


def apply_palette_to_video(scenes: list[Scene], palette: VideoPalette) -> list[Scene]:
    """Apply the palette to every scene, varying the gradient angle per scene."""
    return [
        apply_palette_to_background(scene, palette, angle_offset=(index * ANGLE_STEP) % ANGLE_SPREAD)
        for index, scene in enumerate(scenes)
    ]


def validate_palette_consistency(scenes: list[Scene], palette: VideoPalette) -> list[str]:
    """Report scenes whose colors stray from the palette.

    Returns:
        Issue strings; empty when every scene conforms.
    """
    allowed = palette_color_set(palette)
    issues: list[str] = []

    for index, scene in enumerate(scenes):
        stray = [c for c in scene.background.colors if c.lower() not in allowed]
        if stray:
            issues.append(f"Scene {index}: Background colors don't match palette ({', '.join(stray)})")
        if scene.typography.primary_color != palette.colors.text.primary:
            issues.append(f"Scene {index}: Primary text color doesn't match palette")
        if scene.typography.secondary_color != palette.colors.text.secondary:
            issues.append(f"Scene {index}: Secondary text color doesn't match palette")

    return issues


# ============================================================================
# CSS HELPERS
# ============================================================================


def gradient_css(palette: VideoPalette) -> str:
    gradient = palette.depth.gradient
    first, second = gradient.colors[0], gradient.colors[1]
    if gradient.gradient_type == "linear":
        return f"linear-gradient({gradient.angle or DEFAULT_ANGLE}deg, {first}, {second})"
    return f"radial-gradient(ellipse at center, {first}, {second})"


def depth_shadow_css(palette: VideoPalette) -> str:
    shadow = palette.depth.shadow
    r, g, b = hex_to_rgb(shadow.color)
    return f"0 {shadow.blur / 2:g}px {shadow.blur}px rgba({r}, {g}, {b}, {shadow.opacity})"
