"""Outline, shadow and glow parameters for title layers."""

from __future__ import annotations

from domain.title import EffectProfile, OutlineStyle, ShadowSpec

SHADOW_MAX_STROKE = 2.0
SHADOW_BLUR_RATIO = 1.5
SHADOW_DEFAULT_COLOR = "#000000"
GLOW_MAX_STROKE = 1.5
GLOW_BLUR_RATIO = 3.0
GLOW_DEFAULT_COLOR = "#ffffff"


def resolve_effect_profile(
    outline_style: OutlineStyle | str,
    outline_width: float,
    outline_color: str | None = None,
    text_color: str | None = None,
) -> EffectProfile:
    """Map an outline style and width to concrete stroke and shadow settings.

    A zero width disables the effect entirely, whatever the style. Shadow
    keeps a thin stroke and casts a blurred copy down and to the right; glow
    keeps an even thinner stroke and blurs a centered copy in the outline
    color, falling back to the text color.
    """
    if outline_width <= 0:
        return EffectProfile(stroke_width=0.0)

    if outline_style == OutlineStyle.OUTLINE:
        return EffectProfile(stroke_width=outline_width)

    if outline_style == OutlineStyle.SHADOW:
        return EffectProfile(
            stroke_width=min(outline_width, SHADOW_MAX_STROKE),
            shadow=ShadowSpec(
                color=outline_color or SHADOW_DEFAULT_COLOR,
                blur=outline_width * SHADOW_BLUR_RATIO,
                offset_x=outline_width,
                offset_y=outline_width,
            ),
        )

    if outline_style == OutlineStyle.GLOW:
        return EffectProfile(
            stroke_width=min(outline_width, GLOW_MAX_STROKE),
            shadow=ShadowSpec(
                color=outline_color or text_color or GLOW_DEFAULT_COLOR,
                blur=outline_width * GLOW_BLUR_RATIO,
                offset_x=0.0,
                offset_y=0.0,
            ),
        )

    return EffectProfile(stroke_width=outline_width)
