"""Tests for outline, shadow and glow resolution."""

from __future__ import annotations

import pytest

from domain.title import OutlineStyle
from service.title_effects import resolve_effect_profile


@pytest.mark.parametrize("outline_style", list(OutlineStyle) + ["unknown"])
@pytest.mark.parametrize("outline_color", [None, "#123456"])
@pytest.mark.parametrize("text_color", [None, "#ff0000"])
def test_zero_width_disables_effect(
    outline_style: OutlineStyle | str, outline_color: str | None, text_color: str | None
) -> None:
    """A zero width yields no stroke and no shadow for every style."""
    profile = resolve_effect_profile(outline_style, 0, outline_color, text_color)

    assert profile.stroke_width == 0
    assert profile.shadow is None


def test_outline_is_stroke_only() -> None:
    """Outline keeps the full width as stroke."""
    profile = resolve_effect_profile(OutlineStyle.OUTLINE, 6, "#000000", "#ffffff")

    assert profile.stroke_width == 6
    assert profile.shadow is None


def test_shadow_clamps_stroke_and_offsets_by_width() -> None:
    """Shadow clamps the stroke to 2 and offsets the blurred copy by the width."""
    profile = resolve_effect_profile(OutlineStyle.SHADOW, 10, "#222222")

    assert profile.stroke_width == 2
    assert profile.shadow is not None
    assert profile.shadow.color == "#222222"
    assert profile.shadow.blur == pytest.approx(15)
    assert profile.shadow.offset_x == 10
    assert profile.shadow.offset_y == 10


def test_shadow_defaults_to_black() -> None:
    """Shadow without an outline color falls back to black."""
    profile = resolve_effect_profile(OutlineStyle.SHADOW, 1, None, "#ff0000")

    assert profile.stroke_width == 1
    assert profile.shadow is not None
    assert profile.shadow.color == "#000000"


def test_glow_falls_back_to_text_color() -> None:
    """Glow uses the text color when no outline color is set."""
    profile = resolve_effect_profile(OutlineStyle.GLOW, 10, None, "#ff0000")

    assert profile.stroke_width == 1.5
    assert profile.shadow is not None
    assert profile.shadow.color == "#ff0000"
    assert profile.shadow.blur == pytest.approx(30)
    assert profile.shadow.offset_x == 0
    assert profile.shadow.offset_y == 0


def test_glow_prefers_outline_color_then_white() -> None:
    """Glow prefers the outline color and ends with white."""
    with_outline = resolve_effect_profile(OutlineStyle.GLOW, 1, "#00ff00", "#ff0000")
    bare = resolve_effect_profile(OutlineStyle.GLOW, 1)

    assert with_outline.shadow is not None and with_outline.shadow.color == "#00ff00"
    assert bare.shadow is not None and bare.shadow.color == "#ffffff"
    assert bare.stroke_width == 1


def test_style_keywords_match_enum_members() -> None:
    """Plain keyword strings resolve like the enum members."""
    assert resolve_effect_profile("shadow", 4) == resolve_effect_profile(
        OutlineStyle.SHADOW, 4
    )


def test_unknown_style_falls_back_to_stroke() -> None:
    """An unrecognized style keeps the width as a plain stroke."""
    profile = resolve_effect_profile("sparkle", 3)

    assert profile.stroke_width == 3
    assert profile.shadow is None
