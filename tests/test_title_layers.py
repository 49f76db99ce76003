"""Tests for outline and fill layer composition."""

from __future__ import annotations

from typing import Tuple

import pytest

from domain.title import (
    OriginX,
    OriginY,
    OutlineStyle,
    ResolvedAnchor,
    TextAlign,
    TextLayer,
    TitleEffect,
    TitleFont,
)
from service.title_layers import (
    compose_title_layers,
    compute_center_y,
    text_align_for_origin,
)
from title_surfaces import RecordingSurface

FONT = TitleFont(family="sans-serif", size=48)


def compose(
    surface: RecordingSurface,
    effect: TitleEffect,
    origin_y: OriginY = OriginY.CENTER,
    origin_x: OriginX = OriginX.CENTER,
) -> Tuple[TextLayer, ...]:
    return compose_title_layers(
        surface,
        text="Hello",
        text_color="#ffffff",
        font=FONT,
        text_align=text_align_for_origin(origin_x),
        box_width=640.0,
        anchor=ResolvedAnchor(left=320.0, top=100.0, origin_x=origin_x, origin_y=origin_y),
        scale=1.25,
        opacity=0.5,
        effect=effect,
    )


@pytest.mark.parametrize(
    ("origin_x", "expected"),
    [
        (OriginX.LEFT, TextAlign.LEFT),
        (OriginX.CENTER, TextAlign.CENTER),
        (OriginX.RIGHT, TextAlign.RIGHT),
    ],
)
def test_text_align_follows_origin(origin_x: OriginX, expected: TextAlign) -> None:
    """Alignment is derived from the horizontal origin."""
    assert text_align_for_origin(origin_x) == expected


@pytest.mark.parametrize(
    ("origin_y", "expected"),
    [(OriginY.TOP, 120.0), (OriginY.CENTER, 100.0), (OriginY.BOTTOM, 80.0)],
)
def test_center_y_from_origin(origin_y: OriginY, expected: float) -> None:
    """The vertical center keeps the requested edge in place."""
    assert compute_center_y(100.0, origin_y, 40.0) == expected


@pytest.mark.parametrize("outline_style", list(OutlineStyle))
def test_outline_and_fill_layers(
    surface: RecordingSurface, outline_style: OutlineStyle
) -> None:
    """A colored outline adds a layer beneath the fill for every style."""
    effect = TitleEffect(color="#000000", width=4, style=outline_style)

    layers = compose(surface, effect)

    assert len(layers) == 2
    assert surface.layers == list(layers)
    outline_layer, fill_layer = layers
    assert outline_layer.fill == "#000000"
    assert outline_layer.stroke is not None
    assert outline_layer.stroke.color == "#000000"
    assert outline_layer.stroke.line_join == "round"
    assert fill_layer.fill == "#ffffff"
    assert fill_layer.stroke is None
    assert fill_layer.shadow is None


def test_outline_layer_uses_resolved_profile(surface: RecordingSurface) -> None:
    """The outline layer carries the clamped stroke and the shadow."""
    effect = TitleEffect(color="#330000", width=10, style=OutlineStyle.SHADOW)

    outline_layer, _ = compose(surface, effect)

    assert outline_layer.stroke is not None
    assert outline_layer.stroke.width == 2
    assert outline_layer.shadow is not None
    assert outline_layer.shadow.color == "#330000"
    assert outline_layer.shadow.offset_x == 10


@pytest.mark.parametrize(
    "effect",
    [
        TitleEffect(),
        TitleEffect(color="#000000", width=0),
        TitleEffect(color=None, width=5, style=OutlineStyle.GLOW),
    ],
)
def test_single_fill_layer_without_outline(
    surface: RecordingSurface, effect: TitleEffect
) -> None:
    """Without both a width and a color only the fill layer is emitted."""
    layers = compose(surface, effect)

    assert len(layers) == 1
    assert layers[0].fill == "#ffffff"
    assert layers[0].stroke is None


@pytest.mark.parametrize("origin_y", list(OriginY))
def test_layers_share_transform(surface: RecordingSurface, origin_y: OriginY) -> None:
    """Both layers use the same centered transform for any requested origin."""
    effect = TitleEffect(color="#000000", width=8, style=OutlineStyle.OUTLINE)

    outline_layer, fill_layer = compose(surface, effect, origin_y=origin_y)

    assert outline_layer.transform == fill_layer.transform
    assert fill_layer.transform.origin_y == OriginY.CENTER
    assert fill_layer.transform.top == compute_center_y(100.0, origin_y, 40.0)
    assert fill_layer.transform.left == 320.0
    assert fill_layer.transform.scale_x == 1.25
    assert fill_layer.transform.scale_y == 1.25
    assert fill_layer.transform.opacity == 0.5


def test_origin_x_passes_through(surface: RecordingSurface) -> None:
    """The horizontal origin and alignment are kept."""
    layers = compose(surface, TitleEffect(), origin_x=OriginX.RIGHT)

    assert layers[0].transform.origin_x == OriginX.RIGHT
    assert layers[0].text_align == TextAlign.RIGHT


def test_measures_unstroked_text_once(surface: RecordingSurface) -> None:
    """Height is measured for the text, font and box width."""
    compose(surface, TitleEffect(color="#000000", width=20))

    assert surface.measure_calls == [("Hello", FONT, 640.0)]
