"""Outline and fill layer composition for title text."""

from __future__ import annotations

from typing import Protocol, Tuple

from domain.title import (
    LayerStroke,
    LayerTransform,
    OriginX,
    OriginY,
    ResolvedAnchor,
    TextAlign,
    TextLayer,
    TitleEffect,
    TitleFont,
)
from service.title_effects import resolve_effect_profile


class LayoutSurface(Protocol):
    """Text measurement plus an ordered layer sink.

    Layers added later paint over layers added earlier.
    """

    def measure_text_height(self, text: str, font: TitleFont, width: float) -> float:
        ...

    def add_layer(self, layer: TextLayer) -> None:
        ...


def text_align_for_origin(origin_x: OriginX) -> TextAlign:
    """Derive text alignment from the horizontal origin."""
    if origin_x == OriginX.LEFT:
        return TextAlign.LEFT
    if origin_x == OriginX.RIGHT:
        return TextAlign.RIGHT
    return TextAlign.CENTER


def compute_center_y(top: float, origin_y: OriginY, text_height: float) -> float:
    """Vertical center of an unstroked text block anchored at top/center/bottom."""
    if origin_y == OriginY.TOP:
        return top + text_height / 2.0
    if origin_y == OriginY.BOTTOM:
        return top - text_height / 2.0
    return top


def compose_title_layers(
    surface: LayoutSurface,
    text: str,
    text_color: str,
    font: TitleFont,
    text_align: TextAlign,
    box_width: float,
    anchor: ResolvedAnchor,
    scale: float,
    opacity: float,
    effect: TitleEffect,
) -> Tuple[TextLayer, ...]:
    """Add the outline layer (when configured) and the fill layer to a surface.

    Both layers are centered vertically on the unstroked text block, so the
    outline width never moves the edge the anchor asked for.
    """
    profile = resolve_effect_profile(effect.style, effect.width, effect.color, text_color)
    text_height = surface.measure_text_height(text, font, box_width)
    center_y = compute_center_y(anchor.top, anchor.origin_y, text_height)
    transform = LayerTransform(
        left=anchor.left,
        top=center_y,
        origin_x=anchor.origin_x,
        origin_y=OriginY.CENTER,
        scale_x=scale,
        scale_y=scale,
        opacity=opacity,
    )

    layers: list[TextLayer] = []
    if effect.width > 0 and effect.color:
        layers.append(
            TextLayer(
                text=text,
                fill=effect.color,
                font=font,
                text_align=text_align,
                width=box_width,
                transform=transform,
                stroke=LayerStroke(color=effect.color, width=profile.stroke_width),
                shadow=profile.shadow,
            )
        )
    layers.append(
        TextLayer(
            text=text,
            fill=text_color,
            font=font,
            text_align=text_align,
            width=box_width,
            transform=transform,
        )
    )

    for layer in layers:
        surface.add_layer(layer)
    return tuple(layers)
