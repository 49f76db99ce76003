"""Anchor positions and zoom/pan curves for title elements."""

from __future__ import annotations

from domain.title import (
    INVALID_POSITION_CODE,
    OriginX,
    OriginY,
    RelativePosition,
    RenderValidationError,
    ResolvedAnchor,
    TitlePosition,
    ZoomDirection,
)

POSITION_MARGIN = 0.05
PAN_BASE_SCALE = 1.3
PAN_RANGE_PIXELS = 1000.0

TOP_POSITIONS = ("top", "top-left", "top-right")
BOTTOM_POSITIONS = ("bottom", "bottom-left", "bottom-right")
LEFT_POSITIONS = ("left", "top-left", "bottom-left", "center-left")
RIGHT_POSITIONS = ("right", "top-right", "bottom-right", "center-right")


def resolve_position(position: TitlePosition, width: int, height: int) -> ResolvedAnchor:
    """Resolve a position keyword or relative position to a pixel anchor."""
    if isinstance(position, RelativePosition):
        left = width / 2.0
        top = height / 2.0
        origin_x = OriginX.CENTER
        origin_y = OriginY.CENTER
        if position.x is not None:
            origin_x = position.origin_x
            left = width * position.x
        if position.y is not None:
            origin_y = position.origin_y
            top = height * position.y
        return ResolvedAnchor(left=left, top=top, origin_x=origin_x, origin_y=origin_y)

    if not isinstance(position, str):
        raise RenderValidationError(
            INVALID_POSITION_CODE, f"invalid position: {position!r}"
        )

    origin_x = OriginX.CENTER
    origin_y = OriginY.CENTER
    left = width / 2.0
    top = height / 2.0

    if position in TOP_POSITIONS:
        origin_y = OriginY.TOP
        top = height * POSITION_MARGIN
    elif position in BOTTOM_POSITIONS:
        origin_y = OriginY.BOTTOM
        top = height * (1 - POSITION_MARGIN)

    if position in LEFT_POSITIONS:
        origin_x = OriginX.LEFT
        left = width * POSITION_MARGIN
    elif position in RIGHT_POSITIONS:
        origin_x = OriginX.RIGHT
        left = width * (1 - POSITION_MARGIN)

    return ResolvedAnchor(left=left, top=top, origin_x=origin_x, origin_y=origin_y)


def resolve_zoom_scale(
    progress: float, zoom_direction: ZoomDirection, zoom_amount: float
) -> float:
    """Scale factor for a zoom direction at a progress value."""
    if zoom_direction in (ZoomDirection.LEFT, ZoomDirection.RIGHT):
        return PAN_BASE_SCALE + zoom_amount
    if zoom_direction == ZoomDirection.IN:
        return 1.0 + zoom_amount * progress
    if zoom_direction == ZoomDirection.OUT:
        return 1.0 + zoom_amount * (1.0 - progress)
    return 1.0


def resolve_zoom_translation(
    progress: float, zoom_direction: ZoomDirection, zoom_amount: float
) -> float:
    """Pixel offset for a horizontal pan at a progress value."""
    pan_range = zoom_amount * PAN_RANGE_PIXELS
    if zoom_direction == ZoomDirection.RIGHT:
        return progress * pan_range - pan_range / 2.0
    if zoom_direction == ZoomDirection.LEFT:
        return -(progress * pan_range - pan_range / 2.0)
    return 0.0
