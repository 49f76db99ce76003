"""Tests for anchor resolution and zoom/pan curves."""

from __future__ import annotations

import pytest

from domain.title import (
    OriginX,
    OriginY,
    RelativePosition,
    RenderValidationError,
    ZoomDirection,
)
from service.title_motion import (
    resolve_position,
    resolve_zoom_scale,
    resolve_zoom_translation,
)


@pytest.mark.parametrize(
    ("position", "left", "top", "origin_x", "origin_y"),
    [
        ("center", 400.0, 300.0, OriginX.CENTER, OriginY.CENTER),
        ("top", 400.0, 30.0, OriginX.CENTER, OriginY.TOP),
        ("bottom", 400.0, 570.0, OriginX.CENTER, OriginY.BOTTOM),
        ("top-left", 40.0, 30.0, OriginX.LEFT, OriginY.TOP),
        ("top-right", 760.0, 30.0, OriginX.RIGHT, OriginY.TOP),
        ("bottom-left", 40.0, 570.0, OriginX.LEFT, OriginY.BOTTOM),
        ("bottom-right", 760.0, 570.0, OriginX.RIGHT, OriginY.BOTTOM),
        ("center-left", 40.0, 300.0, OriginX.LEFT, OriginY.CENTER),
        ("center-right", 760.0, 300.0, OriginX.RIGHT, OriginY.CENTER),
    ],
)
def test_position_keywords(
    position: str, left: float, top: float, origin_x: OriginX, origin_y: OriginY
) -> None:
    """Keywords anchor to the frame edges with a 5% margin."""
    anchor = resolve_position(position, 800, 600)

    assert anchor.left == pytest.approx(left)
    assert anchor.top == pytest.approx(top)
    assert anchor.origin_x == origin_x
    assert anchor.origin_y == origin_y


def test_relative_position_defaults_to_top_left_origin() -> None:
    """Relative positions scale by the frame and default to a top-left origin."""
    anchor = resolve_position(RelativePosition(x=0.25, y=0.75), 800, 600)

    assert anchor.left == pytest.approx(200)
    assert anchor.top == pytest.approx(450)
    assert anchor.origin_x == OriginX.LEFT
    assert anchor.origin_y == OriginY.TOP


def test_relative_position_with_only_y_keeps_horizontal_center() -> None:
    """A missing x keeps the centered horizontal anchor."""
    anchor = resolve_position(
        RelativePosition(y=0.5, origin_y=OriginY.CENTER), 800, 600
    )

    assert anchor.left == pytest.approx(400)
    assert anchor.origin_x == OriginX.CENTER
    assert anchor.origin_y == OriginY.CENTER


def test_invalid_position_type_is_rejected() -> None:
    """Non-keyword, non-relative positions raise a validation error."""
    with pytest.raises(RenderValidationError):
        resolve_position(42, 800, 600)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("direction", "progress", "expected"),
    [
        (ZoomDirection.IN, 0.0, 1.0),
        (ZoomDirection.IN, 1.0, 1.2),
        (ZoomDirection.OUT, 0.0, 1.2),
        (ZoomDirection.OUT, 1.0, 1.0),
        (ZoomDirection.LEFT, 0.3, 1.5),
        (ZoomDirection.RIGHT, 0.9, 1.5),
        (ZoomDirection.NONE, 0.5, 1.0),
    ],
)
def test_zoom_scale(direction: ZoomDirection, progress: float, expected: float) -> None:
    """Zoom scales linearly; pans use a fixed enlargement."""
    assert resolve_zoom_scale(progress, direction, 0.2) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("direction", "progress", "expected"),
    [
        (ZoomDirection.RIGHT, 0.0, -100.0),
        (ZoomDirection.RIGHT, 1.0, 100.0),
        (ZoomDirection.LEFT, 0.0, 100.0),
        (ZoomDirection.LEFT, 0.75, -50.0),
        (ZoomDirection.IN, 0.5, 0.0),
        (ZoomDirection.NONE, 0.5, 0.0),
    ],
)
def test_zoom_translation(
    direction: ZoomDirection, progress: float, expected: float
) -> None:
    """Pans sweep across a range proportional to the zoom amount."""
    assert resolve_zoom_translation(progress, direction, 0.2) == pytest.approx(expected)
