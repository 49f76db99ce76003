"""Domain types and parsing for render_title_video."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import math
import re
from typing import Any, Mapping, Tuple, Union

INVALID_COLOR_CODE = "render_title_video.input.invalid_color"
INVALID_CONFIG_CODE = "render_title_video.input.invalid_config"
INVALID_STYLE_CODE = "render_title_video.input.invalid_style"
INVALID_POSITION_CODE = "render_title_video.input.invalid_position"
EMPTY_TEXT_CODE = "render_title_video.input.empty_text"
INPUT_FILE_CODE = "render_title_video.input.file_error"
FONT_LOAD_CODE = "render_title_video.input.fonts_unloadable"
BACKGROUND_IMAGE_CODE = "render_title_video.input.background_image"

HEX_COLOR_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
DEFAULT_TEXT_COLOR = "#ffffff"
DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_ZOOM_AMOUNT = 0.2
FONT_SIZE_RATIO = 0.1


class RenderValidationError(ValueError):
    """Validation error with a stable error code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class TitleStyle(str, Enum):
    """Presentation styles for a title element."""

    NONE = "none"
    FADE_IN = "fade-in"
    WORD_BY_WORD = "word-by-word"
    LETTER_BY_LETTER = "letter-by-letter"


class OutlineStyle(str, Enum):
    """Outline treatments applied beneath the fill layer."""

    OUTLINE = "outline"
    SHADOW = "shadow"
    GLOW = "glow"


class ZoomDirection(str, Enum):
    """Zoom and pan directions."""

    IN = "in"
    OUT = "out"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


class OriginX(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class OriginY(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


POSITION_KEYWORDS = (
    "center",
    "top",
    "bottom",
    "left",
    "right",
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
    "center-left",
    "center-right",
)


@dataclass(frozen=True)
class RelativePosition:
    """Anchor given as fractions of the frame size."""

    x: float | None = None
    y: float | None = None
    origin_x: OriginX = OriginX.LEFT
    origin_y: OriginY = OriginY.TOP

    def __post_init__(self) -> None:
        if self.x is None and self.y is None:
            raise RenderValidationError(
                INVALID_POSITION_CODE, "relative position needs x or y"
            )


TitlePosition = Union[str, RelativePosition]


@dataclass(frozen=True)
class TitleEffect:
    """Optional outline, shadow or glow beneath the title fill."""

    color: str | None = None
    width: float = 0.0
    style: OutlineStyle = OutlineStyle.OUTLINE

    def __post_init__(self) -> None:
        if self.width < 0 or not math.isfinite(self.width):
            raise RenderValidationError(
                INVALID_CONFIG_CODE, "outline width must be a non-negative number"
            )
        if not isinstance(self.style, OutlineStyle):
            raise RenderValidationError(INVALID_STYLE_CODE, "outline style is invalid")


@dataclass(frozen=True)
class TitleRequest:
    """Immutable parameters of one title element."""

    text: str
    text_color: str = DEFAULT_TEXT_COLOR
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float | None = None
    position: TitlePosition = "center"
    zoom_direction: ZoomDirection = ZoomDirection.IN
    zoom_amount: float = DEFAULT_ZOOM_AMOUNT
    style: TitleStyle = TitleStyle.NONE
    animation_duration: float | None = None
    effect: TitleEffect = field(default_factory=TitleEffect)

    def __post_init__(self) -> None:
        if self.font_size is not None and self.font_size <= 0:
            raise RenderValidationError(
                INVALID_CONFIG_CODE, "font_size must be positive"
            )
        if isinstance(self.position, str) and self.position not in POSITION_KEYWORDS:
            raise RenderValidationError(
                INVALID_POSITION_CODE, f"invalid position: {self.position!r}"
            )
        if not isinstance(self.style, TitleStyle):
            raise RenderValidationError(INVALID_STYLE_CODE, "title style is invalid")
        if not isinstance(self.zoom_direction, ZoomDirection):
            raise RenderValidationError(INVALID_STYLE_CODE, "zoom direction is invalid")

    def resolve_font_size(self, width: int, height: int) -> int:
        """Return the explicit font size or one derived from the frame size."""
        if self.font_size:
            return int(round(self.font_size))
        return int(round(min(width, height) * FONT_SIZE_RATIO))


@dataclass(frozen=True)
class RenderConfig:
    """Validated configuration for render_title_video."""

    output_video_file: str
    width: int
    height: int
    duration_seconds: float
    fps: int
    background_rgba: Tuple[int, int, int, int]
    fonts_dir: str
    background_image_path: str | None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise RenderValidationError(
                INVALID_CONFIG_CODE, "width and height must be positive"
            )
        if self.fps <= 0:
            raise RenderValidationError(INVALID_CONFIG_CODE, "fps must be positive")
        if self.duration_seconds <= 0:
            raise RenderValidationError(
                INVALID_CONFIG_CODE, "duration_seconds must be positive"
            )
        if not self.output_video_file.lower().endswith(".mov"):
            raise RenderValidationError(
                INVALID_CONFIG_CODE, "output_video_file must end with .mov"
            )
        if len(self.background_rgba) != 4:
            raise RenderValidationError(INVALID_CONFIG_CODE, "background_rgba is invalid")
        for channel in self.background_rgba:
            if channel < 0 or channel > 255:
                raise RenderValidationError(
                    INVALID_CONFIG_CODE, "background_rgba channel out of range"
                )
        if self.background_image_path is not None and not self.background_image_path.strip():
            raise RenderValidationError(
                INVALID_CONFIG_CODE, "background_image_path must be non-empty"
            )


@dataclass(frozen=True)
class FrameContext:
    """Per-frame timing input."""

    progress: float
    offset_time: float | None = None


@dataclass(frozen=True)
class ResolvedAnchor:
    """Pixel anchor and origin for a title."""

    left: float
    top: float
    origin_x: OriginX
    origin_y: OriginY


@dataclass(frozen=True)
class ShadowSpec:
    color: str
    blur: float
    offset_x: float
    offset_y: float


@dataclass(frozen=True)
class EffectProfile:
    """Concrete stroke and shadow parameters for an outline layer."""

    stroke_width: float
    shadow: ShadowSpec | None = None


@dataclass(frozen=True)
class TitleFont:
    family: str
    size: int


@dataclass(frozen=True)
class LayerStroke:
    color: str
    width: float
    line_join: str = "round"


@dataclass(frozen=True)
class LayerTransform:
    left: float
    top: float
    origin_x: OriginX
    origin_y: OriginY
    scale_x: float
    scale_y: float
    opacity: float


@dataclass(frozen=True)
class TextLayer:
    """One positioned, styled text draw instruction."""

    text: str
    fill: str
    font: TitleFont
    text_align: TextAlign
    width: float
    transform: LayerTransform
    stroke: LayerStroke | None = None
    shadow: ShadowSpec | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize the layer into JSON-compatible values."""
        payload: dict[str, Any] = {
            "text": self.text,
            "fill": self.fill,
            "font_family": self.font.family,
            "font_size": self.font.size,
            "text_align": self.text_align.value,
            "width": self.width,
            "left": self.transform.left,
            "top": self.transform.top,
            "origin_x": self.transform.origin_x.value,
            "origin_y": self.transform.origin_y.value,
            "scale_x": self.transform.scale_x,
            "scale_y": self.transform.scale_y,
            "opacity": self.transform.opacity,
            "stroke": None,
            "shadow": None,
        }
        if self.stroke is not None:
            payload["stroke"] = {
                "color": self.stroke.color,
                "width": self.stroke.width,
                "line_join": self.stroke.line_join,
            }
        if self.shadow is not None:
            payload["shadow"] = {
                "color": self.shadow.color,
                "blur": self.shadow.blur,
                "offset_x": self.shadow.offset_x,
                "offset_y": self.shadow.offset_y,
            }
        return payload


def parse_hex_color(color_value: str) -> str:
    """Validate a #RGB or #RRGGBB color token and return it lowercased."""
    normalized = color_value.strip() if isinstance(color_value, str) else ""
    if not HEX_COLOR_PATTERN.fullmatch(normalized):
        raise RenderValidationError(
            INVALID_COLOR_CODE, f"invalid color value: {color_value!r}"
        )
    return normalized.lower()


def hex_to_rgb(color_value: str) -> Tuple[int, int, int]:
    """Convert a validated hex color into an RGB tuple."""
    hex_digits = parse_hex_color(color_value)[1:]
    if len(hex_digits) == 3:
        hex_digits = "".join(digit * 2 for digit in hex_digits)
    return (
        int(hex_digits[0:2], 16),
        int(hex_digits[2:4], 16),
        int(hex_digits[4:6], 16),
    )


def parse_title_style(value: str | None) -> TitleStyle:
    """Parse a style keyword; empty means no animation."""
    if value is None or not value.strip():
        return TitleStyle.NONE
    try:
        return TitleStyle(value.strip().lower())
    except ValueError as exc:
        raise RenderValidationError(
            INVALID_STYLE_CODE, f"invalid title style: {value!r}"
        ) from exc


def parse_outline_style(value: str | None) -> OutlineStyle:
    """Parse an outline style keyword."""
    if value is None or not value.strip():
        return OutlineStyle.OUTLINE
    try:
        return OutlineStyle(value.strip().lower())
    except ValueError as exc:
        raise RenderValidationError(
            INVALID_STYLE_CODE, f"invalid outline style: {value!r}"
        ) from exc


def parse_zoom_direction(value: str | None) -> ZoomDirection:
    """Parse a zoom direction; null-like values disable zooming."""
    if value is None or not value.strip():
        return ZoomDirection.NONE
    normalized = value.strip().lower()
    if normalized == "null":
        return ZoomDirection.NONE
    try:
        return ZoomDirection(normalized)
    except ValueError as exc:
        raise RenderValidationError(
            INVALID_STYLE_CODE, f"invalid zoom direction: {value!r}"
        ) from exc


def parse_position(value: Any) -> TitlePosition:
    """Parse a position keyword, an "x,y" pair or a relative position mapping."""
    if isinstance(value, Mapping):
        try:
            return RelativePosition(
                x=_optional_float(value.get("x")),
                y=_optional_float(value.get("y")),
                origin_x=OriginX(value.get("originX", OriginX.LEFT.value)),
                origin_y=OriginY(value.get("originY", OriginY.TOP.value)),
            )
        except (TypeError, ValueError) as exc:
            if isinstance(exc, RenderValidationError):
                raise
            raise RenderValidationError(
                INVALID_POSITION_CODE, f"invalid position: {value!r}"
            ) from exc

    if not isinstance(value, str):
        raise RenderValidationError(
            INVALID_POSITION_CODE, f"invalid position: {value!r}"
        )

    normalized = value.strip().lower()
    if normalized in POSITION_KEYWORDS:
        return normalized
    parts = normalized.split(",")
    if len(parts) == 2:
        try:
            return RelativePosition(x=float(parts[0]), y=float(parts[1]))
        except ValueError as exc:
            raise RenderValidationError(
                INVALID_POSITION_CODE, f"invalid position: {value!r}"
            ) from exc
    raise RenderValidationError(INVALID_POSITION_CODE, f"invalid position: {value!r}")


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def parse_title_params(params: Mapping[str, Any]) -> TitleRequest:
    """Build a TitleRequest from title parameters keyed by their camelCase names."""
    text_value = params.get("text")
    if not isinstance(text_value, str) or not text_value.strip():
        raise RenderValidationError(EMPTY_TEXT_CODE, "title text is empty")

    outline_color = params.get("outlineColor")
    try:
        font_size = _optional_float(params.get("fontSize"))
        animation_duration = _optional_float(params.get("animationDuration"))
        zoom_amount = float(params.get("zoomAmount", DEFAULT_ZOOM_AMOUNT))
        outline_width = float(params.get("outlineWidth") or 0)
    except (TypeError, ValueError) as exc:
        raise RenderValidationError(
            INVALID_CONFIG_CODE, f"invalid numeric title parameter: {exc}"
        ) from exc

    zoom_value = params.get("zoomDirection", ZoomDirection.IN.value)
    return TitleRequest(
        text=text_value,
        text_color=parse_hex_color(params.get("textColor", DEFAULT_TEXT_COLOR)),
        font_family=params.get("fontFamily") or DEFAULT_FONT_FAMILY,
        font_size=font_size,
        position=parse_position(params.get("position", "center")),
        zoom_direction=parse_zoom_direction(zoom_value),
        zoom_amount=zoom_amount,
        style=parse_title_style(params.get("style")),
        animation_duration=animation_duration,
        effect=TitleEffect(
            color=parse_hex_color(outline_color) if outline_color else None,
            width=outline_width,
            style=parse_outline_style(params.get("outlineStyle")),
        ),
    )
