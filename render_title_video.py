#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.11"
# dependencies = [
#   "pillow>=10.1"
# ]
# ///
"""Render an animated title element into a MOV (alpha only when needed)."""

from __future__ import annotations

import argparse
import json
import logging
import math
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFilter, ImageFont

from domain.title import (
    BACKGROUND_IMAGE_CODE,
    EMPTY_TEXT_CODE,
    FONT_LOAD_CODE,
    INPUT_FILE_CODE,
    INVALID_COLOR_CODE,
    INVALID_CONFIG_CODE,
    FrameContext,
    OriginX,
    OriginY,
    RenderConfig,
    RenderValidationError,
    TextAlign,
    TextLayer,
    TitleFont,
    TitleRequest,
    hex_to_rgb,
    parse_title_params,
)
from service.title_frames import RenderFrame, create_title_renderer

LOGGER = logging.getLogger("render_title_video")

FONT_FALLBACK_CODE = "render_title_video.input.font_fallback"
FFMPEG_NOT_FOUND_CODE = "render_title_video.ffmpeg.not_found"
FFMPEG_EXEC_CODE = "render_title_video.ffmpeg.exec_error"
FFMPEG_UNSUPPORTED_CODE = "render_title_video.ffmpeg.unsupported"
FFMPEG_PROCESS_CODE = "render_title_video.ffmpeg.process_failed"
DEFAULT_DURATION_SECONDS = 4.0
PRORES_PROFILE = "4444"
PRORES_PIXEL_FORMAT = "yuva444p10le"
PRORES_QSCALE_BASE = 15
PRORES_QSCALE_MAX = 28
PRORES_QSCALE_REFERENCE_PIXELS = 1920 * 1080
PRORES_ALPHA_BITS = "8"
H264_CODEC = "libx264"
H264_PIXEL_FORMAT = "yuv420p"
H264_CRF = "20"
H264_PRESET = "veryfast"
H264_TUNE = "stillimage"

ORIGIN_X_FACTORS = {OriginX.LEFT: 0.0, OriginX.CENTER: 0.5, OriginX.RIGHT: 1.0}
ORIGIN_Y_FACTORS = {OriginY.TOP: 0.0, OriginY.CENTER: 0.5, OriginY.BOTTOM: 1.0}
FONT_FILE_SUFFIXES = (".ttf", ".otf")

# CLI flag -> title parameter name
TITLE_FLAG_PARAMS = (
    ("text", "text"),
    ("text_color", "textColor"),
    ("font_family", "fontFamily"),
    ("font_size", "fontSize"),
    ("position", "position"),
    ("zoom_direction", "zoomDirection"),
    ("zoom_amount", "zoomAmount"),
    ("style", "style"),
    ("animation_duration", "animationDuration"),
    ("outline_color", "outlineColor"),
    ("outline_width", "outlineWidth"),
    ("outline_style", "outlineStyle"),
)


class RenderPipelineError(RuntimeError):
    """Runtime error with a stable error code."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class VideoAlphaMode(str, Enum):
    """Alpha handling mode for video output."""

    ALPHA = "alpha"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class RenderRequest:
    """Parsed CLI request and runtime options."""

    config: RenderConfig
    title: TitleRequest
    background_image: Image.Image | None
    alpha_mode: VideoAlphaMode
    emit_layers: bool


@dataclass(frozen=True)
class VideoEncodingSpec:
    """Encoder settings for a specific alpha mode."""

    codec: str
    pix_fmt: str
    args_builder: Callable[[RenderConfig], Tuple[str, ...]]
    encoder_name: str
    alpha_bits: str | None


class PillowTextLayout:
    """Wraps, measures and rasterizes title layers with Pillow.

    Text is wrapped greedily on spaces to the layer width, one line per
    font line height, like a fixed-width text box.
    """

    def __init__(self, fonts_dir: str) -> None:
        self._fonts_dir = fonts_dir
        self._font_cache: dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}
        self._measure_draw = ImageDraw.Draw(Image.new("RGBA", (1, 1)))

    def load_font(self, font: TitleFont) -> ImageFont.FreeTypeFont:
        """Load the font for a family and size, caching by both."""
        cache_key = (font.family, font.size)
        cached_font = self._font_cache.get(cache_key)
        if cached_font is not None:
            return cached_font

        font_path = self.find_font_file(font.family)
        try:
            if font_path is not None:
                loaded = ImageFont.truetype(font_path, size=font.size)
            else:
                LOGGER.warning(
                    "%s: no font file for %r; using the default font",
                    FONT_FALLBACK_CODE,
                    font.family,
                )
                loaded = ImageFont.load_default(size=font.size)
        except Exception as exc:
            raise RenderValidationError(
                FONT_LOAD_CODE, f"failed to load font {font.family!r} at size {font.size}"
            ) from exc
        self._font_cache[cache_key] = loaded
        return loaded

    def find_font_file(self, family: str) -> str | None:
        """Resolve a font family to a file path or a matching file in fonts_dir."""
        if os.path.isfile(family):
            return family
        if not os.path.isdir(self._fonts_dir):
            return None
        wanted = family.strip().lower()
        for entry_name in sorted(os.listdir(self._fonts_dir)):
            stem, suffix = os.path.splitext(entry_name)
            if suffix.lower() in FONT_FILE_SUFFIXES and stem.lower() == wanted:
                return os.path.join(self._fonts_dir, entry_name)
        return None

    def line_height(self, pil_font: ImageFont.FreeTypeFont) -> float:
        try:
            ascent, descent = pil_font.getmetrics()
            return float(ascent + descent)
        except Exception:
            bbox = pil_font.getbbox("Ag")
            return float(bbox[3] - bbox[1])

    def text_width(self, text_value: str, pil_font: ImageFont.FreeTypeFont) -> float:
        if not text_value:
            return 0.0
        return float(self._measure_draw.textlength(text_value, font=pil_font))

    def wrap_lines(
        self, text_value: str, pil_font: ImageFont.FreeTypeFont, width: float
    ) -> list[str]:
        """Wrap text to a width; a single over-long word keeps its own line."""
        lines: list[str] = []
        for paragraph in text_value.split("\n"):
            current_line = ""
            for word in paragraph.split(" "):
                candidate = word if not current_line else f"{current_line} {word}"
                if current_line and self.text_width(candidate, pil_font) > width:
                    lines.append(current_line)
                    current_line = word
                else:
                    current_line = candidate
            lines.append(current_line)
        return lines

    def measure_text_height(self, text: str, font: TitleFont, width: float) -> float:
        """Height of the unstroked, wrapped text block."""
        pil_font = self.load_font(font)
        lines = self.wrap_lines(text, pil_font, width)
        return self.line_height(pil_font) * len(lines)

    def render_layer(self, layer: TextLayer) -> Tuple[Image.Image, Tuple[int, int]]:
        """Rasterize a layer and return the image plus its top-left frame position."""
        pil_font = self.load_font(layer.font)
        lines = self.wrap_lines(layer.text, pil_font, layer.width)
        line_height = self.line_height(pil_font)
        box_width = max(1, int(math.ceil(layer.width)))
        box_height = max(1, int(math.ceil(line_height * len(lines))))

        stroke_width = int(round(layer.stroke.width)) if layer.stroke else 0
        padding = stroke_width + 1
        if layer.shadow is not None:
            padding += int(
                math.ceil(
                    layer.shadow.blur
                    + max(abs(layer.shadow.offset_x), abs(layer.shadow.offset_y))
                )
            )
        canvas_size = (box_width + 2 * padding, box_height + 2 * padding)

        def draw_lines(
            fill_rgba: Tuple[int, int, int, int], shift_x: float, shift_y: float
        ) -> Image.Image:
            target = Image.new("RGBA", canvas_size, (0, 0, 0, 0))
            draw = ImageDraw.Draw(target)
            for line_index, line in enumerate(lines):
                free_space = box_width - self.text_width(line, pil_font)
                if layer.text_align == TextAlign.CENTER:
                    line_x = free_space / 2.0
                elif layer.text_align == TextAlign.RIGHT:
                    line_x = free_space
                else:
                    line_x = 0.0
                # Pillow strokes with round joins.
                draw.text(
                    (padding + line_x + shift_x, padding + line_index * line_height + shift_y),
                    line,
                    font=pil_font,
                    fill=fill_rgba,
                    stroke_width=stroke_width,
                    stroke_fill=fill_rgba,
                )
            return target

        canvas = Image.new("RGBA", canvas_size, (0, 0, 0, 0))
        if layer.shadow is not None:
            shadow_image = draw_lines(
                hex_to_rgb(layer.shadow.color) + (255,),
                layer.shadow.offset_x,
                layer.shadow.offset_y,
            )
            if layer.shadow.blur > 0:
                shadow_image = shadow_image.filter(
                    ImageFilter.GaussianBlur(layer.shadow.blur / 2.0)
                )
            canvas.alpha_composite(shadow_image)
        canvas.alpha_composite(draw_lines(hex_to_rgb(layer.fill) + (255,), 0.0, 0.0))

        transform = layer.transform
        if transform.scale_x != 1 or transform.scale_y != 1:
            canvas = canvas.resize(
                (
                    max(1, int(round(canvas_size[0] * transform.scale_x))),
                    max(1, int(round(canvas_size[1] * transform.scale_y))),
                ),
                Image.Resampling.LANCZOS,
            )
        if transform.opacity < 1:
            opacity = max(0.0, transform.opacity)
            alpha = canvas.getchannel("A").point(lambda value: int(round(value * opacity)))
            canvas.putalpha(alpha)

        anchor_x = (padding + box_width * ORIGIN_X_FACTORS[transform.origin_x]) * transform.scale_x
        anchor_y = (padding + box_height * ORIGIN_Y_FACTORS[transform.origin_y]) * transform.scale_y
        position = (
            int(round(transform.left - anchor_x)),
            int(round(transform.top - anchor_y)),
        )
        return canvas, position


class PillowFrameSurface:
    """Composites title layers onto one RGBA frame in call order."""

    def __init__(self, layout: PillowTextLayout, frame_image: Image.Image) -> None:
        self._layout = layout
        self.frame_image = frame_image

    def measure_text_height(self, text: str, font: TitleFont, width: float) -> float:
        return self._layout.measure_text_height(text, font, width)

    def add_layer(self, layer: TextLayer) -> None:
        layer_image, position = self._layout.render_layer(layer)
        overlay = Image.new("RGBA", self.frame_image.size, (0, 0, 0, 0))
        overlay.paste(layer_image, position)
        self.frame_image.alpha_composite(overlay)


class LayerRecorder:
    """Collects title layers without drawing them."""

    def __init__(self, layout: PillowTextLayout) -> None:
        self._layout = layout
        self.layers: list[TextLayer] = []

    def measure_text_height(self, text: str, font: TitleFont, width: float) -> float:
        return self._layout.measure_text_height(text, font, width)

    def add_layer(self, layer: TextLayer) -> None:
        self.layers.append(layer)


def configure_logging() -> None:
    """Configure logging for CLI output."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def parse_background_rgba(color_value: str) -> Tuple[int, int, int, int]:
    """Parse a background token into an RGBA tuple."""
    normalized = color_value.strip()
    if normalized.lower() == "transparent":
        return (0, 0, 0, 0)
    try:
        return hex_to_rgb(normalized) + (255,)
    except RenderValidationError as exc:
        raise RenderValidationError(
            INVALID_COLOR_CODE, f"invalid background color: {color_value!r}"
        ) from exc


def read_utf8_text_strict(file_path: str) -> str:
    """Read a UTF-8 file with strict decoding."""
    try:
        with open(file_path, "rb") as file_handle:
            file_bytes = file_handle.read()
    except FileNotFoundError as exc:
        raise RenderValidationError(
            INPUT_FILE_CODE, f"title file not found: {file_path}"
        ) from exc

    try:
        return file_bytes.decode("utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise RenderValidationError(
            INPUT_FILE_CODE,
            f"title file is not valid UTF-8 at byte offset {exc.start}",
        ) from exc


def load_title_params(file_path: str) -> dict[str, Any]:
    """Load title parameters from a JSON object file."""
    try:
        payload = json.loads(read_utf8_text_strict(file_path))
    except json.JSONDecodeError as exc:
        raise RenderValidationError(
            INPUT_FILE_CODE, f"title file is not valid JSON: {exc.msg}"
        ) from exc
    if not isinstance(payload, dict):
        raise RenderValidationError(
            INPUT_FILE_CODE, "title file must contain a JSON object"
        )
    return payload


def load_background_image(image_path: str) -> Image.Image:
    """Load a background image as RGBA."""
    try:
        image = Image.open(image_path)
    except FileNotFoundError as exc:
        raise RenderValidationError(
            BACKGROUND_IMAGE_CODE, f"background image not found: {image_path}"
        ) from exc
    except Exception as exc:
        raise RenderValidationError(
            BACKGROUND_IMAGE_CODE, f"failed to read background image: {image_path}"
        ) from exc
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image


def select_alpha_mode(
    background_rgba: Tuple[int, int, int, int],
    background_image: Image.Image | None,
) -> VideoAlphaMode:
    """Select alpha output mode based on the requested background."""
    if background_image is None and background_rgba[3] == 0:
        return VideoAlphaMode.ALPHA
    return VideoAlphaMode.OPAQUE


def compute_total_frames(duration_seconds: float, fps: int) -> int:
    """Compute total frames for a video duration."""
    total_frames = int(round(duration_seconds * fps))
    if total_frames <= 0:
        raise RenderValidationError(
            INVALID_CONFIG_CODE, "duration and fps produce zero frames"
        )
    return total_frames


def compute_frame_context(frame_index: int, total_frames: int, fps: int) -> FrameContext:
    """Progress runs from 0 on the first frame to 1 on the last."""
    return FrameContext(
        progress=frame_index / float(max(1, total_frames - 1)),
        offset_time=frame_index / float(fps),
    )


def new_frame_image(
    config: RenderConfig, background_image: Image.Image | None
) -> Image.Image:
    if background_image is None:
        return Image.new(
            "RGBA", (config.width, config.height), color=config.background_rgba
        )
    return background_image.copy()


def compute_prores_qscale(width: int, height: int) -> int:
    """Compute a ProRes quantizer based on the frame size."""
    pixel_count = width * height
    scale = pixel_count / PRORES_QSCALE_REFERENCE_PIXELS
    qscale = int(round(PRORES_QSCALE_BASE * math.sqrt(scale)))
    return max(PRORES_QSCALE_BASE, min(PRORES_QSCALE_MAX, qscale))


def build_prores_args(config: RenderConfig) -> Tuple[str, ...]:
    """Build ProRes codec arguments."""
    qscale = compute_prores_qscale(config.width, config.height)
    return (
        "-profile:v",
        PRORES_PROFILE,
        "-qscale:v",
        str(qscale),
        "-alpha_bits",
        PRORES_ALPHA_BITS,
    )


def build_h264_args(config: RenderConfig) -> Tuple[str, ...]:
    """Build H.264 codec arguments."""
    return (
        "-crf",
        H264_CRF,
        "-preset",
        H264_PRESET,
        "-tune",
        H264_TUNE,
    )


ENCODING_SPECS = {
    VideoAlphaMode.ALPHA: VideoEncodingSpec(
        codec="prores_ks",
        pix_fmt=PRORES_PIXEL_FORMAT,
        args_builder=build_prores_args,
        encoder_name="prores_ks",
        alpha_bits=PRORES_ALPHA_BITS,
    ),
    VideoAlphaMode.OPAQUE: VideoEncodingSpec(
        codec=H264_CODEC,
        pix_fmt=H264_PIXEL_FORMAT,
        args_builder=build_h264_args,
        encoder_name=H264_CODEC,
        alpha_bits=None,
    ),
}


def ensure_ffmpeg_available() -> None:
    """Ensure ffmpeg is installed and executable."""
    ffmpeg_path = shutil.which("ffmpeg")
    if not ffmpeg_path:
        raise RenderPipelineError(FFMPEG_NOT_FOUND_CODE, "ffmpeg not on PATH")
    try:
        subprocess.run(
            [ffmpeg_path, "-version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except Exception as exc:
        raise RenderPipelineError(
            FFMPEG_EXEC_CODE, "ffmpeg exists but could not be executed"
        ) from exc


def open_ffmpeg_process(
    config: RenderConfig, alpha_mode: VideoAlphaMode
) -> subprocess.Popen[bytes]:
    """Start ffmpeg for a raw RGBA frame stream."""
    ensure_ffmpeg_available()

    encoding = ENCODING_SPECS[alpha_mode]
    ffmpeg_cmd = [
        "ffmpeg",
        "-y",
        "-f",
        "rawvideo",
        "-pix_fmt",
        "rgba",
        "-s",
        f"{config.width}x{config.height}",
        "-r",
        str(config.fps),
        "-i",
        "-",
        "-an",
        "-c:v",
        encoding.codec,
    ]
    ffmpeg_cmd.extend(encoding.args_builder(config))
    ffmpeg_cmd.extend(["-pix_fmt", encoding.pix_fmt, config.output_video_file])

    try:
        return subprocess.Popen(
            ffmpeg_cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise RenderPipelineError(FFMPEG_NOT_FOUND_CODE, "ffmpeg not found") from exc


def validate_ffmpeg_capabilities(alpha_mode: VideoAlphaMode) -> None:
    """Validate ffmpeg encoders and pixel formats for output."""
    encoding = ENCODING_SPECS[alpha_mode]
    try:
        version_result = subprocess.run(
            ["ffmpeg", "-version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=True,
            text=True,
        )
    except Exception as exc:
        raise RenderPipelineError(
            FFMPEG_NOT_FOUND_CODE, "ffmpeg is not available"
        ) from exc

    if "ffmpeg version" not in version_result.stdout.lower():
        raise RenderPipelineError(
            FFMPEG_EXEC_CODE, "ffmpeg version output is unexpected"
        )

    encoders_result = subprocess.run(
        ["ffmpeg", "-hide_banner", "-encoders"],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=True,
    )
    if encoding.encoder_name not in encoders_result.stdout:
        raise RenderPipelineError(
            FFMPEG_UNSUPPORTED_CODE,
            f"ffmpeg does not support {encoding.encoder_name} encoder",
        )

    if encoding.alpha_bits is not None:
        encoder_help = subprocess.run(
            ["ffmpeg", "-hide_banner", "-h", f"encoder={encoding.encoder_name}"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )
        if "alpha_bits" not in encoder_help.stdout:
            raise RenderPipelineError(
                FFMPEG_UNSUPPORTED_CODE,
                f"ffmpeg {encoding.encoder_name} encoder does not support alpha_bits",
            )

    pixfmts_result = subprocess.run(
        ["ffmpeg", "-hide_banner", "-pix_fmts"],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        check=True,
    )
    if encoding.pix_fmt not in pixfmts_result.stdout:
        raise RenderPipelineError(
            FFMPEG_UNSUPPORTED_CODE,
            f"ffmpeg does not support {encoding.pix_fmt} pixel format",
        )


def render_title_frames(
    config: RenderConfig,
    render_frame: RenderFrame,
    layout: PillowTextLayout,
    background_image: Image.Image | None,
    alpha_mode: VideoAlphaMode,
) -> None:
    """Render every frame of the title element and pipe it to ffmpeg."""
    ffmpeg_process = open_ffmpeg_process(config, alpha_mode)
    if not ffmpeg_process.stdin:
        raise RenderPipelineError(FFMPEG_PROCESS_CODE, "ffmpeg stdin unavailable")

    total_frames = compute_total_frames(config.duration_seconds, config.fps)
    try:
        for frame_index in range(total_frames):
            context = compute_frame_context(frame_index, total_frames, config.fps)
            surface = PillowFrameSurface(
                layout, new_frame_image(config, background_image)
            )
            render_frame(context.progress, surface, context.offset_time)
            ffmpeg_process.stdin.write(surface.frame_image.tobytes())

        ffmpeg_process.stdin.close()
        stderr_bytes = ffmpeg_process.stderr.read() if ffmpeg_process.stderr else b""
        return_code = ffmpeg_process.wait()

        if return_code != 0:
            stderr_text = stderr_bytes.decode("utf-8", errors="replace").strip()
            raise RenderPipelineError(
                FFMPEG_PROCESS_CODE,
                f"ffmpeg failed with exit code {return_code}. {stderr_text}",
            )

    finally:
        try:
            if ffmpeg_process.stdin and not ffmpeg_process.stdin.closed:
                ffmpeg_process.stdin.close()
        except Exception:
            pass
        try:
            if ffmpeg_process.poll() is None:
                ffmpeg_process.kill()
        except Exception:
            pass


def emit_title_layers(
    config: RenderConfig, render_frame: RenderFrame, layout: PillowTextLayout
) -> None:
    """Emit the layers of every frame to stdout as JSON."""
    total_frames = compute_total_frames(config.duration_seconds, config.fps)
    frames = []
    for frame_index in range(total_frames):
        context = compute_frame_context(frame_index, total_frames, config.fps)
        recorder = LayerRecorder(layout)
        render_frame(context.progress, recorder, context.offset_time)
        frames.append(
            {
                "index": frame_index,
                "progress": context.progress,
                "offset_time": context.offset_time,
                "layers": [layer.to_payload() for layer in recorder.layers],
            }
        )
    payload = {"width": config.width, "height": config.height, "frames": frames}
    sys.stdout.write(json.dumps(payload, ensure_ascii=True))


def build_title_params(parsed: argparse.Namespace) -> dict[str, Any]:
    """Merge title JSON parameters with explicit CLI flags."""
    params: dict[str, Any] = {}
    if parsed.title_json:
        params.update(load_title_params(parsed.title_json))
    for flag_name, param_name in TITLE_FLAG_PARAMS:
        flag_value = getattr(parsed, flag_name)
        if flag_value is not None:
            params[param_name] = flag_value
    if "text" not in params:
        raise RenderValidationError(
            EMPTY_TEXT_CODE, "title text is required (--text or --title-json)"
        )
    return params


def parse_args(argv: Sequence[str]) -> RenderRequest:
    """Parse CLI arguments into a RenderRequest."""
    parser = argparse.ArgumentParser(prog="render_title_video.py", add_help=True)
    parser.add_argument("--title-json", default=None)
    parser.add_argument("--text", default=None)
    parser.add_argument("--text-color", default=None)
    parser.add_argument("--font-family", default=None)
    parser.add_argument("--font-size", type=float, default=None)
    parser.add_argument(
        "--position", default=None, help="keyword such as bottom-left, or x,y fractions"
    )
    parser.add_argument("--zoom-direction", default=None, help="in, out, left, right, none")
    parser.add_argument("--zoom-amount", type=float, default=None)
    parser.add_argument(
        "--style", default=None, help="none, fade-in, word-by-word, letter-by-letter"
    )
    parser.add_argument("--animation-duration", type=float, default=None)
    parser.add_argument("--outline-color", default=None)
    parser.add_argument("--outline-width", type=float, default=None)
    parser.add_argument("--outline-style", default=None, help="outline, shadow, glow")
    parser.add_argument("--output-video-file", default="title.mov")
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument(
        "--duration-seconds", type=float, default=DEFAULT_DURATION_SECONDS
    )
    parser.add_argument("--fps", type=int, default=30)
    parser.add_argument(
        "--background", default="transparent", help="transparent (default) or #RRGGBB"
    )
    parser.add_argument("--background-image", default=None)
    parser.add_argument("--fonts-dir", default="fonts")
    parser.add_argument("--emit-layers", action="store_true")

    parsed = parser.parse_args(argv)
    title = parse_title_params(build_title_params(parsed))
    background_rgba = parse_background_rgba(parsed.background)
    background_image = None

    if parsed.background_image:
        if parsed.width is not None or parsed.height is not None:
            raise RenderValidationError(
                INVALID_CONFIG_CODE,
                "width/height cannot be used with background-image",
            )
        background_image = load_background_image(parsed.background_image)
        width, height = background_image.size
    else:
        if parsed.width is None or parsed.height is None:
            raise RenderValidationError(
                INVALID_CONFIG_CODE,
                "width and height are required without background-image",
            )
        width = parsed.width
        height = parsed.height

    alpha_mode = select_alpha_mode(background_rgba, background_image)
    if alpha_mode == VideoAlphaMode.OPAQUE and (width % 2 or height % 2):
        raise RenderValidationError(
            INVALID_CONFIG_CODE,
            "width and height must be even for opaque output",
        )

    config = RenderConfig(
        output_video_file=parsed.output_video_file,
        width=width,
        height=height,
        duration_seconds=parsed.duration_seconds,
        fps=parsed.fps,
        background_rgba=background_rgba,
        fonts_dir=parsed.fonts_dir,
        background_image_path=parsed.background_image,
    )

    return RenderRequest(
        config=config,
        title=title,
        background_image=background_image,
        alpha_mode=alpha_mode,
        emit_layers=parsed.emit_layers,
    )


def main() -> int:
    """CLI entrypoint."""
    configure_logging()

    try:
        request = parse_args(sys.argv[1:])
        layout = PillowTextLayout(request.config.fonts_dir)
        render_frame = create_title_renderer(
            request.config.width, request.config.height, request.title
        )
        if request.emit_layers:
            emit_title_layers(request.config, render_frame, layout)
            return 0
        validate_ffmpeg_capabilities(request.alpha_mode)
        render_title_frames(
            request.config,
            render_frame,
            layout,
            request.background_image,
            request.alpha_mode,
        )
        LOGGER.info(
            "rendered %s (%sx%s, %s fps)",
            request.config.output_video_file,
            request.config.width,
            request.config.height,
            request.config.fps,
        )
        return 0
    except RenderValidationError as exc:
        LOGGER.error("%s: %s", exc.code, str(exc).strip())
        return 1
    except RenderPipelineError as exc:
        LOGGER.error("%s: %s", exc.code, str(exc).strip())
        return 1
    except Exception as exc:
        LOGGER.error("render_title_video.unhandled_error: %s", str(exc).strip())
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
