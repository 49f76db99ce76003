"""Per-frame title rendering across presentation styles."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Mapping, Sequence, Tuple

from domain.title import (
    ResolvedAnchor,
    TextLayer,
    TitleFont,
    TitleRequest,
    TitleStyle,
    ZoomDirection,
)
from service.title_layers import (
    LayoutSurface,
    compose_title_layers,
    text_align_for_origin,
)
from service.title_motion import (
    resolve_position,
    resolve_zoom_scale,
    resolve_zoom_translation,
)
from service.title_reveal import (
    LETTER_DELAY,
    WORD_DELAY,
    compute_fade_in_opacity,
    compute_reveal_progress,
    reveal_tokens,
    tokenize_letters,
    tokenize_words,
)

LOGGER = logging.getLogger(__name__)
BOX_WIDTH_RATIO = 0.8

RenderFrame = Callable[..., Tuple[TextLayer, ...]]


@dataclass(frozen=True)
class StyleProfile:
    """How one presentation style times, positions and fades a title."""

    tokenizer: Callable[[str], Sequence[str]] | None
    separator: str
    delay_per_token: float
    suppress_zoom: bool
    translate_top: bool
    opacity_rule: Callable[[float], float]


def _full_opacity(progress: float) -> float:
    return 1.0


STYLE_PROFILES: Mapping[TitleStyle, StyleProfile] = {
    TitleStyle.NONE: StyleProfile(
        tokenizer=None,
        separator="",
        delay_per_token=0.0,
        suppress_zoom=False,
        translate_top=True,
        opacity_rule=_full_opacity,
    ),
    TitleStyle.FADE_IN: StyleProfile(
        tokenizer=None,
        separator="",
        delay_per_token=0.0,
        suppress_zoom=False,
        translate_top=True,
        opacity_rule=compute_fade_in_opacity,
    ),
    TitleStyle.WORD_BY_WORD: StyleProfile(
        tokenizer=tokenize_words,
        separator=" ",
        delay_per_token=WORD_DELAY,
        suppress_zoom=True,
        translate_top=False,
        opacity_rule=_full_opacity,
    ),
    TitleStyle.LETTER_BY_LETTER: StyleProfile(
        tokenizer=tokenize_letters,
        separator="",
        delay_per_token=LETTER_DELAY,
        suppress_zoom=True,
        translate_top=False,
        opacity_rule=_full_opacity,
    ),
}


def create_title_renderer(width: int, height: int, request: TitleRequest) -> RenderFrame:
    """Prepare a title element and return its per-frame render function.

    The returned ``render_frame(progress, surface, offset_time=None)`` adds the
    frame's layers to ``surface`` and returns them. It keeps no state between
    calls.
    """
    profile = STYLE_PROFILES[request.style]
    font = TitleFont(
        family=request.font_family, size=request.resolve_font_size(width, height)
    )
    anchor = resolve_position(request.position, width, height)
    text_align = text_align_for_origin(anchor.origin_x)
    box_width = width * BOX_WIDTH_RATIO
    zoom_direction = ZoomDirection.NONE if profile.suppress_zoom else request.zoom_direction
    tokens = profile.tokenizer(request.text) if profile.tokenizer else None

    def render_frame(
        progress: float,
        surface: LayoutSurface,
        offset_time: float | None = None,
    ) -> Tuple[TextLayer, ...]:
        scale = resolve_zoom_scale(progress, zoom_direction, request.zoom_amount)
        translation = resolve_zoom_translation(
            progress, zoom_direction, request.zoom_amount
        )

        if tokens is None:
            text_value = request.text
            opacity = profile.opacity_rule(progress)
        else:
            reveal_progress = compute_reveal_progress(
                progress, offset_time, request.animation_duration
            )
            reveal = reveal_tokens(
                tokens, profile.delay_per_token, reveal_progress, profile.separator
            )
            if reveal.is_blank:
                LOGGER.debug("blank reveal at progress %.4f; no layers", progress)
                return ()
            text_value = reveal.visible_text
            opacity = reveal.terminal_opacity

        frame_anchor = ResolvedAnchor(
            left=anchor.left + translation,
            top=anchor.top + translation if profile.translate_top else anchor.top,
            origin_x=anchor.origin_x,
            origin_y=anchor.origin_y,
        )
        return compose_title_layers(
            surface,
            text=text_value,
            text_color=request.text_color,
            font=font,
            text_align=text_align,
            box_width=box_width,
            anchor=frame_anchor,
            scale=scale,
            opacity=opacity,
            effect=request.effect,
        )

    return render_frame
