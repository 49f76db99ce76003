"""Reveal timing for word-by-word and letter-by-letter titles."""

from __future__ import annotations

from dataclasses import dataclass
import math
import re
from typing import Sequence, Tuple

WORD_DELAY = 0.15
LETTER_DELAY = 0.05
FULL_OPACITY_PROGRESS = 0.7
FADE_IN_PROGRESS = 0.3
WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass(frozen=True)
class RevealFrame:
    """Visible prefix of a title and the opacity of its newest token."""

    visible_text: str
    terminal_opacity: float
    visible_count: int

    @property
    def is_blank(self) -> bool:
        return not self.visible_text.strip()


def clamp_unit(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return max(0.0, min(1.0, value))


def tokenize_words(text_value: str) -> Tuple[str, ...]:
    """Split text on whitespace runs, keeping empty edge tokens."""
    return tuple(WHITESPACE_PATTERN.split(text_value))


def tokenize_letters(text_value: str) -> Tuple[str, ...]:
    """Split text into single characters."""
    return tuple(text_value)


def reveal_tokens(
    tokens: Sequence[str],
    delay_per_token: float,
    progress: float,
    separator: str = " ",
) -> RevealFrame:
    """Compute the revealed prefix of tokens at a progress value.

    The token after the last fully elapsed reveal window is always included so
    it can fade in. Past FULL_OPACITY_PROGRESS the newest token is opaque
    regardless of where it is in its window.
    """
    token_count = len(tokens)
    total_duration = token_count * delay_per_token
    elapsed = progress * total_duration
    # Equals floor(progress * token_count); delay sets the nominal reveal rate.
    raw_count = int(math.floor(elapsed / delay_per_token))

    shown = max(0, min(raw_count + 1, token_count))
    visible_text = separator.join(tokens[:shown])

    current_token_progress = (elapsed - raw_count * delay_per_token) / delay_per_token
    if progress >= FULL_OPACITY_PROGRESS:
        terminal_opacity = 1.0
    elif raw_count < token_count - 1:
        terminal_opacity = 1.0
    else:
        terminal_opacity = clamp_unit(current_token_progress)

    return RevealFrame(
        visible_text=visible_text,
        terminal_opacity=terminal_opacity,
        visible_count=max(0, min(raw_count, token_count - 1)),
    )


def compute_fade_in_opacity(progress: float) -> float:
    """Opacity ramp that reaches 1 at FADE_IN_PROGRESS."""
    return clamp_unit(progress / FADE_IN_PROGRESS)


def compute_reveal_progress(
    progress: float,
    offset_time: float | None,
    animation_duration: float | None,
) -> float:
    """Select the timing source for token reveals.

    With a positive animation duration the reveal runs on elapsed seconds
    normalized by that duration; elapsed time falls back to progress when the
    frame carries no offset. Otherwise the frame progress is used as is.
    """
    if animation_duration is None or animation_duration <= 0:
        return progress
    elapsed = offset_time if offset_time is not None else progress
    return clamp_unit(elapsed / animation_duration)
