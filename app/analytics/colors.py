"""
Emotion colors and confidence-weighted color blending.

A day on the mood calendar is painted with the weighted average of every
emotion tag logged that day. Weighted averaging is done with exact rationals
so the blended color never depends on the order the tags arrive in.
"""

import math
import re
from fractions import Fraction
from numbers import Real
from typing import Dict, Iterable, Optional, Tuple

RGB = Tuple[int, int, int]

NEUTRAL_EMOTION = "neutral"

EMOTION_COLORS: Dict[str, str] = {
    "joy": "#FFD700",
    "love": "#FF69B4",
    "surprise": "#FF8C00",
    "anger": "#DC143C",
    "fear": "#8A2BE2",
    "sadness": "#4169E1",
    "disgust": "#32CD32",
    "neutral": "#808080",
}

EMOTION_LABELS: Dict[str, str] = {
    "joy": "Joy",
    "love": "Love",
    "surprise": "Surprise",
    "anger": "Anger",
    "fear": "Fear",
    "sadness": "Sadness",
    "disgust": "Disgust",
    "neutral": "Neutral",
}

_HEX_PATTERN = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
_HALF = Fraction(1, 2)


def emotion_color(emotion: str) -> str:
    """Display color for an emotion; unknown names get the neutral color."""
    return EMOTION_COLORS.get(emotion, EMOTION_COLORS[NEUTRAL_EMOTION])


def emotion_label(emotion: str) -> str:
    return EMOTION_LABELS.get(emotion, emotion)


def hex_to_rgb(hex_color: str) -> Optional[RGB]:
    if not isinstance(hex_color, str):
        return None
    match = _HEX_PATTERN.match(hex_color.strip())
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def rgb_string(rgb: RGB) -> str:
    r, g, b = rgb
    return f"rgb({r}, {g}, {b})"


def _as_weight(weight) -> Optional[Fraction]:
    if isinstance(weight, bool) or not isinstance(weight, Real):
        return None
    if isinstance(weight, float) and not math.isfinite(weight):
        return None
    if weight < 0:
        return None
    return Fraction(weight)


def _round_half_up(value: Fraction) -> int:
    return max(0, min(255, math.floor(value + _HALF)))


def blend(weighted: Iterable[Tuple[str, float]]) -> Optional[RGB]:
    """
    Blend (hex color, weight) pairs into one representative RGB triple.

    Pairs with an invalid color or a negative weight are skipped. Returns None
    when nothing with a positive weight is left, which callers must treat as
    "no color" rather than black.
    """
    valid = []
    for color, weight in weighted:
        rgb = hex_to_rgb(color)
        w = _as_weight(weight)
        if rgb is None or w is None:
            continue
        valid.append((rgb, w))

    total_weight = sum((w for _, w in valid), Fraction(0))
    if total_weight == 0:
        return None

    positive = [rgb for rgb, w in valid if w > 0]
    if len(positive) == 1:
        return positive[0]

    channels = []
    for i in range(3):
        weighted_sum = sum((rgb[i] * w for rgb, w in valid), Fraction(0))
        channels.append(_round_half_up(weighted_sum / total_weight))
    return tuple(channels)
