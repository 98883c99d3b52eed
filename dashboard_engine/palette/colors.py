"""
Colour Palettes

- ColorQuantizer: equal-width buckets of [0, domain_max] mapped onto an
  ordered palette (choropleth maps)
- chart series colours with wrap-around
- fixed marketplace brand colours
"""

from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from dashboard_engine.config import get_settings
from dashboard_engine.models import is_defined

CHART_COLORS = (
    "#0C77B5",
    "#FF751A",
    "#FFDF64",
    "#61C9A8",
    "#BA3B46",
    "#94C6FF",
    "#FAA36A",
    "#FFEEA8",
    "#9EF8DC",
    "#F18992",
)

MAP_ORANGE_TONES = (
    "#FFF3EA",
    "#FFE4D1",
    "#FFD2B0",
    "#FFB885",
    "#FF9A52",
    "#FF751A",
    "#E65F00",
    "#CC4F00",
)

MARKETPLACE_COLORS = {
    "magazine luiza": "#0099FF",
    "mercado livre": "#FFDB58",
    "shopee": "#EE4D2D",
    "web": "#122752",
    "madeiramadeira": "rgb(254 145 84)",
    "cnova": "#E71B3B",
}
MARKETPLACE_FALLBACK_COLOR = "#94A3B8"
DARK_TEXT_COLOR = "#0f172a"
LIGHT_TEXT_COLOR = "#ffffff"


class ColorQuantizer:
    """
    Quantize scale onto a fixed ordered palette.

    Values without data get unknown_color, which is never one of the
    palette entries.

    Example:
        quantizer = ColorQuantizer(MAP_ORANGE_TONES)
        quantizer.color_for(42000, domain_max=42000)  # darkest tone
    """

    def __init__(self, palette: Sequence[str], unknown_color: Optional[str] = None):
        if not palette:
            raise ValueError("palette must contain at least one colour")
        unknown = unknown_color or get_settings().engine.unknown_color
        if unknown in palette:
            raise ValueError(f"unknown colour {unknown} must not be part of the palette")
        self.palette = tuple(palette)
        self.unknown_color = unknown

    def bucket_index(self, value: float, domain_max: float) -> int:
        """Palette index of value; out-of-domain values clamp to the ends"""
        n = len(self.palette)
        if not is_defined(domain_max) or domain_max <= 0:
            return 0
        with np.errstate(over="ignore"):
            ratio = float(np.clip(np.float64(value) / np.float64(domain_max), 0.0, 1.0))
        return min(int(ratio * n), n - 1)

    def color_for(self, value: Optional[float], domain_max: float) -> str:
        if not is_defined(value):
            return self.unknown_color
        return self.palette[self.bucket_index(value, domain_max)]

    def color_map(self, values: Mapping[str, Optional[float]]) -> Dict[str, str]:
        """
        Colour every id of a value map.

        The domain max is the largest defined value, at least 1, so an
        all-zero map renders in the lightest tone.
        """
        defined = np.asarray([v for v in values.values() if is_defined(v)], dtype=float)
        domain_max = max(1.0, float(defined.max())) if defined.size else 1.0
        return {key: self.color_for(value, domain_max) for key, value in values.items()}


def chart_color(index: int) -> str:
    """Series colour by position, wrapping around (negative indices too)"""
    return CHART_COLORS[index % len(CHART_COLORS)]


def chart_colors(count: int) -> List[str]:
    return [chart_color(i) for i in range(max(0, count))]


def _normalize_name(name: Optional[str]) -> str:
    return str(name or "").strip().lower()


def marketplace_color(name: Optional[str]) -> Optional[str]:
    return MARKETPLACE_COLORS.get(_normalize_name(name))


def marketplace_color_or_fallback(name: Optional[str]) -> str:
    return marketplace_color(name) or MARKETPLACE_FALLBACK_COLOR


def marketplace_text_color(name: Optional[str]) -> str:
    """Readable label colour on top of the marketplace colour"""
    # Mercado Livre yellow needs dark text
    if (marketplace_color(name) or "").lower() == "#ffdb58":
        return DARK_TEXT_COLOR
    return LIGHT_TEXT_COLOR
