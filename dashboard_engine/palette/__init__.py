"""
Colour Palette Module
"""
from .colors import (
    CHART_COLORS,
    MAP_ORANGE_TONES,
    MARKETPLACE_COLORS,
    MARKETPLACE_FALLBACK_COLOR,
    ColorQuantizer,
    chart_color,
    chart_colors,
    marketplace_color,
    marketplace_color_or_fallback,
    marketplace_text_color,
)

__all__ = [
    "CHART_COLORS",
    "MAP_ORANGE_TONES",
    "MARKETPLACE_COLORS",
    "MARKETPLACE_FALLBACK_COLOR",
    "ColorQuantizer",
    "chart_color",
    "chart_colors",
    "marketplace_color",
    "marketplace_color_or_fallback",
    "marketplace_text_color",
]
