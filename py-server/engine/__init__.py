"""
Style Conversion Engine

Core engine module for converting Figma nodes into render-ready styles.
Contains the StyleMapper and its configuration.
"""

__version__ = "1.0.0"

from engine.config import ConverterConfig, GeometryOptions, CssFormatOptions
from engine.style_mapper import StyleMapper, map_paint, map_strokes, select_box_handler

__all__ = [
    'ConverterConfig',
    'GeometryOptions',
    'CssFormatOptions',
    'StyleMapper',
    'map_paint',
    'map_strokes',
    'select_box_handler',
]
