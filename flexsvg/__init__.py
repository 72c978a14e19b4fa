"""
flexsvg Core Package

This package renders declarative, styled element trees to SVG and PNG.
Box geometry comes from a pluggable flex layout engine; text is segmented,
line-broken and checked for glyph coverage here, and missing fonts or
emoji images are fetched through a caller-supplied loader.
"""

from .backends import (FlexEngine, RasterRenderer, SkiaRasterRenderer,
                       get_flex_engine, get_rasterizer, init, reset_backends)
from .caching import IdentityCache, LRUCache
from .config import InheritedStyle, RasterConfig, RenderOptions
from .css import calc_degree, length_to_number, multiply
from .fonts import (FontList, FontOptions, FontRegistry, clear_font_registries,
                    get_font_registry)
from .language import detect_language_code
from .layout import LayoutContext, LayoutHandle, LayoutState, TreeResolver
from .pipeline import RenderPipeline, to_png, to_svg
from .text import (add_highlights, prepare_text_tokens, segment,
                   split_by_break_opportunities)

__version__ = "0.1.0"
__version_info__ = (0, 1, 0)
__license__ = "Apache-2.0"
__description__ = "Render styled element trees to SVG and PNG"
__all__ = [
    "FlexEngine",
    "RasterRenderer",
    "SkiaRasterRenderer",
    "get_flex_engine",
    "get_rasterizer",
    "init",
    "reset_backends",
    "IdentityCache",
    "LRUCache",
    "InheritedStyle",
    "RasterConfig",
    "RenderOptions",
    "calc_degree",
    "length_to_number",
    "multiply",
    "FontList",
    "FontOptions",
    "FontRegistry",
    "clear_font_registries",
    "get_font_registry",
    "detect_language_code",
    "LayoutContext",
    "LayoutHandle",
    "LayoutState",
    "TreeResolver",
    "RenderPipeline",
    "to_png",
    "to_svg",
    "add_highlights",
    "prepare_text_tokens",
    "segment",
    "split_by_break_opportunities",
]
