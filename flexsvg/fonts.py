import io
import threading
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional

import uharfbuzz as hb
from fontTools.ttLib import TTFont, TTLibError

from flexsvg.caching import IdentityCache, LRUCache
from flexsvg.text.segmentation import WORD_SEPARATORS, segment
from flexsvg.utils.exceptions import FontError
from flexsvg.utils.logging import log_message

# Joiners and variation selectors never need a glyph of their own.
IGNORABLE_CODEPOINTS = frozenset(
    [0x200C, 0x200D, 0x20E3, *range(0xFE00, 0xFE10), *range(0xE0020, 0xE0080)]
)


@dataclass
class FontOptions:
    """A font supplied by the caller: raw sfnt bytes plus CSS matching data."""

    name: str
    data: bytes
    weight: int = 400
    style: str = "normal"
    lang: Optional[str] = None


class FontList(list):
    """List of FontOptions that the registry cache can reference weakly."""


@dataclass
class LoadedFont:
    options: FontOptions
    codepoints: FrozenSet[int]
    units_per_em: int


def load_font(options: FontOptions) -> LoadedFont:
    """
    Reads the character map of a font.

    Raises:
        FontError: If the data is not a readable font
    """
    try:
        font = TTFont(io.BytesIO(options.data), fontNumber=0, lazy=True)
        cmap = font.getBestCmap() or {}
        units_per_em = font["head"].unitsPerEm
    except (TTLibError, KeyError, AttributeError, ValueError, TypeError) as e:
        raise FontError(f"Failed to parse font '{options.name}'") from e

    return LoadedFont(
        options=options, codepoints=frozenset(cmap), units_per_em=units_per_em
    )


class FontRegistry:
    """Parsed fonts for a render request, queried for glyph coverage."""

    def __init__(self, fonts: Iterable[FontOptions] = (), verbose: bool = False):
        self.verbose = verbose
        self._fonts: List[LoadedFont] = []
        self._hb_fonts = LRUCache(max_size=20)
        self._lock = threading.RLock()
        self.add_fonts(fonts)

    @property
    def fonts(self) -> List[FontOptions]:
        with self._lock:
            return [loaded.options for loaded in self._fonts]

    def __len__(self):
        return len(self._fonts)

    def add_fonts(self, fonts: Iterable[FontOptions]) -> None:
        loaded = [load_font(options) for options in fonts]
        with self._lock:
            self._fonts.extend(loaded)
        for font in loaded:
            log_message(
                f"Registered font '{font.options.name}' ({len(font.codepoints)} codepoints)",
                verbose=self.verbose,
            )

    def has_glyph(self, grapheme: str) -> bool:
        """True if one registered font covers every codepoint of the grapheme."""
        required = {ord(ch) for ch in grapheme} - IGNORABLE_CODEPOINTS
        if not required:
            return True
        with self._lock:
            return any(required <= font.codepoints for font in self._fonts)

    def find_missing_segments(self, text: str) -> List[str]:
        """Graphemes of `text` no registered font can draw, in order of appearance."""
        return [
            grapheme
            for grapheme in segment(text, "grapheme")
            if grapheme not in WORD_SEPARATORS
            and not grapheme.isspace()
            and not self.has_glyph(grapheme)
        ]

    def _resolve(self, text: str, name: Optional[str]) -> LoadedFont:
        with self._lock:
            candidates = [
                font for font in self._fonts if name is None or font.options.name == name
            ]
        if not candidates:
            raise FontError(f"No registered font named '{name}'")

        required = {ord(ch) for ch in text} - IGNORABLE_CODEPOINTS
        for font in candidates:
            if required <= font.codepoints:
                return font
        return candidates[0]

    def measure_text(self, text: str, font_size: float, name: Optional[str] = None) -> float:
        """
        Shapes text with HarfBuzz and returns its advance width in pixels.

        Raises:
            FontError: If no font matches `name`
        """
        if not text:
            return 0.0

        font = self._resolve(text, name)
        cache_key = id(font)
        hb_font = self._hb_fonts.get(cache_key)
        if hb_font is None:
            hb_font = hb.Font(hb.Face(font.options.data))
            self._hb_fonts.put(cache_key, hb_font)

        buf = hb.Buffer()
        buf.add_str(text)
        buf.guess_segment_properties()
        hb.shape(hb_font, buf, {"kern": True, "liga": True})

        advance = sum(pos.x_advance for pos in buf.glyph_positions)
        return advance * font_size / font.units_per_em


_registry_cache: IdentityCache[FontRegistry] = IdentityCache()


def get_font_registry(fonts: Iterable[FontOptions], verbose: bool = False) -> FontRegistry:
    """
    Returns the registry built for this exact font list object, building it
    on first use. Requests sharing one list share (and mutate) one registry.

    A FontList is held weakly. Plain lists are held by a bounded LRU, so
    only the most recently used ones keep their registries alive.
    """
    return _registry_cache.get_or_create(
        fonts, lambda owner: FontRegistry(owner, verbose=verbose)
    )


def forget_font_registry(fonts) -> bool:
    return _registry_cache.forget(fonts)


def clear_font_registries() -> None:
    _registry_cache.clear()
