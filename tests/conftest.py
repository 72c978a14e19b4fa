import io

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from flexsvg.backends import reset_backends
from flexsvg.fonts import FontOptions, clear_font_registries
from flexsvg.text.segmentation import reset_segmenter


def build_font_bytes(chars, advance=600, units_per_em=1000, family="Test"):
    """Builds a minimal TrueType font covering `chars` with a fixed advance."""
    glyph_names = {ch: f"uni{ord(ch):04X}" for ch in chars}
    glyph_order = [".notdef", *glyph_names.values()]

    fb = FontBuilder(units_per_em, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(ch): name for ch, name in glyph_names.items()})
    fb.setupGlyf({name: TTGlyphPen(None).glyph() for name in glyph_order})
    fb.setupHorizontalMetrics({name: (advance, 0) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2()
    fb.setupPost()

    output = io.BytesIO()
    fb.save(output)
    return output.getvalue()


@pytest.fixture
def latin_font() -> FontOptions:
    return FontOptions(name="Latin", data=build_font_bytes("abcdefghijklmnopqrstuvwxyz AB"))


@pytest.fixture
def cjk_font() -> FontOptions:
    return FontOptions(name="CJK", data=build_font_bytes("\u6f22\u5b57"), lang="ja-JP")


@pytest.fixture(autouse=True)
def _reset_process_state():
    yield
    reset_backends()
    reset_segmenter()
    clear_font_registries()


@pytest.fixture
def font_factory():
    return build_font_bytes
