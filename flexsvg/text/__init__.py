"""
Text preparation modules for flexsvg.

This subpackage contains modules for:
- Locale-aware word and grapheme segmentation
- Unicode line-break opportunity resolution
- Highlight marker reconciliation across tokenization
"""

from typing import Union

from flexsvg.validation import WordBreak, resolve_style_value

from .highlights import (HighlightSection, add_highlights,
                         find_highlight_sections)
from .line_breaking import (HIGHLIGHT_END, HIGHLIGHT_START, LineBreakResult,
                            split_by_break_opportunities,
                            strip_highlight_markers)
from .segmentation import (WORD_SEPARATORS, Segmenter, UnicodeSegmenter,
                           get_segmenter, reset_segmenter, segment,
                           set_segmenter)


def prepare_text_tokens(
    content: str, word_break: Union[WordBreak, str, None] = WordBreak.NORMAL
) -> LineBreakResult:
    """
    Tokenizes a text run for wrapping and carries its highlight markers
    over to the resulting tokens.

    Only "normal" strips the markers before breaking, so only that mode
    needs them re-applied.
    """
    mode = resolve_style_value("wordBreak", word_break, WordBreak.NORMAL)
    result = split_by_break_opportunities(content, mode)
    if mode is WordBreak.NORMAL:
        result.words = add_highlights(content, result.words, mode)
    return result


__all__ = [
    "HIGHLIGHT_END",
    "HIGHLIGHT_START",
    "WORD_SEPARATORS",
    "HighlightSection",
    "LineBreakResult",
    "Segmenter",
    "UnicodeSegmenter",
    "add_highlights",
    "find_highlight_sections",
    "get_segmenter",
    "prepare_text_tokens",
    "reset_segmenter",
    "segment",
    "set_segmenter",
    "split_by_break_opportunities",
    "strip_highlight_markers",
]
