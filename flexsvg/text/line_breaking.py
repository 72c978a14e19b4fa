from dataclasses import dataclass, field
from typing import List, Union

from flexsvg.text.segmentation import get_segmenter, segment
from flexsvg.validation import WordBreak, resolve_style_value

HIGHLIGHT_START = "[s]"
HIGHLIGHT_END = "[e]"

# UAX #14 classes BK, CR, LF and NL: a break after them is mandatory.
MANDATORY_BREAK_CHARS = frozenset("\n\r\x0b\x0c\x85\u2028\u2029")


@dataclass
class LineBreakResult:
    """Tokens and, for normal word-break, which breaks are mandatory."""

    words: List[str] = field(default_factory=list)
    required_breaks: List[bool] = field(default_factory=list)


def strip_highlight_markers(content: str) -> str:
    return content.replace(HIGHLIGHT_START, "").replace(HIGHLIGHT_END, "")


def split_by_break_opportunities(
    content: str, word_break: Union[WordBreak, str, None] = WordBreak.NORMAL
) -> LineBreakResult:
    """
    Splits content at the positions where a line may wrap.

    Args:
        content: Text, possibly containing [s]...[e] highlight markers
        word_break: CSS word-break mode

    Returns:
        LineBreakResult. For "normal", required_breaks has one more entry
        than words and entry i marks a mandatory break after word i-1.

    Raises:
        StyleValueError: If word_break is not an allowed value.
    """
    mode = resolve_style_value("wordBreak", word_break, WordBreak.NORMAL)

    if mode is WordBreak.BREAK_ALL:
        return LineBreakResult(words=segment(content, "grapheme"))

    if mode is WordBreak.KEEP_ALL:
        return LineBreakResult(words=segment(content, "word"))

    # Markers are zero-width and must not create break opportunities.
    stripped = strip_highlight_markers(content)
    words = get_segmenter().line_units(stripped) if stripped else []

    required_breaks = [False]
    last = len(words) - 1
    for i, word in enumerate(words):
        required_breaks.append(i < last and word[-1] in MANDATORY_BREAK_CHARS)

    return LineBreakResult(words=words, required_breaks=required_breaks)
