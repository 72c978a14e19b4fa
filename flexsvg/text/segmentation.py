import threading
from typing import List, Optional, Protocol

from flexsvg.utils.exceptions import ConfigurationError

NBSP = "\u00a0"

# https://drafts.csswg.org/css-text/#word-separator
WORD_SEPARATORS = tuple(
    chr(point)
    for point in (0x0020, 0x00A0, 0x1361, 0x10100, 0x10101, 0x1039, 0x1091, 0x000A)
)


class Segmenter(Protocol):
    """Backend that partitions text into Unicode units."""

    def graphemes(self, content: str, locale: Optional[str] = None) -> List[str]: ...

    def words(self, content: str, locale: Optional[str] = None) -> List[str]: ...

    def line_units(self, content: str) -> List[str]: ...


class UnicodeSegmenter:
    """
    Segmenter based on `regex` extended grapheme clusters and `uniseg`
    UAX #29 word / UAX #14 line break rules. Locales fall back to the
    root rules of those algorithms.
    """

    def __init__(self):
        try:
            import regex
            from uniseg.linebreak import line_break_units
            from uniseg.wordbreak import words
        except ImportError as e:
            raise ConfigurationError(
                "Unicode segmentation requires the 'regex' and 'uniseg' packages."
            ) from e

        self._grapheme_pattern = regex.compile(r"\X")
        self._words = words
        self._line_break_units = line_break_units

    def graphemes(self, content, locale=None):
        return self._grapheme_pattern.findall(content)

    def words(self, content, locale=None):
        return list(self._words(content))

    def line_units(self, content):
        return list(self._line_break_units(content))


_segmenter: Optional[Segmenter] = None
_segmenter_lock = threading.Lock()


def get_segmenter() -> Segmenter:
    """
    Returns the process-wide segmenter, creating it on first use.

    Raises:
        ConfigurationError: If the segmentation libraries are unavailable.
    """
    global _segmenter
    if _segmenter is None:
        with _segmenter_lock:
            if _segmenter is None:
                _segmenter = UnicodeSegmenter()
    return _segmenter


def set_segmenter(segmenter: Optional[Segmenter]) -> None:
    """Installs a segmenter backend (None restores lazy default creation)."""
    global _segmenter
    with _segmenter_lock:
        _segmenter = segmenter


def reset_segmenter() -> None:
    set_segmenter(None)


def _merge_non_breaking_spaces(segments: List[str]) -> List[str]:
    # A lone NBSP glues its neighbours into one token so they can't be broken apart.
    output: List[str] = []
    i = 0
    while i < len(segments):
        current = segments[i]
        if current == NBSP:
            previous_word = output.pop() if i > 0 else ""
            next_word = segments[i + 1] if i < len(segments) - 1 else ""
            output.append(f"{previous_word}{NBSP}{next_word}")
            i += 2
        else:
            output.append(current)
            i += 1
    return output


def segment(content: str, granularity: str, locale: Optional[str] = None) -> List[str]:
    """
    Splits text into words or grapheme clusters.

    Args:
        content: Text to split
        granularity: "word" or "grapheme"
        locale: Optional BCP 47 locale hint

    Returns:
        Ordered tokens whose concatenation equals `content`.

    Raises:
        ValueError: If granularity is not "word" or "grapheme".
        ConfigurationError: If no segmentation backend is available.
    """
    if granularity not in ("word", "grapheme"):
        raise ValueError(f"Unsupported granularity: {granularity!r}")

    segmenter = get_segmenter()
    if not content:
        return []

    if granularity == "grapheme":
        return segmenter.graphemes(content, locale)
    return _merge_non_breaking_spaces(segmenter.words(content, locale))
