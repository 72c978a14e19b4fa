import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from flexsvg.text.line_breaking import (HIGHLIGHT_END, HIGHLIGHT_START,
                                        split_by_break_opportunities)
from flexsvg.validation import WordBreak

# Word run followed by its trailing punctuation/whitespace
WORD_WITH_PUNCTUATION = re.compile(r"(\w+)(\W*)")


@dataclass(frozen=True)
class HighlightSection:
    """A [s]...[e] range. start_index is at "[s]", end_index is one past "[e]"."""

    start_index: int
    end_index: int
    text: str

    @property
    def content_start(self) -> int:
        return self.start_index + len(HIGHLIGHT_START)

    @property
    def content_end(self) -> int:
        return self.end_index - len(HIGHLIGHT_END)

    def contains(self, index: int) -> bool:
        return self.content_start <= index < self.content_end


def find_highlight_sections(content: str) -> List[HighlightSection]:
    """Scans content left to right for [s]...[e] pairs. Unclosed starts are ignored."""
    sections: List[HighlightSection] = []
    search_start = 0

    while True:
        start = content.find(HIGHLIGHT_START, search_start)
        if start == -1:
            break
        end = content.find(HIGHLIGHT_END, start)
        if end == -1:
            break

        sections.append(
            HighlightSection(
                start_index=start,
                end_index=end + len(HIGHLIGHT_END),
                text=content[start + len(HIGHLIGHT_START):end].strip(),
            )
        )
        search_start = end + len(HIGHLIGHT_END)

    return sections


def _section_bounds(
    original_content: str,
    section: HighlightSection,
    word_break: Union[WordBreak, str, None],
) -> Optional[tuple]:
    """Returns (first word start, last word end) of the section in original_content."""
    highlight_words = split_by_break_opportunities(section.text, word_break).words
    if not highlight_words:
        return None

    first_word = highlight_words[0]
    last_word = highlight_words[-1]
    first_start = original_content.find(first_word, section.content_start)
    last_start = original_content.rfind(last_word, section.content_start, section.content_end)
    return first_start, last_start + len(last_word)


def add_highlights(
    original_content: str,
    words: Sequence[str],
    word_break: Union[WordBreak, str, None] = WordBreak.NORMAL,
) -> List[str]:
    """
    Re-applies [s]/[e] markers from original_content onto tokens produced
    from the marker-free text.

    Args:
        original_content: Text with [s]...[e] markers
        words: Tokens from split_by_break_opportunities
        word_break: The word-break mode the tokens were produced with

    Returns:
        Tokens with the start marker before the first highlighted word and
        the end marker after the last one.
    """
    sections = find_highlight_sections(original_content)
    if not sections:
        return list(words)

    result: List[str] = []
    cursor = 0

    for word in words:
        match = WORD_WITH_PUNCTUATION.search(word)
        if not match:
            result.append(word)
            continue

        core_word, punctuation = match.group(1), match.group(2)
        prefix, rest = word[: match.start()], word[match.end():]

        word_start = original_content.find(core_word, cursor)
        if word_start == -1:
            result.append(word)
            continue

        cursor = word_start + len(core_word)
        word_end = word_start + len(core_word)

        section = next((s for s in sections if s.contains(word_start)), None)
        if section is None:
            result.append(word)
            continue

        bounds = _section_bounds(original_content, section, word_break)
        if bounds is not None:
            first_start, last_end = bounds
            if word_start == first_start:
                result.append(f"{prefix}{HIGHLIGHT_START}{core_word}{punctuation}{rest}")
                continue
            if last_end in (word_end, word_start + len(word.strip())):
                result.append(f"{prefix}{core_word}{HIGHLIGHT_END}{punctuation}{rest}")
                continue

        result.append(word)

    return result
