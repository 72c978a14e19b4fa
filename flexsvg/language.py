from typing import Dict

import regex

EMOJI_CODE = "emoji"
UNKNOWN_CODE = "unknown"

EMOJI_PATTERN = regex.compile(r"\p{Extended_Pictographic}|\p{Emoji_Presentation}")

# Checked in order; the first match wins. Han ideographs resolve to ja-JP.
LANGUAGE_PATTERNS: Dict[str, "regex.Pattern"] = {
    "ja-JP": regex.compile(r"\p{scx=Hiragana}|\p{scx=Katakana}|\p{scx=Han}|[\u3000-\u303f\uff00-\uffef]"),
    "ko-KR": regex.compile(r"\p{scx=Hangul}"),
    "th-TH": regex.compile(r"\p{scx=Thai}"),
    "bn-IN": regex.compile(r"\p{scx=Bengali}"),
    "ar-AR": regex.compile(r"\p{scx=Arabic}"),
    "ta-IN": regex.compile(r"\p{scx=Tamil}"),
    "ml-IN": regex.compile(r"\p{scx=Malayalam}"),
    "he-IL": regex.compile(r"\p{scx=Hebrew}"),
    "te-IN": regex.compile(r"\p{scx=Telugu}"),
    "devanagari": regex.compile(r"\p{scx=Devanagari}"),
    "kannada": regex.compile(r"\p{scx=Kannada}"),
}


def detect_language_code(grapheme: str) -> str:
    """
    Classifies one grapheme cluster by script.

    Returns:
        "emoji", one of LANGUAGE_PATTERNS' codes, or "unknown".
    """
    if EMOJI_PATTERN.search(grapheme):
        return EMOJI_CODE
    for code, pattern in LANGUAGE_PATTERNS.items():
        if pattern.search(grapheme):
            return code
    return UNKNOWN_CODE
