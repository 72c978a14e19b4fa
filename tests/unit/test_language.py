"""Tests for flexsvg/language.py"""

import pytest

from flexsvg.language import EMOJI_CODE, UNKNOWN_CODE, detect_language_code


class TestDetectLanguageCode:
    """Test script classification of single graphemes"""

    @pytest.mark.parametrize(
        "grapheme, code",
        [
            ("\U0001F600", EMOJI_CODE),
            ("❤️", EMOJI_CODE),
            ("漢", "ja-JP"),
            ("あ", "ja-JP"),
            ("カ", "ja-JP"),
            ("한", "ko-KR"),
            ("ก", "th-TH"),
            ("א", "he-IL"),
            ("ب", "ar-AR"),
            ("क", "devanagari"),
            ("ಕ", "kannada"),
        ],
    )
    def test_known_scripts(self, grapheme: str, code: str) -> None:
        assert detect_language_code(grapheme) == code

    @pytest.mark.parametrize("grapheme", ["a", "1", "?"])
    def test_unknown(self, grapheme: str) -> None:
        assert detect_language_code(grapheme) == UNKNOWN_CODE
