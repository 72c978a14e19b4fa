"""Tests for flexsvg/validation.py"""

import pytest

from flexsvg.utils.exceptions import StyleValueError, ValidationError
from flexsvg.validation import (FlexDirection, WordBreak, allowed_values,
                                resolve_style_value, validate_style_value)


class TestValidateStyleValue:
    """Test value-or-violation validation"""

    def test_accepts_css_string(self) -> None:
        result = validate_style_value("wordBreak", "keep-all")
        assert result.ok
        assert result.value is WordBreak.KEEP_ALL

    def test_accepts_enum_member(self) -> None:
        result = validate_style_value("flexDirection", FlexDirection.COLUMN)
        assert result.value is FlexDirection.COLUMN

    def test_none_uses_default(self) -> None:
        result = validate_style_value("wordBreak", None, WordBreak.NORMAL)
        assert result.value is WordBreak.NORMAL

    def test_violation_names_property_value_and_allowed_set(self) -> None:
        result = validate_style_value("wordBreak", "break-word")
        assert not result.ok
        message = str(result.violation)
        assert '"wordBreak"' in message
        assert '"break-word"' in message
        assert '"normal" | "break-all" | "keep-all"' in message

    def test_unknown_property(self) -> None:
        with pytest.raises(ValidationError):
            validate_style_value("colour", "red")


class TestResolveStyleValue:
    """Test the raising variant"""

    def test_raises_violation(self) -> None:
        with pytest.raises(StyleValueError) as exc_info:
            resolve_style_value("flexDirection", "diagonal")
        assert exc_info.value.property_name == "flexDirection"
        assert exc_info.value.received == "diagonal"
        assert exc_info.value.allowed == allowed_values("flexDirection")

    def test_returns_member(self) -> None:
        assert resolve_style_value("wordBreak", "break-all") is WordBreak.BREAK_ALL
