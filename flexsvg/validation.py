from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Type, Union

from flexsvg.utils.exceptions import StyleValueError, ValidationError


class WordBreak(Enum):
    NORMAL = "normal"
    BREAK_ALL = "break-all"
    KEEP_ALL = "keep-all"


class WhiteSpace(Enum):
    NORMAL = "normal"
    PRE = "pre"
    PRE_WRAP = "pre-wrap"
    PRE_LINE = "pre-line"
    NOWRAP = "nowrap"


class FlexDirection(Enum):
    ROW = "row"
    COLUMN = "column"
    ROW_REVERSE = "row-reverse"
    COLUMN_REVERSE = "column-reverse"


class FlexWrap(Enum):
    NOWRAP = "nowrap"
    WRAP = "wrap"
    WRAP_REVERSE = "wrap-reverse"


class AlignContent(Enum):
    AUTO = "auto"
    NORMAL = "normal"
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    STRETCH = "stretch"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"


class AlignItems(Enum):
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    BASELINE = "baseline"
    STRETCH = "stretch"
    NORMAL = "normal"


class JustifyContent(Enum):
    FLEX_START = "flex-start"
    FLEX_END = "flex-end"
    CENTER = "center"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"
    SPACE_EVENLY = "space-evenly"


class Overflow(Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


class Direction(Enum):
    LTR = "ltr"
    RTL = "rtl"


STYLE_PROPERTIES: Dict[str, Type[Enum]] = {
    "wordBreak": WordBreak,
    "whiteSpace": WhiteSpace,
    "flexDirection": FlexDirection,
    "flexWrap": FlexWrap,
    "alignContent": AlignContent,
    "alignItems": AlignItems,
    "justifyContent": JustifyContent,
    "overflow": Overflow,
    "direction": Direction,
}


@dataclass(frozen=True)
class StyleValueResult:
    """Outcome of validating a style value: either `value` or `violation` is set."""

    value: Optional[Enum] = None
    violation: Optional[StyleValueError] = None

    @property
    def ok(self) -> bool:
        return self.violation is None


def allowed_values(property_name: str) -> Tuple[str, ...]:
    """Returns the CSS spellings accepted for a style property."""
    return tuple(member.value for member in _enum_for(property_name))


def _enum_for(property_name: str) -> Type[Enum]:
    try:
        return STYLE_PROPERTIES[property_name]
    except KeyError:
        raise ValidationError(f"Unknown style property: {property_name}") from None


def validate_style_value(
    property_name: str,
    value: Union[str, Enum, None],
    default: Optional[Enum] = None,
) -> StyleValueResult:
    """
    Validates a style value against the property's allowed set.

    Args:
        property_name: camelCase CSS property name, e.g. "wordBreak"
        value: CSS string, enum member or None
        default: Member used when value is None

    Returns:
        StyleValueResult carrying the enum member or the violation.
    """
    enum_cls = _enum_for(property_name)

    if value is None:
        return StyleValueResult(value=default)
    if isinstance(value, enum_cls):
        return StyleValueResult(value=value)

    try:
        return StyleValueResult(value=enum_cls(value))
    except ValueError:
        return StyleValueResult(
            violation=StyleValueError(
                property_name, value, allowed_values(property_name)
            )
        )


def resolve_style_value(
    property_name: str,
    value: Union[str, Enum, None],
    default: Optional[Enum] = None,
) -> Optional[Enum]:
    """
    Same as validate_style_value, but raises the violation.

    Raises:
        StyleValueError: If the value is not allowed for the property.
    """
    result = validate_style_value(property_name, value, default)
    if result.violation is not None:
        raise result.violation
    return result.value
