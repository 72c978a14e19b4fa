import math
import re
from typing import Any, List, Mapping, Optional, Sequence, Union

# Root font size used for `rem` units.
ROOT_FONT_SIZE = 16

# Shorthand, multi-value and function syntax: `1px 2px`, `1px/2px`, `calc(1px)`, `1px, 2px`
MULTI_VALUE_PATTERN = re.compile(r"[ /(,]")
DIMENSION_PATTERN = re.compile(
    r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(%|[a-zA-Z]+)?$"
)

LENGTH_UNITS = frozenset(
    {"em", "ex", "ch", "rem", "vw", "vh", "vmin", "vmax",
     "px", "mm", "cm", "in", "pt", "pc", "q", "mozmm"}
)
ANGLE_UNITS = frozenset({"deg", "grad", "rad", "turn"})
TIME_UNITS = frozenset({"s", "ms"})
FREQUENCY_UNITS = frozenset({"hz", "khz"})
RESOLUTION_UNITS = frozenset({"dpi", "dpcm", "dppx"})


def _parse_dimension(value: str):
    """
    Parses a CSS dimension literal into (type, number, unit).

    Raises:
        ValueError: If the literal is malformed or the unit is unknown.
    """
    match = DIMENSION_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid CSS dimension: {value!r}")

    number = float(match.group(1))
    unit = (match.group(2) or "").lower()

    if not unit:
        return "number", number, ""
    if unit == "%":
        return "percentage", number, unit
    if unit in LENGTH_UNITS:
        return "length", number, unit
    if unit in ANGLE_UNITS:
        return "angle", number, unit
    if unit in TIME_UNITS:
        return "time", number, unit
    if unit in FREQUENCY_UNITS:
        return "frequency", number, unit
    if unit in RESOLUTION_UNITS:
        return "resolution", number, unit
    raise ValueError(f"Unknown CSS unit in {value!r}")


def _canonical_number(value: str) -> Optional[float]:
    """Returns the number if `value` is exactly its own canonical decimal spelling."""
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer() and abs(number) < 1e21:
        canonical = str(int(number))
        if value == canonical:
            return int(number)
        return None
    return number if value == repr(number) else None


def length_to_number(
    length: Union[str, int, float],
    base_font_size: float,
    base_length: float,
    inherited_style: Mapping[str, Any],
    percentage: bool = False,
) -> Optional[float]:
    """
    Converts a CSS length into pixels.

    Args:
        length: Number (returned as-is) or CSS length string
        base_font_size: Font size that `em` resolves against
        base_length: Length that percentages resolve against
        inherited_style: Inherited style; must carry `_viewport_width` and
            `_viewport_height` for `vw`/`vh`
        percentage: Whether percentages may be resolved

    Returns:
        The resolved number, or None when the value can't be resolved and
        the caller should fall back to its default.
    """
    if isinstance(length, (int, float)) and not isinstance(length, bool):
        return length

    try:
        length = length.strip()

        if MULTI_VALUE_PATTERN.search(length):
            return None

        bare = _canonical_number(length)
        if bare is not None:
            return bare

        kind, value, unit = _parse_dimension(length)
        if kind == "length":
            if unit == "em":
                return value * base_font_size
            if unit == "rem":
                return value * ROOT_FONT_SIZE
            if unit == "vw":
                return math.floor(value * inherited_style["_viewport_width"] / 100)
            if unit == "vh":
                return math.floor(value * inherited_style["_viewport_height"] / 100)
            return value
        if kind == "angle":
            return calc_degree(length)
        if kind == "percentage" and percentage:
            return value / 100 * base_length
    except (AttributeError, KeyError, TypeError, ValueError):
        # Not a length unit, silently ignore.
        pass
    return None


def calc_degree(angle: str) -> Optional[float]:
    """Converts a CSS angle (`deg`, `rad`, `turn`, `grad`) into degrees."""
    try:
        _, value, unit = _parse_dimension(angle.strip())
    except (AttributeError, ValueError):
        return None

    if unit == "deg":
        return value
    if unit == "rad":
        return value * 180 / math.pi
    if unit == "turn":
        return value * 360
    if unit == "grad":
        return 0.9 * value
    return None


def multiply(m1: Sequence[float], m2: Sequence[float]) -> List[float]:
    """
    Multiplies two 2D affine matrices given as [a, b, c, d, e, f].

    The result applies `m2` first, then `m1`.
    """
    return [
        m1[0] * m2[0] + m1[2] * m2[1],
        m1[1] * m2[0] + m1[3] * m2[1],
        m1[0] * m2[2] + m1[2] * m2[3],
        m1[1] * m2[2] + m1[3] * m2[3],
        m1[0] * m2[4] + m1[2] * m2[5] + m1[4],
        m1[1] * m2[4] + m1[3] * m2[5] + m1[5],
    ]


def split_effects(value: str, separator: str = ",") -> List[str]:
    """
    Splits a comma separated effect list (shadows, transforms, filters)
    at top level, leaving separators inside parentheses alone.
    """
    separator_pattern = re.compile(separator)
    result = []
    last = 0
    depth = 0

    for i, char in enumerate(value):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1

        if depth == 0 and separator_pattern.match(char):
            result.append(value[last:i].strip())
            last = i + 1

    result.append(value[last:].strip())
    return result


def parse_view_box(view_box: Optional[str]) -> Optional[List[float]]:
    if not view_box:
        return None
    return [float(part) for part in re.split(r"[, ]", view_box) if part]


def to_kebab_case(name: str) -> str:
    """`fontSize` -> `font-size`"""
    return re.sub(r"([A-Z])", lambda m: f"-{m.group(1).lower()}", name)
