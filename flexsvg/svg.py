from typing import Any, Mapping, Optional

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def build_xml_string(tag: str, attrs: Mapping[str, Any], children: Optional[str] = None) -> str:
    """Serializes one element. Attributes set to None are omitted."""
    attr_string = "".join(
        f' {key}="{value}"' for key, value in attrs.items() if value is not None
    )
    if children:
        return f"<{tag}{attr_string}>{children}</{tag}>"
    return f"<{tag}{attr_string}/>"


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_svg(width: float, height: float, content: str) -> str:
    """Wraps serialized body content into the root <svg> document."""
    return build_xml_string(
        "svg",
        {
            "width": _format_number(width),
            "height": _format_number(height),
            "viewBox": f"0 0 {_format_number(width)} {_format_number(height)}",
            "xmlns": SVG_NAMESPACE,
        },
        content,
    )
