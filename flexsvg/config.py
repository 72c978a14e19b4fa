import os
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence

from flexsvg.utils.exceptions import ValidationError


@dataclass
class InheritedStyle:
    """Root inherited style for every render."""

    font_size: float = 16
    font_weight: str = "normal"
    font_family: str = "serif"
    font_style: str = "normal"
    line_height: float = 1.2
    color: str = "black"
    opacity: float = 1
    white_space: str = "normal"

    def to_dict(self, viewport_width: float, viewport_height: float) -> Dict[str, Any]:
        style = asdict(self)
        # Special style properties used by vw/vh resolution
        style["_viewport_width"] = viewport_width
        style["_viewport_height"] = viewport_height
        return style


@dataclass
class RasterConfig:
    """Configuration for PNG output."""

    png_compression: int = 6
    verbose: bool = False

    def __post_init__(self):
        if not 0 <= self.png_compression <= 9:
            raise ValidationError("png_compression must be between 0 and 9.")


@dataclass
class RenderOptions:
    """Options for a single to_svg / to_png request."""

    width: float
    height: float
    fonts: Sequence[Any] = field(default_factory=list)
    embed_font: bool = True
    debug: bool = False
    grapheme_images: Optional[Dict[str, str]] = None
    # Maps one grapheme to a language code; defaults to detect_language_code.
    detect_language: Optional[Callable[[str], Any]] = None
    # (language_code, text) -> FontOptions | image URI | None, sync or async
    load_additional_asset: Optional[Callable[[str, str], Any]] = None
    # Tree-to-box resolver; defaults to the one installed with init()
    resolver: Optional[Any] = None
    inherited_style: InheritedStyle = field(default_factory=InheritedStyle)

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ValidationError(f"{name} must be a positive number.")

        if self.grapheme_images is None:
            self.grapheme_images = {}

        if not self.debug:
            self.debug = os.environ.get("FLEXSVG_DEBUG", "").lower() in ("1", "true", "yes")
