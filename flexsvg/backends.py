import io
import threading
from typing import Any, Optional, Protocol

import numpy as np
from PIL import Image

from flexsvg.config import RasterConfig
from flexsvg.layout import TreeResolver
from flexsvg.utils.exceptions import ConfigurationError, RenderingError
from flexsvg.utils.logging import log_message
from flexsvg.validation import (AlignContent, AlignItems, Direction,
                                FlexDirection, FlexWrap, JustifyContent,
                                Overflow)


class FlexEngine(Protocol):
    """Flexbox layout backend owning native layout nodes."""

    def construct(self, width: float, height: float) -> Any: ...

    def configure(
        self,
        node: Any,
        *,
        flex_direction: FlexDirection,
        flex_wrap: FlexWrap,
        align_content: AlignContent,
        align_items: AlignItems,
        justify_content: JustifyContent,
        overflow: Overflow,
    ) -> None: ...

    def compute(self, node: Any, width: float, height: float, direction: Direction) -> None: ...

    def release(self, node: Any) -> None:
        """Frees the node and its descendants."""
        ...


class RasterRenderer(Protocol):
    def render(self, document: str, fit_width: float) -> bytes: ...


def skia_surface_to_pil(surface) -> Image.Image:
    """Converts a Skia Surface to a PIL image.

    Raises:
        RenderingError: If conversion fails
    """
    import skia

    skia_image = surface.makeImageSnapshot()
    if skia_image is None:
        raise RenderingError("Failed to create Skia image snapshot")

    skia_image = skia_image.convert(
        alphaType=skia.kUnpremul_AlphaType, colorType=skia.kRGBA_8888_ColorType
    )
    return Image.fromarray(np.asarray(skia_image))


class SkiaRasterRenderer:
    """Rasterizes SVG documents to PNG with Skia's SVG DOM."""

    def __init__(self, config: Optional[RasterConfig] = None):
        try:
            import skia
        except ImportError as e:
            raise ConfigurationError("Rasterization requires the 'skia-python' package.") from e
        self._skia = skia
        self.config = config or RasterConfig()

    def render(self, document: str, fit_width: float) -> bytes:
        """
        Renders an SVG document scaled to `fit_width` pixels wide.

        Raises:
            RenderingError: If the document can't be parsed or drawn
        """
        skia = self._skia
        try:
            stream = skia.MemoryStream(document.encode("utf-8"), True)
            dom = skia.SVGDOM.MakeFromStream(stream)
        except Exception as e:
            raise RenderingError("Failed to parse SVG document") from e
        if dom is None:
            raise RenderingError("Failed to parse SVG document")

        size = dom.containerSize()
        width, height = size.width(), size.height()
        if width <= 0 or height <= 0:
            raise RenderingError("SVG document has no intrinsic size")

        scale = fit_width / width
        out_width = max(1, round(fit_width))
        out_height = max(1, round(height * scale))
        log_message(
            f"Rasterizing {width:.0f}x{height:.0f} -> {out_width}x{out_height}",
            verbose=self.config.verbose,
        )

        try:
            surface = skia.Surface(out_width, out_height)
            with surface as canvas:
                canvas.scale(scale, scale)
                dom.render(canvas)
            pil_image = skia_surface_to_pil(surface)
        except RenderingError:
            raise
        except Exception as e:
            log_message(f"Skia rasterization error: {e}", always_print=True)
            raise RenderingError("SVG rasterization failed") from e

        output = io.BytesIO()
        pil_image.save(output, format="PNG", compress_level=self.config.png_compression)
        return output.getvalue()


_flex_engine: Optional[FlexEngine] = None
_rasterizer: Optional[RasterRenderer] = None
_resolver: Optional[TreeResolver] = None
_backend_lock = threading.Lock()


def init(
    flex_engine: Optional[FlexEngine] = None,
    rasterizer: Optional[RasterRenderer] = None,
    resolver: Optional[TreeResolver] = None,
) -> None:
    """Installs process-wide backends. Arguments left as None keep the current one."""
    global _flex_engine, _rasterizer, _resolver
    with _backend_lock:
        if flex_engine is not None:
            _flex_engine = flex_engine
        if rasterizer is not None:
            _rasterizer = rasterizer
        if resolver is not None:
            _resolver = resolver


def reset_backends() -> None:
    global _flex_engine, _rasterizer, _resolver
    with _backend_lock:
        _flex_engine = None
        _rasterizer = None
        _resolver = None


def get_flex_engine() -> FlexEngine:
    """
    Raises:
        ConfigurationError: If init() has not installed a flex engine.
    """
    if _flex_engine is None:
        raise ConfigurationError("Flex layout engine is not initialized.")
    return _flex_engine


def get_resolver() -> TreeResolver:
    if _resolver is None:
        raise ConfigurationError("Tree resolver is not initialized.")
    return _resolver


def get_rasterizer() -> RasterRenderer:
    """Returns the installed rasterizer, creating the Skia one on first use."""
    global _rasterizer
    with _backend_lock:
        if _rasterizer is None:
            _rasterizer = SkiaRasterRenderer()
        return _rasterizer
