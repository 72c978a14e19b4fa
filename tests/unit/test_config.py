"""Tests for flexsvg/config.py"""

import pytest

from flexsvg.config import InheritedStyle, RasterConfig, RenderOptions
from flexsvg.utils.exceptions import ValidationError


class TestRenderOptions:
    """Test request option defaults and validation"""

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("FLEXSVG_DEBUG", raising=False)
        options = RenderOptions(width=100, height=50)
        assert options.grapheme_images == {}
        assert options.embed_font is True
        assert options.debug is False
        assert options.load_additional_asset is None

    @pytest.mark.parametrize("width, height", [(0, 10), (10, -1), ("10", 10), (True, 10)])
    def test_invalid_dimensions(self, width, height) -> None:
        with pytest.raises(ValidationError):
            RenderOptions(width=width, height=height)

    def test_debug_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("FLEXSVG_DEBUG", "1")
        assert RenderOptions(width=1, height=1).debug is True


class TestInheritedStyle:
    """Test the root inherited style"""

    def test_to_dict_adds_viewport(self) -> None:
        style = InheritedStyle().to_dict(320, 240)
        assert style["font_size"] == 16
        assert style["line_height"] == 1.2
        assert style["_viewport_width"] == 320
        assert style["_viewport_height"] == 240


class TestRasterConfig:
    """Test PNG output configuration"""

    @pytest.mark.parametrize("level", [-1, 10])
    def test_compression_out_of_range(self, level) -> None:
        with pytest.raises(ValidationError):
            RasterConfig(png_compression=level)

    def test_defaults(self) -> None:
        config = RasterConfig()
        assert config.png_compression == 6
        assert config.verbose is False
