"""
Shared helpers for flexsvg.

This subpackage contains modules for:
- Custom exception types
- Verbose-gated logging
"""

from .exceptions import (AssetLoadError, ConfigurationError, FontError,
                         LayoutProtocolError, RenderingError, StyleValueError,
                         ValidationError)
from .logging import get_logger, log_message

__all__ = [
    "AssetLoadError",
    "ConfigurationError",
    "FontError",
    "LayoutProtocolError",
    "RenderingError",
    "StyleValueError",
    "ValidationError",
    "get_logger",
    "log_message",
]
