class ValidationError(ValueError):
    """Custom exception for validation errors."""

    pass


class StyleValueError(ValidationError):
    """Custom exception for style values outside a property's allowed set."""

    def __init__(self, property_name, received, allowed):
        self.property_name = property_name
        self.received = received
        self.allowed = tuple(allowed)
        allowed_str = " | ".join(f'"{value}"' for value in self.allowed)
        super().__init__(
            f'Invalid value for CSS property "{property_name}". '
            f'Allowed values: {allowed_str}. Received: "{received}".'
        )


class ConfigurationError(RuntimeError):
    """Custom exception for missing process-wide backends or libraries."""

    pass


class AssetLoadError(RuntimeError):
    """Custom exception for additional asset loader failures."""

    pass


class LayoutProtocolError(RuntimeError):
    """Custom exception for out-of-order layout handle usage."""

    pass


class FontError(RuntimeError):
    """Custom exception for font loading and resource failures."""

    pass


class RenderingError(RuntimeError):
    """Custom exception for rasterization failures."""

    pass
