"""Exceptions raised by the graphic field codec."""


class GraphicFieldError(Exception):
    """Exception raised for graphic field encoding and decoding errors."""

    pass


class InvalidGeometry(GraphicFieldError, ValueError):
    """Raised when a raster reports a negative width or height."""

    pass
