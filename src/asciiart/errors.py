class AsciiArtError(Exception):
    """Base class for errors raised by asciiart."""


class EmptyWorkingSetError(AsciiArtError):
    """Raised when a conversion or lookup is attempted with no characters."""


class DegenerateNormalizationError(AsciiArtError, ZeroDivisionError):
    """Raised when normalizing against a range whose min equals its max."""


class ImageLoadError(AsciiArtError):
    """Raised when an image cannot be read or decoded."""


class ResolutionError(AsciiArtError, ValueError):
    """Raised for a resolution the padded image cannot be split by."""


class CharsetSyntaxError(AsciiArtError, ValueError):
    """Raised for a charset expression that cannot be parsed."""
