"""Exceptions raised by the pixel engines."""


class FilterPlayError(Exception):
    """Base class for every engine error."""


class OutOfBounds(FilterPlayError, IndexError):
    """A pixel coordinate lies outside the buffer extent."""


class SizeMismatch(FilterPlayError, ValueError):
    """A raw byte buffer does not match its declared dimensions."""


class InvalidParameter(FilterPlayError, ValueError):
    """A kernel was constructed with an unusable argument."""


class EmptyBuffer(FilterPlayError, ValueError):
    """A zero-area buffer was used where a real image is required."""
