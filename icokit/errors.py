"""
Errors raised by the ICO codec.
"""


class IcoError(Exception):
    """Base class for every error raised by icokit."""


class FormatError(IcoError, ValueError):
    """The ICONDIR header does not describe a Windows icon."""


class TruncatedDataError(IcoError, ValueError):
    """A read would run past the end of the buffer."""

    def __init__(self, needed, available, position=0):
        self.needed = needed
        self.available = available
        self.position = position
        super().__init__(
            f"Need {needed} bytes at offset {position}, only {available} available"
        )


class EmptyResultError(IcoError):
    """Decoding finished but no image survived validation."""


class InvalidSizeError(IcoError, ValueError):
    """A requested icon size is outside 1..256."""

    def __init__(self, size):
        self.size = size
        super().__init__(f"Invalid icon size {size!r}: must be an integer from 1 to 256")


class NoSizesRequestedError(IcoError, ValueError):
    """Encoding was requested without any target size."""

    def __init__(self, message="At least one icon size must be selected"):
        super().__init__(message)
