"""Custom exceptions for planet generation."""


class PlanetError(Exception):
    """Base exception for planet generation errors."""

    pass


class InvalidResolutionError(PlanetError, ValueError):
    """Raised when a mesh resolution is negative."""

    pass


class ChannelMismatchError(PlanetError, ValueError):
    """Raised when paired inputs such as maps and weights differ in length."""

    pass


class BufferOverflowError(PlanetError):
    """Raised when writing past the end of a pre-sized mesh buffer."""

    pass
