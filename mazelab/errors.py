"""Exceptions raised by maze construction, parsing and solving."""


class MazeError(ValueError):
    """Base class for all maze errors."""


class InvalidDimensions(MazeError):
    """Raised when a grid is requested with non-positive rows or columns."""


class FormatError(MazeError):
    """Raised when serialized maze text cannot be decoded."""


class InvalidArgument(MazeError):
    """Raised when a position lies outside the grid."""


__all__ = [
    "MazeError",
    "InvalidDimensions",
    "FormatError",
    "InvalidArgument",
]
