"""Exception types raised by the level-to-SVG pipeline."""


class LevelMapError(Exception):
    """Base class for every failure the conversion pipeline reports."""


class SourceParseError(LevelMapError):
    """A level or texture source could not be parsed."""


class TextureFetchError(LevelMapError):
    """A raster could not be obtained for a referenced texture."""


class DepthComputationError(LevelMapError):
    """
    A depth or extent could not be computed.

    Raised when a face has no vertices, or when a coordinate is not-a-number
    and therefore cannot be ordered.
    """
