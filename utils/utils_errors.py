# utils/utils_errors.py


class WaveguideError(Exception):
    """Base class for every error raised by the mode solver."""


class GeometryError(WaveguideError, ValueError):
    """A cross-section dimension is non-positive, non-finite or mis-ordered."""


class InvalidArgumentError(WaveguideError, ValueError):
    """An index, frequency, coordinate or option is outside its valid range."""


class UnsupportedModeError(WaveguideError, ValueError):
    """The mode does not exist in the queried geometry."""


class RootFindingError(WaveguideError, ArithmeticError):
    """Newton refinement or bracketing did not produce a usable root."""
