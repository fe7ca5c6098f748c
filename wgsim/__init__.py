from utils.utils_errors import (
    GeometryError,
    InvalidArgumentError,
    RootFindingError,
    UnsupportedModeError,
    WaveguideError,
)
from .modes import CalculatedParams, FieldVector, Mode, ModeFamily, Vector3D
from .waveguide import Waveguide
from .rectangular_waveguide import RectangularWaveguide
from .circular_waveguide import CircularWaveguide
from .coaxial_waveguide import CoaxialWaveguide
from .factory import create_waveguide
from .logsettings import LOG_CONTROLLER

LOG_CONTROLLER.set_default()

__version__ = "0.1.0"

__all__ = [
    "CalculatedParams",
    "CircularWaveguide",
    "CoaxialWaveguide",
    "FieldVector",
    "GeometryError",
    "InvalidArgumentError",
    "LOG_CONTROLLER",
    "Mode",
    "ModeFamily",
    "RectangularWaveguide",
    "RootFindingError",
    "UnsupportedModeError",
    "Vector3D",
    "Waveguide",
    "WaveguideError",
    "create_waveguide",
]
