from .cross_section import CrossSection, validate_dimension
from .rectangular_section import RectangularSection
from .circular_section import CircularSection
from .coaxial_section import CoaxialSection
from .standard_sections import STANDARD_WAVEGUIDES, standard_section

__all__ = [
    "CrossSection",
    "RectangularSection",
    "CircularSection",
    "CoaxialSection",
    "STANDARD_WAVEGUIDES",
    "standard_section",
    "validate_dimension",
]
