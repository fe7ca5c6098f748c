# wgsim/factory.py

from objects.circular_section import CircularSection
from objects.coaxial_section import CoaxialSection
from objects.rectangular_section import RectangularSection
from objects.standard_sections import standard_section
from utils.utils_errors import InvalidArgumentError
from .circular_waveguide import CircularWaveguide
from .coaxial_waveguide import CoaxialWaveguide
from .rectangular_waveguide import RectangularWaveguide

_WAVEGUIDE_TYPES = {
    RectangularSection: RectangularWaveguide,
    CircularSection: CircularWaveguide,
    CoaxialSection: CoaxialWaveguide,
}


def create_waveguide(section, **options):
    """
    Build the waveguide matching a cross-section.

    Parameters:
    - section : a RectangularSection, CircularSection or CoaxialSection, or the
                name of a catalogued guide such as "WR90" or "COAX_50OHM"
    - options : forwarded to from_section() (include_hybrid, cutoff_method)

    Example:
        wg = create_waveguide("WR90")
        wg = create_waveguide(CoaxialSection(0.00091, 0.0021), cutoff_method="geometric")
    """
    if isinstance(section, str):
        section = standard_section(section)
    cls = _WAVEGUIDE_TYPES.get(type(section))
    if cls is None:
        raise InvalidArgumentError(f"No waveguide type for cross-section {section!r}")
    return cls.from_section(section, **options)
