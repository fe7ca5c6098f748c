# standard_sections.py

"""
Catalog of common waveguide sizes (EIA rectangular designations and two
standard coaxial lines). Dimensions in meters.
"""

from .rectangular_section import RectangularSection
from .coaxial_section import CoaxialSection
from utils.utils_errors import InvalidArgumentError

STANDARD_WAVEGUIDES = {
    "WR90": {"kind": "rectangular", "a": 0.02286, "b": 0.01016},
    "WR75": {"kind": "rectangular", "a": 0.01905, "b": 0.00953},
    "WR62": {"kind": "rectangular", "a": 0.01580, "b": 0.00790},
    "WR42": {"kind": "rectangular", "a": 0.01067, "b": 0.00432},
    "COAX_50OHM": {"kind": "coaxial", "inner_radius": 0.00091, "outer_radius": 0.0021},
    "COAX_75OHM": {"kind": "coaxial", "inner_radius": 0.00058, "outer_radius": 0.0021},
}


def standard_section(name: str, **options):
    """
    Build the cross-section of a catalogued guide, e.g. standard_section("WR90").
    Names are case-insensitive. Extra options (such as origin="corner") are
    forwarded to the rectangular constructor.
    """
    key = str(name).upper()
    if key not in STANDARD_WAVEGUIDES:
        raise InvalidArgumentError(
            f"Unknown standard waveguide {name!r}; available: {sorted(STANDARD_WAVEGUIDES)}")
    entry = dict(STANDARD_WAVEGUIDES[key])
    kind = entry.pop("kind")
    if kind == "rectangular":
        return RectangularSection(entry["a"], entry["b"], **options)
    if options:
        raise InvalidArgumentError(f"{key} is coaxial and takes no options, got {sorted(options)}")
    return CoaxialSection(entry["inner_radius"], entry["outer_radius"])
