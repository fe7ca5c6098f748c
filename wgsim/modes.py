# wgsim/modes.py

"""
Shared vocabulary of the mode solver: mode descriptors, field samples and the
derived-parameter bundle. All types are immutable values.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from enum import Enum

from utils.utils_errors import InvalidArgumentError


class ModeFamily(str, Enum):
    TE = "TE"
    TM = "TM"
    TEM = "TEM"
    HE = "HE"
    EH = "EH"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Mode:
    """
    One eigenmode of a hollow-pipe (or coaxial) boundary-value problem.

    The indices are geometry-relative:
      - rectangular: m half-waves along a, n half-waves along b
      - circular/coaxial: n is the azimuthal (Bessel) order, m the radial root index

    A family may be given as a string, e.g. Mode("TE", 1, 0).
    """
    family: ModeFamily
    m: int = 0
    n: int = 0

    def __post_init__(self):
        try:
            family = ModeFamily(self.family)
        except ValueError:
            raise InvalidArgumentError(
                f"Unknown mode family {self.family!r}; expected one of "
                f"{[f.value for f in ModeFamily]}") from None
        object.__setattr__(self, "family", family)
        for name in ("m", "n"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
                raise InvalidArgumentError(f"Mode index {name} must be an integer >= 0, got {value!r}")
            object.__setattr__(self, name, int(value))

    @property
    def is_hybrid(self) -> bool:
        return self.family in (ModeFamily.HE, ModeFamily.EH)

    @property
    def label(self) -> str:
        """Conventional name with indices in storage order, e.g. 'TE10' or 'TEM'."""
        if self.family is ModeFamily.TEM:
            return "TEM"
        sep = "," if max(self.m, self.n) > 9 else ""
        return f"{self.family.value}{self.m}{sep}{self.n}"

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Vector3D:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class FieldVector:
    """Instantaneous (E, H) sample at one point, Cartesian components."""
    E: Vector3D
    H: Vector3D

    @classmethod
    def zero(cls) -> FieldVector:
        return cls(Vector3D(), Vector3D())

    @property
    def is_zero(self) -> bool:
        return not any(self.E.as_tuple()) and not any(self.H.as_tuple())


@dataclass(frozen=True)
class CalculatedParams:
    """
    Derived scalars for one (geometry, mode, frequency) triple.

    Only cutoff_frequency, cutoff_wavelength, attenuation_constant and
    is_propagating are meaningful below cutoff; the propagation quantities
    stay at 0.0 there, so gate on is_propagating before using them.
    """
    cutoff_frequency: float         # fc [Hz]
    cutoff_wavelength: float        # c/fc [m], inf when fc = 0
    propagation_constant: float     # beta [rad/m]
    attenuation_constant: float     # alpha [Np/m], evanescent only
    phase_velocity: float           # vp [m/s]
    group_velocity: float           # vg [m/s]
    guide_wavelength: float         # lambda_g [m]
    impedance: float                # modal wave impedance [Ohm]
    is_propagating: bool
