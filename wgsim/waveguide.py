# wgsim/waveguide.py

"""
Abstract waveguide contract.

A concrete waveguide supplies the geometry-specific pieces (cutoff wavenumber,
mode support rules, candidate modes for enumeration and the in-domain field
evaluation). Everything derived from the dispersion relation lives here once:

    k  = 2 pi f / c
    kc = cutoff_wavenumber(mode)
    beta  = sqrt(k^2 - kc^2)      f > fc
    alpha = sqrt(kc^2 - k^2)      f <= fc

Field snapshots are real-valued: with psi = time - beta z, the longitudinal
generator is multiplied by cos(psi) and the transverse components, which sit
at +90 degrees in phasor form, by -sin(psi).
"""

import math
from abc import ABC, abstractmethod

from loguru import logger

from utils.utils_constants import C0, EPS0, ETA0, MU0
from utils.utils_errors import InvalidArgumentError, UnsupportedModeError
from .modes import CalculatedParams, FieldVector, Mode, ModeFamily, Vector3D


def check_frequency(frequency) -> float:
    """Frequency must be a finite number >= 0 [Hz]."""
    if isinstance(frequency, bool):
        raise InvalidArgumentError(f"frequency must be a finite number >= 0, got {frequency!r}")
    try:
        value = float(frequency)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"frequency must be a finite number >= 0, got {frequency!r}") from None
    if not math.isfinite(value) or value < 0.0:
        raise InvalidArgumentError(f"frequency must be a finite number >= 0, got {frequency!r}")
    return value


def check_finite(name: str, value) -> float:
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name} must be a finite number, got {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be a finite number, got {value!r}") from None
    if not math.isfinite(as_float):
        raise InvalidArgumentError(f"{name} must be a finite number, got {value!r}")
    return as_float


def transverse_coefficients(family: ModeFamily, d1g: float, d2g: float,
                            kc: float, omega: float, beta: float):
    """
    Transverse (E1, E2, H1, H2) from the gradient of the longitudinal generator.

    (d1g, d2g) is (dg/dx, dg/dy) in a rectangular guide and
    (dg/drho, (1/rho) dg/dphi) in a cylindrical one. The returned values are the
    phasor coefficients divided by j:
      TE:  E1 = -w mu/kc^2 d2g,  E2 = w mu/kc^2 d1g,  H1 = -beta/kc^2 d1g,  H2 = -beta/kc^2 d2g
      TM:  E1 = -beta/kc^2 d1g,  E2 = -beta/kc^2 d2g,  H1 = w eps/kc^2 d2g,  H2 = -w eps/kc^2 d1g
    """
    kc2 = kc * kc
    if family is ModeFamily.TE:
        s = omega * MU0 / kc2
        t = beta / kc2
        return -s * d2g, s * d1g, -t * d1g, -t * d2g
    s = beta / kc2
    t = omega * EPS0 / kc2
    return -s * d1g, -s * d2g, t * d2g, -t * d1g


def snapshot_components(family: ModeFamily, g: float, d1g: float, d2g: float,
                        kc: float, omega: float, beta: float, psi: float):
    """
    Real field snapshot (E1, E2, Ez, H1, H2, Hz) of a TE or TM mode.

    The generator keeps its own amplitude. The transverse components are
    renormalised by 1/(Z kc), Z being the modal impedance w mu0/beta (TE) or
    beta/(w eps0) (TM), so E_t/H_t still equals Z. Only valid above cutoff
    (beta > 0).
    """
    e1, e2, h1, h2 = transverse_coefficients(family, d1g, d2g, kc, omega, beta)
    c = math.cos(psi)
    s = -math.sin(psi)
    if family is ModeFamily.TE:
        renorm = beta / (omega * MU0 * kc)
        return (renorm * e1 * s, renorm * e2 * s, 0.0,
                renorm * h1 * s, renorm * h2 * s, g * c)
    renorm = omega * EPS0 / (beta * kc)
    return (renorm * e1 * s, renorm * e2 * s, g * c,
            renorm * h1 * s, renorm * h2 * s, 0.0)


def polar_to_cartesian(v_rho: float, v_phi: float, cos_phi: float, sin_phi: float):
    return v_rho * cos_phi - v_phi * sin_phi, v_rho * sin_phi + v_phi * cos_phi


class Waveguide(ABC):
    """
    Base class for a waveguide of fixed cross-section.

    Instances are immutable after construction: the only state is the validated
    cross-section. All queries are pure functions of their arguments.
    """

    geometry: str = "abstract"

    # Conventional labels write the azimuthal order first (cylindrical guides)
    azimuthal_first: bool = False

    def __init__(self, section):
        self._section = section
        logger.trace(f"Created {self!r}")

    @property
    def section(self):
        return self._section

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._section!r})"

    # --------------------------------------------------------------------------
    # Geometry-specific capabilities
    # --------------------------------------------------------------------------

    @abstractmethod
    def cutoff_wavenumber(self, mode: Mode) -> float:
        """Transverse eigenvalue kc [rad/m] of a supported mode."""

    @abstractmethod
    def is_mode_supported(self, mode: Mode) -> bool:
        """Index-range rules of the geometry."""

    @abstractmethod
    def _mode_candidates(self):
        """Modes enumerated by available_modes(), in encounter order."""

    @abstractmethod
    def _field_at(self, x: float, y: float, z: float, mode: Mode,
                  frequency: float, time: float) -> FieldVector:
        """
        Field of a supported mode at a point inside the cross-section. Only
        called for propagating modes and for TEM.
        """

    # --------------------------------------------------------------------------
    # Shared behaviour
    # --------------------------------------------------------------------------

    def require_supported(self, mode: Mode) -> Mode:
        if not isinstance(mode, Mode):
            raise InvalidArgumentError(f"Expected a Mode, got {mode!r}")
        if not self.is_mode_supported(mode):
            raise UnsupportedModeError(
                f"{self.mode_label(mode)} (family={mode.family.value}, m={mode.m}, n={mode.n}) "
                f"is not supported by the {self.geometry} waveguide")
        return mode

    def contains(self, x: float, y: float) -> bool:
        return self._section.contains(x, y)

    def mode_label(self, mode: Mode) -> str:
        """Conventional name of a mode in this geometry, e.g. 'TE10' or 'TM01'."""
        if mode.family is ModeFamily.TEM:
            return "TEM"
        first, second = (mode.n, mode.m) if self.azimuthal_first else (mode.m, mode.n)
        sep = "," if max(first, second) > 9 else ""
        return f"{mode.family.value}{first}{sep}{second}"

    def cutoff_frequency(self, mode: Mode) -> float:
        """fc = c kc / (2 pi) [Hz]."""
        return C0 * self.cutoff_wavenumber(mode) / (2.0 * math.pi)

    def available_modes(self) -> list:
        """Supported modes in the enumeration range, ascending cutoff (stable)."""
        modes = [mode for mode in self._mode_candidates() if self.is_mode_supported(mode)]
        return sorted(modes, key=self.cutoff_frequency)

    def dominant_mode(self) -> Mode:
        return self.available_modes()[0]

    def propagating_modes(self, frequency: float) -> list:
        frequency = check_frequency(frequency)
        return [mode for mode in self.available_modes()
                if frequency > self.cutoff_frequency(mode)]

    def propagation_constant(self, frequency: float, mode: Mode) -> float:
        """
        beta [rad/m] above cutoff, attenuation constant alpha [Np/m] at or
        below it. Both are >= 0; use calculated_params().is_propagating to tell
        them apart.
        """
        frequency = check_frequency(frequency)
        kc = self.cutoff_wavenumber(mode)
        k = 2.0 * math.pi * frequency / C0
        if frequency > self.cutoff_frequency(mode):
            return math.sqrt(max(k * k - kc * kc, 0.0))
        return math.sqrt(max(kc * kc - k * k, 0.0))

    def _wave_impedance(self, mode: Mode, ratio: float) -> float:
        """Modal impedance, ratio = sqrt(1 - (fc/f)^2)."""
        if mode.family is ModeFamily.TE:
            return ETA0 / ratio
        if mode.family is ModeFamily.TM:
            return ETA0 * ratio
        if mode.family is ModeFamily.TEM:
            return ETA0
        return 0.0

    def calculated_params(self, frequency: float, mode: Mode) -> CalculatedParams:
        frequency = check_frequency(frequency)
        fc = self.cutoff_frequency(mode)
        cutoff_wavelength = C0 / fc if fc > 0.0 else math.inf
        gamma = self.propagation_constant(frequency, mode)
        if not frequency > fc:
            return CalculatedParams(
                cutoff_frequency=fc,
                cutoff_wavelength=cutoff_wavelength,
                propagation_constant=0.0,
                attenuation_constant=gamma,
                phase_velocity=0.0,
                group_velocity=0.0,
                guide_wavelength=0.0,
                impedance=0.0,
                is_propagating=False,
            )
        ratio = math.sqrt(1.0 - (fc / frequency) ** 2)
        return CalculatedParams(
            cutoff_frequency=fc,
            cutoff_wavelength=cutoff_wavelength,
            propagation_constant=gamma,
            attenuation_constant=0.0,
            phase_velocity=C0 / ratio,
            group_velocity=C0 * ratio,
            guide_wavelength=(C0 / frequency) / ratio,
            impedance=self._wave_impedance(mode, ratio),
            is_propagating=True,
        )

    def _zeroed_when_evanescent(self, mode: Mode) -> bool:
        # TEM has no cutoff and is never suppressed
        return mode.family is not ModeFamily.TEM

    def field_distribution(self, x: float, y: float, z: float, mode: Mode,
                           frequency: float, time: float = 0.0) -> FieldVector:
        """
        Instantaneous (E, H) at the point (x, y, z).

        Parameters:
        - x, y, z   : coordinates [m], (x, y) in the cross-section frame
        - mode      : a mode supported by this guide
        - frequency : operating frequency [Hz]
        - time      : phase angle w t [rad]

        Returns the zero field outside the cross-section and, except for TEM,
        when the mode is evanescent at the given frequency.
        """
        self.require_supported(mode)
        frequency = check_frequency(frequency)
        x = check_finite("x", x)
        y = check_finite("y", y)
        z = check_finite("z", z)
        time = check_finite("time", time)

        if not self.contains(x, y):
            return FieldVector.zero()
        if self._zeroed_when_evanescent(mode) and not frequency > self.cutoff_frequency(mode):
            return FieldVector.zero()
        return self._field_at(x, y, z, mode, frequency, time)

    @staticmethod
    def _field_vector(ex, ey, ez, hx, hy, hz) -> FieldVector:
        return FieldVector(Vector3D(ex, ey, ez), Vector3D(hx, hy, hz))

    @staticmethod
    def _phase(frequency: float, beta: float, z: float, time: float):
        """(omega, psi) for a wave travelling towards +z."""
        return 2.0 * math.pi * frequency, time - beta * z
