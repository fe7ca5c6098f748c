# wgsim/circular_waveguide.py

import math

from objects.circular_section import CircularSection
from utils.utils_bessel import (
    bessel_j,
    bessel_j_max,
    bessel_j_prime,
    bessel_j_prime_zero,
    bessel_j_zero,
)
from utils.utils_constants import RHO_EPSILON
from utils.utils_errors import InvalidArgumentError
from .modes import FieldVector, Mode, ModeFamily
from .waveguide import Waveguide, polar_to_cartesian, snapshot_components

# TM share of the field in the approximate hybrid modes; the TE share is 1 - mix
HYBRID_MIX = {ModeFamily.HE: 0.7, ModeFamily.EH: 0.3}


class CircularWaveguide(Waveguide):
    """
    Hollow PEC circular guide of radius R.

    Mode indices: n is the azimuthal (Bessel) order, m the radial root index.
      - TE_nm : kc = chi'_nm / R (m-th zero of Jn'),  Hz ~ Jn(kc rho) cos(n phi) / Jn(chi'_nm)
      - TM_nm : kc = chi_nm / R  (m-th zero of Jn),   Ez ~ Jn(kc rho) cos(n phi) / max|Jn|
      - HE/EH : approximate hybrids, kc = chi_nm / R, a fixed mix of the TM-like
                and TE-like fields built from the same generator. These are a
                visual aid; real hybrid modes need a dielectric-loaded guide.
    """

    geometry = "circular"
    azimuthal_first = True

    MAX_ORDER = 3
    MAX_ROOT = 3
    MAX_HYBRID_INDEX = 2

    def __init__(self, radius: float, include_hybrid: bool = True):
        """
        Parameters:
        - radius: inner radius of the pipe [meters]
        - include_hybrid: accept and enumerate the approximate HE/EH modes
        """
        self._include_hybrid = bool(include_hybrid)
        super().__init__(CircularSection(radius))

    @classmethod
    def from_section(cls, section: CircularSection, include_hybrid: bool = True) -> "CircularWaveguide":
        if not isinstance(section, CircularSection):
            raise InvalidArgumentError(f"Expected a CircularSection, got {section!r}")
        return cls(section.radius, include_hybrid=include_hybrid)

    def __repr__(self) -> str:
        return f"CircularWaveguide(radius={self.radius!r}, include_hybrid={self._include_hybrid!r})"

    @property
    def radius(self) -> float:
        return self._section.radius

    @property
    def include_hybrid(self) -> bool:
        return self._include_hybrid

    def is_mode_supported(self, mode: Mode) -> bool:
        if mode.family in (ModeFamily.TE, ModeFamily.TM):
            return mode.m >= 1
        if mode.is_hybrid:
            return self._include_hybrid and mode.n >= 1 and mode.m >= 1
        return False

    def cutoff_root(self, mode: Mode) -> float:
        """chi'_nm for TE, chi_nm for TM and the hybrids."""
        self.require_supported(mode)
        if mode.family is ModeFamily.TE:
            return bessel_j_prime_zero(mode.n, mode.m)
        return bessel_j_zero(mode.n, mode.m)

    def cutoff_wavenumber(self, mode: Mode) -> float:
        return self.cutoff_root(mode) / self.radius

    def _mode_candidates(self):
        for family in (ModeFamily.TE, ModeFamily.TM):
            for n in range(self.MAX_ORDER + 1):
                for m in range(1, self.MAX_ROOT + 1):
                    yield Mode(family, m, n)
        if self._include_hybrid:
            for family in (ModeFamily.HE, ModeFamily.EH):
                for n in range(1, self.MAX_HYBRID_INDEX + 1):
                    for m in range(1, self.MAX_HYBRID_INDEX + 1):
                        yield Mode(family, m, n)

    def _generator(self, n: int, kc: float, rho: float, cos_nphi: float, sin_nphi: float, norm: float):
        """
        g = Jn(kc rho) cos(n phi) / norm and its gradient (dg/drho, (1/rho) dg/dphi).

        n Jn(x) / x = (J(n-1)(x) + J(n+1)(x)) / 2 keeps the azimuthal term finite
        on the axis.
        """
        x = kc * rho
        g = bessel_j(n, x) * cos_nphi / norm
        dg_rho = kc * bessel_j_prime(n, x) * cos_nphi / norm
        if n == 0:
            dg_phi = 0.0
        else:
            n_j_over_rho = 0.5 * kc * (bessel_j(n - 1, x) + bessel_j(n + 1, x))
            dg_phi = -n_j_over_rho * sin_nphi / norm
        return g, dg_rho, dg_phi

    def _field_at(self, x, y, z, mode, frequency, time) -> FieldVector:
        n = mode.n
        kc = self.cutoff_wavenumber(mode)
        beta = self.propagation_constant(frequency, mode)
        omega, psi = self._phase(frequency, beta, z, time)

        rho = math.hypot(x, y)
        if rho < RHO_EPSILON * self.radius:
            cos_phi, sin_phi, phi = 1.0, 0.0, 0.0
        else:
            cos_phi, sin_phi, phi = x / rho, y / rho, math.atan2(y, x)
        cos_nphi, sin_nphi = math.cos(n * phi), math.sin(n * phi)

        if mode.family is ModeFamily.TE:
            norm = bessel_j(n, self.cutoff_root(mode))
            g, d1, d2 = self._generator(n, kc, rho, cos_nphi, sin_nphi, norm)
            comps = snapshot_components(ModeFamily.TE, g, d1, d2, kc, omega, beta, psi)
        elif mode.family is ModeFamily.TM:
            g, d1, d2 = self._generator(n, kc, rho, cos_nphi, sin_nphi, bessel_j_max(n))
            comps = snapshot_components(ModeFamily.TM, g, d1, d2, kc, omega, beta, psi)
        else:
            mix = HYBRID_MIX[mode.family]
            g, d1, d2 = self._generator(n, kc, rho, cos_nphi, sin_nphi, bessel_j_max(n))
            tm = snapshot_components(ModeFamily.TM, g, d1, d2, kc, omega, beta, psi)
            te = snapshot_components(ModeFamily.TE, g, d1, d2, kc, omega, beta, psi)
            comps = tuple(mix * a + (1.0 - mix) * b for a, b in zip(tm, te))

        e_rho, e_phi, ez, h_rho, h_phi, hz = comps
        ex, ey = polar_to_cartesian(e_rho, e_phi, cos_phi, sin_phi)
        hx, hy = polar_to_cartesian(h_rho, h_phi, cos_phi, sin_phi)
        return self._field_vector(ex, ey, ez, hx, hy, hz)
