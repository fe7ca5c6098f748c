# wgsim/coaxial_waveguide.py

import math
from functools import lru_cache

from loguru import logger
from scipy.optimize import brentq

from objects.coaxial_section import CoaxialSection
from utils.utils_bessel import bessel_j, bessel_j_prime, bessel_y, bessel_y_prime
from utils.utils_constants import C0, COAX_SCAN_STEPS, ETA0
from utils.utils_errors import InvalidArgumentError, RootFindingError
from .modes import FieldVector, Mode, ModeFamily
from .waveguide import Waveguide, polar_to_cartesian, snapshot_components

CUTOFF_METHODS = ("transcendental", "geometric")


def coaxial_characteristic_equation(family: ModeFamily, n: int, kc: float, a: float, b: float) -> float:
    """
    Cross-product whose positive roots in kc are the coaxial cutoffs:
      TE:  Jn'(kc a) Yn'(kc b) - Jn'(kc b) Yn'(kc a)
      TM:  Jn(kc a)  Yn(kc b)  - Jn(kc b)  Yn(kc a)
    """
    if family is ModeFamily.TE:
        return (bessel_j_prime(n, kc * a) * bessel_y_prime(n, kc * b)
                - bessel_j_prime(n, kc * b) * bessel_y_prime(n, kc * a))
    return (bessel_j(n, kc * a) * bessel_y(n, kc * b)
            - bessel_j(n, kc * b) * bessel_y(n, kc * a))


@lru_cache(maxsize=512)
def coaxial_cutoff_root(family: ModeFamily, n: int, m: int, a: float, b: float) -> float:
    """
    m-th positive root kc [rad/m] of the coaxial characteristic equation.

    Scans kc upwards from zero for sign changes, then polishes the m-th bracket
    with Brent's method. Radial roots are spaced by about pi/(b - a), while the
    lowest TE roots sit near 2n/(a + b), far below pi/(b - a) on thin-gap lines;
    the step resolves the smaller of the two scales. The scan stops at
    (n + m + 2) pi/(b - a).
    """
    gap = b - a
    step = min(math.pi / gap, 2.0 / (a + b)) / COAX_SCAN_STEPS
    n_steps = math.ceil((n + m + 2) * math.pi / gap / step)

    def f(kc):
        return coaxial_characteristic_equation(family, n, kc, a, b)

    found = 0
    k_prev = step
    f_prev = f(k_prev)
    for i in range(2, n_steps + 1):
        k_next = i * step
        f_next = f(k_next)
        if f_prev == 0.0 or f_prev * f_next < 0.0:
            found += 1
            if found == m:
                root = k_prev if f_prev == 0.0 else brentq(f, k_prev, k_next, xtol=1e-12 * k_next)
                logger.trace(f"Coaxial {family.value}{n}{m} root kc={root:.6g} rad/m (a={a}, b={b})")
                return root
        k_prev, f_prev = k_next, f_next
    raise RootFindingError(
        f"Found only {found} cutoff root(s) of coaxial {family.value} order {n} "
        f"below kc={n_steps * step:.6g} rad/m, needed {m}")


class CoaxialWaveguide(Waveguide):
    """
    Coaxial line with inner conductor radius a and outer radius b.

    Mode indices: n is the azimuthal order, m the radial root index.
      - TEM (0, 0) : no cutoff, E_rho = (a / rho) cos(psi), H_phi = E_rho / eta0
      - TE_nm      : R(rho) = Jn(kc rho) Yn'(kc a) - Jn'(kc a) Yn(kc rho)
      - TM_nm      : R(rho) = Jn(kc rho) Yn(kc a)  - Jn(kc a)  Yn(kc rho)
    The TE/TM generators R(rho) cos(n phi) are divided by the Wronskian value
    2 / (pi kc a).

    cutoff_method:
      - "transcendental": kc is the m-th root of the characteristic equation
      - "geometric": closed-form approximation, TE kc = n pi/(b - a) + m/r,
        TM kc = sqrt((m pi/(b - a))^2 + (n/r)^2), r = (a + b)/2. Approximate only.
    """

    geometry = "coaxial"
    azimuthal_first = True

    MAX_ORDER = 2
    MAX_ROOT = 2

    def __init__(self, inner_radius: float, outer_radius: float,
                 cutoff_method: str = "transcendental"):
        """
        Parameters:
        - inner_radius: radius a of the inner conductor [meters]
        - outer_radius: radius b of the outer conductor [meters]
        - cutoff_method: "transcendental" (default) or "geometric"
        """
        if cutoff_method not in CUTOFF_METHODS:
            raise InvalidArgumentError(
                f"cutoff_method must be one of {CUTOFF_METHODS}, got {cutoff_method!r}")
        self._cutoff_method = cutoff_method
        super().__init__(CoaxialSection(inner_radius, outer_radius))

    @classmethod
    def from_section(cls, section: CoaxialSection,
                     cutoff_method: str = "transcendental") -> "CoaxialWaveguide":
        if not isinstance(section, CoaxialSection):
            raise InvalidArgumentError(f"Expected a CoaxialSection, got {section!r}")
        return cls(section.inner_radius, section.outer_radius, cutoff_method=cutoff_method)

    def __repr__(self) -> str:
        return (f"CoaxialWaveguide(inner_radius={self.inner_radius!r}, "
                f"outer_radius={self.outer_radius!r}, cutoff_method={self._cutoff_method!r})")

    @property
    def inner_radius(self) -> float:
        return self._section.inner_radius

    @property
    def outer_radius(self) -> float:
        return self._section.outer_radius

    @property
    def cutoff_method(self) -> str:
        return self._cutoff_method

    def characteristic_impedance(self) -> float:
        """Z0 = (eta0 / 2 pi) ln(b / a) [Ohm]."""
        return ETA0 / (2.0 * math.pi) * math.log(self.outer_radius / self.inner_radius)

    def is_mode_supported(self, mode: Mode) -> bool:
        if mode.family is ModeFamily.TEM:
            return mode.m == 0 and mode.n == 0
        if mode.family in (ModeFamily.TE, ModeFamily.TM):
            return mode.m >= 1
        return False

    def cutoff_wavenumber(self, mode: Mode) -> float:
        self.require_supported(mode)
        if mode.family is ModeFamily.TEM:
            return 0.0
        a, b = self.inner_radius, self.outer_radius
        if self._cutoff_method == "geometric":
            gap = b - a
            mean = 0.5 * (a + b)
            logger.debug(f"Geometric (approximate) cutoff for coaxial {self.mode_label(mode)}")
            if mode.family is ModeFamily.TE:
                return mode.n * math.pi / gap + mode.m / mean
            return math.sqrt((mode.m * math.pi / gap) ** 2 + (mode.n / mean) ** 2)
        return coaxial_cutoff_root(mode.family, mode.n, mode.m, a, b)

    def _mode_candidates(self):
        yield Mode(ModeFamily.TEM, 0, 0)
        for family in (ModeFamily.TE, ModeFamily.TM):
            for n in range(self.MAX_ORDER + 1):
                for m in range(1, self.MAX_ROOT + 1):
                    yield Mode(family, m, n)

    def _radial(self, family: ModeFamily, n: int, kc: float, rho: float):
        """(R(rho), dR/drho) divided by the Wronskian 2 / (pi kc a)."""
        a = self.inner_radius
        x, xa = kc * rho, kc * a
        w = 2.0 / (math.pi * xa)
        if family is ModeFamily.TE:
            ca, cb = bessel_y_prime(n, xa), bessel_j_prime(n, xa)
        else:
            ca, cb = bessel_y(n, xa), bessel_j(n, xa)
        r = bessel_j(n, x) * ca - cb * bessel_y(n, x)
        dr = kc * (bessel_j_prime(n, x) * ca - cb * bessel_y_prime(n, x))
        return r / w, dr / w

    def _field_at(self, x, y, z, mode, frequency, time) -> FieldVector:
        rho = math.hypot(x, y)
        cos_phi, sin_phi = x / rho, y / rho

        if mode.family is ModeFamily.TEM:
            beta = 2.0 * math.pi * frequency / C0
            _, psi = self._phase(frequency, beta, z, time)
            e_rho = self.inner_radius / rho * math.cos(psi)
            h_phi = e_rho / ETA0
            ex, ey = polar_to_cartesian(e_rho, 0.0, cos_phi, sin_phi)
            hx, hy = polar_to_cartesian(0.0, h_phi, cos_phi, sin_phi)
            return self._field_vector(ex, ey, 0.0, hx, hy, 0.0)

        n = mode.n
        kc = self.cutoff_wavenumber(mode)
        beta = self.propagation_constant(frequency, mode)
        omega, psi = self._phase(frequency, beta, z, time)

        phi = math.atan2(y, x)
        cos_nphi, sin_nphi = math.cos(n * phi), math.sin(n * phi)
        r, dr = self._radial(mode.family, n, kc, rho)
        g = r * cos_nphi
        dg_rho = dr * cos_nphi
        dg_phi = -n * r * sin_nphi / rho

        e_rho, e_phi, ez, h_rho, h_phi, hz = snapshot_components(
            mode.family, g, dg_rho, dg_phi, kc, omega, beta, psi)
        ex, ey = polar_to_cartesian(e_rho, e_phi, cos_phi, sin_phi)
        hx, hy = polar_to_cartesian(h_rho, h_phi, cos_phi, sin_phi)
        return self._field_vector(ex, ey, ez, hx, hy, hz)
