# wgsim/rectangular_waveguide.py

import math

from objects.rectangular_section import RectangularSection
from utils.utils_errors import InvalidArgumentError
from .modes import FieldVector, Mode, ModeFamily
from .waveguide import Waveguide, snapshot_components


class RectangularWaveguide(Waveguide):
    """
    Hollow PEC rectangular guide of cross-section a x b (a >= b).

    Mode indices: m half-waves along a (x), n half-waves along b (y).
      - TE_mn : m, n >= 0, not both zero.  Hz = cos(kx x) cos(ky y)
      - TM_mn : m, n >= 1.                 Ez = sin(kx x) sin(ky y)
    with kx = m pi / a, ky = n pi / b and x, y measured from the corner.
    """

    geometry = "rectangular"

    # Enumeration range of available_modes()
    MAX_INDEX = 3

    def __init__(self, a: float, b: float, origin: str = "center"):
        """
        Parameters:
        - a: broad-wall width [meters]
        - b: narrow-wall height [meters]
        - origin: "center" (default) or "corner", the placement of (0, 0) in the
                  coordinates accepted by field_distribution()
        """
        super().__init__(RectangularSection(a, b, origin=origin))

    @classmethod
    def from_section(cls, section: RectangularSection) -> "RectangularWaveguide":
        if not isinstance(section, RectangularSection):
            raise InvalidArgumentError(f"Expected a RectangularSection, got {section!r}")
        return cls(section.a, section.b, origin=section.origin)

    @property
    def a(self) -> float:
        return self._section.a

    @property
    def b(self) -> float:
        return self._section.b

    def wavenumbers(self, mode: Mode):
        """(kx, ky) = (m pi / a, n pi / b)."""
        return mode.m * math.pi / self.a, mode.n * math.pi / self.b

    def is_mode_supported(self, mode: Mode) -> bool:
        if mode.family is ModeFamily.TE:
            return mode.m > 0 or mode.n > 0
        if mode.family is ModeFamily.TM:
            return mode.m >= 1 and mode.n >= 1
        return False

    def cutoff_wavenumber(self, mode: Mode) -> float:
        self.require_supported(mode)
        kx, ky = self.wavenumbers(mode)
        return math.sqrt(kx * kx + ky * ky)

    def _mode_candidates(self):
        for m in range(self.MAX_INDEX + 1):
            for n in range(self.MAX_INDEX + 1):
                yield Mode(ModeFamily.TE, m, n)
        for m in range(1, self.MAX_INDEX + 1):
            for n in range(1, self.MAX_INDEX + 1):
                yield Mode(ModeFamily.TM, m, n)

    def _field_at(self, x, y, z, mode, frequency, time) -> FieldVector:
        kx, ky = self.wavenumbers(mode)
        kc = self.cutoff_wavenumber(mode)
        beta = self.propagation_constant(frequency, mode)
        omega, psi = self._phase(frequency, beta, z, time)

        xl, yl = self._section.to_local(x, y)
        cx, sx = math.cos(kx * xl), math.sin(kx * xl)
        cy, sy = math.cos(ky * yl), math.sin(ky * yl)

        if mode.family is ModeFamily.TE:
            g = cx * cy
            dgx = -kx * sx * cy
            dgy = -ky * cx * sy
        else:
            g = sx * sy
            dgx = kx * cx * sy
            dgy = ky * sx * cy

        ex, ey, ez, hx, hy, hz = snapshot_components(mode.family, g, dgx, dgy, kc, omega, beta, psi)
        return self._field_vector(ex, ey, ez, hx, hy, hz)
