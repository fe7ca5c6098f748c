# coaxial_section.py

import math

import torch

from .cross_section import CrossSection, circle_outline_numpy, validate_dimension
from utils.utils_errors import GeometryError


class CoaxialSection(CrossSection):
    kind = "coaxial"

    def __init__(self, inner_radius, outer_radius):
        """
        Annular cross-section between two concentric conductors.

        Parameters:
        - inner_radius: radius a of the inner conductor [meters]
        - outer_radius: radius b of the outer conductor [meters], b > a
        """
        a = validate_dimension("inner_radius", inner_radius)
        b = validate_dimension("outer_radius", outer_radius)
        if a >= b:
            raise GeometryError(
                f"inner_radius must be smaller than outer_radius, got {a} >= {b}")
        self._inner_radius = a
        self._outer_radius = b
        super().__init__((-b, b), (-b, b))

    @property
    def inner_radius(self) -> float:
        return self._inner_radius

    @property
    def outer_radius(self) -> float:
        return self._outer_radius

    @property
    def gap(self) -> float:
        return self._outer_radius - self._inner_radius

    @property
    def mean_radius(self) -> float:
        return 0.5 * (self._inner_radius + self._outer_radius)

    def contains(self, x: float, y: float) -> bool:
        rho = math.hypot(x, y)
        return self._inner_radius <= rho <= self._outer_radius

    def mask(self, X: torch.Tensor, Y: torch.Tensor) -> torch.Tensor:
        rho = torch.sqrt(X ** 2 + Y ** 2)
        return (rho >= self._inner_radius) & (rho <= self._outer_radius)

    def generate_outline_numpy(self, n_points: int = 181):
        """Outer wall first, then the inner conductor."""
        return [circle_outline_numpy(self._outer_radius, n_points),
                circle_outline_numpy(self._inner_radius, n_points)]

    def as_dict(self) -> dict:
        return {"inner_radius": self._inner_radius, "outer_radius": self._outer_radius}
