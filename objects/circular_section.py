# circular_section.py

import math

import torch

from .cross_section import CrossSection, circle_outline_numpy, validate_dimension


class CircularSection(CrossSection):
    kind = "circular"

    def __init__(self, radius):
        """
        Circular cross-section centered on the origin.

        Parameters:
        - radius: inner radius of the pipe [meters]
        """
        self._radius = validate_dimension("radius", radius)
        super().__init__((-self._radius, self._radius), (-self._radius, self._radius))

    @property
    def radius(self) -> float:
        return self._radius

    def contains(self, x: float, y: float) -> bool:
        return math.hypot(x, y) <= self._radius

    def mask(self, X: torch.Tensor, Y: torch.Tensor) -> torch.Tensor:
        return torch.sqrt(X ** 2 + Y ** 2) <= self._radius

    def generate_outline_numpy(self, n_points: int = 181):
        return [circle_outline_numpy(self._radius, n_points)]

    def as_dict(self) -> dict:
        return {"radius": self._radius}
