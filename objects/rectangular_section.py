# rectangular_section.py

import numpy as np
import torch
from loguru import logger

from .cross_section import CrossSection, validate_dimension
from utils.utils_errors import GeometryError


class RectangularSection(CrossSection):
    kind = "rectangular"

    def __init__(self, a, b, origin: str = "center"):
        """
        Rectangular cross-section with broad wall a (along X) and narrow wall b (along Y).

        Parameters:
        - a: width along X [meters]
        - b: height along Y [meters]
        - origin: "center" puts (0, 0) at the middle of the guide,
                  "corner" puts it at the lower-left corner

        If a < b the two are swapped so that a is always the broad wall.
        """
        a = validate_dimension("a", a)
        b = validate_dimension("b", b)
        if origin not in ("center", "corner"):
            raise GeometryError(f"origin must be 'center' or 'corner', got {origin!r}")
        if a < b:
            logger.debug(f"Swapping rectangular dimensions so that a >= b (a={b}, b={a})")
            a, b = b, a
        self._a = a
        self._b = b
        self._origin = origin

        if origin == "center":
            x_bounds = (-a / 2.0, a / 2.0)
            y_bounds = (-b / 2.0, b / 2.0)
        else:
            x_bounds = (0.0, a)
            y_bounds = (0.0, b)
        super().__init__(x_bounds, y_bounds)

    @property
    def a(self) -> float:
        return self._a

    @property
    def b(self) -> float:
        return self._b

    @property
    def origin(self) -> str:
        return self._origin

    def to_local(self, x: float, y: float) -> tuple[float, float]:
        """Map user coordinates to corner-based coordinates in [0, a] x [0, b]."""
        return x - self.x_min, y - self.y_min

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def mask(self, X: torch.Tensor, Y: torch.Tensor) -> torch.Tensor:
        return (X >= self.x_min) & (X <= self.x_max) & (Y >= self.y_min) & (Y <= self.y_max)

    def generate_outline_numpy(self, n_points: int = 181):
        """
        Closed rectangle through the four corners (n_points is not needed for
        straight walls).
        """
        xs = np.array([self.x_min, self.x_max, self.x_max, self.x_min, self.x_min])
        ys = np.array([self.y_min, self.y_min, self.y_max, self.y_max, self.y_min])
        return [(xs, ys)]

    def as_dict(self) -> dict:
        return {"a": self._a, "b": self._b, "origin": self._origin}
