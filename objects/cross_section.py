# cross_section.py

import math

import numpy as np
import torch

from utils.utils_errors import GeometryError


def validate_dimension(name: str, value) -> float:
    """
    Return value as float if it is a finite number > 0, otherwise raise
    GeometryError naming the parameter.
    """
    if isinstance(value, bool):
        raise GeometryError(f"{name} must be a finite positive number, got {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise GeometryError(f"{name} must be a finite positive number, got {value!r}") from None
    if not math.isfinite(as_float):
        raise GeometryError(f"{name} must be finite, got {value!r}")
    if as_float <= 0.0:
        raise GeometryError(f"{name} must be > 0, got {value!r}")
    return as_float


class CrossSection:
    """
    Base class for the transverse cross-section of a waveguide (the geometry
    parameters of a guide). Coordinates are in meters.

    Subclasses validate their dimensions on construction and never change them
    afterwards. They must implement contains() and generate_outline_numpy().
    """

    kind: str = "abstract"

    def __init__(self, x_bounds, y_bounds):
        """
        Parameters:
        - x_bounds : tuple (x_min, x_max) of the bounding box [m]
        - y_bounds : tuple (y_min, y_max) of the bounding box [m]
        """
        self._x_bounds = (float(x_bounds[0]), float(x_bounds[1]))
        self._y_bounds = (float(y_bounds[0]), float(y_bounds[1]))

    @property
    def x_min(self) -> float:
        return self._x_bounds[0]

    @property
    def x_max(self) -> float:
        return self._x_bounds[1]

    @property
    def y_min(self) -> float:
        return self._y_bounds[0]

    @property
    def y_max(self) -> float:
        return self._y_bounds[1]

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(x_min, x_max, y_min, y_max) of the bounding box."""
        return (*self._x_bounds, *self._y_bounds)

    def contains(self, x: float, y: float) -> bool:
        """
        Abstract. True if (x, y) lies in the physical cross-section (walls included).
        """
        raise NotImplementedError("contains() must be implemented in subclasses.")

    def mask(self, X: torch.Tensor, Y: torch.Tensor) -> torch.Tensor:
        """
        Abstract. Boolean tensor, same shape as X and Y, True inside the section.
        """
        raise NotImplementedError("mask() must be implemented in subclasses.")

    def generate_grid(self, nx: int = 25, ny: int = 25, device: str = 'cpu'):
        """
        Build a regular grid covering the bounding box, walls included.

        Returns:
        - x_lin : 1D tensor [Nx]
        - y_lin : 1D tensor [Ny]
        - X, Y  : 2D tensors [Ny, Nx] from torch.meshgrid (indexing='ij')

        Float64 keeps wall points on the walls when they are mapped back to
        Python floats for the field evaluation.
        """
        x_lin = torch.linspace(self.x_min, self.x_max, nx, dtype=torch.float64, device=device)
        y_lin = torch.linspace(self.y_min, self.y_max, ny, dtype=torch.float64, device=device)
        Y, X = torch.meshgrid(y_lin, x_lin, indexing='ij')
        return x_lin, y_lin, X, Y

    def generate_outline_numpy(self, n_points: int = 181):
        """
        Abstract. Returns a list of (X, Y) NumPy arrays, each one a closed wall
        contour, for plotting.
        """
        raise NotImplementedError("generate_outline_numpy() must be implemented in subclasses.")

    def as_dict(self) -> dict:
        raise NotImplementedError("as_dict() must be implemented in subclasses.")

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self):
        return hash((type(self).__name__, tuple(sorted(self.as_dict().items()))))

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"{type(self).__name__}({args})"


def circle_outline_numpy(radius: float, n_points: int):
    """Closed circle of the given radius centered on the origin."""
    theta = np.linspace(0.0, 2.0 * np.pi, n_points)
    return radius * np.cos(theta), radius * np.sin(theta)
