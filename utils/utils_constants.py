# utils_constants.py

"""
Defines fundamental physical constants used throughout the mode solver
and the numerical tunables of the root-finding routines.

The physical values are fixed inputs (CODATA-consistent), not re-derived
from one another.
"""

import math

# Speed of light in vacuum [m/s]
C0: float = 299792458.0

# Vacuum permeability [H/m]
MU0: float = 4.0e-7 * math.pi

# Vacuum permittivity [F/m]
EPS0: float = 8.854187817e-12

# Vacuum wave impedance [Ohm]
ETA0: float = 376.730313668

# ------------------------------------------------------------------------------
# Numerical parameters
# ------------------------------------------------------------------------------

# Newton-Raphson refinement of Bessel zeros outside the tables
NEWTON_MAX_ITER: int = 20
NEWTON_TOL: float = 1e-12

# Below this radius (relative to the guide radius) the azimuth is taken as 0
RHO_EPSILON: float = 1e-12

# Sign-change scan resolution for coaxial cutoffs: steps per min(pi/(b - a), 2/(a + b))
COAX_SCAN_STEPS: int = 64
