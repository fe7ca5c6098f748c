# utils/utils_modes.py

import torch
import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401 (needed for 3D plotting)

COMPONENTS = ("Ex", "Ey", "Ez", "Hx", "Hy", "Hz")


class ModeProfile:
    """
    Field of one waveguide mode sampled on a regular grid over the cross-section.

    The grid covers the bounding box of the section; points outside the
    physical cross-section hold zero, as returned by field_distribution().
    All components are 2D torch.Tensors of shape [Ny, Nx].

    Provides four visualization methods, each drawing the section outline:
      - plot_heatmap(component): 2D color map (imshow).
      - plot_line(direction, component): 1D central cut (line plot).
      - plot_vectors(field): quiver plot of the transverse E or H vectors.
      - plot_3d(component): 3D surface plot.
    """

    def __init__(self,
                 waveguide,
                 mode,
                 frequency: float,
                 x_lin: torch.Tensor,
                 y_lin: torch.Tensor,
                 z: float = 0.0,
                 time: float = 0.0,
                 device: str = 'cpu'):
        """
        Parameters:
        - waveguide : a wgsim Waveguide instance
        - mode      : a mode supported by the waveguide
        - frequency : operating frequency [Hz]
        - x_lin     : 1D tensor of x-coordinates (length Nx)
        - y_lin     : 1D tensor of y-coordinates (length Ny)
        - z, time   : axial position [m] and phase angle [rad] of the snapshot
        - device    : 'cpu' or 'cuda'
        """
        self.waveguide = waveguide
        self.mode = mode
        self.frequency = frequency
        self.z = z
        self.time = time
        self.x_lin = x_lin.to(device=device, dtype=torch.float64)  # [Nx]
        self.y_lin = y_lin.to(device=device, dtype=torch.float64)  # [Ny]
        self.device = device
        self._fields = None

    @classmethod
    def for_waveguide(cls, waveguide, mode, frequency: float, resolution=25,
                      z: float = 0.0, time: float = 0.0, device: str = 'cpu'):
        """
        Sample over the waveguide's bounding box. resolution is either one
        integer (points per axis) or a tuple (Nx, Ny).
        """
        if isinstance(resolution, int):
            nx = ny = resolution
        else:
            nx, ny = resolution
        if nx < 2 or ny < 2:
            raise ValueError(f"resolution must be >= 2 points per axis, got {resolution!r}")
        x_lin, y_lin, _, _ = waveguide.section.generate_grid(nx, ny, device=device)
        return cls(waveguide, mode, frequency, x_lin, y_lin, z=z, time=time, device=device)

    def generate(self) -> dict:
        """
        Evaluate the six field components at every (y, x) of the grid.
        Returns a dict {"Ex": Tensor[Ny, Nx], ...}. Computed once per profile.

        Each grid point is one scalar field_distribution() call (Bessel values
        come from scipy one argument at a time), so the cost is O(Nx * Ny)
        Python calls: keep resolutions in the tens of points per axis.
        """
        if self._fields is not None:
            return self._fields

        # Create 2D meshgrid: shape [Ny, Nx]
        Xg, Yg = torch.meshgrid(self.x_lin.cpu(), self.y_lin.cpu(), indexing='xy')
        samples = [
            self.waveguide.field_distribution(x, y, self.z, self.mode, self.frequency, self.time)
            for x, y in zip(Xg.flatten().tolist(), Yg.flatten().tolist())
        ]
        values = torch.tensor(
            [fv.E.as_tuple() + fv.H.as_tuple() for fv in samples],
            dtype=torch.float64,
        )  # [Ny * Nx, 6]

        shape = Xg.shape
        self._fields = {
            name: values[:, i].reshape(shape).to(self.device)
            for i, name in enumerate(COMPONENTS)
        }
        return self._fields

    def component(self, name: str) -> torch.Tensor:
        """One Cartesian component ("Ex" ... "Hz") or a magnitude ("E", "H")."""
        if name in ("E", "H"):
            return self.magnitude(name)
        if name not in COMPONENTS:
            raise ValueError(f"component must be one of {COMPONENTS + ('E', 'H')}, got {name!r}")
        return self.generate()[name]

    def magnitude(self, field: str = 'E') -> torch.Tensor:
        """|E| or |H| at each grid point, shape [Ny, Nx]."""
        if field not in ("E", "H"):
            raise ValueError("field must be 'E' or 'H'")
        fields = self.generate()
        return torch.sqrt(fields[field + "x"] ** 2 + fields[field + "y"] ** 2 + fields[field + "z"] ** 2)

    def max_values(self) -> dict:
        """Peak |E| and |H| over the grid."""
        return {"E": self.magnitude('E').max().item(),
                "H": self.magnitude('H').max().item()}

    def _draw_outline(self, ax, color='w'):
        for xs, ys in self.waveguide.section.generate_outline_numpy():
            ax.plot(xs, ys, color=color, linewidth=1.5)

    def plot_heatmap(self, component: str = 'E'):
        """
        Plot one component (or a magnitude) as a heatmap (imshow).
        """
        profile = self.component(component).detach().cpu().numpy()  # shape [Ny, Nx]

        extent = [
            self.x_lin.min().item(),
            self.x_lin.max().item(),
            self.y_lin.min().item(),
            self.y_lin.max().item()
        ]

        fig, ax = plt.subplots(figsize=(5, 4))
        im = ax.imshow(
            profile,
            origin='lower',
            extent=extent,
            aspect='equal',
            cmap='viridis'
        )
        self._draw_outline(ax)
        fig.colorbar(im, ax=ax, label=self._label(component))
        ax.set_xlabel('x [m]')
        ax.set_ylabel('y [m]')
        ax.set_title(self.title_str() + f" {component} (Heatmap)")
        fig.tight_layout()
        plt.show()
        return fig

    def plot_line(self, direction: str = 'x', component: str = 'E'):
        """
        Plot a 1D central cut of the profile.
        - direction='x': the row through the middle of the section, vs. x.
        - direction='y': the column through the middle of the section, vs. y.
        """
        profile = self.component(component).detach().cpu().numpy()  # [Ny, Nx]
        x_np = self.x_lin.cpu().numpy()  # [Nx]
        y_np = self.y_lin.cpu().numpy()  # [Ny]

        if direction == 'x':
            y_center = 0.5 * (y_np[0] + y_np[-1])
            iy = np.abs(y_np - y_center).argmin()
            data_line = profile[iy, :]       # length Nx
            coord = x_np
            xlabel = 'x [m]'
            title = f"{self.title_str()} – Cut at y ≈ {y_np[iy] * 1e3:.2f} mm"
        elif direction == 'y':
            x_center = 0.5 * (x_np[0] + x_np[-1])
            ix = np.abs(x_np - x_center).argmin()
            data_line = profile[:, ix]       # length Ny
            coord = y_np
            xlabel = 'y [m]'
            title = f"{self.title_str()} – Cut at x ≈ {x_np[ix] * 1e3:.2f} mm"
        else:
            raise ValueError("direction must be 'x' or 'y'")

        fig, ax = plt.subplots(figsize=(5, 3))
        ax.plot(coord, data_line, '-o', markersize=3)
        ax.set_xlabel(xlabel)
        ax.set_ylabel(self._label(component))
        ax.set_title(title + " (Line)")
        ax.grid(True)
        fig.tight_layout()
        plt.show()
        return fig

    def plot_vectors(self, field: str = 'E'):
        """
        Quiver plot of the transverse (x, y) part of E or H over |field|.
        """
        if field not in ("E", "H"):
            raise ValueError("field must be 'E' or 'H'")
        fields = self.generate()
        u = fields[field + "x"].detach().cpu().numpy()
        v = fields[field + "y"].detach().cpu().numpy()
        mag = self.magnitude(field).detach().cpu().numpy()
        x_np = self.x_lin.cpu().numpy()
        y_np = self.y_lin.cpu().numpy()
        Xg, Yg = np.meshgrid(x_np, y_np, indexing='xy')  # both [Ny, Nx]

        fig, ax = plt.subplots(figsize=(5, 4))
        ax.contourf(Xg, Yg, mag, levels=20, cmap='viridis')
        ax.quiver(Xg, Yg, u, v, color='w', pivot='mid')
        self._draw_outline(ax, color='k')
        ax.set_aspect('equal')
        ax.set_xlabel('x [m]')
        ax.set_ylabel('y [m]')
        ax.set_title(self.title_str() + f" transverse {field}")
        fig.tight_layout()
        plt.show()
        return fig

    def plot_3d(self, component: str = 'E'):
        """
        Plot one component (or a magnitude) as a 3D surface (x, y, value).
        """
        profile = self.component(component).detach().cpu().numpy()  # [Ny, Nx]
        x_np = self.x_lin.cpu().numpy()  # [Nx]
        y_np = self.y_lin.cpu().numpy()  # [Ny]

        # Create 2D meshgrid for plotting
        Xg, Yg = np.meshgrid(x_np, y_np, indexing='xy')  # both [Ny, Nx]

        fig = plt.figure(figsize=(6, 5))
        ax = fig.add_subplot(111, projection='3d')
        ax.plot_surface(
            Xg, Yg, profile,
            rstride=1, cstride=1,
            cmap='viridis',
            edgecolor='k',
            linewidth=0.2,
            alpha=0.8
        )
        ax.set_xlabel('x [m]')
        ax.set_ylabel('y [m]')
        ax.set_zlabel(self._label(component))
        ax.set_title(self.title_str() + " (3D Surface)")
        fig.tight_layout()
        plt.show()
        return fig

    @staticmethod
    def _label(component: str) -> str:
        if component in ("E", "H"):
            return f"|{component}|"
        return component

    def title_str(self) -> str:
        return (f"{self.waveguide.mode_label(self.mode)} "
                f"({self.waveguide.geometry}, {self.frequency / 1e9:.3g} GHz)")
