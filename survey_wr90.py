import math

from objects import STANDARD_WAVEGUIDES
from utils.utils_constants import C0
from wgsim import Mode, create_waveguide

#------------------------------------------------------------------------------
# 1) WR-90 (X band) from the catalogue of standard sizes
#------------------------------------------------------------------------------
wg = create_waveguide("WR90")
print(f"WR-90: a = {wg.a * 1e3:.2f} mm, b = {wg.b * 1e3:.2f} mm")

#------------------------------------------------------------------------------
# 2) Mode chart: every enumerated mode, ascending cutoff
#------------------------------------------------------------------------------
print("\nMode    fc [GHz]   lambda_c [mm]")
for mode in wg.available_modes():
    fc = wg.cutoff_frequency(mode)
    print(f"{wg.mode_label(mode):<6} {fc / 1e9:9.3f}   {C0 / fc * 1e3:10.2f}")

#------------------------------------------------------------------------------
# 3) Dominant mode across the recommended band (8.2 - 12.4 GHz)
#------------------------------------------------------------------------------
te10 = Mode("TE", 1, 0)
print("\n f [GHz]   beta [rad/m]   vp/c    vg/c    lambda_g [mm]   Z_TE [Ohm]   modes")
for f in (8.2e9, 9.0e9, 10.0e9, 11.0e9, 12.4e9):
    p = wg.calculated_params(f, te10)
    n_modes = len(wg.propagating_modes(f))
    print(f"{f / 1e9:7.2f}   {p.propagation_constant:12.2f}   {p.phase_velocity / C0:5.3f}"
          f"   {p.group_velocity / C0:5.3f}   {p.guide_wavelength * 1e3:13.2f}"
          f"   {p.impedance:10.1f}   {n_modes}")

#------------------------------------------------------------------------------
# 4) Below cutoff the mode decays instead
#------------------------------------------------------------------------------
p = wg.calculated_params(5e9, te10)
print(f"\nTE10 at 5 GHz: attenuation {p.attenuation_constant:.1f} Np/m "
      f"({20 * math.log10(math.e) * p.attenuation_constant:.0f} dB/m)")

#------------------------------------------------------------------------------
# 5) Coaxial lines: characteristic impedance and first higher-order mode
#------------------------------------------------------------------------------
for name in ("COAX_50OHM", "COAX_75OHM"):
    coax = create_waveguide(name)
    first = coax.available_modes()[1]
    dims = STANDARD_WAVEGUIDES[name]
    print(f"\n{name}: a = {dims['inner_radius'] * 1e3:.2f} mm, b = {dims['outer_radius'] * 1e3:.2f} mm, "
          f"Z0 = {coax.characteristic_impedance():.1f} Ohm")
    print(f"  single-mode up to {coax.mode_label(first)} cutoff at "
          f"{coax.cutoff_frequency(first) / 1e9:.1f} GHz")
