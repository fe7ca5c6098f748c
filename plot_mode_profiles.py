import math

from objects import CircularSection, CoaxialSection
from utils.utils_modes import ModeProfile
from wgsim import Mode, create_waveguide

#------------------------------------------------------------------------------
# 1) Rectangular WR-90, TE10 and TM11
#------------------------------------------------------------------------------
wr90 = create_waveguide("WR90")

te10 = ModeProfile.for_waveguide(wr90, Mode("TE", 1, 0), 10e9, resolution=(41, 21), time=math.pi / 2)
print(f"{te10.title_str()}: max |E| = {te10.max_values()['E']:.3f}, max |H| = {te10.max_values()['H']:.3e}")
te10.plot_heatmap("Ey")
te10.plot_line("x", component="Ey")
te10.plot_vectors("H")

tm11 = ModeProfile.for_waveguide(wr90, Mode("TM", 1, 1), 20e9, resolution=(41, 21))
tm11.plot_3d("Ez")

#------------------------------------------------------------------------------
# 2) Circular guide, R = 10 mm: dominant TE11 and axially symmetric TM01
#------------------------------------------------------------------------------
circ = create_waveguide(CircularSection(0.01))

te11 = ModeProfile.for_waveguide(circ, Mode("TE", 1, 1), 12e9, resolution=31, time=math.pi / 2)
te11.plot_vectors("E")

tm01 = ModeProfile.for_waveguide(circ, Mode("TM", 1, 0), 15e9, resolution=31)
tm01.plot_heatmap("Ez")

#------------------------------------------------------------------------------
# 3) Coaxial 50 Ohm line: TEM and the first TE mode
#------------------------------------------------------------------------------
coax = create_waveguide(CoaxialSection(0.00091, 0.0021))

tem = ModeProfile.for_waveguide(coax, Mode("TEM"), 3e9, resolution=31)
tem.plot_vectors("E")

te11_coax = ModeProfile.for_waveguide(coax, Mode("TE", 1, 1), 40e9, resolution=31)
te11_coax.plot_heatmap("Hz")
