# tests/test_coaxial_waveguide.py

import math

import numpy as np
import pytest
from scipy import special as sp
from scipy.optimize import brentq

from utils.utils_constants import C0, ETA0
from wgsim import (
    CoaxialWaveguide,
    GeometryError,
    InvalidArgumentError,
    Mode,
    UnsupportedModeError,
)
from wgsim.coaxial_waveguide import coaxial_cutoff_root

TEM = Mode("TEM", 0, 0)
TE11 = Mode("TE", 1, 1)
TM01 = Mode("TM", 1, 0)

A_IN = 0.00091
B_OUT = 0.0021


@pytest.fixture
def coax():
    """
    Fixture: 50 Ohm air line, inner radius 0.91 mm, outer radius 2.1 mm.
    """
    return CoaxialWaveguide(A_IN, B_OUT)


def scipy_characteristic(family, n, kc, a, b):
    if family == "TE":
        return sp.jvp(n, kc * a) * sp.yvp(n, kc * b) - sp.jvp(n, kc * b) * sp.yvp(n, kc * a)
    return sp.jv(n, kc * a) * sp.yv(n, kc * b) - sp.jv(n, kc * b) * sp.yv(n, kc * a)


def test_tem_has_no_cutoff(coax):
    assert coax.cutoff_frequency(TEM) == 0.0
    assert coax.cutoff_wavenumber(TEM) == 0.0
    for f in (1.0, 1e3, 1e9, 50e9):
        params = coax.calculated_params(f, TEM)
        assert params.is_propagating
        assert params.cutoff_wavelength == math.inf
        assert params.phase_velocity == pytest.approx(C0)
        assert params.impedance == ETA0
    assert coax.available_modes()[0] == TEM
    assert coax.dominant_mode() == TEM


def test_characteristic_impedance(coax):
    z0 = coax.characteristic_impedance()
    assert z0 == pytest.approx(50.0, rel=0.2)
    assert z0 == pytest.approx(ETA0 / (2 * math.pi) * math.log(B_OUT / A_IN))


def test_mode_support_rules(coax):
    assert coax.is_mode_supported(TEM)
    assert not coax.is_mode_supported(Mode("TEM", 1, 0))
    assert coax.is_mode_supported(TE11)
    assert coax.is_mode_supported(TM01)
    assert not coax.is_mode_supported(Mode("TE", 0, 1))
    assert not coax.is_mode_supported(Mode("HE", 1, 1))
    with pytest.raises(UnsupportedModeError):
        coax.cutoff_frequency(Mode("EH", 1, 1))


def test_available_modes_sorted(coax):
    modes = coax.available_modes()
    # TEM plus TE/TM with n in 0..2 and m in 1..2
    assert len(modes) == 1 + 2 * 3 * 2
    fcs = [coax.cutoff_frequency(m) for m in modes]
    assert fcs == sorted(fcs)
    # TE11 is the first higher-order mode
    assert modes[1] == TE11


@pytest.mark.parametrize("family, n, m", [
    ("TE", 1, 1), ("TE", 2, 1), ("TE", 0, 1), ("TE", 1, 2),
    ("TM", 0, 1), ("TM", 1, 1), ("TM", 0, 2),
])
def test_transcendental_roots(coax, family, n, m):
    """
    Each cutoff is a sign change of the characteristic equation, checked
    independently with scipy.special.
    """
    kc = coax.cutoff_wavenumber(Mode(family, m, n))
    lo = scipy_characteristic(family, n, kc * (1 - 1e-6), A_IN, B_OUT)
    hi = scipy_characteristic(family, n, kc * (1 + 1e-6), A_IN, B_OUT)
    assert lo * hi < 0


def reference_root(family, n, m, a, b):
    """
    m-th root from a dense scipy scan that starts next to kc = 0.
    """
    upper = (n + m + 2) * math.pi / (b - a)
    kc = np.linspace(upper * 1e-6, upper, 400001)
    values = scipy_characteristic(family, n, kc, a, b)
    flips = np.nonzero(np.sign(values[:-1]) * np.sign(values[1:]) < 0)[0]
    i = flips[m - 1]
    return brentq(lambda k: scipy_characteristic(family, n, k, a, b),
                  kc[i], kc[i + 1], xtol=1e-14 * upper)


@pytest.mark.parametrize("a, b", [
    (1.0, 1.05), (1.0, 1.2), (A_IN, B_OUT), (0.001, 0.02),
])
@pytest.mark.parametrize("family, n, m", [
    ("TE", 1, 1), ("TE", 2, 1), ("TE", 1, 2), ("TE", 0, 1),
    ("TM", 0, 1), ("TM", 1, 1),
])
def test_roots_match_dense_scan(a, b, family, n, m):
    guide = CoaxialWaveguide(a, b)
    expected = reference_root(family, n, m, a, b)
    assert guide.cutoff_wavenumber(Mode(family, m, n)) == pytest.approx(expected, rel=1e-8)


def test_thin_gap_line():
    """
    On a thin annulus TE11 cuts off near 2 / (a + b), far below pi / (b - a),
    and stays the first higher-order mode.
    """
    guide = CoaxialWaveguide(1.0, 1.05)
    kc = guide.cutoff_wavenumber(TE11)
    assert kc == pytest.approx(2 / 2.05, rel=1e-2)
    assert kc < math.pi / 0.05
    modes = guide.available_modes()
    assert modes[0] == TEM
    assert modes[1] == TE11
    assert modes[2] == Mode("TE", 1, 2)


def test_root_ordering(coax):
    # consecutive radial roots of the same order increase
    assert coax.cutoff_wavenumber(Mode("TE", 2, 1)) > coax.cutoff_wavenumber(TE11)
    assert coax.cutoff_wavenumber(Mode("TM", 2, 0)) > coax.cutoff_wavenumber(TM01)


def test_familiar_approximations(coax):
    # TE11: kc ≈ 2/(a + b); TM01: kc ≈ pi/(b - a)
    assert coax.cutoff_wavenumber(TE11) == pytest.approx(2 / (A_IN + B_OUT), rel=0.1)
    assert coax.cutoff_wavenumber(TM01) == pytest.approx(math.pi / (B_OUT - A_IN), rel=0.1)


def test_roots_are_memoised():
    coaxial_cutoff_root.cache_clear()
    guide = CoaxialWaveguide(A_IN, B_OUT)
    guide.cutoff_wavenumber(TE11)
    guide.cutoff_wavenumber(TE11)
    info = coaxial_cutoff_root.cache_info()
    assert info.hits >= 1
    assert info.misses == 1


def test_geometric_cutoffs():
    geo = CoaxialWaveguide(A_IN, B_OUT, cutoff_method="geometric")
    gap = B_OUT - A_IN
    mean = (A_IN + B_OUT) / 2
    assert geo.cutoff_method == "geometric"
    assert geo.cutoff_wavenumber(TE11) == pytest.approx(math.pi / gap + 1 / mean)
    assert geo.cutoff_wavenumber(Mode("TM", 2, 1)) == pytest.approx(
        math.sqrt((2 * math.pi / gap) ** 2 + (1 / mean) ** 2))
    assert geo.cutoff_frequency(TEM) == 0.0


def test_unknown_cutoff_method():
    with pytest.raises(InvalidArgumentError):
        CoaxialWaveguide(A_IN, B_OUT, cutoff_method="exact")


def test_tem_field(coax):
    f = 1e9
    fv = coax.field_distribution(A_IN, 0.0, 0.0, TEM, f, 0.0)
    assert fv.E.x == pytest.approx(1.0)
    assert fv.E.y == pytest.approx(0.0, abs=1e-15)
    assert fv.H.y == pytest.approx(1.0 / ETA0)
    assert fv.E.z == 0.0 and fv.H.z == 0.0

    # E falls off as 1/rho and points radially
    fv = coax.field_distribution(0.0, 2 * A_IN, 0.0, TEM, f, 0.0)
    assert fv.E.y == pytest.approx(0.5)
    assert fv.H.x == pytest.approx(-0.5 / ETA0)


def test_tem_is_never_zeroed():
    # far below every TE/TM cutoff, and even at f = 0
    coax = CoaxialWaveguide(A_IN, B_OUT)
    assert not coax.field_distribution(0.0015, 0.0, 0.0, TEM, 1e3, 0.0).is_zero
    assert not coax.field_distribution(0.0015, 0.0, 0.0, TEM, 0.0, 0.0).is_zero


def test_tem_travelling_wave(coax):
    f = 3e9
    quarter = C0 / f / 4
    ahead = coax.field_distribution(0.0015, 0.0, quarter, TEM, f, math.pi / 2)
    now = coax.field_distribution(0.0015, 0.0, 0.0, TEM, f, 0.0)
    assert ahead.E.x == pytest.approx(now.E.x, rel=1e-9)


def test_te11_generator_is_unity_on_inner_conductor(coax):
    fv = coax.field_distribution(A_IN, 0.0, 0.0, TE11, 40e9, 0.0)
    assert fv.H.z == pytest.approx(1.0, rel=1e-6)


def test_tm01_ez_vanishes_on_conductors(coax):
    f = 200e9
    assert coax.calculated_params(f, TM01).is_propagating
    inner = coax.field_distribution(A_IN, 0.0, 0.0, TM01, f, 0.0)
    outer = coax.field_distribution(0.0, B_OUT, 0.0, TM01, f, 0.0)
    middle = coax.field_distribution(0.0015, 0.0, 0.0, TM01, f, 0.0)
    assert abs(inner.E.z) < 1e-9
    assert abs(outer.E.z) < 1e-6 * abs(middle.E.z)
    assert middle.E.z != 0.0


def test_higher_modes_zero_below_cutoff(coax):
    assert coax.field_distribution(0.0015, 0.0, 0.0, TE11, 10e9, 0.0).is_zero


def test_outside_annulus_is_zero(coax):
    for x, y in ((0.0, 0.0), (0.0005, 0.0), (0.0, 0.0025)):
        assert coax.field_distribution(x, y, 0.0, TEM, 1e9, 0.0).is_zero


def test_invalid_geometry():
    with pytest.raises(GeometryError):
        CoaxialWaveguide(0.002, 0.001)
    with pytest.raises(GeometryError):
        CoaxialWaveguide(0.001, 0.001)
    with pytest.raises(GeometryError):
        CoaxialWaveguide(-0.001, 0.002)


def test_mode_label(coax):
    assert coax.mode_label(TEM) == "TEM"
    assert coax.mode_label(TE11) == "TE11"
    assert coax.mode_label(TM01) == "TM01"


if __name__ == "__main__":
    pytest.main()
