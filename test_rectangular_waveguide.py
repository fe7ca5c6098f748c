# tests/test_rectangular_waveguide.py

import math

import pytest

from utils.utils_constants import C0, EPS0, ETA0
from wgsim import (
    GeometryError,
    InvalidArgumentError,
    Mode,
    RectangularWaveguide,
    UnsupportedModeError,
)

TE10 = Mode("TE", 1, 0)
TM11 = Mode("TM", 1, 1)


@pytest.fixture
def wr90():
    """
    Fixture: WR-90 guide (X band), a = 22.86 mm, b = 10.16 mm.

    TE10 cutoff is c / (2a) ≈ 6.557 GHz.
    """
    return RectangularWaveguide(0.02286, 0.01016)


def test_te10_cutoff_wr90(wr90):
    fc = wr90.cutoff_frequency(TE10)
    assert fc == pytest.approx(6.557e9, rel=5e-3)
    assert fc == pytest.approx(C0 / (2 * 0.02286), rel=1e-12)
    assert wr90.cutoff_wavenumber(TE10) == pytest.approx(math.pi / 0.02286)


def test_te10_is_dominant(wr90):
    modes = wr90.available_modes()
    assert modes[0] == TE10
    assert wr90.dominant_mode() == TE10
    fc10 = wr90.cutoff_frequency(TE10)
    assert all(wr90.cutoff_frequency(m) >= fc10 for m in modes)


def test_mode_support_rules(wr90):
    assert wr90.is_mode_supported(Mode("TE", 0, 1))
    assert wr90.is_mode_supported(Mode("TE", 1, 0))
    assert not wr90.is_mode_supported(Mode("TE", 0, 0))
    assert wr90.is_mode_supported(TM11)
    assert not wr90.is_mode_supported(Mode("TM", 1, 0))
    assert not wr90.is_mode_supported(Mode("TM", 0, 1))
    assert not wr90.is_mode_supported(Mode("TEM"))
    assert not wr90.is_mode_supported(Mode("HE", 1, 1))


def test_available_modes_enumeration(wr90):
    modes = wr90.available_modes()
    # 15 TE (m, n in 0..3 without (0, 0)) and 9 TM (m, n in 1..3)
    assert len(modes) == 24
    assert len(set(modes)) == 24
    assert all(wr90.is_mode_supported(m) for m in modes)
    fcs = [wr90.cutoff_frequency(m) for m in modes]
    assert fcs == sorted(fcs)


def test_degenerate_modes_keep_encounter_order(wr90):
    # TE11 and TM11 share a cutoff; TE is enumerated first
    modes = wr90.available_modes()
    assert modes.index(Mode("TE", 1, 1)) + 1 == modes.index(TM11)


def test_unsupported_mode_fails_fast(wr90):
    with pytest.raises(UnsupportedModeError):
        wr90.cutoff_frequency(Mode("TM", 1, 0))
    with pytest.raises(UnsupportedModeError):
        wr90.calculated_params(10e9, Mode("TEM"))
    with pytest.raises(UnsupportedModeError):
        wr90.field_distribution(0.0, 0.0, 0.0, Mode("TE", 0, 0), 10e9, 0.0)
    with pytest.raises(InvalidArgumentError):
        wr90.cutoff_frequency("TE10")


def test_calculated_params_propagating(wr90):
    f = 10e9
    params = wr90.calculated_params(f, TE10)
    fc = wr90.cutoff_frequency(TE10)
    ratio = math.sqrt(1 - (fc / f) ** 2)

    assert params.is_propagating
    assert params.cutoff_frequency == fc
    assert params.cutoff_wavelength == pytest.approx(2 * 0.02286)
    k = 2 * math.pi * f / C0
    assert params.propagation_constant == pytest.approx(math.sqrt(k**2 - (math.pi / 0.02286)**2))
    assert params.attenuation_constant == 0.0
    assert params.phase_velocity == pytest.approx(C0 / ratio)
    assert params.group_velocity == pytest.approx(C0 * ratio)
    assert params.guide_wavelength == pytest.approx((C0 / f) / ratio)
    assert params.impedance == pytest.approx(ETA0 / ratio)

    params_tm = wr90.calculated_params(20e9, TM11)
    ratio_tm = math.sqrt(1 - (wr90.cutoff_frequency(TM11) / 20e9) ** 2)
    assert params_tm.impedance == pytest.approx(ETA0 * ratio_tm)


def test_calculated_params_evanescent(wr90):
    params = wr90.calculated_params(5e9, TE10)
    assert not params.is_propagating
    k = 2 * math.pi * 5e9 / C0
    kc = math.pi / 0.02286
    assert params.attenuation_constant == pytest.approx(math.sqrt(kc**2 - k**2))
    assert wr90.propagation_constant(5e9, TE10) == params.attenuation_constant
    for name in ("propagation_constant", "phase_velocity", "group_velocity",
                 "guide_wavelength", "impedance"):
        assert getattr(params, name) == 0.0

    # exactly at cutoff the mode does not propagate
    assert not wr90.calculated_params(wr90.cutoff_frequency(TE10), TE10).is_propagating


@pytest.mark.parametrize("f", [7e9, 10e9, 18e9, 40e9])
def test_dispersion_relation(wr90, f):
    for mode in wr90.propagating_modes(f):
        params = wr90.calculated_params(f, mode)
        assert params.phase_velocity * params.group_velocity == pytest.approx(C0**2, rel=1e-12)


def test_propagating_modes(wr90):
    assert wr90.propagating_modes(5e9) == []
    assert wr90.propagating_modes(10e9) == [TE10]
    assert Mode("TE", 2, 0) in wr90.propagating_modes(14e9)


def test_te10_field_at_center(wr90):
    """
    TE10 in the centred frame: Ey peaks at x = 0 and Hx carries the
    wave impedance, Ey / Hx = -Z_TE.
    """
    f = 10e9
    fv = wr90.field_distribution(0.0, 0.0, 0.0, TE10, f, math.pi / 2)
    params = wr90.calculated_params(f, TE10)
    z_te = params.impedance
    kc = math.pi / 0.02286

    # (w mu0 / kc^2) * kc, renormalised by 1 / (Z_TE kc)
    assert fv.E.y == pytest.approx(params.propagation_constant / kc**2, rel=1e-12)
    assert fv.E.x == pytest.approx(0.0, abs=1e-12)
    assert fv.E.z == 0.0
    assert fv.H.x == pytest.approx(-fv.E.y / z_te, rel=1e-9)
    assert fv.H.z == pytest.approx(0.0, abs=1e-12)


def test_te10_boundary_conditions(wr90):
    f = 10e9
    for y in (-0.005, 0.0, 0.003):
        for x in (-0.01143, 0.01143):
            fv = wr90.field_distribution(x, y, 0.0, TE10, f, math.pi / 2)
            # tangential E vanishes on the side walls
            assert abs(fv.E.y) < 1e-12


def test_te10_longitudinal_h_at_wall(wr90):
    # the generator keeps unit amplitude
    fv = wr90.field_distribution(-0.01143, 0.0, 0.0, TE10, 10e9, 0.0)
    assert fv.H.z == pytest.approx(1.0, rel=1e-12)


def test_tm11_transverse_amplitude(wr90):
    """
    TM transverse terms: (beta / kc^2) grad Ez renormalised by 1 / (Z_TM kc),
    i.e. (w eps0 / kc^3) grad Ez, with Ex / Hy = Z_TM.
    """
    a, b = 0.02286, 0.01016
    kx, ky = math.pi / a, math.pi / b
    kc = math.hypot(kx, ky)
    f = 20e9
    omega = 2 * math.pi * f
    # corner-local (a/4, b/2) in the centred frame
    fv = wr90.field_distribution(-a / 4, 0.0, 0.0, TM11, f, math.pi / 2)
    dez_dx = kx * math.cos(math.pi / 4)
    assert fv.E.x == pytest.approx(omega * EPS0 / kc**3 * dez_dx, rel=1e-9)
    assert fv.E.y == pytest.approx(0.0, abs=1e-15)
    z_tm = wr90.calculated_params(f, TM11).impedance
    assert fv.E.x / fv.H.y == pytest.approx(z_tm, rel=1e-9)


def test_transverse_amplitude_finite_near_cutoff(wr90):
    # just above cutoff the TM transverse E tends to (w eps0 / kc^3) grad Ez
    fc = wr90.cutoff_frequency(TM11)
    near = wr90.field_distribution(-0.02286 / 4, 0.0, 0.0, TM11, fc * (1 + 1e-9), math.pi / 2)
    above = wr90.field_distribution(-0.02286 / 4, 0.0, 0.0, TM11, fc * 1.001, math.pi / 2)
    assert math.isfinite(near.E.x)
    assert near.E.x == pytest.approx(above.E.x, rel=1e-2)
    # TE transverse E vanishes with beta at cutoff
    fc10 = wr90.cutoff_frequency(TE10)
    te = wr90.field_distribution(0.0, 0.0, 0.0, TE10, fc10 * (1 + 1e-9), math.pi / 2)
    assert abs(te.E.y) < 1e-6


def test_tm11_field(wr90):
    f = 25e9
    center = wr90.field_distribution(0.0, 0.0, 0.0, TM11, f, 0.0)
    assert center.E.z == pytest.approx(1.0, rel=1e-12)

    wall = wr90.field_distribution(0.01143, 0.001, 0.0, TM11, f, 0.0)
    assert abs(wall.E.z) < 1e-12


def test_travelling_wave_phase(wr90):
    """
    Advancing z by a quarter guide wavelength equals retarding the phase by pi/2.
    """
    f = 10e9
    lam_g = wr90.calculated_params(f, TE10).guide_wavelength
    ahead = wr90.field_distribution(0.002, 0.001, lam_g / 4, TE10, f, math.pi / 2)
    now = wr90.field_distribution(0.002, 0.001, 0.0, TE10, f, 0.0)
    assert ahead.E.y == pytest.approx(now.E.y, abs=1e-12)
    assert ahead.H.z == pytest.approx(now.H.z, abs=1e-12)


def test_evanescent_field_is_zero(wr90):
    fv = wr90.field_distribution(0.0, 0.0, 0.0, TE10, 5e9, 0.0)
    assert fv.is_zero


def test_field_outside_is_zero(wr90):
    for x, y in ((0.02, 0.0), (0.0, -0.006), (-0.0115, 0.0051)):
        fv = wr90.field_distribution(x, y, 0.0, TE10, 10e9, 0.3)
        assert fv.is_zero


def test_corner_origin_matches_centered(wr90):
    corner = RectangularWaveguide(0.02286, 0.01016, origin="corner")
    # TE11 cuts off at about 16.15 GHz
    f = 18e9
    mode = Mode("TE", 1, 1)
    a = corner.field_distribution(0.01143 + 0.003, 0.00508 - 0.001, 0.01, mode, f, 0.4)
    b = wr90.field_distribution(0.003, -0.001, 0.01, mode, f, 0.4)
    assert not b.is_zero
    for u, v in zip(a.E.as_tuple() + a.H.as_tuple(), b.E.as_tuple() + b.H.as_tuple()):
        assert u == pytest.approx(v, rel=1e-9, abs=1e-12)


def test_field_is_idempotent(wr90):
    args = (0.004, -0.002, 0.013, Mode("TE", 2, 0), 15e9, 1.1)
    assert wr90.field_distribution(*args) == wr90.field_distribution(*args)


@pytest.mark.parametrize("bad", [-1.0, math.nan, math.inf, "fast", None])
def test_invalid_frequency(wr90, bad):
    with pytest.raises(InvalidArgumentError):
        wr90.calculated_params(bad, TE10)
    with pytest.raises(InvalidArgumentError):
        wr90.field_distribution(0.0, 0.0, 0.0, TE10, bad, 0.0)


def test_invalid_coordinates(wr90):
    with pytest.raises(InvalidArgumentError):
        wr90.field_distribution(math.nan, 0.0, 0.0, TE10, 10e9, 0.0)
    with pytest.raises(InvalidArgumentError):
        wr90.field_distribution(0.0, 0.0, math.inf, TE10, 10e9, 0.0)


def test_construction_validation():
    with pytest.raises(GeometryError):
        RectangularWaveguide(0.0, 0.01)
    with pytest.raises(GeometryError):
        RectangularWaveguide(0.02, -0.01)
    swapped = RectangularWaveguide(0.01016, 0.02286)
    assert (swapped.a, swapped.b) == (0.02286, 0.01016)


def test_mode_label(wr90):
    assert wr90.mode_label(TE10) == "TE10"
    assert wr90.mode_label(Mode("TM", 2, 1)) == "TM21"


if __name__ == "__main__":
    pytest.main()
