"""Tests for policy tables and float helpers."""
import math

from ncsizer import arith
from ncsizer.models import CpuVendor, LicenseTier, RedundancyLevel
from ncsizer.policies import (
    cpu_efficiency,
    cvm_overhead,
    growth_multiplier,
    legacy_billable_cores,
    legacy_edition,
    redundancy_extra,
    storage_efficiency_ratio,
    target_edition,
)


def test_policy_lookups():
    assert growth_multiplier(0) == 1
    assert growth_multiplier(50) == 1.5
    assert storage_efficiency_ratio(True) == 1.5
    assert storage_efficiency_ratio(False) == 1.0
    assert cpu_efficiency(True, CpuVendor.AMD) == 1.4
    assert cpu_efficiency(True, CpuVendor.INTEL) == 1.25
    assert cpu_efficiency(False, CpuVendor.AMD) == 1.0
    assert cvm_overhead(True) == (32, 4)
    assert cvm_overhead(False) == (0, 0)


def test_every_enum_value_has_a_table_entry():
    assert [redundancy_extra(level) for level in RedundancyLevel] == [0, 1, 2]
    for tier in LicenseTier:
        assert target_edition(tier).startswith("NCI ")
        assert legacy_edition(tier)
    assert legacy_edition(LicenseTier.ULTIMATE) == "VCF (Enterprise)"


def test_legacy_billable_cores_floor():
    assert legacy_billable_cores(10, 2, 8) == 320
    assert legacy_billable_cores(10, 2, 20) == 400
    assert legacy_billable_cores(0, 2, 20) == 0


def test_div_non_finite():
    assert arith.div(6, 3) == 2
    assert arith.div(1, 0) == math.inf
    assert arith.div(-1, 0) == -math.inf
    assert math.isnan(arith.div(0, 0))


def test_ceil_and_round_pass_non_finite_through():
    assert arith.ceil(4.01) == 5
    assert arith.ceil(math.inf) == math.inf
    assert math.isnan(arith.ceil(math.nan))
    assert arith.round_half_up(2.5) == 3
    assert arith.round_half_up(-2.5) == -2
    assert arith.round_half_up(-49.46) == -49
    assert arith.round_half_up(-math.inf) == -math.inf


def test_max_of_propagates_nan():
    assert arith.max_of(1, 7, 3) == 7
    assert math.isnan(arith.max_of(1, math.nan, 3))


def test_fixed_formatting():
    assert arith.fixed(10 / 7) == "1.4"
    assert arith.fixed(1.25) == "1.3"
    assert arith.fixed(0) == "0.0"
    assert arith.fixed(math.inf) == "Infinity"
    assert arith.fixed(math.nan) == "NaN"


def test_fixed_large_magnitudes():
    assert arith.fixed(1e20) == "100000000000000000000.0"
    assert arith.fixed(1e30) == "1e+30"
    assert arith.fixed(-2.5e300) == "-2.5e+300"
