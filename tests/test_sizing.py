"""Tests for the sizing estimator."""
import math

import pytest
from pydantic import ValidationError

from ncsizer.models import LimitingFactor
from ncsizer.sizing import compute, count_nodes, project_demand, size_cluster, source_totals


def _counts(inputs):
    return count_nodes(inputs, project_demand(inputs))


def test_reference_scenario_node_counts(make_inputs):
    """160 cores / 32 per node = 5; 2560 GB / 512 = 5; 50 TB / 8.25 = 7 (storage bound)."""
    inputs = make_inputs()
    assert source_totals(inputs) == (160, 2560, 50)
    demand = project_demand(inputs)
    assert demand.demand_cores == 160
    assert demand.demand_ram_gb == 2560
    assert demand.demand_storage_tb == 50
    c = count_nodes(inputs, demand)
    assert c.node_cores == 32
    assert c.node_ram_gb == 512
    assert c.node_storage_tb == pytest.approx(8.25)
    assert (c.cpu_nodes, c.ram_nodes, c.storage_nodes) == (5, 5, 7)
    assert c.raw_nodes == 7
    assert c.final_nodes == 7
    assert c.limiting_factor == LimitingFactor.STORAGE


def test_reference_scenario_results(make_inputs):
    r = compute(make_inputs())
    assert r.source_total_cores == 160
    assert r.source_total_ram_gb == 2560
    assert r.source_total_storage_tb == 50
    assert r.nodes_required == 7
    assert r.target_total_cores == 7 * 16 * 2
    assert r.target_total_ram_gb == 7 * 512
    assert r.target_total_storage_tb == pytest.approx(7 * 15 * 0.55)
    assert r.consolidation_ratio == "1.4 : 1"
    assert r.limiting_factor == LimitingFactor.STORAGE
    assert r.efficiency_factor == 1.0
    assert r.legacy_edition == "VVF + vSAN (Advanced)"
    assert r.target_edition == "NCI Pro"


def test_redundancy_n_plus_2(make_inputs):
    r = compute(make_inputs(redundancy_level="n+2"))
    assert r.nodes_required == 9
    assert r.consolidation_ratio == "1.1 : 1"


def test_consolidation_ratio_rounds_half_up(make_inputs):
    """10 hosts / 8 nodes = 1.25 exactly, shown as 1.3."""
    r = compute(make_inputs(redundancy_level="n+1"))
    assert r.nodes_required == 8
    assert r.consolidation_ratio == "1.3 : 1"


def test_minimum_three_nodes(make_inputs):
    """Tiny demand still yields 3 nodes, plus redundancy."""
    tiny = dict(source_hosts=1, source_sockets=1, source_cores_per_socket=1, source_ram_gb=1, source_usable_storage_tb=1)
    c = _counts(make_inputs(**tiny))
    assert (c.cpu_nodes, c.ram_nodes, c.storage_nodes) == (1, 1, 1)
    assert c.raw_nodes == 3
    for level, extra in (("none", 0), ("n+1", 1), ("n+2", 2)):
        r = compute(make_inputs(redundancy_level=level, **tiny))
        assert r.nodes_required == 3 + extra


def test_limiting_factor_tie_prefers_cpu(make_inputs):
    """CPU and RAM both need 5 nodes, storage 1."""
    c = _counts(make_inputs(source_usable_storage_tb=1))
    assert (c.cpu_nodes, c.ram_nodes, c.storage_nodes) == (5, 5, 1)
    assert c.limiting_factor == LimitingFactor.CPU


def test_limiting_factor_ram(make_inputs):
    c = _counts(make_inputs(source_ram_gb=512, source_usable_storage_tb=1))
    assert c.ram_nodes == 10
    assert c.limiting_factor == LimitingFactor.RAM


def test_limiting_factor_tie_ram_over_storage(make_inputs):
    """RAM and storage both need 10 nodes (80 TB / 8.25 = 9.7 -> 10)."""
    c = _counts(make_inputs(source_ram_gb=512, source_usable_storage_tb=80))
    assert (c.cpu_nodes, c.ram_nodes, c.storage_nodes) == (5, 10, 10)
    assert c.limiting_factor == LimitingFactor.RAM


def test_limiting_factor_matches_largest_count(make_inputs):
    for overrides in (
        {},
        {"source_usable_storage_tb": 1},
        {"source_ram_gb": 1024},
        {"source_cores_per_socket": 32},
        {"growth_factor_pct": 50, "storage_efficiency": True},
    ):
        c = _counts(make_inputs(**overrides))
        by_factor = {
            LimitingFactor.CPU: c.cpu_nodes,
            LimitingFactor.RAM: c.ram_nodes,
            LimitingFactor.STORAGE: c.storage_nodes,
        }
        assert by_factor[c.limiting_factor] == max(by_factor.values())


def test_modernization_efficiency(make_inputs):
    """AMD: 160 / 1.4 / 32 = 3.57 -> 4. Intel: 160 / 1.25 / 32 = 4."""
    amd = _counts(make_inputs(apply_modernization=True, target_cpu_type="amd"))
    assert amd.cpu_efficiency == 1.4
    assert amd.cpu_nodes == 4
    intel = _counts(make_inputs(apply_modernization=True, target_cpu_type="intel"))
    assert intel.cpu_efficiency == 1.25
    assert intel.effective_cpu_demand == 128
    assert intel.cpu_nodes == 4
    off = compute(make_inputs(apply_modernization=False, target_cpu_type="amd"))
    assert off.efficiency_factor == 1.0


def test_cvm_overhead_reduces_node_capacity(make_inputs):
    """32 - 4 = 28 cores, 512 - 32 = 480 GB per node."""
    c = _counts(make_inputs(apply_cvm_overhead=True))
    assert c.node_cores == 28
    assert c.node_ram_gb == 480
    assert c.cpu_nodes == 6  # 160 / 28 = 5.7
    assert c.ram_nodes == 6  # 2560 / 480 = 5.3
    assert c.storage_nodes == 7


def test_storage_efficiency_never_increases_storage_nodes(make_inputs):
    for storage in (1, 20, 50, 120, 500):
        off = _counts(make_inputs(source_usable_storage_tb=storage, storage_efficiency=False))
        on = _counts(make_inputs(source_usable_storage_tb=storage, storage_efficiency=True))
        assert on.storage_nodes <= off.storage_nodes
    on = _counts(make_inputs(storage_efficiency=True))
    assert on.storage_nodes == 5  # 50 / 1.5 / 8.25 = 4.04


def test_growth_is_monotonic(make_inputs):
    previous = None
    for growth in range(0, 51, 5):
        c = _counts(make_inputs(growth_factor_pct=growth))
        current = (c.cpu_nodes, c.ram_nodes, c.storage_nodes)
        if previous is not None:
            assert all(cur >= prev for cur, prev in zip(current, previous))
        previous = current


def test_growth_fifty_percent(make_inputs):
    """240 cores / 32 = 7.5 -> 8; 3840 GB / 512 = 7.5 -> 8; 75 TB / 8.25 = 9.1 -> 10."""
    c = _counts(make_inputs(growth_factor_pct=50))
    assert (c.cpu_nodes, c.ram_nodes, c.storage_nodes) == (8, 8, 10)


def test_target_totals_scale_with_nodes(make_inputs):
    for overrides in ({}, {"redundancy_level": "n+2"}, {"source_hosts": 40}, {"apply_cvm_overhead": True}):
        inputs = make_inputs(**overrides)
        r = compute(inputs)
        assert r.nodes_required >= 3
        assert r.target_total_cores == r.nodes_required * inputs.target_cores_per_socket * 2
        assert r.target_total_ram_gb == r.nodes_required * inputs.target_ram_gb


def test_zero_hosts_savings_pct_not_finite(make_inputs):
    """No billable legacy cores: savings / 0 gives -inf rather than raising."""
    r = compute(make_inputs(source_hosts=0))
    assert r.nodes_required == 3
    assert r.consolidation_ratio == "0.0 : 1"
    assert r.financials.legacy_license_cost_usd == 0
    assert math.isinf(r.financials.savings_pct)
    assert r.financials.savings_pct < 0


def test_zero_node_capacity_not_finite(make_inputs):
    """CVM overhead consuming all cores gives an infinite node count, not an exception."""
    r = compute(make_inputs(target_cores_per_socket=2, apply_cvm_overhead=True))
    assert math.isinf(r.nodes_required)
    assert math.isinf(r.target_total_ram_gb)
    assert r.limiting_factor == LimitingFactor.CPU


def test_zero_demand_over_zero_capacity_is_nan(make_inputs):
    r = compute(make_inputs(source_hosts=0, target_cores_per_socket=2, apply_cvm_overhead=True))
    assert math.isnan(r.nodes_required)


def test_compute_is_idempotent(make_inputs):
    inputs = make_inputs(growth_factor_pct=17, apply_modernization=True, target_cpu_type="amd")
    assert compute(inputs) == compute(inputs)
    assert compute(inputs).model_dump() == compute(make_inputs(
        growth_factor_pct=17, apply_modernization=True, target_cpu_type="amd",
    )).model_dump()


def test_inputs_are_immutable(make_inputs):
    inputs = make_inputs()
    with pytest.raises(ValidationError):
        inputs.source_hosts = 20


def test_inputs_require_every_field(reference_payload):
    from ncsizer.models import ClusterInputs

    reference_payload.pop("show_financials")
    with pytest.raises(ValidationError):
        ClusterInputs.model_validate(reference_payload)


def test_inputs_reject_out_of_range_growth(make_inputs):
    with pytest.raises(ValidationError):
        make_inputs(growth_factor_pct=75)
    with pytest.raises(ValidationError):
        make_inputs(redundancy_level="n+3")


@pytest.mark.parametrize(
    "field,value",
    [
        ("source_hosts", 10**28),
        ("source_hosts", 10**400),
        ("source_cores_per_socket", 1000),
        ("target_raw_storage_tb", 1e9),
    ],
)
def test_inputs_reject_oversized_values(make_inputs, field, value):
    with pytest.raises(ValidationError):
        make_inputs(**{field: value})


def test_largest_accepted_inputs_compute(make_inputs):
    r = compute(
        make_inputs(
            source_hosts=10000,
            source_sockets=16,
            source_cores_per_socket=256,
            source_ram_gb=65536,
            source_usable_storage_tb=1000000,
            growth_factor_pct=50,
        )
    )
    assert r.source_total_cores == 10000 * 16 * 256
    assert r.consolidation_ratio.endswith(" : 1")


def test_size_cluster_returns_stage_records(make_inputs):
    inputs = make_inputs()
    results, demand, counts = size_cluster(inputs)
    assert results == compute(inputs)
    assert demand == project_demand(inputs)
    assert counts == count_nodes(inputs, demand)
    assert counts.final_nodes == results.nodes_required
