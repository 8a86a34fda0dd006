"""Pytest fixtures for sizer tests."""
import pytest

from ncsizer.models import ClusterInputs
from ncsizer.resilience import size_cache

# 10 legacy hosts, 2 x 8 cores, 256 GB, 50 TB usable; 16-core/512 GB/15 TB Intel targets, no policies
REFERENCE = {
    "source_hosts": 10,
    "source_sockets": 2,
    "source_cores_per_socket": 8,
    "source_ram_gb": 256,
    "source_usable_storage_tb": 50,
    "growth_factor_pct": 0,
    "storage_efficiency": False,
    "include_migration_services": False,
    "target_cpu_type": "intel",
    "target_cores_per_socket": 16,
    "target_ram_gb": 512,
    "target_raw_storage_tb": 15,
    "apply_modernization": False,
    "apply_cvm_overhead": False,
    "redundancy_level": "none",
    "target_license": "pro",
    "show_financials": True,
}


@pytest.fixture
def reference_payload():
    return dict(REFERENCE)


@pytest.fixture
def make_inputs():
    """Build ClusterInputs from the reference scenario with overrides."""
    def _make(**overrides) -> ClusterInputs:
        return ClusterInputs.model_validate({**REFERENCE, **overrides})
    return _make


@pytest.fixture(autouse=True)
def fresh_size_cache():
    """API tests must not see results cached by an earlier test."""
    size_cache.clear()
    yield
    size_cache.clear()
