"""Legacy renewal vs target TCO (pure functions)."""
from ncsizer import arith
from ncsizer.models import ClusterInputs, Financials
from ncsizer.policies import SOCKETS_PER_NODE, legacy_billable_cores
from ncsizer.pricing import DEFAULT_PRICE_BOOK, PriceBook


def node_hardware_cost(inputs: ClusterInputs, prices: PriceBook = DEFAULT_PRICE_BOOK) -> float:
    """
    cost_per_node = chassis + ram * $/GB + raw_storage * $/TB + (cores_per_socket * 2) * $/core
    Storage is priced on raw, not usable, capacity.
    """
    return (
        prices.hw_base_chassis
        + inputs.target_ram_gb * prices.hw_per_gb_ram
        + inputs.target_raw_storage_tb * prices.hw_per_tb_nvme
        + inputs.target_cores_per_socket * SOCKETS_PER_NODE * prices.hw_per_core
    )


def migration_services_cost(inputs: ClusterInputs, prices: PriceBook = DEFAULT_PRICE_BOOK) -> float:
    """Estimated VMs (hosts * assumed density) times the per-VM rate; zero when not included."""
    if not inputs.include_migration_services:
        return 0
    estimated_vms = inputs.source_hosts * prices.est_vms_per_host
    return estimated_vms * prices.migration_per_vm


def compute_financials(
    inputs: ClusterInputs,
    nodes_required: int | float,
    target_total_cores: int | float,
    prices: PriceBook = DEFAULT_PRICE_BOOK,
) -> Financials:
    """
    legacy = billable_cores(current fleet, 16-core socket floor) * legacy_rate(tier)
    target_tco = target_cores * tier_rate + nodes * cost_per_node + migration
    savings_pct = round(savings / legacy * 100); non-finite when legacy is zero
    """
    billable = legacy_billable_cores(
        inputs.source_hosts, inputs.source_sockets, inputs.source_cores_per_socket
    )
    legacy_total = billable * prices.legacy_rate(inputs.target_license)

    license_total = target_total_cores * prices.target_rate(inputs.target_license)
    hardware_total = nodes_required * node_hardware_cost(inputs, prices)
    migration = migration_services_cost(inputs, prices)

    tco = license_total + hardware_total + migration
    savings = legacy_total - tco

    return Financials(
        legacy_license_cost_usd=legacy_total,
        target_license_cost_usd=license_total,
        target_hardware_cost_usd=hardware_total,
        migration_services_cost_usd=migration,
        total_target_tco_usd=tco,
        savings_usd=savings,
        savings_pct=arith.round_half_up(arith.div(savings, legacy_total) * 100),
    )
