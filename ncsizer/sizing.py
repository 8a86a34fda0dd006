"""Sizing estimator: source aggregation, demand projection, node counts (pure functions, no I/O)."""
from ncsizer import arith
from ncsizer.cost_model import compute_financials
from ncsizer.models import (
    ClusterInputs,
    DemandProjection,
    LimitingFactor,
    NodeCounts,
    SizingResults,
)
from ncsizer.policies import (
    MIN_CLUSTER_NODES,
    SOCKETS_PER_NODE,
    USABLE_STORAGE_FACTOR,
    cpu_efficiency,
    cvm_overhead,
    growth_multiplier,
    legacy_edition,
    redundancy_extra,
    storage_efficiency_ratio,
    target_edition,
)
from ncsizer.pricing import DEFAULT_PRICE_BOOK, PriceBook


def source_totals(inputs: ClusterInputs) -> tuple[int, float, float]:
    """(cores, ram_gb, storage_tb) of the legacy cluster. Usable storage is already cluster-wide."""
    cores = inputs.source_hosts * inputs.source_sockets * inputs.source_cores_per_socket
    ram = inputs.source_hosts * inputs.source_ram_gb
    return cores, ram, inputs.source_usable_storage_tb


def project_demand(inputs: ClusterInputs) -> DemandProjection:
    """
    Apply growth to all three resources; storage is further divided by the
    data-reduction ratio when storage efficiency is enabled.
    """
    cores, ram, storage = source_totals(inputs)
    g = growth_multiplier(inputs.growth_factor_pct)
    ratio = storage_efficiency_ratio(inputs.storage_efficiency)
    return DemandProjection(
        growth_multiplier=g,
        storage_efficiency_ratio=ratio,
        demand_cores=cores * g,
        demand_ram_gb=ram * g,
        demand_storage_tb=storage * g / ratio,
    )


def _limiting_factor(cpu_nodes, ram_nodes, storage_nodes) -> LimitingFactor:
    # Ties resolve CPU, then RAM, then Storage
    if cpu_nodes >= ram_nodes and cpu_nodes >= storage_nodes:
        return LimitingFactor.CPU
    if ram_nodes >= storage_nodes:
        return LimitingFactor.RAM
    return LimitingFactor.STORAGE


def count_nodes(inputs: ClusterInputs, demand: DemandProjection) -> NodeCounts:
    """
    nodes_for_X = ceil(demand_X / usable_X_per_node), each rounded up independently.
    raw_nodes = max(cpu, ram, storage, 3); final_nodes = raw_nodes + redundancy extra.
    """
    efficiency = cpu_efficiency(inputs.apply_modernization, inputs.target_cpu_type)
    effective_cpu_demand = demand.demand_cores / efficiency

    cvm_ram, cvm_cores = cvm_overhead(inputs.apply_cvm_overhead)
    node_cores = inputs.target_cores_per_socket * SOCKETS_PER_NODE - cvm_cores
    node_ram = inputs.target_ram_gb - cvm_ram
    node_storage = inputs.target_raw_storage_tb * USABLE_STORAGE_FACTOR

    cpu_nodes = arith.ceil(arith.div(effective_cpu_demand, node_cores))
    ram_nodes = arith.ceil(arith.div(demand.demand_ram_gb, node_ram))
    storage_nodes = arith.ceil(arith.div(demand.demand_storage_tb, node_storage))

    raw_nodes = arith.max_of(cpu_nodes, ram_nodes, storage_nodes, MIN_CLUSTER_NODES)
    final_nodes = raw_nodes + redundancy_extra(inputs.redundancy_level)

    return NodeCounts(
        cpu_efficiency=efficiency,
        effective_cpu_demand=effective_cpu_demand,
        node_cores=node_cores,
        node_ram_gb=node_ram,
        node_storage_tb=node_storage,
        cpu_nodes=cpu_nodes,
        ram_nodes=ram_nodes,
        storage_nodes=storage_nodes,
        raw_nodes=raw_nodes,
        final_nodes=final_nodes,
        limiting_factor=_limiting_factor(cpu_nodes, ram_nodes, storage_nodes),
    )


def consolidation_ratio(source_hosts: int, nodes: int | float) -> str:
    """Legacy hosts per target node, e.g. '1.4 : 1'."""
    return arith.fixed(arith.div(source_hosts, nodes), 1) + " : 1"


def size_cluster(
    inputs: ClusterInputs, prices: PriceBook = DEFAULT_PRICE_BOOK
) -> tuple[SizingResults, DemandProjection, NodeCounts]:
    """Run every stage once; return the results together with the demand and node-count records."""
    src_cores, src_ram, src_storage = source_totals(inputs)
    demand = project_demand(inputs)
    counts = count_nodes(inputs, demand)

    nodes = counts.final_nodes
    target_cores = nodes * inputs.target_cores_per_socket * SOCKETS_PER_NODE
    target_ram = nodes * inputs.target_ram_gb
    # Usable physical capacity across the cluster
    target_storage = nodes * counts.node_storage_tb

    financials = compute_financials(inputs, nodes, target_cores, prices)

    results = SizingResults(
        source_total_cores=src_cores,
        source_total_ram_gb=src_ram,
        source_total_storage_tb=src_storage,
        nodes_required=nodes,
        target_total_cores=target_cores,
        target_total_ram_gb=target_ram,
        target_total_storage_tb=target_storage,
        consolidation_ratio=consolidation_ratio(inputs.source_hosts, nodes),
        limiting_factor=counts.limiting_factor,
        efficiency_factor=counts.cpu_efficiency,
        legacy_edition=legacy_edition(inputs.target_license),
        target_edition=target_edition(inputs.target_license),
        financials=financials,
    )
    return results, demand, counts


def compute(inputs: ClusterInputs, prices: PriceBook = DEFAULT_PRICE_BOOK) -> SizingResults:
    """Map one set of cluster inputs to a capacity plan and cost comparison. Deterministic, no side effects."""
    return size_cluster(inputs, prices)[0]
