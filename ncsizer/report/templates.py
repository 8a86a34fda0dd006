"""Report section builders (text/structure shared by PDF and HTML)."""
import math
from datetime import date

from ncsizer.models import (
    ClusterInputs,
    DemandProjection,
    Financials,
    NodeCounts,
    RedundancyLevel,
    SizingResults,
)
from ncsizer.pricing import DEFAULT_PRICE_BOOK, PriceBook
from ncsizer.sizing import compute

REPORT_VERSION = "1.0"


def report_metadata() -> dict:
    return {
        "brand": "NCS",
        "tagline": "Hypervisor migration sizing & TCO",
        "doc_name_short": "Cluster Sizing Report",
        "report_version": REPORT_VERSION,
        "date": date.today().isoformat(),
        "copyright": f"© {date.today().year} NCS. Estimates only; validate with your vendors.",
    }


def fmt_num(value: float, decimals: int = 0) -> str:
    """Thousands-separated number; non-finite values print as 'n/a'."""
    if not math.isfinite(value):
        return "n/a"
    return f"{value:,.{decimals}f}"


def fmt_usd(value: float) -> str:
    if not math.isfinite(value):
        return "n/a"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def fmt_pct(value: float) -> str:
    if not math.isfinite(value):
        return "n/a"
    return f"{value:.0f}%"


def executive_summary_narrative(inputs: ClusterInputs, results: SizingResults) -> str:
    """Summary paragraph for the report; the cost sentence only appears when financials are shown."""
    parts = [
        f"The current environment runs {inputs.source_hosts} host(s) with "
        f"{fmt_num(results.source_total_cores)} cores, {fmt_num(results.source_total_ram_gb)} GB RAM and "
        f"{fmt_num(results.source_total_storage_tb, 1)} TB usable storage. "
        f"Allowing {inputs.growth_factor_pct:.0f}% growth, the target platform needs "
        f"<b>{fmt_num(results.nodes_required)} node(s)</b> with {inputs.redundancy_level.value} redundancy, "
        f"a consolidation ratio of {results.consolidation_ratio}. "
        f"The node count is driven by {results.limiting_factor.value}.",
    ]
    if inputs.show_financials:
        fin = results.financials
        if math.isfinite(fin.savings_usd) and fin.savings_usd >= 0:
            outcome = f"saves approximately <b>{fmt_usd(fin.savings_usd)}</b> ({fmt_pct(fin.savings_pct)})"
        else:
            outcome = f"costs approximately <b>{fmt_usd(-fin.savings_usd)}</b> more"
        parts.append(
            f" Moving from {results.legacy_edition} to {results.target_edition} {outcome} "
            f"compared with a legacy renewal of {fmt_usd(fin.legacy_license_cost_usd)}."
        )
    return "".join(parts)


def source_vs_target(inputs: ClusterInputs, results: SizingResults) -> list[list[str]]:
    """Rows of [resource, source, target], header first."""
    return [
        ["", "Source", "Target"],
        ["Hosts / nodes", fmt_num(inputs.source_hosts), fmt_num(results.nodes_required)],
        ["Cores", fmt_num(results.source_total_cores), fmt_num(results.target_total_cores)],
        ["RAM (GB)", fmt_num(results.source_total_ram_gb), fmt_num(results.target_total_ram_gb)],
        ["Usable storage (TB)", fmt_num(results.source_total_storage_tb, 1), fmt_num(results.target_total_storage_tb, 1)],
    ]


def node_breakdown(demand: DemandProjection, counts: NodeCounts) -> list[list[str]]:
    """Per-resource demand, usable capacity per node and node count. The limiting row is flagged."""
    rows = [["Resource", "Demand", "Usable per node", "Nodes"]]
    for label, factor, dem, cap, n in (
        ("CPU (cores)", "CPU", counts.effective_cpu_demand, counts.node_cores, counts.cpu_nodes),
        ("RAM (GB)", "RAM", demand.demand_ram_gb, counts.node_ram_gb, counts.ram_nodes),
        ("Storage (TB)", "Storage", demand.demand_storage_tb, counts.node_storage_tb, counts.storage_nodes),
    ):
        marker = " *" if counts.limiting_factor.value == factor else ""
        rows.append([label + marker, fmt_num(dem, 1), fmt_num(cap, 2), fmt_num(n)])
    return rows


def sizing_assumptions(inputs: ClusterInputs, demand: DemandProjection, counts: NodeCounts) -> list[list[str]]:
    rows = [["Input", "Value"]]
    rows.append(["Growth multiplier", f"{demand.growth_multiplier:.2f}x"])
    rows.append(["Storage efficiency ratio", f"{demand.storage_efficiency_ratio:.1f}:1"])
    rows.append(["CPU modernization factor", f"{counts.cpu_efficiency:.2f}x ({inputs.target_cpu_type.value})"])
    rows.append(["CVM overhead", "32 GB / 4 cores per node" if inputs.apply_cvm_overhead else "not reserved"])
    rows.append(["Target node", (
        f"2 x {inputs.target_cores_per_socket} cores, {fmt_num(inputs.target_ram_gb)} GB, "
        f"{fmt_num(inputs.target_raw_storage_tb, 1)} TB raw"
    )])
    rows.append(["Redundancy", inputs.redundancy_level.value])
    rows.append(["License tier", inputs.target_license.value])
    return rows


def financial_rows(fin: Financials) -> list[list[str]]:
    return [
        ["Item", "USD"],
        ["Legacy license renewal", fmt_usd(fin.legacy_license_cost_usd)],
        ["Target licenses", fmt_usd(fin.target_license_cost_usd)],
        ["Target hardware", fmt_usd(fin.target_hardware_cost_usd)],
        ["Migration services", fmt_usd(fin.migration_services_cost_usd)],
        ["Target TCO", fmt_usd(fin.total_target_tco_usd)],
        ["Savings", f"{fmt_usd(fin.savings_usd)} ({fmt_pct(fin.savings_pct)})"],
    ]


def cost_chart_data(fin: Financials) -> dict:
    """Legacy vs target bar lengths as fractions of the larger of the two."""
    legacy = fin.legacy_license_cost_usd if math.isfinite(fin.legacy_license_cost_usd) else 0
    target = fin.total_target_tco_usd if math.isfinite(fin.total_target_tco_usd) else 0
    top = max(legacy, target) or 1
    return {
        "legacy_usd": legacy,
        "target_usd": target,
        "legacy_frac": legacy / top,
        "target_frac": target / top,
    }


def redundancy_what_if(inputs: ClusterInputs, prices: PriceBook = DEFAULT_PRICE_BOOK) -> list[dict]:
    """Re-run the estimate at every redundancy level, other inputs unchanged."""
    out = []
    for level in RedundancyLevel:
        r = compute(inputs.model_copy(update={"redundancy_level": level}), prices)
        out.append({
            "level": level.value,
            "nodes": r.nodes_required,
            "consolidation_ratio": r.consolidation_ratio,
            "total_target_tco_usd": r.financials.total_target_tco_usd,
        })
    return out


def methodology_section() -> list[dict[str, str]]:
    return [
        {
            "title": "Demand",
            "body": "Source cores and RAM are the host totals; storage is the cluster-wide usable figure. "
            "All three grow by the growth percentage. With storage efficiency enabled, storage demand "
            "is divided by a 1.5:1 data reduction ratio.",
        },
        {
            "title": "Node count",
            "body": "Target nodes are dual socket. CPU demand is divided by the modernization factor "
            "(1.25x Intel, 1.4x AMD) when enabled. Controller VM overhead (32 GB, 4 cores) is subtracted "
            "from each node when enabled, and 55% of raw storage counts as usable. Each resource is rounded "
            "up to whole nodes separately; the largest count, never fewer than 3, is used before redundancy "
            "nodes are added.",
        },
        {
            "title": "Costs",
            "body": "The legacy renewal bills current cores with a 16-core per-socket minimum. Target licenses "
            "are per physical core; hardware is chassis plus RAM, raw NVMe and cores per node. Migration "
            "services assume 15 VMs per legacy host.",
        },
    ]


def definitions_section() -> list[dict[str, str]]:
    return [
        {"term": "Node", "definition": "One physical target host with a fixed dual-socket topology."},
        {"term": "CVM overhead", "definition": "Compute and memory reserved on every node for the controller VM appliance."},
        {"term": "Consolidation ratio", "definition": "Legacy host count divided by the final target node count."},
        {"term": "Limiting factor", "definition": "The resource (CPU, RAM or Storage) that requires the most nodes."},
        {"term": "TCO", "definition": "Total cost of ownership: target licenses, hardware and migration services."},
    ]
