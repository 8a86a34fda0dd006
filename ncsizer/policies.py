"""Sizing policy tables: each toggle maps to a named multiplier or constant."""
from ncsizer.models import CpuVendor, LicenseTier, RedundancyLevel

# Controller VM reserve per node when CVM overhead is applied
CVM_RAM_GB = 32
CVM_CPU_CORES = 4

# Target nodes are always dual socket, regardless of source topology
SOCKETS_PER_NODE = 2

# Usable share of raw node storage (on-disk format and replication)
USABLE_STORAGE_FACTOR = 0.55

# Data reduction credited when storage efficiency is enabled
STORAGE_EFFICIENCY_RATIO = 1.5

# Smallest resilient cluster, before redundancy
MIN_CLUSTER_NODES = 3

# Legacy per-core licensing bills at least this many cores per socket
LEGACY_MIN_CORES_PER_SOCKET = 16

# Effective per-core gain of a current-generation target CPU over the source fleet
CPU_MODERNIZATION_GAIN = {
    CpuVendor.AMD: 1.4,
    CpuVendor.INTEL: 1.25,
}

REDUNDANCY_EXTRA_NODES = {
    RedundancyLevel.NONE: 0,
    RedundancyLevel.N_PLUS_1: 1,
    RedundancyLevel.N_PLUS_2: 2,
}

TARGET_EDITION_LABELS = {
    LicenseTier.STARTER: "NCI Starter",
    LicenseTier.PRO: "NCI Pro",
    LicenseTier.ULTIMATE: "NCI Ultimate",
}

LEGACY_EDITION_LABELS = {
    LicenseTier.STARTER: "VVF (Standard)",
    LicenseTier.PRO: "VVF + vSAN (Advanced)",
    LicenseTier.ULTIMATE: "VCF (Enterprise)",
}


def growth_multiplier(growth_factor_pct: float) -> float:
    return 1 + growth_factor_pct / 100


def storage_efficiency_ratio(enabled: bool) -> float:
    """Divisor applied to storage demand."""
    return STORAGE_EFFICIENCY_RATIO if enabled else 1.0


def cpu_efficiency(apply_modernization: bool, vendor: CpuVendor) -> float:
    """Divisor applied to compute demand; 1.0 when modernization is off."""
    if not apply_modernization:
        return 1.0
    return CPU_MODERNIZATION_GAIN[vendor]


def cvm_overhead(apply_cvm_overhead: bool) -> tuple[int, int]:
    """(ram_gb, cores) reserved on every node."""
    if apply_cvm_overhead:
        return CVM_RAM_GB, CVM_CPU_CORES
    return 0, 0


def redundancy_extra(level: RedundancyLevel) -> int:
    return REDUNDANCY_EXTRA_NODES[level]


def legacy_billable_cores(hosts: int, sockets: int, cores_per_socket: int) -> int:
    """Current (not projected) legacy core count with the per-socket licensing floor."""
    return hosts * sockets * max(cores_per_socket, LEGACY_MIN_CORES_PER_SOCKET)


def target_edition(tier: LicenseTier) -> str:
    return TARGET_EDITION_LABELS[tier]


def legacy_edition(tier: LicenseTier) -> str:
    return LEGACY_EDITION_LABELS[tier]
