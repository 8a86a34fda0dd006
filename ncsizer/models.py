"""Input/output types for the migration cluster sizer."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CpuVendor(str, Enum):
    """Target node CPU vendor."""
    INTEL = "intel"
    AMD = "amd"


class RedundancyLevel(str, Enum):
    """Extra nodes added on top of the sized cluster."""
    NONE = "none"
    N_PLUS_1 = "n+1"
    N_PLUS_2 = "n+2"


class LicenseTier(str, Enum):
    """Target license tier; also selects the legacy edition compared against."""
    STARTER = "starter"
    PRO = "pro"
    ULTIMATE = "ultimate"


class LimitingFactor(str, Enum):
    CPU = "CPU"
    RAM = "RAM"
    STORAGE = "Storage"


class ClusterInputs(BaseModel):
    """Source cluster shape, target node shape and sizing policies. Every field is required."""
    model_config = ConfigDict(frozen=True)

    # Source
    source_hosts: int = Field(..., ge=0, le=10000, description="Number of legacy hosts")
    source_sockets: int = Field(..., ge=0, le=16, description="Sockets per legacy host")
    source_cores_per_socket: int = Field(..., ge=0, le=256, description="Cores per legacy socket")
    source_ram_gb: float = Field(..., ge=0, le=65536, description="RAM GB per legacy host")
    source_usable_storage_tb: float = Field(..., ge=0, le=1000000, description="Usable storage TB, cluster-wide")

    # Growth & services
    growth_factor_pct: float = Field(..., ge=0, le=50, description="Projected growth % applied to demand")
    storage_efficiency: bool = Field(..., description="Apply 1.5:1 data reduction to storage demand")
    include_migration_services: bool = Field(..., description="Add professional services migration cost")

    # Target
    target_cpu_type: CpuVendor
    target_cores_per_socket: int = Field(..., ge=0, le=256, description="Cores per socket on a target node (dual socket)")
    target_ram_gb: float = Field(..., ge=0, le=65536, description="RAM GB per target node")
    target_raw_storage_tb: float = Field(..., ge=0, le=10000, description="Raw NVMe TB per target node")

    # Policies
    apply_modernization: bool = Field(..., description="Credit newer CPU generations with an efficiency gain")
    apply_cvm_overhead: bool = Field(..., description="Reserve controller VM capacity on every node")
    redundancy_level: RedundancyLevel
    target_license: LicenseTier
    show_financials: bool = Field(..., description="Render financial figures in reports")


class DemandProjection(BaseModel):
    """Stage B output: growth-projected demand."""
    model_config = ConfigDict(frozen=True)

    growth_multiplier: float
    storage_efficiency_ratio: float
    demand_cores: float
    demand_ram_gb: float
    demand_storage_tb: float


class NodeCounts(BaseModel):
    """Stage C output: per-node usable capacity and the node counts it implies."""
    model_config = ConfigDict(frozen=True)

    cpu_efficiency: float
    effective_cpu_demand: float
    node_cores: float
    node_ram_gb: float
    node_storage_tb: float
    cpu_nodes: int | float  # float only when non-finite
    ram_nodes: int | float
    storage_nodes: int | float
    raw_nodes: int | float
    final_nodes: int | float
    limiting_factor: LimitingFactor


class Financials(BaseModel):
    """Legacy renewal vs target TCO."""
    model_config = ConfigDict(frozen=True)

    legacy_license_cost_usd: float
    target_license_cost_usd: float
    target_hardware_cost_usd: float
    migration_services_cost_usd: float
    total_target_tco_usd: float
    savings_usd: float
    savings_pct: int | float  # non-finite when legacy cost is zero


class SizingResults(BaseModel):
    """Capacity plan and cost comparison for one set of inputs."""
    model_config = ConfigDict(frozen=True)

    # Source totals
    source_total_cores: int
    source_total_ram_gb: float
    source_total_storage_tb: float

    # Target totals
    nodes_required: int | float
    target_total_cores: int | float
    target_total_ram_gb: float
    target_total_storage_tb: float

    # Metrics
    consolidation_ratio: str
    limiting_factor: LimitingFactor
    efficiency_factor: float

    # Licensing & financials
    legacy_edition: str
    target_edition: str
    financials: Financials


class SizeResponse(BaseModel):
    """Response from /v1/size."""
    results: SizingResults
    notes: list[str] = Field(default_factory=list)


class NodePreset(BaseModel):
    """Catalog entry for a target node model."""
    id: str
    name: str
    cpu_vendor: CpuVendor
    cores_per_socket: int
    ram_gb: float
    raw_storage_tb: float
    description: str = ""


class LicenseEdition(BaseModel):
    """Catalog entry pairing a target tier with the legacy edition it replaces."""
    tier: LicenseTier
    target_edition: str
    legacy_edition: str
    target_rate_per_core_usd: float
    legacy_rate_per_core_usd: float
