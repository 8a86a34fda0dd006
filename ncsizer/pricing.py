"""Static price book used by the cost model. No live pricing."""
from pydantic import BaseModel, ConfigDict, Field

from ncsizer.models import LicenseTier


class PriceBook(BaseModel):
    """Per-core license rates, hardware unit costs and services rates (USD)."""
    model_config = ConfigDict(frozen=True)

    # Legacy renewal per billable core
    legacy_standard_per_core: float = 450  # VVF
    legacy_premium_per_core: float = 950   # VCF

    # Target software per physical core
    target_per_core: dict[LicenseTier, float] = Field(
        default_factory=lambda: {
            LicenseTier.STARTER: 280,
            LicenseTier.PRO: 500,
            LicenseTier.ULTIMATE: 850,
        }
    )

    # Target hardware
    hw_base_chassis: float = 6000
    hw_per_gb_ram: float = 8
    hw_per_tb_nvme: float = 150
    hw_per_core: float = 75

    # Migration services
    migration_per_vm: float = 150
    est_vms_per_host: int = 15

    def legacy_rate(self, tier: LicenseTier) -> float:
        """Ultimate compares against the premium legacy bundle; other tiers against the standard one."""
        if tier == LicenseTier.ULTIMATE:
            return self.legacy_premium_per_core
        return self.legacy_standard_per_core

    def target_rate(self, tier: LicenseTier) -> float:
        return self.target_per_core[tier]


DEFAULT_PRICE_BOOK = PriceBook()
