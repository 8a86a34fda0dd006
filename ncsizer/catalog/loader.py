"""Load target node presets from JSON and list license editions with their default rates."""
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ncsizer.models import LicenseEdition, LicenseTier, NodePreset
from ncsizer.policies import legacy_edition, target_edition
from ncsizer.pricing import DEFAULT_PRICE_BOOK, PriceBook

_LOG = logging.getLogger(__name__)

_CATALOG_DIR = Path(__file__).resolve().parent
_CACHE: dict[str, dict] = {}


def _load(name: str) -> dict | None:
    if name in _CACHE:
        return _CACHE[name]
    path = _CATALOG_DIR / f"{name}.json"
    if not path.is_file():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        _LOG.warning("Catalog %s could not be read: %s", path.name, e)
        return None
    _CACHE[name] = data
    return data


def get_node_presets(vendor: str | None = None) -> list[dict[str, Any]]:
    """
    Return target node presets, optionally filtered by CPU vendor.
    Each item: { id, name, cpu_vendor, cores_per_socket, ram_gb, raw_storage_tb, description }.
    """
    data = _load("nodes")
    if not data:
        return []
    out = []
    for raw in data.get("nodes") or []:
        try:
            preset = NodePreset.model_validate(raw)
        except ValidationError as e:
            _LOG.warning("Skipping invalid node preset %r: %s", raw.get("id") if isinstance(raw, dict) else raw, e)
            continue
        if vendor and preset.cpu_vendor.value != vendor.lower():
            continue
        out.append(preset.model_dump(mode="json"))
    return out


def get_node_preset(node_id: str) -> dict | None:
    """Return a single preset by id, or None."""
    for preset in get_node_presets():
        if preset["id"] == node_id:
            return preset
    return None


def get_license_editions(prices: PriceBook = DEFAULT_PRICE_BOOK) -> list[dict[str, Any]]:
    """One entry per target tier with the legacy edition it is compared against."""
    return [
        LicenseEdition(
            tier=tier,
            target_edition=target_edition(tier),
            legacy_edition=legacy_edition(tier),
            target_rate_per_core_usd=prices.target_rate(tier),
            legacy_rate_per_core_usd=prices.legacy_rate(tier),
        ).model_dump(mode="json")
        for tier in LicenseTier
    ]
