"""Target node presets and license editions. Node presets are read from nodes.json."""
from ncsizer.catalog.loader import (
    get_node_presets,
    get_node_preset,
    get_license_editions,
)

__all__ = ["get_node_presets", "get_node_preset", "get_license_editions"]
