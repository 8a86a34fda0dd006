"""Report colors and asset lookup."""
from pathlib import Path

BRAND_DARK = "#1e293b"        # body text, headings
BRAND_MUTED = "#64748b"       # small text, footer
BRAND_ACCENT = "#3b82f6"      # legacy bars, links
BRAND_ACCENT_DARK = "#1e3a8a"  # table header, card headings
BRAND_GRID = "#e2e8f0"        # table grid, borders
BRAND_SUCCESS = "#10b981"     # target platform, positive savings
BRAND_WHITE = "#ffffff"


def _static_dir(static_dir: Path | None = None) -> Path | None:
    """Resolve static directory for assets."""
    if static_dir is not None and Path(static_dir).is_dir():
        return Path(static_dir).resolve()
    here = Path(__file__).resolve().parent.parent.parent / "static"
    if here.is_dir():
        return here
    cwd = Path.cwd() / "static"
    if cwd.is_dir():
        return cwd
    return None


def get_logo_path(static_dir: Path | None = None) -> Path | None:
    """Path to logo.png in the static dir, if any."""
    base = _static_dir(static_dir)
    if base is None:
        return None
    path = base / "logo.png"
    return path if path.is_file() else None
