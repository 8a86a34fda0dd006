"""FastAPI routes for the migration cluster sizer."""
import logging
import math
import os
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from ncsizer.catalog import get_license_editions, get_node_preset, get_node_presets
from ncsizer.models import ClusterInputs, NodeCounts, SizeResponse, SizingResults
from ncsizer.observability import RequestLoggingMiddleware, get_metrics_text, record_sizing
from ncsizer.pricing import DEFAULT_PRICE_BOOK
from ncsizer.report.html_report import generate_report_html
from ncsizer.report.pdf import generate_report_pdf
from ncsizer.resilience import (
    get_report_timeout_sec,
    get_size_timeout_sec,
    run_sync_with_timeout,
    size_cache,
)
from ncsizer.sizing import size_cluster

_LOG = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = (os.environ.get("NCS_CORS_ORIGINS") or "").strip()
    if not raw:
        return []
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


app = FastAPI(
    title="NCS",
    description="Hypervisor migration cluster sizing and TCO comparison",
    version="0.1.0",
)
origins = _cors_origins()
if origins:
    app.add_middleware(CORSMiddleware, allow_origins=origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])
app.add_middleware(RequestLoggingMiddleware)


def _sizing_notes(counts: NodeCounts, results: SizingResults) -> list[str]:
    """Advisory notes about degenerate inputs (no validation is applied)."""
    notes = []
    if counts.node_cores <= 0:
        notes.append(
            f"Usable cores per node is {counts.node_cores:g} after controller VM overhead; "
            "CPU node count is not finite. Choose a node with more cores."
        )
    if counts.node_ram_gb <= 0:
        notes.append(
            f"Usable RAM per node is {counts.node_ram_gb:g} GB after controller VM overhead; "
            "RAM node count is not finite. Choose a node with more memory."
        )
    if counts.node_storage_tb <= 0:
        notes.append("Target node has no raw storage; storage node count is not finite.")
    if results.financials.legacy_license_cost_usd == 0:
        notes.append("Legacy license cost is zero (no billable cores), so savings percentage is undefined.")
    if math.isfinite(results.financials.savings_usd) and results.financials.savings_usd < 0:
        notes.append("Target TCO exceeds the legacy renewal; hardware is a one-time cost in this comparison.")
    if counts.raw_nodes == 3 and max(counts.cpu_nodes, counts.ram_nodes, counts.storage_nodes) < 3:
        notes.append("Demand fits in fewer than 3 nodes; the minimum cluster size of 3 applies.")
    return notes


def _do_size(inputs: ClusterInputs) -> SizeResponse:
    """Run the estimator and collect notes (for timeout/cache)."""
    results, _, counts = size_cluster(inputs, DEFAULT_PRICE_BOOK)
    return SizeResponse(results=results, notes=_sizing_notes(counts, results))


def _json(body: SizeResponse) -> Response:
    # inf/nan serialize as null
    return Response(content=body.model_dump_json(), media_type="application/json")


def _report_pdf(inputs: ClusterInputs, static_dir: Path | None) -> bytes:
    """Generate report PDF (sync, for timeout wrapper)."""
    results, demand, counts = size_cluster(inputs, DEFAULT_PRICE_BOOK)
    return generate_report_pdf(inputs, results, demand, counts, DEFAULT_PRICE_BOOK, static_dir=static_dir)


@app.get("/v1/health")
def health():
    return {"status": "ok", "service": "ncsizer"}


@app.get("/v1/metrics")
def metrics():
    """Prometheus-style metrics (request counts, sizings, uptime, duration)."""
    return PlainTextResponse(get_metrics_text(), media_type="text/plain; charset=utf-8")


@app.get("/v1/catalog/nodes")
def catalog_nodes(vendor: str | None = None):
    """Target node presets, optionally filtered by CPU vendor (intel, amd)."""
    return get_node_presets(vendor)


@app.get("/v1/catalog/nodes/{node_id}")
def catalog_node(node_id: str):
    preset = get_node_preset(node_id)
    if preset is None:
        raise HTTPException(status_code=404, detail=f"Unknown node preset: {node_id}")
    return preset


@app.get("/v1/catalog/licenses")
def catalog_licenses():
    """License tiers with legacy/target edition labels and default per-core rates."""
    return get_license_editions(DEFAULT_PRICE_BOOK)


@app.get("/v1/pricing")
def pricing():
    """Static price book used for every computation."""
    return DEFAULT_PRICE_BOOK.model_dump(mode="json")


@app.post("/v1/size", response_model=SizeResponse)
def size(inputs: ClusterInputs):
    """
    Compute node count, capacity and cost comparison; return JSON. Uses optional cache and timeout.
    Non-finite values (e.g. savings_pct with zero legacy cost) serialize as null.
    """
    inputs_dict = inputs.model_dump(mode="json")
    cached = size_cache.get(inputs_dict)
    if cached is not None:
        result = SizeResponse.model_validate(cached)
    else:
        try:
            result = run_sync_with_timeout(get_size_timeout_sec(), _do_size, inputs)
        except TimeoutError:
            raise HTTPException(status_code=504, detail="Sizing timed out. Try again.")
        size_cache.set(inputs_dict, result.model_dump())
    record_sizing(result.results.limiting_factor.value)
    _LOG.info(
        "sizing served",
        extra={
            "nodes_required": result.results.nodes_required,
            "limiting_factor": result.results.limiting_factor.value,
            "cached": cached is not None,
        },
    )
    return _json(result)


@app.post("/v1/report")
def report(inputs: ClusterInputs, req: Request):
    """Generate and return the PDF sizing report."""
    static_dir = getattr(req.app.state, "static_dir", None)
    try:
        pdf_bytes = run_sync_with_timeout(get_report_timeout_sec(), _report_pdf, inputs, static_dir)
    except TimeoutError:
        raise HTTPException(status_code=504, detail="Report generation timed out.")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=ncs-sizing-report.pdf"},
    )


@app.post("/v1/report/html", response_class=HTMLResponse)
def report_html(inputs: ClusterInputs):
    """Same content as the PDF report, as an HTML page."""
    results, demand, counts = size_cluster(inputs, DEFAULT_PRICE_BOOK)
    return HTMLResponse(generate_report_html(inputs, results, demand, counts, DEFAULT_PRICE_BOOK))


def mount_static(app: FastAPI, static_dir: Path):
    """Mount the static front end if the directory exists. Stored for the report logo path."""
    resolved = Path(static_dir).resolve()
    app.state.static_dir = resolved
    if resolved.is_dir():
        app.mount("/", StaticFiles(directory=str(resolved), html=True), name="static")
