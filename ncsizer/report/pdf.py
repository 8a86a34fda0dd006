"""PDF sizing report rendering with ReportLab (US Letter, header, footer, brand colors)."""
import io
import logging
from pathlib import Path

from reportlab.graphics.shapes import Drawing, Rect, String
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ncsizer.models import ClusterInputs, DemandProjection, NodeCounts, SizingResults
from ncsizer.pricing import DEFAULT_PRICE_BOOK, PriceBook
from ncsizer.report.constants import (
    BRAND_ACCENT,
    BRAND_ACCENT_DARK,
    BRAND_DARK,
    BRAND_GRID,
    BRAND_MUTED,
    BRAND_SUCCESS,
    get_logo_path,
)
from ncsizer.report.templates import (
    cost_chart_data,
    definitions_section,
    executive_summary_narrative,
    financial_rows,
    fmt_num,
    fmt_usd,
    methodology_section,
    node_breakdown,
    redundancy_what_if,
    report_metadata,
    sizing_assumptions,
    source_vs_target,
)

_LOG = logging.getLogger(__name__)

MARGIN_LR = 0.75 * inch
MARGIN_TOP = 0.85 * inch
MARGIN_BOTTOM = 0.8 * inch
SECTION_SPACER = 0.25 * inch


def _styles():
    """Paragraph styles keyed by name. Plain dict to avoid ReportLab stylesheet name clashes."""
    return {
        "NCS_Title": ParagraphStyle(
            name="NCS_Title", fontName="Helvetica-Bold", fontSize=24, textColor=BRAND_DARK, spaceAfter=12,
        ),
        "NCS_H2": ParagraphStyle(
            name="NCS_H2", fontName="Helvetica-Bold", fontSize=12.5, textColor=BRAND_DARK, spaceBefore=14, spaceAfter=6,
        ),
        "NCS_Body": ParagraphStyle(
            name="NCS_Body", fontName="Helvetica", fontSize=10.5, textColor=BRAND_DARK, spaceAfter=6,
        ),
        "NCS_Small": ParagraphStyle(
            name="NCS_Small", fontName="Helvetica", fontSize=9, textColor=BRAND_MUTED, spaceAfter=4,
        ),
    }


def _header_flowables(styles, meta, static_dir=None):
    flowables = [
        Paragraph(f"<b>{meta['brand']}</b>", styles["NCS_Small"]),
        Paragraph(meta["tagline"], styles["NCS_Small"]),
        Spacer(1, 0.08 * inch),
    ]
    logo_path = get_logo_path(static_dir)
    if logo_path:
        try:
            flowables.append(Image(str(logo_path), width=1.4 * inch, height=0.45 * inch))
            flowables.append(Spacer(1, 0.12 * inch))
        except OSError as e:
            _LOG.warning("Report logo %s could not be loaded: %s", logo_path, e)
    return flowables


def _add_footer(canvas, doc):
    meta = report_metadata()
    canvas.saveState()
    y_footer = MARGIN_BOTTOM - 0.25 * inch
    canvas.setFont("Helvetica", 8)
    canvas.setFillColor(colors.HexColor(BRAND_MUTED))
    canvas.drawString(MARGIN_LR, y_footer, f"NCS report v{meta['report_version']} | {meta['doc_name_short']} | {meta['date']}")
    canvas.drawString(MARGIN_LR, y_footer - 0.14 * inch, meta["copyright"])
    canvas.drawRightString(letter[0] - MARGIN_LR, y_footer, f"Page {doc.page}")
    canvas.restoreState()


def _draw_cost_bars(chart: dict) -> Drawing:
    """Two horizontal bars: legacy renewal vs target TCO, scaled to the larger."""
    w, h = 400, 80
    d = Drawing(w, h)
    bar_w, bar_h, gap = 260, 24, 10
    x0, y0 = 110, h - 30
    rows = (
        ("Legacy", chart["legacy_frac"], chart["legacy_usd"], BRAND_ACCENT),
        ("Target TCO", chart["target_frac"], chart["target_usd"], BRAND_SUCCESS),
    )
    for i, (label, frac, usd, color) in enumerate(rows):
        y = y0 - i * (bar_h + gap)
        d.add(Rect(x0, y, bar_w * frac, bar_h, fillColor=colors.HexColor(color), strokeColor=None))
        d.add(Rect(x0 + bar_w * frac, y, bar_w * (1 - frac), bar_h, fillColor=colors.HexColor(BRAND_GRID), strokeColor=None))
        d.add(String(x0 - 5, y + bar_h / 2 - 4, label, fontName="Helvetica", fontSize=9, textAnchor="end", fillColor=colors.HexColor(BRAND_DARK)))
        d.add(String(x0 + bar_w + 8, y + bar_h / 2 - 4, fmt_usd(usd), fontName="Helvetica", fontSize=9, fillColor=colors.HexColor(BRAND_DARK)))
    return d


def _table_with_header(data, col_widths=None):
    """Table with dark header row, grid, padding."""
    t = Table(data, colWidths=col_widths)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(BRAND_ACCENT_DARK)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("BACKGROUND", (0, 1), (-1, -1), colors.white),
        ("TEXTCOLOR", (0, 1), (-1, -1), colors.HexColor(BRAND_DARK)),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor(BRAND_GRID)),
        ("LEFTPADDING", (0, 0), (-1, -1), 8),
        ("RIGHTPADDING", (0, 0), (-1, -1), 8),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    return t


def generate_report_pdf(
    inputs: ClusterInputs,
    results: SizingResults,
    demand: DemandProjection,
    counts: NodeCounts,
    prices: PriceBook = DEFAULT_PRICE_BOOK,
    static_dir: Path | None = None,
) -> bytes:
    """Generate the sizing report; returns PDF bytes. Financial sections follow inputs.show_financials."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        leftMargin=MARGIN_LR,
        rightMargin=MARGIN_LR,
        topMargin=MARGIN_TOP,
        bottomMargin=MARGIN_BOTTOM,
        title="Cluster Sizing Report",
    )
    styles = _styles()
    meta = report_metadata()
    story = []

    story.extend(_header_flowables(styles, meta, static_dir=static_dir))
    story.append(Paragraph("Cluster Sizing Report", styles["NCS_Title"]))
    story.append(Paragraph(meta["date"], styles["NCS_Small"]))
    story.append(Spacer(1, SECTION_SPACER))

    story.append(Paragraph("Executive Summary", styles["NCS_H2"]))
    story.append(Paragraph(executive_summary_narrative(inputs, results), styles["NCS_Body"]))
    story.append(Spacer(1, SECTION_SPACER))

    story.append(Paragraph("Source vs Target", styles["NCS_H2"]))
    story.append(_table_with_header(source_vs_target(inputs, results), [2 * inch, 2 * inch, 2 * inch]))
    story.append(Spacer(1, SECTION_SPACER))

    story.append(Paragraph("Node Count Breakdown", styles["NCS_H2"]))
    story.append(_table_with_header(node_breakdown(demand, counts), [1.7 * inch, 1.5 * inch, 1.5 * inch, 1 * inch]))
    story.append(Paragraph(
        f"* Limiting factor. Minimum cluster size is 3 nodes; {fmt_num(counts.final_nodes - counts.raw_nodes)} "
        "redundancy node(s) added.",
        styles["NCS_Small"],
    ))
    story.append(Spacer(1, SECTION_SPACER))

    story.append(Paragraph("Sizing Assumptions", styles["NCS_H2"]))
    story.append(_table_with_header(sizing_assumptions(inputs, demand, counts), [2.5 * inch, 3 * inch]))
    story.append(Spacer(1, SECTION_SPACER))

    what_if = redundancy_what_if(inputs, prices)
    story.append(Paragraph("Redundancy What-If", styles["NCS_H2"]))
    wi_data = [["Redundancy", "Nodes", "Consolidation"]]
    if inputs.show_financials:
        wi_data[0].append("Target TCO")
    for row in what_if:
        cells = [row["level"], fmt_num(row["nodes"]), row["consolidation_ratio"]]
        if inputs.show_financials:
            cells.append(fmt_usd(row["total_target_tco_usd"]))
        wi_data.append(cells)
    story.append(_table_with_header(wi_data))
    story.append(Spacer(1, SECTION_SPACER))

    if inputs.show_financials:
        story.append(Paragraph("Financial Comparison", styles["NCS_H2"]))
        story.append(Paragraph(
            f"{results.legacy_edition} renewal vs {results.target_edition} on the sized cluster.",
            styles["NCS_Small"],
        ))
        story.append(_draw_cost_bars(cost_chart_data(results.financials)))
        story.append(_table_with_header(financial_rows(results.financials), [2.5 * inch, 2.5 * inch]))
        story.append(Paragraph("Static list prices; estimates are directional.", styles["NCS_Small"]))
        story.append(Spacer(1, SECTION_SPACER))

    story.append(Paragraph("Methodology", styles["NCS_H2"]))
    for m in methodology_section():
        story.append(Paragraph(f"<b>{m['title']}</b>", styles["NCS_Body"]))
        story.append(Paragraph(m["body"], styles["NCS_Body"]))
    story.append(Spacer(1, SECTION_SPACER))

    story.append(Paragraph("Definitions", styles["NCS_H2"]))
    def_data = [["Term", "Definition"]]
    for d in definitions_section():
        def_data.append([d["term"], Paragraph(d["definition"], styles["NCS_Body"])])
    story.append(_table_with_header(def_data, [1.5 * inch, 4.5 * inch]))

    doc.build(story, onFirstPage=_add_footer, onLaterPages=_add_footer)
    return buffer.getvalue()
