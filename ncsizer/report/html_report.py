"""HTML sizing report (same sections as the PDF)."""
from ncsizer.models import ClusterInputs, DemandProjection, NodeCounts, SizingResults
from ncsizer.pricing import DEFAULT_PRICE_BOOK, PriceBook
from ncsizer.report.constants import (
    BRAND_ACCENT,
    BRAND_ACCENT_DARK,
    BRAND_DARK,
    BRAND_GRID,
    BRAND_MUTED,
    BRAND_SUCCESS,
    BRAND_WHITE,
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


def _table(rows: list[list[str]]) -> str:
    """First row is the header."""
    head = "".join(f"<th>{c}</th>" for c in rows[0])
    body = "".join("<tr>" + "".join(f"<td>{c}</td>" for c in r) + "</tr>" for r in rows[1:])
    return f"<table><tbody><tr>{head}</tr>{body}</tbody></table>"


def _bar(label: str, frac: float, usd: float, color: str) -> str:
    pct = round(frac * 100, 1)
    return (
        f'<div class="bar-wrap"><div class="bar-label">{label} {fmt_usd(usd)}</div>'
        f'<div class="bar" style="background: linear-gradient(to right, {color} 0%, {color} {pct}%, '
        f'{BRAND_GRID} {pct}%, {BRAND_GRID} 100%);"></div></div>'
    )


def generate_report_html(
    inputs: ClusterInputs,
    results: SizingResults,
    demand: DemandProjection,
    counts: NodeCounts,
    prices: PriceBook = DEFAULT_PRICE_BOOK,
) -> str:
    """Self-contained HTML page. Financial sections are omitted when inputs.show_financials is false."""
    meta = report_metadata()

    what_if_rows = [["Redundancy", "Nodes", "Consolidation"] + (["Target TCO"] if inputs.show_financials else [])]
    for row in redundancy_what_if(inputs, prices):
        cells = [row["level"], fmt_num(row["nodes"]), row["consolidation_ratio"]]
        if inputs.show_financials:
            cells.append(fmt_usd(row["total_target_tco_usd"]))
        what_if_rows.append(cells)

    financial_html = ""
    if inputs.show_financials:
        chart = cost_chart_data(results.financials)
        financial_html = (
            "<h2>Financial Comparison</h2>"
            f'<p class="subtitle">{results.legacy_edition} renewal vs {results.target_edition} on the sized cluster.</p>'
            + _bar("Legacy", chart["legacy_frac"], chart["legacy_usd"], BRAND_ACCENT)
            + _bar("Target TCO", chart["target_frac"], chart["target_usd"], BRAND_SUCCESS)
            + _table(financial_rows(results.financials))
            + '<p class="subtitle">Static list prices; estimates are directional.</p>'
        )

    css = f"""
    * {{ box-sizing: border-box; }}
    body {{ font-family: -apple-system, BlinkMacSystemFont, sans-serif; color: {BRAND_DARK}; background: #f8fafc; margin: 0; padding: 24px; line-height: 1.5; }}
    .report {{ max-width: 800px; margin: 0 auto; background: {BRAND_WHITE}; padding: 40px; border-radius: 12px; box-shadow: 0 1px 3px rgba(0,0,0,.08); }}
    .brand {{ font-weight: 700; }}
    .tagline, .subtitle {{ font-size: 0.9rem; color: {BRAND_MUTED}; }}
    h1 {{ font-size: 1.75rem; margin: 16px 0 4px 0; }}
    h2 {{ font-size: 1.15rem; color: {BRAND_ACCENT_DARK}; margin: 24px 0 12px 0; }}
    h3 {{ font-size: 1rem; margin: 16px 0 8px 0; }}
    table {{ width: 100%; border-collapse: collapse; margin: 12px 0; font-size: 0.9rem; }}
    th, td {{ border: 1px solid {BRAND_GRID}; padding: 10px 12px; text-align: left; }}
    th {{ background: {BRAND_ACCENT_DARK}; color: white; font-weight: 600; }}
    .bar-wrap {{ margin: 8px 0; }}
    .bar {{ height: 20px; max-width: 300px; border-radius: 4px; }}
    .bar-label {{ font-size: 0.85rem; color: {BRAND_MUTED}; }}
    .footer {{ margin-top: 32px; padding-top: 16px; border-top: 1px solid {BRAND_GRID}; font-size: 0.8rem; color: {BRAND_MUTED}; }}
    """

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{meta["doc_name_short"]} | {meta["brand"]}</title>
<style>{css}</style>
</head>
<body>
<div class="report">
<div class="brand">{meta["brand"]}</div>
<div class="tagline">{meta["tagline"]}</div>
<h1>Cluster Sizing Report</h1>
<p class="subtitle">{meta["date"]}</p>
<h2>Executive Summary</h2>
<p>{executive_summary_narrative(inputs, results)}</p>
<h2>Source vs Target</h2>
{_table(source_vs_target(inputs, results))}
<h2>Node Count Breakdown</h2>
{_table(node_breakdown(demand, counts))}
<p class="subtitle">* Limiting factor. Minimum cluster size is 3 nodes; {fmt_num(counts.final_nodes - counts.raw_nodes)} redundancy node(s) added.</p>
<h2>Sizing Assumptions</h2>
{_table(sizing_assumptions(inputs, demand, counts))}
<h2>Redundancy What-If</h2>
{_table(what_if_rows)}
{financial_html}
<h2>Methodology</h2>
{"".join(f"<h3>{m['title']}</h3><p>{m['body']}</p>" for m in methodology_section())}
<h2>Definitions</h2>
{_table([["Term", "Definition"]] + [[d["term"], d["definition"]] for d in definitions_section()])}
<div class="footer">NCS report v{meta["report_version"]}. {meta["copyright"]}</div>
</div>
</body>
</html>"""
