"""PDF dashboard report using ReportLab."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from pathlib import Path
from xml.sax.saxutils import escape

from .finance import format_currency
from .models import Product, Stage
from .summary import DashboardStats

_TONE_COLOURS = {
    "neutral": "#F3F4F6",
    "good": "#DCFCE7",
    "info": "#DBEAFE",
    "warn": "#FEF9C3",
    "alert": "#FFEDD5",
    "new": "#E0E7FF",
}

_STAGE_HEADERS = {
    Stage.ORDER_PLACED: "Placed",
    Stage.ORDER_DELIVERED: "Delivered",
    Stage.REVIEW_ADDED: "Review",
    Stage.REVIEW_LIVE: "Live",
    Stage.REVIEW_SS_SENT: "SS Sent",
}


def _stat_cards(stats: DashboardStats, currency: str) -> list[list[str]]:
    return [
        [
            "Total Products",
            "Completed Orders",
            "Total Paid",
            "Total Received",
            "Remaining Refund",
            "Net Profit/Loss",
        ],
        [
            str(stats.total_products),
            str(stats.completed_orders),
            format_currency(stats.total_paid, currency),
            format_currency(stats.total_received, currency),
            format_currency(stats.remaining_exposure, currency),
            format_currency(stats.net_delta, currency),
        ],
    ]


def _product_rows(products: Sequence[Product], currency: str) -> list[list[str]]:
    rows = [
        ["Item", "Ordered", "Status"]
        + list(_STAGE_HEADERS.values())
        + ["Paid", "Received", "Delta"]
    ]
    for p in products:
        name = p.item if len(p.item) <= 48 else p.item[:45] + "..."
        rows.append(
            [
                name,
                p.order_date.strftime("%b %d, %Y") if p.order_date else "-",
                p.status.value,
            ]
            + ["Y" if p.stage(s) else "-" for s in _STAGE_HEADERS]
            + [
                format_currency(p.paid, currency),
                format_currency(p.received, currency),
                format_currency(p.delta, currency),
            ]
        )
    return rows


def generate_report(
    stats: DashboardStats,
    products: Sequence[Product],
    output_path: str | Path,
    *,
    title: str = "Amazon Review Products Dashboard",
    currency: str = "$",
) -> Path:
    """Render the dashboard stats and a product table to a PDF file.

    Args:
        stats: Summary over the whole tracked set.
        products: The rows to list, already filtered and sorted.
        output_path: Where to save the PDF file.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4, landscape
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError(
            "reportlab is required: pip install 'refundtrack[pdf]'"
        )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(A4),
        leftMargin=12 * mm,
        rightMargin=12 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=title,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "DashTitle",
        parent=styles["Title"],
        fontSize=18,
        leading=24,
    )
    subtitle_style = ParagraphStyle(
        "DashSubtitle",
        parent=styles["Normal"],
        fontSize=10,
        leading=14,
        textColor=colors.grey,
    )
    heading_style = ParagraphStyle(
        "DashHeading",
        parent=styles["Heading2"],
        fontSize=13,
        leading=18,
        spaceAfter=3 * mm,
    )

    elements: list = []
    elements.append(Paragraph(escape(title), title_style))
    elements.append(Paragraph(f"Generated {date.today().isoformat()}", subtitle_style))
    elements.append(Spacer(1, 5 * mm))

    net_colour = colors.HexColor("#16A34A") if stats.is_profitable else colors.HexColor("#DC2626")
    cards = Table(_stat_cards(stats, currency), colWidths=[44 * mm] * 6)
    cards.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4A90D9")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTSIZE", (0, 0), (-1, 0), 8),
        ("FONTSIZE", (0, 1), (-1, 1), 14),
        ("TEXTCOLOR", (4, 1), (4, 1), colors.HexColor("#EA580C")),
        ("TEXTCOLOR", (5, 1), (5, 1), net_colour),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("TOPPADDING", (0, 1), (-1, 1), 6),
        ("BOTTOMPADDING", (0, 1), (-1, 1), 6),
    ]))
    elements.append(cards)
    elements.append(Spacer(1, 6 * mm))

    elements.append(Paragraph(f"Products ({len(products)})", heading_style))
    if not products:
        elements.append(Paragraph("No products match the current filters.", styles["Normal"]))
        doc.build(elements)
        return output_path

    table_style = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4A90D9")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTSIZE", (0, 0), (-1, -1), 7),
        ("ALIGN", (3, 0), (-1, -1), "CENTER"),
        ("ALIGN", (8, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("TOPPADDING", (0, 0), (-1, -1), 2),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
        ("LEFTPADDING", (0, 0), (-1, -1), 3),
        ("RIGHTPADDING", (0, 0), (-1, -1), 3),
    ]
    for row, p in enumerate(products, start=1):
        table_style.append(
            ("BACKGROUND", (2, row), (2, row), colors.HexColor(_TONE_COLOURS[p.status.tone]))
        )
        delta = p.delta
        if delta is not None and delta > 0:
            table_style.append(("TEXTCOLOR", (-1, row), (-1, row), colors.HexColor("#16A34A")))
        elif delta is not None and delta < 0:
            table_style.append(("TEXTCOLOR", (-1, row), (-1, row), colors.HexColor("#DC2626")))

    col_widths = [70 * mm, 22 * mm, 28 * mm] + [15 * mm] * 5 + [22 * mm] * 3
    t = Table(_product_rows(products, currency), colWidths=col_widths, repeatRows=1)
    t.setStyle(TableStyle(table_style))
    elements.append(t)

    doc.build(elements)
    return output_path
