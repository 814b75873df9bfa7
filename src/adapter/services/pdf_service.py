"""ReportLab statement rendering

Builds the statement of account for one order ledger.
"""

from datetime import datetime, timezone
from decimal import Decimal
from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from libs.money import ZERO
from libs.ph_calendar import format_ph_datetime
from src.app.services.pdf_service import PdfService
from src.app.use_cases.accounts.dtos import LedgerEntryKind, OrderLedgerDTO

INK = colors.HexColor("#1F2A36")
MUTED = colors.HexColor("#6B7785")
ACCENT = colors.HexColor("#B9551B")
RULE = colors.HexColor("#D5DAE0")
STRIPE = colors.HexColor("#F4F6F8")

LEDGER_COLUMNS = ["Date (PH)", "Description", "Debit", "Credit", "Balance"]
LEDGER_WIDTHS = [36 * mm, 58 * mm, 27 * mm, 27 * mm, 32 * mm]


def _php(amount: Decimal) -> str:
    # The built-in Helvetica has no peso glyph
    return f"PHP {amount:,.2f}"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Layout: company block, order facts, the ledger table with its running
    balance, then a summary with the balance still due.
    """

    def __init__(self):
        base = getSampleStyleSheet()
        self.styles = {
            "company": ParagraphStyle(
                "Company", parent=base["Title"], alignment=0, fontSize=18, textColor=INK
            ),
            "address": ParagraphStyle(
                "Address", parent=base["Normal"], fontSize=9, textColor=MUTED
            ),
            "heading": ParagraphStyle(
                "Heading", parent=base["Heading3"], textColor=ACCENT, spaceBefore=6
            ),
            "cell": ParagraphStyle("Cell", parent=base["BodyText"], fontSize=8, leading=10),
            "note": ParagraphStyle(
                "Note", parent=base["Italic"], fontSize=8, textColor=MUTED
            ),
        }

    def generate_ledger_statement(
        self,
        ledger: OrderLedgerDTO,
        company_name: str = "Hardware Distribution Co.",
        company_address: str = "Metro Manila, Philippines",
    ) -> bytes:
        """
        Render a ledger as a PDF statement of account

        Args:
            ledger: Computed order ledger
            company_name: Shown at the top of the statement
            company_address: Shown under the company name

        Returns:
            PDF bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            title=f"Statement of Account {ledger.invoice_code or ledger.order_id}",
            leftMargin=14 * mm,
            rightMargin=14 * mm,
            topMargin=16 * mm,
            bottomMargin=16 * mm,
        )

        story = []
        story.extend(self._company_block(company_name, company_address))
        story.extend(self._order_facts(ledger))
        story.append(self._ledger_table(ledger))
        story.extend(self._summary(ledger))

        doc.build(story)
        return buffer.getvalue()

    def _company_block(self, company_name: str, company_address: str) -> List:
        return [
            Paragraph(escape(company_name), self.styles["company"]),
            Paragraph(escape(company_address), self.styles["address"]),
            Spacer(1, 3 * mm),
            HRFlowable(width="100%", thickness=1.2, color=ACCENT),
            Paragraph("Statement of Account", self.styles["heading"]),
        ]

    def _order_facts(self, ledger: OrderLedgerDTO) -> List:
        facts = Table(
            [
                ["TXN Code", ledger.invoice_code or "No TXN Code", "Status", (ledger.order_status or "-").upper()],
                ["Order", ledger.order_id, "Charge", _php(ledger.charge_amount)],
                ["Printed", format_ph_datetime(datetime.now(timezone.utc)), "", ""],
            ],
            colWidths=[22 * mm, 78 * mm, 20 * mm, 60 * mm],
        )
        facts.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED),
                    ("TEXTCOLOR", (2, 0), (2, -1), MUTED),
                    ("FONTNAME", (1, 0), (1, -1), "Helvetica-Bold"),
                    ("FONTNAME", (3, 0), (3, -1), "Helvetica-Bold"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        return [facts, Spacer(1, 6 * mm)]

    def _ledger_table(self, ledger: OrderLedgerDTO) -> Table:
        data = [LEDGER_COLUMNS]
        credit_rows = []
        for index, entry in enumerate(ledger.entries, start=1):
            data.append(
                [
                    entry.date_label,
                    Paragraph(escape(entry.description), self.styles["cell"]),
                    _php(entry.debit) if entry.debit else "",
                    _php(entry.credit) if entry.credit else "",
                    _php(entry.balance),
                ]
            )
            if entry.kind == LedgerEntryKind.CREDIT:
                credit_rows.append(index)

        commands = [
            ("LINEBELOW", (0, 0), (-1, 0), 1, INK),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
            ("VALIGN", (0, 1), (-1, -1), "TOP"),
            ("LINEBELOW", (0, 1), (-1, -1), 0.25, RULE),
            ("FONTNAME", (4, 1), (4, -1), "Helvetica-Bold"),
        ]
        for row in credit_rows:
            commands.append(("BACKGROUND", (0, row), (-1, row), STRIPE))

        table = Table(data, colWidths=LEDGER_WIDTHS, repeatRows=1)
        table.setStyle(TableStyle(commands))
        return table

    def _summary(self, ledger: OrderLedgerDTO) -> List:
        balance_due = max(ZERO, ledger.current_balance)
        summary = Table(
            [
                ["Total charge", _php(ledger.charge_amount)],
                ["Payments received", _php(ledger.total_credits)],
                ["Balance due", _php(balance_due)],
            ],
            colWidths=[45 * mm, 40 * mm],
            hAlign="RIGHT",
        )
        summary.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                    ("LINEABOVE", (0, -1), (-1, -1), 1, INK),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                    ("TEXTCOLOR", (1, -1), (1, -1), ACCENT if balance_due > ZERO else INK),
                ]
            )
        )
        return [
            Spacer(1, 6 * mm),
            summary,
            Spacer(1, 10 * mm),
            Paragraph(
                "Only payments confirmed as received are listed. "
                "Payments under review appear once confirmed.",
                self.styles["note"],
            ),
        ]
