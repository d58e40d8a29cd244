"""
Reconciliation PDF drawn directly on a reportlab canvas.
"""

import io

from django.conf import settings
from django.utils import timezone
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

NAVY = HexColor('#1B2A4A')
SLATE = HexColor('#64748B')
SLATE_PALE = HexColor('#F1F5F9')
GREEN = HexColor('#166534')
ROSE = HexColor('#BE185D')

W, H = A4
MARGIN = 45
CONTENT_W = W - 2 * MARGIN
ROW_H = 18

SECTIONS = [
    ('Purchases & Sales', [
        ('Total purchases', 'total_purchases', 'money'),
        ('Purchased weight', 'total_purchase_kg', 'kg'),
        ('Total sales', 'total_sales', 'money'),
        ('Sold weight', 'total_sales_kg', 'kg'),
    ]),
    ('Inventory', [
        ('Opening inventory value', 'opening_inventory_value', 'money'),
        ('Closing inventory value', 'closing_inventory_value', 'money'),
        ('Closing inventory weight', 'closing_inventory_kg', 'kg'),
    ]),
    ('Payments & Advances', [
        ('Payments to suppliers', 'total_payments_to_suppliers', 'money'),
        ('Advances given', 'total_advances_given', 'money'),
        ('Expenses', 'total_expenses', 'money'),
    ]),
    ('Cash Flow', [
        ('Cash in', 'total_cash_in', 'money'),
        ('Cash out', 'total_cash_out', 'money'),
        ('Net cash flow', 'net_cash_flow', 'signed'),
    ]),
    ('Profit & Loss', [
        ('Revenue', 'revenue', 'money'),
        ('Cost of goods sold', 'cost_of_goods_sold', 'money'),
        ('Gross profit', 'gross_profit', 'signed'),
        ('Operating expenses', 'operating_expenses', 'money'),
        ('Net profit', 'net_profit', 'signed'),
    ]),
    ('Balance Sheet', [
        ('Total assets', 'total_assets', 'money'),
        ('Total liabilities', 'total_liabilities', 'money'),
        ('Equity', 'equity', 'signed'),
    ]),
]


def format_ugx(amount) -> str:
    return f"UGX {amount:,.2f}"


def format_kg(kilograms) -> str:
    return f"{kilograms:,.2f} kg"


class ReconciliationPdf:

    def __init__(self, data):
        self.data = data
        self.buffer = io.BytesIO()
        self.c = canvas.Canvas(self.buffer, pagesize=A4)
        self.c.setTitle(f"Monthly Reconciliation {data['month']} {data['year']}")
        self.c.setAuthor(settings.COMPANY_NAME)
        self.y = H - MARGIN

    def header(self):
        self.c.saveState()
        self.c.setFillColor(NAVY)
        self.c.rect(0, H - 90, W, 90, fill=1, stroke=0)
        self.c.setFillColor(HexColor('#FFFFFF'))
        self.c.setFont('Helvetica-Bold', 18)
        self.c.drawString(MARGIN, H - 45, settings.COMPANY_NAME)
        self.c.setFont('Helvetica', 11)
        self.c.drawString(
            MARGIN, H - 65,
            f"Monthly Reconciliation: {self.data['month']} {self.data['year']}",
        )
        self.c.setFont('Helvetica', 8)
        self.c.drawRightString(
            W - MARGIN, H - 65,
            f"Generated {timezone.localtime():%Y-%m-%d %H:%M}",
        )
        self.c.restoreState()
        self.y = H - 90 - 30

    def ensure_room(self, height):
        if self.y - height < MARGIN:
            self.c.showPage()
            self.y = H - MARGIN

    def section(self, title, rows):
        self.ensure_room(ROW_H * (len(rows) + 2))
        self.c.setFillColor(NAVY)
        self.c.setFont('Helvetica-Bold', 12)
        self.c.drawString(MARGIN, self.y, title)
        self.y -= 8
        self.c.setStrokeColor(SLATE)
        self.c.setLineWidth(0.5)
        self.c.line(MARGIN, self.y, W - MARGIN, self.y)
        self.y -= ROW_H

        for index, (label, key, kind) in enumerate(rows):
            if index % 2:
                self.c.setFillColor(SLATE_PALE)
                self.c.rect(MARGIN, self.y - 5, CONTENT_W, ROW_H, fill=1, stroke=0)
            value = self.data[key]
            self.c.setFont('Helvetica', 10)
            self.c.setFillColor(NAVY)
            self.c.drawString(MARGIN + 6, self.y, label)
            if kind == 'kg':
                text = format_kg(value)
            else:
                text = format_ugx(value)
                if kind == 'signed':
                    self.c.setFillColor(GREEN if value >= 0 else ROSE)
                    self.c.setFont('Helvetica-Bold', 10)
            self.c.drawRightString(W - MARGIN - 6, self.y, text)
            self.y -= ROW_H
        self.y -= 12

    def render(self) -> bytes:
        self.header()
        for title, rows in SECTIONS:
            self.section(title, rows)
        self.c.showPage()
        self.c.save()
        return self.buffer.getvalue()


def render_reconciliation_pdf(data: dict) -> bytes:
    """Render ``ReconciliationQueries.monthly`` output as an A4 PDF."""
    return ReconciliationPdf(data).render()
