"""
PDF exports: the monthly expense report and printable chat transcripts.
"""
import io
import logging
from datetime import date
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from ekheti.errors import ReportError
from ekheti.utils import format_number

logger = logging.getLogger(__name__)

# The built-in PDF fonts have no rupee glyph
PDF_CURRENCY_SYMBOLS = {'INR': 'Rs. ', 'USD': '$', 'EUR': 'EUR '}


def month_transactions(transactions, today=None):
    """Transactions dated in the current month and year, newest first."""
    today = today or date.today()
    selected = [t for t in transactions if t.date.year == today.year and t.date.month == today.month]
    return sorted(selected, key=lambda t: (t.date, t.id), reverse=True)


def monthly_summary(transactions, today=None):
    """Income, expense and profit/loss for this month. Only INR amounts are counted."""
    selected = [t for t in month_transactions(transactions, today) if t.currency == 'INR']
    income = sum(t.amount for t in selected if t.type == 'income')
    expense = sum(t.amount for t in selected if t.type == 'expense')
    return {
        'currency': 'INR',
        'totalIncome': round(income, 2),
        'totalExpense': round(expense, 2),
        'profitOrLoss': round(income - expense, 2),
    }


def expense_report_filename(today=None):
    today = today or date.today()
    return f"eKheti_Expense_Report_{today.year}_{today.month}.pdf"


class NumberedCanvas(canvas.Canvas):
    """Canvas that stamps "Page i of N" once the page count is known."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.setFont('Helvetica', 10)
            width, height = self._pagesize
            self.drawRightString(width - 0.5 * inch, 0.4 * inch, f"Page {self._pageNumber} of {page_count}")
            super().showPage()
        super().save()


def _styles():
    styles = getSampleStyleSheet()
    return {
        'title': ParagraphStyle('ReportTitle', parent=styles['Heading1'], fontSize=20, spaceAfter=6,
                                textColor=colors.darkgreen),
        'heading': ParagraphStyle('ReportHeading', parent=styles['Heading2'], fontSize=14,
                                  spaceBefore=16, spaceAfter=8),
        'body': ParagraphStyle('ReportBody', parent=styles['Normal'], fontSize=11, spaceAfter=6),
        'footer': ParagraphStyle('ReportFooter', parent=styles['Normal'], fontSize=9,
                                 alignment=TA_CENTER, textColor=colors.grey),
    }


def _money(amount, currency='INR'):
    return f"{PDF_CURRENCY_SYMBOLS.get(currency, '')}{format_number(amount)}"


def _build(story, title):
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=title,
                            rightMargin=54, leftMargin=54, topMargin=54, bottomMargin=54)
    try:
        doc.build(story, canvasmaker=NumberedCanvas)
    except (ValueError, IndexError) as e:
        logger.error("Error generating PDF %s: %s", title, e)
        raise ReportError("Could not generate the PDF report.", status_code=500)
    return buffer.getvalue()


def build_expense_report(transactions, farmer_name, today=None):
    """Render the monthly expense report and return the PDF bytes."""
    today = today or date.today()
    styles = _styles()
    summary = monthly_summary(transactions, today)

    story = [
        Paragraph("eKheti - Expense Report", styles['title']),
        Paragraph(f"Farmer: {escape(farmer_name)}", styles['body']),
        Paragraph(f"Report Date: {today.strftime('%d %B %Y')}", styles['body']),
        Paragraph(f"Summary for {today.strftime('%B')} {today.year}", styles['heading']),
    ]

    summary_table = Table([
        ['Category', 'Amount'],
        ['Total Income (Aay)', _money(summary['totalIncome'])],
        ['Total Expense (Kharcha)', _money(summary['totalExpense'])],
        ['Net Balance (Profit/Loss)', _money(summary['profitOrLoss'])],
    ], colWidths=[3 * inch, 2 * inch])
    summary_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTNAME', (0, 1), (0, -1), 'Helvetica-Bold'),
        ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ('TEXTCOLOR', (1, 3), (1, 3), colors.green if summary['profitOrLoss'] >= 0 else colors.red),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
    ]))
    story.append(summary_table)
    story.append(Spacer(1, 18))

    rows = month_transactions(transactions, today)
    if rows:
        data = [['Date', 'Type', 'Category', 'Description', 'Amount']]
        for t in rows:
            data.append([
                t.date.strftime('%d/%m/%Y'),
                t.type.capitalize(),
                Paragraph(escape(t.category), styles['body']),
                Paragraph(escape(t.description or '-'), styles['body']),
                _money(t.amount, t.currency),
            ])
        table = Table(data, colWidths=[0.9 * inch, 0.8 * inch, 1.4 * inch, 2.2 * inch, 1.1 * inch], repeatRows=1)
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#2980b9')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
            ('ALIGN', (4, 1), (4, -1), 'RIGHT'),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ]))
        story.append(table)
    else:
        story.append(Paragraph("No transactions recorded for this month.", styles['body']))

    return _build(story, 'eKheti Expense Report')


def build_chat_report(conversation):
    """Printable transcript of one conversation."""
    styles = _styles()
    story = [
        Paragraph(escape(conversation.title), styles['title']),
        Paragraph(f"Chat ID: {conversation.id}", styles['footer']),
        Spacer(1, 12),
    ]
    for message in conversation.messages:
        speaker = 'You' if message.role == 'user' else 'eKheti AI'
        story.append(Paragraph(f"<b>{speaker}</b>", styles['body']))
        if message.document_name:
            story.append(Paragraph(f"<i>Attached document: {escape(message.document_name)}</i>", styles['body']))
        if message.image_preview:
            story.append(Paragraph("<i>Attached image</i>", styles['body']))
        text = escape(message.text or '').replace('\n', '<br/>')
        story.append(Paragraph(text, styles['body']))
        story.append(Spacer(1, 8))
    story.append(Spacer(1, 20))
    story.append(Paragraph("Generated by eKheti", styles['footer']))
    return _build(story, conversation.title)
