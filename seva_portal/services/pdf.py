# seva_portal/services/pdf.py
"""PDF rendering for donation receipts, member ID cards and appointment letters.

Layouts are measured in millimetres from the top-left corner of the page and
converted to ReportLab's bottom-left point system by ``_Page.y``. Every
canvas is created in invariant mode, so the same record always renders to the
same bytes.
"""
import json
from datetime import date, datetime, timedelta
from io import BytesIO
from typing import Callable, Iterable, Optional

import qrcode
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from ..core.config import settings
from .words import amount_to_words, format_inr

BRAND = colors.Color(37 / 255, 99 / 255, 235 / 255)
CARD_BACKGROUND = colors.Color(240 / 255, 248 / 255, 1)
TABLE_HEADER = colors.Color(240 / 255, 240 / 255, 240 / 255)
PLACEHOLDER = colors.Color(200 / 255, 200 / 255, 200 / 255)
ID_CARD_SIZE = (85.6 * mm, 53.98 * mm)


class PdfGenerationError(Exception):
    """Raised when a document cannot be rendered."""


class _Page:
    def __init__(self, c: canvas.Canvas, size):
        self.c = c
        self.width, self.height = size

    def y(self, top_mm: float) -> float:
        return self.height - top_mm * mm

    def band(self, top_mm: float, height_mm: float, fill=BRAND):
        self.c.setFillColor(fill)
        self.c.rect(0, self.y(top_mm + height_mm), self.width, height_mm * mm, fill=1, stroke=0)

    def text(self, x_mm: float, top_mm: float, value, font="Helvetica", size=10, align="left"):
        self.c.setFont(font, size)
        value = "" if value is None else str(value)
        if align == "center":
            self.c.drawCentredString(x_mm * mm, self.y(top_mm), value)
        elif align == "right":
            self.c.drawRightString(x_mm * mm, self.y(top_mm), value)
        else:
            self.c.drawString(x_mm * mm, self.y(top_mm), value)

    def image(self, data: BytesIO, x_mm: float, top_mm: float, size_mm: float):
        self.c.drawImage(ImageReader(data), x_mm * mm, self.y(top_mm + size_mm),
                         width=size_mm * mm, height=size_mm * mm)

    def watermark(self, value: str, size=52, alpha=0.07):
        c = self.c
        c.saveState()
        c.setFillColor(BRAND)
        c.setFillAlpha(alpha)
        c.setFont("Helvetica-Bold", size)
        c.translate(self.width / 2, self.height / 2)
        c.rotate(45)
        c.drawCentredString(0, 0, value)
        c.restoreState()


def make_qr_png(data: str) -> BytesIO:
    qr = qrcode.QRCode(version=1, box_size=10, border=1)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    buffer.seek(0)
    return buffer


def _as_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None

def format_date(value) -> str:
    d = _as_date(value)
    return d.strftime("%d/%m/%Y") if d else "N/A"

def receipt_label(donation: dict) -> str:
    return donation.get("receipt_number") or str(donation.get("_id", ""))[:8].upper()

def amount_in_words_line(amount) -> str:
    try:
        return f"Rupees {amount_to_words(amount)}"
    except ValueError:
        return f"Rupees {format_inr(amount)} Only"


def _render(items: Iterable, draw: Callable, pagesize, what: str, title: str) -> bytes:
    items = list(items)
    if not items:
        raise PdfGenerationError(f"Failed to generate {what}: nothing to render")
    buffer = BytesIO()
    try:
        c = canvas.Canvas(buffer, pagesize=pagesize, invariant=1)
        c.setTitle(title)
        c.setAuthor(settings.org_name)
        for item in items:
            draw(_Page(c, pagesize), item)
            c.showPage()
        c.save()
    except Exception as exc:
        raise PdfGenerationError(f"Failed to generate {what}") from exc
    data = buffer.getvalue()
    if not data:
        raise PdfGenerationError(f"Failed to generate {what}")
    return data


# --------------------------------------------------
# Donation receipt
# --------------------------------------------------
def _draw_receipt(page: _Page, donation: dict):
    c = page.c
    amount = donation.get("amount") or 0
    number = receipt_label(donation)
    created = donation.get("created_at")

    page.watermark(settings.org_name.upper())

    page.band(0, 35)
    c.setFillColor(colors.white)
    page.text(105, 18, settings.org_name.upper(), "Helvetica-Bold", 22, "center")
    page.text(105, 28, "DONATION RECEIPT", "Helvetica-Bold", 14, "center")

    c.setFillColor(colors.black)
    page.text(20, 50, f"Receipt No: {number}", size=11)
    page.text(190, 50, f"Date: {format_date(created)}", size=11, align="right")

    page.text(20, 70, "Donor Details:", "Helvetica-Bold", 12)
    page.text(20, 80, f"Name: {donation.get('donor_name', '')}")
    page.text(20, 87, f"Email: {donation.get('donor_email', '')}")
    page.text(20, 94, f"Phone: {donation.get('donor_phone') or 'N/A'}")

    page.text(20, 115, "Donation Details:", "Helvetica-Bold", 12)
    c.setFillColor(TABLE_HEADER)
    c.rect(20 * mm, page.y(133), 170 * mm, 8 * mm, fill=1, stroke=0)
    c.setFillColor(colors.black)
    page.text(25, 131, "Purpose", "Helvetica-Bold")
    page.text(95, 131, "Payment Method", "Helvetica-Bold")
    page.text(185, 131, "Amount (Rs.)", "Helvetica-Bold", align="right")
    page.text(25, 142, donation.get("purpose") or "General Donation")
    page.text(95, 142, donation.get("payment_method", ""))
    page.text(185, 142, format_inr(amount), align="right")

    page.text(20, 152, f"Amount in Words: {amount_in_words_line(amount)}", "Helvetica-Bold")
    if donation.get("transaction_id"):
        page.text(20, 159, f"Transaction ID: {donation['transaction_id']}")
    page.text(20, 166, f"Status: {donation.get('status', 'Completed')}")

    c.setFillColor(BRAND)
    c.rect(120 * mm, page.y(190), 70 * mm, 15 * mm, fill=1, stroke=0)
    c.setFillColor(colors.white)
    page.text(155, 185, f"Total: Rs. {format_inr(amount)}", "Helvetica-Bold", 12, "center")

    c.setFillColor(colors.black)
    lines = [
        f"Thank you for your generous donation to {settings.org_name}.",
        "Your contribution helps us continue our mission of positive social impact.",
        "This receipt serves as proof of your donation for tax purposes under Section 80G.",
        "",
        "With gratitude,",
        f"{settings.org_name} Team",
    ]
    top = 205
    for line in lines:
        page.text(20, top, line, size=10)
        top += 7

    qr_data = json.dumps({
        "receipt": number,
        "amount": amount,
        "date": _as_date(created).isoformat() if _as_date(created) else None,
        "donor": donation.get("donor_name"),
    }, sort_keys=True)
    page.image(make_qr_png(qr_data), 163, 240, 25)

    page.band(270, 27)
    c.setFillColor(colors.white)
    page.text(105, 282, f"{settings.org_name} | {settings.org_registration} | PAN: {settings.org_pan}",
              size=8, align="center")
    page.text(105, 288, "This is a computer generated receipt and does not require a signature.",
              size=7, align="center")


def render_receipt(donation: dict) -> bytes:
    return render_receipts([donation])

def render_receipts(donations: Iterable[dict]) -> bytes:
    return _render(donations, _draw_receipt, A4, "donation receipt", "Donation Receipt")


# --------------------------------------------------
# Member ID card
# --------------------------------------------------
def initials(name: str) -> str:
    parts = [p for p in (name or "").split() if p]
    return "".join(p[0] for p in parts[:2]).upper() or "?"

def valid_until(member: dict, issued_on: date) -> str:
    if member.get("membership_type") == "lifetime":
        return "Lifetime"
    return format_date(issued_on + timedelta(days=settings.id_card_validity_days))


def _draw_id_card(page: _Page, item):
    member, issued_on = item
    c = page.c
    page.band(0, 53.98, CARD_BACKGROUND)

    page.band(0, 12)
    c.setFillColor(colors.white)
    page.text(5, 6, settings.org_name.upper(), "Helvetica-Bold", 8)
    page.text(5, 9.5, "MEMBER ID CARD", "Helvetica-Bold", 6)

    c.setFillColor(PLACEHOLDER)
    c.rect(5 * mm, page.y(33), 15 * mm, 18 * mm, fill=1, stroke=0)
    c.setFillColor(colors.Color(100 / 255, 100 / 255, 100 / 255))
    page.text(12.5, 25, initials(member.get("name", "")), "Helvetica-Bold", 10, "center")

    c.setFillColor(colors.black)
    page.text(22, 17, (member.get("name") or "")[:28], "Helvetica-Bold", 7)
    page.text(22, 21, f"ID: {member.get('membership_id') or 'N/A'}", size=6)
    page.text(22, 25, f"Type: {(member.get('membership_type') or 'regular').title()}", size=6)
    page.text(22, 29, f"Phone: {member.get('phone', '')}", size=6)
    page.text(22, 33, f"Joined: {format_date(member.get('join_date'))}", size=6)
    page.text(22, 37, f"Valid Until: {valid_until(member, issued_on)}", size=6)

    qr_data = json.dumps({
        "id": str(member.get("_id", "")),
        "name": member.get("name"),
        "membership_id": member.get("membership_id"),
        "type": member.get("membership_type"),
    }, sort_keys=True)
    page.image(make_qr_png(qr_data), 62, 15, 20)

    page.band(40, 13.98)
    c.setFillColor(colors.white)
    page.text(5, 44, settings.org_website, size=5)
    page.text(5, 47, "Valid for official identification", size=5)
    page.text(5, 50, f"Issue Date: {format_date(issued_on)}", size=5)


def render_id_card(member: dict, issued_on: Optional[date] = None) -> bytes:
    return render_id_cards([member], issued_on)

def render_id_cards(members: Iterable[dict], issued_on: Optional[date] = None) -> bytes:
    issued_on = issued_on or date.today()
    return _render(((m, issued_on) for m in members), _draw_id_card, ID_CARD_SIZE,
                   "ID card", "Member ID Card")


# --------------------------------------------------
# Appointment letter
# --------------------------------------------------
def letter_number(member: dict, issued_on: date) -> str:
    return f"AL/{member.get('membership_id', '')}/{issued_on.year}"

def _letter_body(member: dict) -> list:
    org = settings.org_name
    return [
        "Dear Member,",
        "",
        f"We are pleased to inform you that you have been appointed as a member of {org}. "
        "Your membership details are as follows:",
        "",
        f"Membership Number: {member.get('membership_id', '')}",
        f"Membership Type: {(member.get('membership_type') or 'regular').title()}",
        f"Date of Joining: {format_date(member.get('join_date'))}",
        "",
        f"As a member of {org}, you are entitled to:",
        "- Participate in all activities and events of the organisation",
        "- Access member-only resources and programs",
        "- Receive regular updates about our initiatives",
        "- Download your official ID card and certificates",
        "",
        "We look forward to your active participation in our mission to create positive social impact.",
        "",
        f"Welcome to the {org} family!",
    ]


def _draw_appointment_letter(page: _Page, item):
    member, issued_on = item
    c = page.c
    page.band(0, 30)
    c.setFillColor(colors.white)
    page.text(105, 15, settings.org_name.upper(), "Helvetica-Bold", 20, "center")
    page.text(105, 23, "Appointment Letter", "Helvetica-Bold", 12, "center")

    c.setFillColor(colors.black)
    page.text(20, 45, f"Date: {format_date(issued_on)}")
    page.text(20, 50, f"Letter No: {letter_number(member, issued_on)}")

    page.text(20, 65, "To,", size=11)
    page.text(20, 71, member.get("name", ""), size=11)
    top = 77
    for line in simpleSplit(member.get("address") or "", "Helvetica", 11, 120 * mm)[:3]:
        page.text(20, top, line, size=11)
        top += 6

    page.text(20, 105, f"Subject: Appointment as Member of {settings.org_name}", "Helvetica-Bold", 11)

    top = 118
    for paragraph in _letter_body(member):
        for line in simpleSplit(paragraph, "Helvetica", 10, 170 * mm) or [""]:
            page.text(20, top, line, size=10)
            top += 5.5

    top += 6
    page.text(20, top, "Best regards,", size=10)
    c.line(130 * mm, page.y(250), 185 * mm, page.y(250))
    page.text(157.5, 255, "Authorized Signatory", "Helvetica-Bold", 10, "center")
    page.text(157.5, 260, f"{settings.org_signatory}, {settings.org_name}", size=9, align="center")

    page.band(270, 27)
    c.setFillColor(colors.white)
    page.text(105, 282, f"{settings.org_name} | {settings.org_website} | {settings.org_email}",
              size=8, align="center")


def render_appointment_letter(member: dict, issued_on: Optional[date] = None) -> bytes:
    return render_appointment_letters([member], issued_on)

def render_appointment_letters(members: Iterable[dict], issued_on: Optional[date] = None) -> bytes:
    issued_on = issued_on or date.today()
    return _render(((m, issued_on) for m in members), _draw_appointment_letter, A4,
                   "appointment letter", "Appointment Letter")
