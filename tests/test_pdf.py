from datetime import date, datetime, timezone

import pytest

from seva_portal.services.pdf import (
    PdfGenerationError,
    amount_in_words_line,
    letter_number,
    render_appointment_letter,
    render_id_card,
    render_receipt,
    render_receipts,
    valid_until,
)

DONATION = {
    "_id": "64b7f0c2a1b2c3d4e5f60718",
    "donor_name": "Ravi Verma",
    "donor_email": "ravi@example.com",
    "donor_phone": "+91 90000 00000",
    "amount": 1234,
    "payment_method": "UPI",
    "transaction_id": "UPI-889",
    "receipt_number": "BSS-RCP-2025-000001",
    "purpose": "Education",
    "status": "Completed",
    "created_at": datetime(2025, 3, 1, 10, 30, tzinfo=timezone.utc),
}

MEMBER = {
    "_id": "64b7f0c2a1b2c3d4e5f60719",
    "name": "Meera Joshi",
    "email": "meera@example.com",
    "phone": "+91 91111 11111",
    "address": "12 Lake Road, Udaipur, Rajasthan",
    "membership_id": "BSS-MEM-2025-00001",
    "membership_type": "regular",
    "status": "approved",
    "join_date": datetime(2025, 2, 1, tzinfo=timezone.utc),
}

def test_receipt_is_pdf_and_deterministic():
    first = render_receipt(DONATION)
    assert first.startswith(b"%PDF")
    assert render_receipt(DONATION) == first

def test_bulk_receipts_hold_every_page():
    single = render_receipt(DONATION)
    other = {**DONATION, "receipt_number": "BSS-RCP-2025-000002", "amount": 500}
    bulk = render_receipts([DONATION, other])
    assert bulk.startswith(b"%PDF")
    assert len(bulk) > len(single)

def test_receipt_without_optional_fields():
    minimal = {"_id": "64b7f0c2a1b2c3d4e5f60720", "donor_name": "A", "donor_email": "a@example.com",
               "amount": 10, "payment_method": "Cash"}
    assert render_receipt(minimal).startswith(b"%PDF")

def test_large_amount_falls_back_to_figures():
    assert amount_in_words_line(2_500_000) == "Rupees 25,00,000.00 Only"
    assert amount_in_words_line(1000) == "Rupees One Thousand Only"

def test_empty_batch_is_an_error():
    with pytest.raises(PdfGenerationError):
        render_receipts([])

def test_id_card_and_letter():
    issued = date(2025, 4, 1)
    assert render_id_card(MEMBER, issued).startswith(b"%PDF")
    assert render_appointment_letter(MEMBER, issued).startswith(b"%PDF")
    assert letter_number(MEMBER, issued) == "AL/BSS-MEM-2025-00001/2025"

def test_valid_until():
    issued = date(2025, 4, 1)
    assert valid_until(MEMBER, issued) == "01/04/2026"
    assert valid_until({**MEMBER, "membership_type": "lifetime"}, issued) == "Lifetime"
