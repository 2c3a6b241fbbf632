"""
Tests for RegexSmsParser (field extraction from bank SMS).
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from domain.enums import TransactionDirection, TransactionOrigin
from infrastructure.sms.regex_parser import RegexSmsParser
from tests.conftest import FIXED_NOW


@pytest.fixture
def parser(fixed_clock) -> RegexSmsParser:
    return RegexSmsParser(clock=fixed_clock)


class TestAmountExtraction:
    """Currency marker + number."""

    def test_rupee_amount_with_grouping(self, parser):
        tx = parser.parse("VM-HDFCBK", "Rs 1,234.50 debited from your account")

        assert tx is not None
        assert tx.amount == Decimal("1234.50")
        assert tx.direction == TransactionDirection.DEBIT

    @pytest.mark.parametrize("body, expected", [
        ("INR 500 credited to your a/c", Decimal("500")),
        ("inr 75.25 spent on card XX1234", Decimal("75.25")),
        ("You paid ₹99 to SWIGGY", Decimal("99")),
        ("RS12,00,000.00 deposited", Decimal("1200000.00")),
    ])
    def test_recognized_markers(self, parser, body, expected):
        tx = parser.parse("AD-ICICIB", body)
        assert tx is not None
        assert tx.amount == expected

    def test_only_first_amount_is_used(self, parser):
        tx = parser.parse("VM-HDFCBK", "Rs 100 debited. Avl Bal Rs 5,000.00")
        assert tx.amount == Decimal("100")

    @pytest.mark.parametrize("body", [
        "Your OTP for login is 482913. Do not share it.",
        "Meeting moved to 3pm",
        "Rs 0.00 debited from a/c XX1234",
        "Rs , debited",
        "Rs. 500 debited",  # marker must be followed directly by the number
        "",
    ])
    def test_non_transaction_messages_return_none(self, parser, body):
        assert parser.parse("VM-HDFCBK", body) is None


class TestDirectionDetection:
    """Keyword evidence and the substring tie-break."""

    def test_credit_keywords_only(self, parser):
        assert parser.detect_direction("INR 500 credited to a/c") == TransactionDirection.CREDIT
        assert parser.detect_direction("Refund of Rs 20 processed") == TransactionDirection.CREDIT

    def test_debit_keywords_only(self, parser):
        assert parser.detect_direction("Rs 500 withdrawn at ATM") == TransactionDirection.DEBIT

    def test_no_keywords_defaults_to_debit(self, parser):
        assert parser.detect_direction("Rs 500 at AMAZON") == TransactionDirection.DEBIT

    def test_both_with_credit_first(self, parser):
        body = "INR 2,000 credited to your a/c as refund of amount debited on card"
        assert parser.detect_direction(body) == TransactionDirection.CREDIT

    def test_both_with_debit_first(self, parser):
        body = "Rs 300 debited from a/c; it will be credited back as refund"
        assert parser.detect_direction(body) == TransactionDirection.DEBIT

    def test_tie_break_is_plain_substring_search(self, parser):
        # "received" + "transaction" hit both keyword sets, but neither
        # "credit" nor "debit" appears: -1 < -1 is false, so debit.
        assert parser.detect_direction("Rs 500 received. Transaction ref 99") == TransactionDirection.DEBIT

        # "debit" present, "credit" absent: -1 sorts first, so credit.
        body = "Rs 500 received via debit card transaction"
        assert parser.detect_direction(body) == TransactionDirection.CREDIT


class TestDateExtraction:
    """Explicit dates, relative words, and the processing-time fallback."""

    @pytest.mark.parametrize("body, expected", [
        ("Rs 500 debited on 15/01/2024", datetime(2024, 1, 15)),
        ("Rs 500 debited on 5/2/2024", datetime(2024, 2, 5)),
        ("Rs 500 debited on 05-02-2024", datetime(2024, 2, 5)),
        ("Rs 500 debited on 2024-01-15", datetime(2024, 1, 15)),
    ])
    def test_explicit_date_patterns(self, parser, body, expected):
        assert parser.parse("VM-HDFCBK", body).occurred_at == expected

    def test_pattern_order_slash_first(self, parser):
        tx = parser.parse("VM-HDFCBK", "Rs 500 debited on 2024-02-20 (value date 15/01/2024)")
        assert tx.occurred_at == datetime(2024, 1, 15)

    def test_explicit_date_wins_over_relative_word(self, parser):
        tx = parser.parse("VM-HDFCBK", "Rs 500 debited yesterday, txn date 15/01/2024")
        assert tx.occurred_at == datetime(2024, 1, 15)

    def test_today(self, parser):
        tx = parser.parse("VM-HDFCBK", "Rs 500 spent TODAY at DMART")
        assert tx.occurred_at == FIXED_NOW

    def test_yesterday(self, parser):
        tx = parser.parse("VM-HDFCBK", "Rs 500 spent yesterday at DMART")
        assert tx.occurred_at == FIXED_NOW - timedelta(days=1)

    def test_fallback_is_extraction_time(self, parser):
        tx = parser.parse("VM-HDFCBK", "Rs 500 spent at DMART")
        assert tx.occurred_at == FIXED_NOW
        assert tx.created_at == FIXED_NOW
        assert tx.updated_at == FIXED_NOW

    def test_impossible_date_rejects_message(self, parser):
        assert parser.parse("VM-HDFCBK", "Rs 500 debited on 31/02/2024") is None


class TestBankResolution:
    """Sender code lookup."""

    @pytest.mark.parametrize("sender, expected", [
        ("VM-HDFCBK", "HDFC Bank"),
        ("vm-hdfcbk", "HDFC Bank"),
        ("AD-ICICIB", "ICICI Bank"),
        ("AD-SBIINB", "State Bank of India"),
        ("BZ-AXISBK", "Axis Bank"),
        ("JD-KOTAKB", "Kotak Mahindra"),
        ("VK-PNBSMS", "Punjab National Bank"),
        ("BP-BOIIND", "Bank of India"),
        ("JD-BOBTXN", "Bank of Baroda"),
        ("VM-CANBNK-CANARA", "Canara Bank"),
        ("AX-UNIONB", "Union Bank"),
    ])
    def test_known_codes(self, parser, sender, expected):
        assert parser.resolve_bank(sender) == expected

    def test_first_match_in_table_order_wins(self, parser):
        assert parser.resolve_bank("AX-UNIONSBI") == "State Bank of India"

    def test_unknown_sender_is_truncated(self, parser):
        assert parser.resolve_bank("+919876543210123456789") == "+9198765432101234567"
        assert parser.resolve_bank("MYBANK") == "MYBANK"


class TestRecord:
    """Whole-record properties."""

    def test_description_is_trimmed_prefix(self, parser):
        body = "  Rs 10 spent " + "x" * 200
        tx = parser.parse("VM-HDFCBK", body)

        assert tx.description == body[:100].strip()
        assert len(tx.description) <= 100

    def test_origin_is_sms(self, parser):
        assert parser.parse("VM-HDFCBK", "Rs 10 spent").origin == TransactionOrigin.SMS

    def test_identity_is_stable_for_same_input(self, parser):
        body = "Rs 1,234.50 debited from a/c XX1234 on 15/01/2024"
        first = parser.parse("VM-HDFCBK", body)
        second = parser.parse("VM-HDFCBK", body)

        assert first.id == second.id
        assert first.id.startswith("tx_")

    def test_identity_ignores_processing_time_when_date_is_explicit(self):
        body = "Rs 1,234.50 debited from a/c XX1234 on 15/01/2024"
        early = RegexSmsParser(clock=lambda: datetime(2024, 1, 15, 9, 0)).parse("VM-HDFCBK", body)
        late = RegexSmsParser(clock=lambda: datetime(2024, 2, 1, 18, 0)).parse("VM-HDFCBK", body)

        assert early.id == late.id

    def test_identity_differs_by_sender_and_amount(self, parser):
        body = "Rs 500 debited on 15/01/2024"
        assert parser.parse("VM-HDFCBK", body).id != parser.parse("AD-SBIINB", body).id
        assert parser.parse("VM-HDFCBK", body).id != parser.parse("VM-HDFCBK", "Rs 501 debited on 15/01/2024").id
