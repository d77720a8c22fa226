from datetime import date

import pytest

from moneybook.categories import format_baht
from moneybook.validation import (
    ValidationError,
    parse_amount,
    parse_budget,
    parse_debt,
    parse_month,
    parse_record,
    parse_registration,
)


def record_payload(**overrides):
    data = {
        "type": "expense",
        "amount": "350",
        "category": "อาหาร",
        "description": "ข้าวกลางวัน",
        "date": "2026-02-02",
        "note": "",
    }
    data.update(overrides)
    return data


class TestParseRecord:
    def test_valid_payload(self):
        fields = parse_record(record_payload())
        assert fields == {
            "type": "expense",
            "amount": 350.0,
            "category": "อาหาร",
            "description": "ข้าวกลางวัน",
            "date": date(2026, 2, 2),
            "note": None,
        }

    @pytest.mark.parametrize("missing", ["type", "amount", "category", "description", "date"])
    def test_missing_field(self, missing):
        data = record_payload()
        del data[missing]
        with pytest.raises(ValidationError):
            parse_record(data)

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            parse_record(record_payload(type="transfer"))

    def test_rejects_bad_date(self):
        with pytest.raises(ValidationError):
            parse_record(record_payload(date="02/02/2026"))

    def test_accepts_datetime_string(self):
        assert parse_record(record_payload(date="2026-02-02T00:00:00.000Z"))["date"] == date(2026, 2, 2)

    @pytest.mark.parametrize("value", ["2026-02-10garbage", "2026-02-10T25:00:00", "2026-02-30"])
    def test_rejects_trailing_garbage_and_impossible_dates(self, value):
        with pytest.raises(ValidationError):
            parse_record(record_payload(date=value))

    @pytest.mark.parametrize("field, value", [
        ("category", {"name": "อาหาร"}),
        ("description", ["ข้าว", "น้ำ"]),
        ("type", ["expense"]),
        ("date", 20260202),
        ("note", {"x": 1}),
    ])
    def test_rejects_non_text_fields(self, field, value):
        with pytest.raises(ValidationError):
            parse_record(record_payload(**{field: value}))


class TestParseAmount:
    @pytest.mark.parametrize("value", ["abc", None, "nan", "inf", True, "-5", 0, "0"])
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            parse_amount(value)

    def test_zero_allowed_when_asked(self):
        assert parse_amount("0", allow_zero=True) == 0

    def test_rounds_to_satang(self):
        assert parse_amount("10.005") == pytest.approx(10.0, abs=0.01)
        assert parse_amount(99.5) == 99.5


class TestParseDebtAndBudget:
    def test_debt_status_defaults_to_unpaid(self):
        fields = parse_debt({
            "type": "borrow", "amount": 500, "person": "สมชาย",
            "description": "ค่าข้าว", "date": "2026-02-03",
        })
        assert fields["status"] == "unpaid"
        assert fields["note"] is None

    def test_debt_rejects_bad_status(self):
        with pytest.raises(ValidationError):
            parse_debt({
                "type": "lend", "amount": 500, "person": "สมชาย",
                "description": "ค่าข้าว", "date": "2026-02-03", "status": "gone",
            })

    def test_debt_rejects_bad_type(self):
        with pytest.raises(ValidationError):
            parse_debt({
                "type": "gift", "amount": 500, "person": "สมชาย",
                "description": "ค่าข้าว", "date": "2026-02-03",
            })

    def test_budget_allows_zero(self):
        assert parse_budget({"category": "อาหาร", "amount": 0}) == {"category": "อาหาร", "amount": 0}

    def test_budget_requires_amount(self):
        with pytest.raises(ValidationError):
            parse_budget({"category": "อาหาร"})


class TestRegistrationAndMonth:
    def test_email_is_normalised(self):
        fields = parse_registration({"name": "A", "email": " Alice@Example.COM ", "password": "secret1"})
        assert fields["email"] == "alice@example.com"

    def test_short_password(self):
        with pytest.raises(ValidationError):
            parse_registration({"name": "A", "email": "a@example.com", "password": "12345"})

    def test_rejects_non_text_credentials(self):
        with pytest.raises(ValidationError):
            parse_registration({"name": "A", "email": ["a@example.com"], "password": "secret1"})
        with pytest.raises(ValidationError):
            parse_registration({"name": "A", "email": "a@example.com", "password": 1234567})

    def test_parse_month(self):
        assert parse_month("2026-02") == date(2026, 2, 1)
        with pytest.raises(ValidationError):
            parse_month("2026-13")


def test_format_baht():
    assert format_baht(1234.5) == "฿1,234.50"
    assert format_baht(-200) == "-฿200.00"
    assert format_baht(None) == "฿0.00"
