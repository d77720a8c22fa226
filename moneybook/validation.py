"""Input parsing shared by the JSON API and the HTML forms.

Each ``parse_*`` function takes a mapping (a JSON body or ``request.form``)
and returns the cleaned column values, or raises ``ValidationError`` with a
message that can be shown to the user as-is.
"""
import math
from datetime import date, datetime

from .models import RECORD_TYPES, DEBT_TYPES, DEBT_STATUSES

MISSING_FIELDS = "กรุณากรอกข้อมูลให้ครบ"


class ValidationError(ValueError):
    pass


def _text(data, key):
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} ต้องเป็นข้อความ")
    return value.strip()


def _require(data, *keys):
    """Text fields must be non-empty strings; ``amount`` may also be a number."""
    values = {}
    for key in keys:
        if key == "amount":
            raw = data.get(key)
            values[key] = "" if raw is None else str(raw).strip()
        else:
            values[key] = _text(data, key)
    if not all(values.values()):
        raise ValidationError(MISSING_FIELDS)
    return values


def parse_amount(value, allow_zero=False) -> float:
    if isinstance(value, bool):
        raise ValidationError("จำนวนเงินไม่ถูกต้อง")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError("จำนวนเงินไม่ถูกต้อง")
    if not math.isfinite(amount):
        raise ValidationError("จำนวนเงินไม่ถูกต้อง")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError("จำนวนเงินต้องมากกว่า 0")
    return round(amount, 2)


def parse_date(value) -> date:
    """A full ISO date (``YYYY-MM-DD``) or ISO datetime, nothing trailing."""
    if not isinstance(value, str):
        raise ValidationError("รูปแบบวันที่ไม่ถูกต้อง")
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        # JSON clients send a trailing Z for UTC
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("รูปแบบวันที่ไม่ถูกต้อง")


def parse_month(value) -> date:
    """``YYYY-MM`` to the first day of that month."""
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m").date()
    except ValueError:
        raise ValidationError("รูปแบบเดือนไม่ถูกต้อง (YYYY-MM)")


def _choice(value, allowed, message):
    if value not in allowed:
        raise ValidationError(message)
    return value


def parse_record(data):
    fields = _require(data, "type", "amount", "category", "description", "date")
    return {
        "type": _choice(fields["type"], RECORD_TYPES, "ประเภทต้องเป็น income หรือ expense"),
        "amount": parse_amount(data.get("amount")),
        "category": fields["category"],
        "description": fields["description"],
        "date": parse_date(fields["date"]),
        "note": _text(data, "note") or None,
    }


def parse_debt(data):
    fields = _require(data, "type", "amount", "person", "description", "date")
    status = _text(data, "status") or "unpaid"
    return {
        "type": _choice(fields["type"], DEBT_TYPES, "ประเภทต้องเป็น borrow หรือ lend"),
        "amount": parse_amount(data.get("amount")),
        "person": fields["person"],
        "description": fields["description"],
        "date": parse_date(fields["date"]),
        "note": _text(data, "note") or None,
        "status": _choice(status, DEBT_STATUSES, "สถานะต้องเป็น unpaid หรือ paid"),
    }


def parse_budget(data):
    fields = _require(data, "category", "amount")
    return {
        "category": fields["category"],
        "amount": parse_amount(data.get("amount"), allow_zero=True),
    }


def parse_registration(data, min_password_length=6):
    name = _text(data, "name")
    email = _text(data, "email").lower()
    password = data.get("password") or ""
    if not isinstance(password, str):
        raise ValidationError("password ต้องเป็นข้อความ")
    if not name or not email or not password:
        raise ValidationError(MISSING_FIELDS)
    if "@" not in email:
        raise ValidationError("อีเมลไม่ถูกต้อง")
    if len(password) < min_password_length:
        raise ValidationError(f"รหัสผ่านต้องมีอย่างน้อย {min_password_length} ตัวอักษร")
    return {"name": name, "email": email, "password": password}
