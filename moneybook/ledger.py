"""Per-user queries shared by the page blueprints and the JSON API."""
from datetime import date

from sqlalchemy.exc import IntegrityError

from .aggregates import (
    budget_overview, budget_status, debt_totals, month_start, monthly_summary,
    next_month, record_totals, shift_months, spent_by_category,
)
from .extensions import db
from .models import Budget, Debt, Record, User, RECORD_TYPES
from .validation import ValidationError


def owned_or_404(model, row_id, user_id, description=None):
    """Fetch a row that belongs to ``user_id``; anyone else's row is a 404."""
    return model.query.filter_by(id=row_id, user_id=user_id).first_or_404(description=description)


def _in_month(query, month: date):
    start = month_start(month)
    return query.filter(Record.date >= start, Record.date < next_month(start))


def records_for(user_id, month=None, type_=None):
    q = Record.query.filter(Record.user_id == user_id)
    if month is not None:
        q = _in_month(q, month)
    if type_ in RECORD_TYPES:
        q = q.filter(Record.type == type_)
    return q.order_by(Record.date.desc(), Record.id.desc()).all()


def records_overview(user_id, month=None, type_=None):
    """Filtered records plus totals for the whole month (type filter ignored)."""
    records = records_for(user_id, month, type_)
    if type_ in RECORD_TYPES:
        scope = records_for(user_id, month)
    else:
        scope = records
    return {"records": records, "summary": record_totals(scope)}


def month_expenses(user_id, month: date):
    return _in_month(
        Record.query.filter(Record.user_id == user_id, Record.type == "expense"), month
    ).all()


def budgets_overview(user_id, month: date):
    budgets = Budget.query.filter_by(user_id=user_id).order_by(Budget.category).all()
    return budget_overview(budgets, month_expenses(user_id, month))


def budget_with_status(budget: Budget, month: date):
    spent = spent_by_category(month_expenses(budget.user_id, month)).get(budget.category, 0.0)
    row = budget.to_dict()
    row.update(budget_status(budget.amount, spent))
    return row


def upsert_budget(user_id, category, amount):
    budget = Budget.query.filter_by(user_id=user_id, category=category).first()
    if budget:
        budget.amount = amount
    else:
        budget = Budget(user_id=user_id, category=category, amount=amount)
        db.session.add(budget)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError("มีงบประมาณของหมวดหมู่นี้แล้ว")
    return budget


def summary_for(user_id, months: int, today: date):
    start = shift_months(today, -(months - 1))
    records = (
        Record.query.filter(Record.user_id == user_id, Record.date >= start)
        .order_by(Record.date.asc())
        .all()
    )
    return monthly_summary(records, months, today)


def debts_overview(user_id, status=None):
    q = Debt.query.filter_by(user_id=user_id)
    debts = q.order_by(Debt.date.desc(), Debt.id.desc()).all()
    listed = [d for d in debts if status is None or d.status == status]
    return {"debts": listed, "summary": debt_totals(debts)}


def category_budget_warning(record: Record):
    """Message for an expense that pushed its category over budget, else None."""
    if record.type != "expense":
        return None
    budget = Budget.query.filter_by(user_id=record.user_id, category=record.category).first()
    if budget is None:
        return None
    spent = spent_by_category(month_expenses(record.user_id, record.date)).get(record.category, 0.0)
    status = budget_status(budget.amount, spent)
    if status["overBudget"]:
        return f"เกินงบหมวด {record.category} แล้ว {-status['remaining']:,.2f} บาท"
    if budget.amount > 0 and status["remaining"] <= 0.1 * budget.amount:
        return f"งบหมวด {record.category} เหลือ {status['remaining']:,.2f} บาท"
    return None


def parse_months(value, default: int, maximum: int) -> int:
    """Number of months for the summary, clamped to ``1..maximum``."""
    if value in (None, ""):
        return default
    try:
        months = int(value)
    except (TypeError, ValueError):
        raise ValidationError("จำนวนเดือนไม่ถูกต้อง")
    return max(1, min(months, maximum))


def register_user(name, email, password):
    """Create a user; the unique email constraint decides duplicates."""
    user = User(name=name, email=email)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError("อีเมลนี้ถูกใช้งานแล้ว")
    return user
