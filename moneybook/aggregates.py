"""Monthly totals, category breakdowns and budget figures.

Everything here works on already-fetched rows (anything with ``type``,
``amount``, ``category`` and ``date`` attributes) so the same reductions
back both the JSON API and the HTML pages.
"""
from collections import defaultdict
from datetime import date

THAI_SHORT_MONTHS = [
    "ม.ค.", "ก.พ.", "มี.ค.", "เม.ย.", "พ.ค.", "มิ.ย.",
    "ก.ค.", "ส.ค.", "ก.ย.", "ต.ค.", "พ.ย.", "ธ.ค.",
]


def _money(value) -> float:
    return round(float(value), 2)


def month_start(d: date) -> date:
    return d.replace(day=1)


def next_month(d: date) -> date:
    """Return the first day of the month following the month that contains d."""
    if d.month == 12:
        return date(d.year + 1, 1, 1)
    return date(d.year, d.month + 1, 1)


def shift_months(d: date, n: int) -> date:
    """First day of the month ``n`` months away from the month of ``d``."""
    index = d.year * 12 + (d.month - 1) + n
    return date(index // 12, index % 12 + 1, 1)


def month_key(d: date) -> str:
    return d.strftime("%Y-%m")


def month_label(d: date) -> str:
    return THAI_SHORT_MONTHS[d.month - 1]


def record_totals(records):
    income = sum(r.amount for r in records if r.type == "income")
    expense = sum(r.amount for r in records if r.type == "expense")
    return {
        "totalIncome": _money(income),
        "totalExpense": _money(expense),
        "balance": _money(income - expense),
    }


def spent_by_category(records):
    spent = defaultdict(float)
    for r in records:
        if r.type == "expense":
            spent[r.category] += r.amount
    return dict(spent)


def _percentage(part, whole) -> float:
    if whole <= 0:
        return 0
    return min(part / whole * 100, 100)


def budget_status(limit: float, spent: float):
    return {
        "spent": _money(spent),
        "remaining": _money(limit - spent),
        "percentage": _percentage(spent, limit),
        "overBudget": spent > limit,
    }


def budget_overview(budgets, expenses):
    """Attach spend figures to each budget and summarise the month.

    ``totalSpent`` covers every expense of the month, including categories
    without a budget.
    """
    spent = spent_by_category(expenses)
    rows = []
    for b in budgets:
        row = b.to_dict()
        row.update(budget_status(b.amount, spent.get(b.category, 0.0)))
        rows.append(row)

    total_budget = sum(b.amount for b in budgets)
    total_spent = sum(spent.values())
    return {
        "budgets": rows,
        "summary": {
            "totalBudget": _money(total_budget),
            "totalSpent": _money(total_spent),
            "totalRemaining": _money(total_budget - total_spent),
            "overallPercentage": _percentage(total_spent, total_budget),
        },
    }


def _ranked(totals):
    items = [{"name": name, "value": _money(value)} for name, value in totals.items()]
    return sorted(items, key=lambda item: item["value"], reverse=True)


def monthly_summary(records, months: int, today: date):
    """Income/expense per month for the last ``months`` months (current
    month included, oldest first) plus the current month's category split."""
    current = month_start(today)
    buckets = {}
    for i in range(months - 1, -1, -1):
        start = shift_months(current, -i)
        buckets[month_key(start)] = {"start": start, "income": 0.0, "expense": 0.0}

    current_key = month_key(current)
    expense_by_category = defaultdict(float)
    income_by_category = defaultdict(float)

    for r in records:
        key = month_key(r.date)
        bucket = buckets.get(key)
        if bucket is not None:
            bucket["income" if r.type == "income" else "expense"] += r.amount
        if key == current_key:
            target = income_by_category if r.type == "income" else expense_by_category
            target[r.category] += r.amount

    monthly = [
        {
            "month": key,
            "label": month_label(b["start"]),
            "income": _money(b["income"]),
            "expense": _money(b["expense"]),
            "balance": _money(b["income"] - b["expense"]),
        }
        for key, b in buckets.items()
    ]
    return {
        "monthly": monthly,
        "expenseByCategory": _ranked(expense_by_category),
        "incomeByCategory": _ranked(income_by_category),
    }


def debt_totals(debts):
    unpaid = [d for d in debts if d.status == "unpaid"]
    return {
        "unpaidBorrow": _money(sum(d.amount for d in unpaid if d.type == "borrow")),
        "unpaidLend": _money(sum(d.amount for d in unpaid if d.type == "lend")),
        "unpaidCount": len(unpaid),
    }
