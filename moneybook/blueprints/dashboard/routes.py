from datetime import date, timedelta
from flask import Blueprint, render_template, redirect, url_for, flash
from flask_login import login_required, current_user
from ...extensions import db
from ...aggregates import month_start
from ...ledger import records_overview, budgets_overview
from ...models import Record


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard_bp.route("/")
@login_required
def index():
    today = date.today()
    overview = records_overview(current_user.id, today)
    budgets = budgets_overview(current_user.id, today)
    over_budget = [b for b in budgets["budgets"] if b["overBudget"]]
    return render_template(
        "dashboard/index.html",
        month=today,
        records=overview["records"],
        summary=overview["summary"],
        over_budget=over_budget,
    )


@dashboard_bp.route("/seed")
@login_required
def seed_demo():
    """Seed sample income and expense records for demo purposes."""
    if Record.query.filter_by(user_id=current_user.id).first():
        flash("มีข้อมูลอยู่แล้ว", "info")
        return redirect(url_for("dashboard.index"))

    start = month_start(date.today())
    demo = [
        ("income", 25000, "เงินเดือน", "เงินเดือน", 0),
        ("expense", 350, "อาหาร", "ข้าวกลางวัน", 1),
        ("expense", 1500, "เดินทาง", "เติมน้ำมัน", 2),
        ("expense", 89, "เครื่องดื่ม", "กาแฟ", 3),
        ("income", 3000, "รายได้เสริม", "ค่าฟรีแลนซ์", 4),
        ("expense", 8500, "ที่พัก", "ค่าหอพัก", 4),
        ("expense", 450, "อาหาร", "อาหารเย็น", 5),
        ("expense", 200, "ของใช้", "สบู่ แชมพู", 6),
    ]
    for rtype, amount, category, description, offset in demo:
        # Keep every sample inside the current month
        on = min(start + timedelta(days=offset), date.today())
        db.session.add(Record(user_id=current_user.id, type=rtype, amount=amount,
                              category=category, description=description, date=on))
    db.session.commit()
    flash(f"เพิ่มข้อมูลตัวอย่าง {len(demo)} รายการ", "success")
    return redirect(url_for("dashboard.index"))
