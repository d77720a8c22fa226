from datetime import date
from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash
from flask_login import login_required, current_user
from ...extensions import db
from ...categories import EXPENSE_CATEGORIES
from ...ledger import budgets_overview, owned_or_404, upsert_budget
from ...models import Budget
from ...validation import ValidationError, parse_budget

budgets_bp = Blueprint("budgets", __name__, url_prefix="/budgets")


@budgets_bp.route("/", methods=["GET", "POST"])
@login_required
def manage_budgets():
    if request.method == "POST":
        try:
            fields = parse_budget(request.form)
            budget = upsert_budget(current_user.id, fields["category"], fields["amount"])
        except ValidationError as e:
            flash(str(e), "danger")
        else:
            current_app.logger.info("Saved budget %s=%s user=%s", budget.category, budget.amount, current_user.id)
            flash("บันทึกงบประมาณแล้ว", "success")
        return redirect(url_for("budgets.manage_budgets"))

    today = date.today()
    overview = budgets_overview(current_user.id, today)
    # Categories that already have a budget are edited in place, not re-offered
    taken = {b["category"] for b in overview["budgets"]}
    available = [c for c in EXPENSE_CATEGORIES if c not in taken]
    return render_template(
        "budgets/list.html",
        month=today,
        budgets=overview["budgets"],
        summary=overview["summary"],
        available=available,
    )


@budgets_bp.route("/<int:budget_id>/delete", methods=["POST"])
@login_required
def delete_budget(budget_id):
    budget = owned_or_404(Budget, budget_id, current_user.id)
    db.session.delete(budget)
    db.session.commit()
    current_app.logger.info("Deleted budget id=%s user=%s", budget_id, current_user.id)
    flash("ลบงบประมาณแล้ว", "info")
    return redirect(url_for("budgets.manage_budgets"))
