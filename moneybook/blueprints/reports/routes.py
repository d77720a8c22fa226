import csv
from io import StringIO
from datetime import date
from flask import Blueprint, current_app, render_template, request, make_response, flash
from flask_login import login_required, current_user
from ...ledger import parse_months, records_for, summary_for
from ...validation import ValidationError

reports_bp = Blueprint("reports", __name__, url_prefix="/reports")


@reports_bp.route("/")
@login_required
def index():
    default = current_app.config["SUMMARY_DEFAULT_MONTHS"]
    try:
        months = parse_months(request.args.get("months"), default, current_app.config["SUMMARY_MAX_MONTHS"])
    except ValidationError as e:
        flash(str(e), "danger")
        months = default
    summary = summary_for(current_user.id, months, date.today())
    return render_template(
        "reports/index.html",
        months=months,
        monthly=summary["monthly"],
        expense_by_category=summary["expenseByCategory"],
        income_by_category=summary["incomeByCategory"],
    )


@reports_bp.route("/export.csv")
@login_required
def export_csv():
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(["Date", "Type", "Category", "Description", "Amount", "Note"])
    for r in records_for(current_user.id):
        writer.writerow([r.date.isoformat(), r.type, r.category, r.description, f"{r.amount:.2f}", r.note or ""])
    # BOM so spreadsheet apps pick up the Thai text as UTF-8
    response = make_response("\ufeff" + output.getvalue())
    response.headers["Content-Disposition"] = "attachment; filename=records.csv"
    response.headers["Content-Type"] = "text/csv; charset=utf-8"
    return response
