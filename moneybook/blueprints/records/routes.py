from datetime import date
from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash
from flask_login import login_required, current_user
from ...extensions import db
from ...categories import INCOME_CATEGORIES, EXPENSE_CATEGORIES
from ...ledger import category_budget_warning, owned_or_404, records_overview
from ...models import Record
from ...validation import ValidationError, parse_month, parse_record


records_bp = Blueprint("records", __name__, url_prefix="/records")


def _render_form(record=None, form=None, status=200):
    return render_template(
        "records/form.html",
        record=record,
        form=form or {},
        income_categories=INCOME_CATEGORIES,
        expense_categories=EXPENSE_CATEGORIES,
        today=date.today().isoformat(),
    ), status


@records_bp.route("/history")
@login_required
def history():
    month_str = request.args.get("month") or date.today().strftime("%Y-%m")
    try:
        month = parse_month(month_str)
    except ValidationError as e:
        flash(str(e), "danger")
        month = date.today().replace(day=1)
        month_str = month.strftime("%Y-%m")
    type_filter = request.args.get("type", "all")
    overview = records_overview(current_user.id, month, type_filter)
    return render_template(
        "records/history.html",
        month=month_str,
        type_filter=type_filter,
        records=overview["records"],
        summary=overview["summary"],
    )


@records_bp.route("/new", methods=["GET", "POST"])
@login_required
def create_record():
    if request.method == "POST":
        try:
            fields = parse_record(request.form)
        except ValidationError as e:
            flash(str(e), "danger")
            return _render_form(form=request.form, status=400)
        record = Record(user_id=current_user.id, **fields)
        db.session.add(record)
        db.session.commit()
        current_app.logger.info("Created %s record id=%s user=%s", record.type, record.id, current_user.id)
        flash("บันทึกรายการแล้ว", "success")
        warning = category_budget_warning(record)
        if warning:
            flash(warning, "warning")
        return redirect(url_for("dashboard.index"))
    return _render_form()


@records_bp.route("/<int:record_id>/edit", methods=["GET", "POST"])
@login_required
def edit_record(record_id):
    record = owned_or_404(Record, record_id, current_user.id)
    if request.method == "POST":
        try:
            record.apply(parse_record(request.form))
        except ValidationError as e:
            flash(str(e), "danger")
            return _render_form(record=record, form=request.form, status=400)
        db.session.commit()
        current_app.logger.info("Updated record id=%s user=%s", record.id, current_user.id)
        flash("แก้ไขรายการแล้ว", "success")
        return redirect(url_for("records.history", month=record.date.strftime("%Y-%m")))
    return _render_form(record=record)


@records_bp.route("/<int:record_id>/delete", methods=["POST"])
@login_required
def delete_record(record_id):
    record = owned_or_404(Record, record_id, current_user.id)
    month = record.date.strftime("%Y-%m")
    db.session.delete(record)
    db.session.commit()
    current_app.logger.info("Deleted record id=%s user=%s", record_id, current_user.id)
    flash("ลบรายการแล้ว", "info")
    return redirect(url_for("records.history", month=month))
