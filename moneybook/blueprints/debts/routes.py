from datetime import date
from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash
from flask_login import login_required, current_user
from ...extensions import db
from ...ledger import debts_overview, owned_or_404
from ...models import Debt, DEBT_STATUSES
from ...validation import ValidationError, parse_debt

debts_bp = Blueprint("debts", __name__, url_prefix="/debts")


@debts_bp.route("/")
@login_required
def list_debts():
    status = request.args.get("status")
    overview = debts_overview(current_user.id, status if status in DEBT_STATUSES else None)
    return render_template(
        "debts/list.html",
        debts=overview["debts"],
        summary=overview["summary"],
        status=status,
    )


@debts_bp.route("/new", methods=["GET", "POST"])
@login_required
def create_debt():
    if request.method == "POST":
        try:
            fields = parse_debt(request.form)
        except ValidationError as e:
            flash(str(e), "danger")
            return render_template("debts/form.html", debt=None, form=request.form,
                                   today=date.today().isoformat()), 400
        debt = Debt(user_id=current_user.id, **fields)
        db.session.add(debt)
        db.session.commit()
        current_app.logger.info("Created %s debt id=%s user=%s", debt.type, debt.id, current_user.id)
        flash("บันทึกหนี้แล้ว", "success")
        return redirect(url_for("debts.list_debts"))
    return render_template("debts/form.html", debt=None, form={}, today=date.today().isoformat())


@debts_bp.route("/<int:debt_id>/edit", methods=["GET", "POST"])
@login_required
def edit_debt(debt_id):
    debt = owned_or_404(Debt, debt_id, current_user.id)
    if request.method == "POST":
        try:
            debt.apply(parse_debt(request.form))
        except ValidationError as e:
            flash(str(e), "danger")
            return render_template("debts/form.html", debt=debt, form=request.form,
                                   today=date.today().isoformat()), 400
        db.session.commit()
        current_app.logger.info("Updated debt id=%s user=%s", debt.id, current_user.id)
        flash("แก้ไขหนี้แล้ว", "success")
        return redirect(url_for("debts.list_debts"))
    return render_template("debts/form.html", debt=debt, form={}, today=date.today().isoformat())


@debts_bp.route("/<int:debt_id>/toggle", methods=["POST"])
@login_required
def toggle_status(debt_id):
    debt = owned_or_404(Debt, debt_id, current_user.id)
    debt.status = "paid" if debt.status == "unpaid" else "unpaid"
    db.session.commit()
    flash("อัปเดตสถานะแล้ว", "success")
    return redirect(url_for("debts.list_debts"))


@debts_bp.route("/<int:debt_id>/delete", methods=["POST"])
@login_required
def delete_debt(debt_id):
    debt = owned_or_404(Debt, debt_id, current_user.id)
    db.session.delete(debt)
    db.session.commit()
    current_app.logger.info("Deleted debt id=%s user=%s", debt_id, current_user.id)
    flash("ลบหนี้แล้ว", "info")
    return redirect(url_for("debts.list_debts"))
