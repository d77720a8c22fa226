from datetime import date
from flask import Blueprint, current_app, jsonify, request, session
from flask_login import login_required, login_user, logout_user, current_user
from werkzeug.exceptions import HTTPException
from ...extensions import db
from ...errors import json_error
from ...ledger import (
    budget_with_status, budgets_overview, debts_overview, owned_or_404,
    parse_months, records_overview, register_user, summary_for, upsert_budget,
)
from ...models import Budget, Debt, Record, User, DEBT_STATUSES
from ...validation import (
    ValidationError, parse_budget, parse_debt, parse_month, parse_record, parse_registration,
)

api_bp = Blueprint("api", __name__, url_prefix="/api")

RECORD_NOT_FOUND = "ไม่พบรายการ"
DEBT_NOT_FOUND = "ไม่พบหนี้"
BUDGET_NOT_FOUND = "ไม่พบงบประมาณ"


@api_bp.errorhandler(ValidationError)
def handle_validation_error(e):
    return json_error(str(e), 400)


@api_bp.errorhandler(HTTPException)
def handle_http_error(e):
    return json_error(e.description, e.code)


@api_bp.errorhandler(Exception)
def handle_unexpected_error(e):
    db.session.rollback()
    current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
    return json_error("เกิดข้อผิดพลาด กรุณาลองใหม่อีกครั้ง", 500)


def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("ข้อมูลต้องเป็น JSON object")
    return data


def _month_arg():
    month = request.args.get("month")
    return parse_month(month) if month else None


# ---------------------- Auth ----------------------
@api_bp.route("/auth/register", methods=["POST"])
def register():
    fields = parse_registration(_payload(), current_app.config["MIN_PASSWORD_LENGTH"])
    user = register_user(**fields)
    current_app.logger.info("Registered user id=%s", user.id)
    return jsonify(message="สมัครสมาชิกสำเร็จ", userId=user.id), 201


@api_bp.route("/auth/login", methods=["POST"])
def login():
    data = _payload()
    email = str(data.get("email") or "").strip().lower()
    password = str(data.get("password") or "")
    if not email or not password:
        return json_error("กรุณากรอกอีเมลและรหัสผ่าน", 400)
    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        current_app.logger.info("Failed login for %s", email)
        return json_error("อีเมลหรือรหัสผ่านไม่ถูกต้อง", 401)
    session.permanent = True
    login_user(user, remember=bool(data.get("remember")))
    return jsonify(user.to_dict())


@api_bp.route("/auth/logout", methods=["POST"])
def logout():
    logout_user()
    return jsonify(message="ออกจากระบบแล้ว")


@api_bp.route("/auth/session")
@login_required
def session_user():
    return jsonify(current_user.to_dict())


# ---------------------- Records ----------------------
@api_bp.route("/records")
@login_required
def list_records():
    overview = records_overview(current_user.id, _month_arg(), request.args.get("type"))
    return jsonify(
        records=[r.to_dict() for r in overview["records"]],
        summary=overview["summary"],
    )


@api_bp.route("/records", methods=["POST"])
@login_required
def create_record():
    record = Record(user_id=current_user.id, **parse_record(_payload()))
    db.session.add(record)
    db.session.commit()
    current_app.logger.info("Created %s record id=%s user=%s", record.type, record.id, current_user.id)
    return jsonify(record.to_dict()), 201


@api_bp.route("/records/<int:record_id>")
@login_required
def get_record(record_id):
    record = owned_or_404(Record, record_id, current_user.id, RECORD_NOT_FOUND)
    return jsonify(record.to_dict())


@api_bp.route("/records/<int:record_id>", methods=["PUT"])
@login_required
def update_record(record_id):
    record = owned_or_404(Record, record_id, current_user.id, RECORD_NOT_FOUND)
    record.apply(parse_record(_payload()))
    db.session.commit()
    current_app.logger.info("Updated record id=%s user=%s", record.id, current_user.id)
    return jsonify(record.to_dict())


@api_bp.route("/records/<int:record_id>", methods=["DELETE"])
@login_required
def delete_record(record_id):
    record = owned_or_404(Record, record_id, current_user.id, RECORD_NOT_FOUND)
    db.session.delete(record)
    db.session.commit()
    current_app.logger.info("Deleted record id=%s user=%s", record_id, current_user.id)
    return jsonify(message="ลบรายการแล้ว")


# ---------------------- Debts ----------------------
@api_bp.route("/debts")
@login_required
def list_debts():
    status = request.args.get("status")
    overview = debts_overview(current_user.id, status if status in DEBT_STATUSES else None)
    return jsonify(
        debts=[d.to_dict() for d in overview["debts"]],
        summary=overview["summary"],
    )


@api_bp.route("/debts", methods=["POST"])
@login_required
def create_debt():
    debt = Debt(user_id=current_user.id, **parse_debt(_payload()))
    db.session.add(debt)
    db.session.commit()
    current_app.logger.info("Created %s debt id=%s user=%s", debt.type, debt.id, current_user.id)
    return jsonify(debt.to_dict()), 201


@api_bp.route("/debts/<int:debt_id>")
@login_required
def get_debt(debt_id):
    debt = owned_or_404(Debt, debt_id, current_user.id, DEBT_NOT_FOUND)
    return jsonify(debt.to_dict())


@api_bp.route("/debts/<int:debt_id>", methods=["PUT"])
@login_required
def update_debt(debt_id):
    debt = owned_or_404(Debt, debt_id, current_user.id, DEBT_NOT_FOUND)
    debt.apply(parse_debt(_payload()))
    db.session.commit()
    current_app.logger.info("Updated debt id=%s user=%s", debt.id, current_user.id)
    return jsonify(debt.to_dict())


@api_bp.route("/debts/<int:debt_id>", methods=["DELETE"])
@login_required
def delete_debt(debt_id):
    debt = owned_or_404(Debt, debt_id, current_user.id, DEBT_NOT_FOUND)
    db.session.delete(debt)
    db.session.commit()
    current_app.logger.info("Deleted debt id=%s user=%s", debt_id, current_user.id)
    return jsonify(message="ลบหนี้แล้ว")


# ---------------------- Budgets ----------------------
@api_bp.route("/budgets")
@login_required
def list_budgets():
    month = _month_arg() or date.today()
    return jsonify(budgets_overview(current_user.id, month))


@api_bp.route("/budgets", methods=["POST"])
@login_required
def save_budget():
    fields = parse_budget(_payload())
    budget = upsert_budget(current_user.id, fields["category"], fields["amount"])
    current_app.logger.info("Saved budget %s=%s user=%s", budget.category, budget.amount, current_user.id)
    return jsonify(budget.to_dict())


@api_bp.route("/budgets/<int:budget_id>")
@login_required
def get_budget(budget_id):
    budget = owned_or_404(Budget, budget_id, current_user.id, BUDGET_NOT_FOUND)
    return jsonify(budget_with_status(budget, _month_arg() or date.today()))


@api_bp.route("/budgets", methods=["DELETE"])
@api_bp.route("/budgets/<int:budget_id>", methods=["DELETE"])
@login_required
def delete_budget(budget_id=None):
    if budget_id is None:
        budget_id = request.args.get("id", type=int)
        if budget_id is None:
            return json_error("ไม่ระบุ id", 400)
    budget = owned_or_404(Budget, budget_id, current_user.id, BUDGET_NOT_FOUND)
    db.session.delete(budget)
    db.session.commit()
    current_app.logger.info("Deleted budget id=%s user=%s", budget_id, current_user.id)
    return jsonify(message="ลบงบประมาณแล้ว")


# ---------------------- Summary ----------------------
@api_bp.route("/summary")
@login_required
def summary():
    months = parse_months(
        request.args.get("months"),
        current_app.config["SUMMARY_DEFAULT_MONTHS"],
        current_app.config["SUMMARY_MAX_MONTHS"],
    )
    return jsonify(summary_for(current_user.id, months, date.today()))
