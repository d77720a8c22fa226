from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash, session
from flask_login import login_user, logout_user, login_required, current_user
from ...ledger import register_user
from ...models import User
from ...validation import ValidationError, parse_registration

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _safe_next(target):
    # Only follow relative paths so ?next= can't bounce users off-site
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("dashboard.index")


@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.index"))
    if request.method == "POST":
        try:
            fields = parse_registration(request.form, current_app.config["MIN_PASSWORD_LENGTH"])
            user = register_user(**fields)
        except ValidationError as e:
            flash(str(e), "danger")
            return render_template("auth/register.html"), 400
        current_app.logger.info("Registered user id=%s", user.id)
        flash("สมัครสมาชิกสำเร็จ กรุณาเข้าสู่ระบบ", "success")
        return redirect(url_for("auth.login"))
    return render_template("auth/register.html")


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.index"))
    if request.method == "POST":
        email = (request.form.get("email") or "").strip().lower()
        password = request.form.get("password") or ""
        user = User.query.filter_by(email=email).first()
        if user and user.check_password(password):
            session.permanent = True
            login_user(user, remember=bool(request.form.get("remember")))
            flash("เข้าสู่ระบบสำเร็จ", "success")
            return redirect(_safe_next(request.args.get("next")))
        current_app.logger.info("Failed login for %s", email)
        flash("อีเมลหรือรหัสผ่านไม่ถูกต้อง", "danger")
    return render_template("auth/login.html")


@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    flash("ออกจากระบบแล้ว", "info")
    return redirect(url_for("auth.login"))
