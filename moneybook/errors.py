from flask import flash, jsonify, redirect, request, url_for
from werkzeug.exceptions import HTTPException

from .extensions import login_manager


def wants_json():
    return request.blueprint == "api" or request.path.startswith("/api/")


def json_error(message, status):
    return jsonify(error=message), status


@login_manager.unauthorized_handler
def unauthorized():
    if wants_json():
        return json_error("Unauthorized", 401)
    flash(login_manager.login_message, login_manager.login_message_category)
    return redirect(url_for("auth.login", next=request.path))


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        # API clients always get {"error": ...}; pages keep Werkzeug's HTML
        if wants_json():
            return json_error(e.description, e.code)
        return e
