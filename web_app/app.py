# web_app/app.py
import os

from flask import Flask, jsonify, request
from supabase import PostgrestAPIError
from werkzeug.exceptions import HTTPException

from teamledger.settings import ConfigError, setup_logging
from web_app.reports_api import reports_api
from web_app.transactions_api import transactions_api
from web_app.vault_api import vault_api

setup_logging(log_file="web_app.log")

# ---- Flask app ----
app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev")

# ---- Blueprints ----
app.register_blueprint(transactions_api)
app.register_blueprint(reports_api)
app.register_blueprint(vault_api)


# ------------------ MIDDLEWARE ------------------
@app.after_request
def add_no_cache_headers(resp):
    resp.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    resp.headers["Pragma"] = "no-cache"
    resp.headers["Expires"] = "0"
    return resp


# ------------------ ERRORS ------------------
@app.errorhandler(PostgrestAPIError)
def supabase_error(e: PostgrestAPIError):
    app.logger.error("Supabase request failed on %s: %s (code=%s)", request.path, e.message, e.code)
    return jsonify({"error": e.message or "upstream query failed", "code": e.code}), 502


@app.errorhandler(ConfigError)
def config_error(e: ConfigError):
    app.logger.error("Misconfigured request on %s: %s", request.path, e)
    return jsonify({"error": str(e)}), 503


@app.errorhandler(HTTPException)
def http_error(e: HTTPException):
    if request.path.startswith("/api/"):
        return jsonify({"error": e.description}), e.code
    return e


# ------------------ ROUTES ------------------
@app.get("/healthz")
def healthz():
    return jsonify(ok=True), 200


# ------------------ MAIN ------------------
if __name__ == "__main__":
    app.run(debug=True)
