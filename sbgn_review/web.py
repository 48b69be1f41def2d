"""Flask application serving the review page and its JSON API.

Routes:
    GET  /                          review page
    GET  /api/config                resolved directories and image bound
    GET  /api/files                 working set with statuses (merges the ledger)
    GET  /api/file/<base>           document text + status
    GET  /api/image/<side>/<base>   old/new image, downscaled when too large
    POST /api/save                  overwrite the edited document
    POST /api/status                set accept / reject / clear

The config document is re-read on every request so directory changes take
effect without a restart.
"""
from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, Response, render_template_string, request

from .config import DEFAULT_CONFIG_PATH, ReviewConfig, load_config
from .documents import get_document, save_document
from .errors import ReviewError, StorageError, ValidationError
from .images import IMAGE_SIDES, load_image
from .io import list_working_set, validate_identifier
from .ledger import open_ledger, validate_status
from .responses import error_response, ok_response, success_response
from .templates import PAGE_TEMPLATE

LOGGER = logging.getLogger(__name__)

_MISSING = object()


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Invalid payload.")
    return payload


def create_app(config_path: Path = DEFAULT_CONFIG_PATH) -> Flask:
    app = Flask(__name__)
    app.config["CONFIG_PATH"] = Path(config_path)
    app.config["MAX_CONTENT_LENGTH"] = 50 * 1024 * 1024

    def current_config() -> ReviewConfig:
        return load_config(app.config["CONFIG_PATH"])

    @app.errorhandler(ReviewError)
    def handle_review_error(exc: ReviewError):
        if exc.status_code >= 500:
            LOGGER.error("%s %s failed: %s", request.method, request.path, exc.message)
            return error_response("Request failed.", exc.status_code)
        LOGGER.warning("%s %s rejected: %s", request.method, request.path, exc.message)
        return error_response(exc.message, exc.status_code)

    @app.errorhandler(OSError)
    def handle_os_error(exc: OSError):
        return handle_review_error(StorageError(str(exc)))

    @app.route("/")
    def index():
        return render_template_string(PAGE_TEMPLATE, config_path=str(app.config["CONFIG_PATH"]))

    @app.route("/api/config")
    def api_config():
        return success_response(current_config().as_payload())

    @app.route("/api/files")
    def api_files():
        cfg = current_config()
        bases = list_working_set(cfg)
        ledger = open_ledger(cfg.ledger_path)
        ledger.reconcile(bases)

        files = [{"base": base, "status": ledger.get_status(base)} for base in bases]
        accepted = sum(1 for item in files if item["status"] == "accept")
        rejected = sum(1 for item in files if item["status"] == "reject")
        counts = {"accept": accepted, "reject": rejected, "clear": len(files) - accepted - rejected}
        return success_response({"files": files, "counts": counts})

    @app.route("/api/file/<path:base>")
    def api_file(base: str):
        validate_identifier(base)
        cfg = current_config()
        xml = get_document(cfg, base)
        status = open_ledger(cfg.ledger_path).get_status(base)
        return success_response({"base": base, "xml": xml, "status": status})

    @app.route("/api/image/<side>/<path:base>")
    def api_image(side: str, base: str):
        if side not in IMAGE_SIDES:
            raise ValidationError("Invalid image type.")
        validate_identifier(base)
        payload = load_image(current_config(), side, base)
        return Response(payload.data, mimetype=payload.mimetype)

    @app.route("/api/save", methods=["POST"])
    def api_save():
        payload = _json_body()
        base = validate_identifier(payload.get("base"))
        xml = payload.get("xml")
        if not isinstance(xml, str):
            raise ValidationError("Invalid payload.")
        save_document(current_config(), base, xml)
        return ok_response()

    @app.route("/api/status", methods=["POST"])
    def api_status():
        payload = _json_body()
        base = validate_identifier(payload.get("base"))
        status = validate_status(payload.get("status", _MISSING))
        cfg = current_config()
        open_ledger(cfg.ledger_path).set_status(base, status)
        return ok_response()

    return app
