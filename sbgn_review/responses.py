"""JSON envelopes for the review API."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from flask import jsonify


def error_response(message: str, code: int) -> tuple[Any, int]:
    """``{"error": {"message", "code", "timestamp"}}`` with ``code`` as the HTTP status."""
    stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return jsonify({"error": {"message": message, "code": code, "timestamp": stamp}}), code


def success_response(data: Any) -> tuple[Any, int]:
    return jsonify(data), 200


def ok_response() -> tuple[Any, int]:
    return success_response({"ok": True})
