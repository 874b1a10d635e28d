from __future__ import annotations

import io
import logging
from functools import wraps
from typing import Callable, Optional

from flask import current_app, g, jsonify, request, send_file

from ..core.constants import AUTH_HEADER, AUTH_QUERY_PARAM
from ..core.result import Err, Result
from ..users.model import Principal

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation": 400,
    "domain": 400,
    "invalid_session": 400,
    "conflict": 400,
    "unauthenticated": 401,
    "forbidden": 403,
    "not_found": 404,
    "store": 500,
}


def current_token() -> Optional[str]:
    return request.headers.get(AUTH_HEADER) or request.args.get(AUTH_QUERY_PARAM) or None


def current_principal() -> Optional[Principal]:
    return g.get("principal")


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(err: Err):
    status = STATUS_BY_KIND.get(err.kind, 500)
    payload = {"error": err.detail}
    if err.kind == "store":
        logger.error("Store failure surfaced to caller: %s", err.debug_detail)
        if current_app.config.get("DEBUG") and err.debug_detail:
            payload["details"] = err.debug_detail
    return jsonify(payload), status


def respond(result: Result, *, status: int = 200, serialize: Optional[Callable] = None):
    """Map a core ``Ok``/``Err`` onto a JSON response."""

    if isinstance(result, Err):
        return error_response(result)
    value = serialize(result.value) if serialize else result.value
    return jsonify(value), status


def send_export(result: Result):
    if isinstance(result, Err):
        return error_response(result)
    exported = result.value
    return send_file(
        io.BytesIO(exported.body),
        mimetype=exported.mimetype,
        as_attachment=True,
        download_name=exported.filename,
    )


def make_login_required(resolve: Callable[[Optional[str]], Optional[Principal]]):
    """Build the auth decorator around a token -> principal lookup."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = resolve(current_token())
            if principal is None:
                return jsonify({"error": "Unauthorized"}), 401
            g.principal = principal
            return view(*args, **kwargs)

        return wrapper

    return login_required
