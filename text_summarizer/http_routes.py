from __future__ import annotations

import os
from typing import Any, Dict, Tuple

from flask import Blueprint, Response, current_app, g, jsonify, request
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from text_summarizer import __version__
from text_summarizer.errors import InvalidParamsError, MethodNotFoundError, ToolError

SERVICE_NAME = "text-processing-server"

_ERROR_STATUS = {
    InvalidParamsError.code: 400,
    MethodNotFoundError.code: 404,
}


def _error(message: str, error_type: str, code: int):
    return jsonify({"error": {"message": message, "type": error_type, "code": code}}), code


def register_routes(app) -> Blueprint:
    api = Blueprint("text_summarizer_api", __name__)
    limiter = app.config.get("TEXTSUM_LIMITER")
    rate_limit = app.config.get("TEXTSUM_RATE_LIMIT")

    def _limit_route(func):
        if limiter:
            return limiter.limit(rate_limit)(func)
        return func

    def _auth_required() -> bool:
        if os.getenv("TEXTSUM_ENV", "development").lower() == "production":
            return True
        return os.getenv("TEXTSUM_REQUIRE_BEARER", "0") == "1"

    def require_bearer() -> Tuple[bool, Dict[str, Any] | None]:
        if not _auth_required():
            return True, None
        token = os.getenv("TEXTSUM_BEARER_TOKEN", "")
        got = request.headers.get("Authorization", "")
        if not token or got != f"Bearer {token}":
            return False, {"error": {"message": "Unauthorized", "type": "auth_error", "code": 401}}
        return True, None

    @api.get("/health")
    def health():
        return {"status": "ok", "service": SERVICE_NAME, "version": __version__}

    @api.get("/ready")
    def ready():
        registry = current_app.config["TEXTSUM_TOOLS"]
        tools = registry.list_tools()
        if not tools:
            return {"status": "unready", "service": SERVICE_NAME, "reason": "no_tools"}, 503
        return {"status": "ready", "service": SERVICE_NAME, "tools": len(tools)}

    @api.get("/metrics")
    def metrics():
        if os.getenv("TEXTSUM_METRICS_ENABLED", "1") != "1":
            return {"status": "disabled", "service": SERVICE_NAME}, 503
        ok, err = require_bearer()
        if not ok:
            return jsonify(err), 401
        registry = current_app.config["TEXTSUM_METRICS_REGISTRY"]
        return Response(generate_latest(registry), mimetype=CONTENT_TYPE_LATEST)

    @api.get("/v1/tools")
    def tools_list():
        ok, err = require_bearer()
        if not ok:
            return jsonify(err), 401
        registry = current_app.config["TEXTSUM_TOOLS"]
        return jsonify({"tools": registry.describe()}), 200

    @api.post("/v1/tools/call")
    @_limit_route
    def tools_call():
        ok, err = require_bearer()
        if not ok:
            return jsonify(err), 401

        payload = request.get_json(force=True, silent=True)
        if not isinstance(payload, dict):
            return _error("JSON object body required", "validation_error", 400)
        tool_name = payload.get("name")
        if not tool_name or not isinstance(tool_name, str):
            return _error("Tool name required", "validation_error", 400)

        registry = current_app.config["TEXTSUM_TOOLS"]
        try:
            result = registry.call(
                tool_name,
                payload.get("arguments"),
                request_id=getattr(g, "request_id", None),
            )
        except ToolError as exc:
            status = _ERROR_STATUS.get(exc.code, 500)
            return jsonify({"error": exc.to_dict()}), status
        return jsonify(result), 200

    app.register_blueprint(api)
    return api
