import json
import logging
import os
import time
import uuid

from dotenv import load_dotenv
from flask import Flask, g, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from prometheus_client import CollectorRegistry, Counter, Histogram

from text_summarizer.http_routes import register_routes
from text_summarizer.observability import get_current_trace_context, init_otel
from text_summarizer.tools import build_registry

load_dotenv()

logger = logging.getLogger("text_summarizer")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - logging
        base = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": int(record.created * 1000),
        }
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            base.update(record.extra)
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, separators=(",", ":"))


def configure_logging() -> None:
    level = os.getenv("TEXTSUM_LOG_LEVEL", "INFO").upper()
    log_json = os.getenv("TEXTSUM_LOG_JSON", "1") == "1"
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if log_json else logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)


def create_app() -> Flask:
    configure_logging()

    app = Flask(__name__)
    init_otel(app)
    app.config["MAX_CONTENT_LENGTH"] = int(os.getenv("TEXTSUM_MAX_REQUEST_BYTES", "1048576"))

    rate_limit_enabled = os.getenv("TEXTSUM_RATE_LIMIT_ENABLED", "1") == "1"
    rate_limit = os.getenv("TEXTSUM_RATE_LIMIT", "60 per minute")
    storage_url = os.getenv("TEXTSUM_RATE_LIMIT_STORAGE_URL") or "memory://"
    limiter = (
        Limiter(
            app=app,
            key_func=get_remote_address,
            default_limits=[rate_limit],
            storage_uri=storage_url,
        )
        if rate_limit_enabled
        else None
    )

    metrics_registry = CollectorRegistry(auto_describe=True)
    request_count = Counter(
        "textsum_requests_total",
        "Total requests",
        ["route", "method", "status"],
        registry=metrics_registry,
    )
    request_latency = Histogram(
        "textsum_request_latency_seconds",
        "Request latency",
        ["route", "method"],
        registry=metrics_registry,
    )
    error_count = Counter(
        "textsum_errors_total",
        "Total errors",
        ["route", "method", "status"],
        registry=metrics_registry,
    )
    tool_calls = Counter(
        "textsum_tool_calls_total",
        "Tool calls by outcome",
        ["tool", "outcome"],
        registry=metrics_registry,
    )

    app.config["TEXTSUM_LIMITER"] = limiter
    app.config["TEXTSUM_RATE_LIMIT"] = rate_limit
    app.config["TEXTSUM_METRICS_REGISTRY"] = metrics_registry
    app.config["TEXTSUM_TOOLS"] = build_registry(call_counter=tool_calls)

    @app.before_request
    def start_request():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        g.request_start = time.time()
        otel_context = get_current_trace_context()
        if otel_context:
            g.otel_trace_id = otel_context.get("trace_id")

    @app.after_request
    def finalize_request(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers["X-Request-ID"] = request_id
        route = request.url_rule.rule if request.url_rule else request.path
        method = request.method
        status = str(response.status_code)
        duration = time.time() - getattr(g, "request_start", time.time())
        request_count.labels(route, method, status).inc()
        request_latency.labels(route, method).observe(duration)
        if response.status_code >= 500:
            error_count.labels(route, method, status).inc()

        logger.info(
            "request",
            extra={
                "extra": {
                    "request_id": request_id,
                    "route": route,
                    "method": method,
                    "status": response.status_code,
                    "latency_ms": int(duration * 1000),
                    "otel_trace_id": getattr(g, "otel_trace_id", None),
                }
            },
        )
        return response

    register_routes(app)
    return app


if __name__ == "__main__":
    port = int(os.getenv("TEXTSUM_PORT", "8088"))
    host = os.getenv("TEXTSUM_HOST", "127.0.0.1")
    create_app().run(host=host, port=port, debug=False)
