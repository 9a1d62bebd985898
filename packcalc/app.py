"""Application wiring and the command that starts the HTTP server."""

from __future__ import annotations

import argparse
import logging
import re
import sys
import time
from pathlib import Path

from flask import Flask, Response, g, request

from packcalc.api import Handler
from packcalc.cache import PackCache
from packcalc.calculator import Calculator
from packcalc.config import Config, ConfigError, load_config

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET,HEAD,PUT,PATCH,POST,DELETE"


def configure_logging() -> logging.Logger:
    """Send INFO and above to stderr with ISO 8601 timestamps."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s\t%(levelname)s\t%(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.INFO)
    return root


def _match_origin(allowed: list[str], origin: str) -> str | None:
    """Return the value for Access-Control-Allow-Origin, or None if not allowed."""
    for candidate in allowed:
        if candidate == "*" or candidate == origin:
            return candidate
    for candidate in allowed:
        if "*" not in candidate and "?" not in candidate:
            continue
        pattern = re.escape(candidate).replace(r"\*", ".*").replace(r"\?", ".")
        if re.fullmatch(pattern, origin):
            return origin
    return None


def _install_cors(app: Flask, allowed: list[str]) -> None:
    @app.before_request
    def _preflight() -> Response | None:
        if request.method != "OPTIONS":
            return None
        response = Response(status=204)
        response.vary.update(
            ["Origin", "Access-Control-Request-Method", "Access-Control-Request-Headers"]
        )
        origin = request.headers.get("Origin", "")
        allow_origin = _match_origin(allowed, origin) if origin else None
        if allow_origin is None:
            return response
        response.headers["Access-Control-Allow-Origin"] = allow_origin
        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        requested = request.headers.get("Access-Control-Request-Headers")
        if requested:
            response.headers["Access-Control-Allow-Headers"] = requested
        return response

    @app.after_request
    def _simple(response: Response) -> Response:
        if request.method == "OPTIONS":
            return response
        response.vary.add("Origin")
        origin = request.headers.get("Origin", "")
        allow_origin = _match_origin(allowed, origin) if origin else None
        if allow_origin is not None:
            response.headers["Access-Control-Allow-Origin"] = allow_origin
        return response


def _install_request_logging(app: Flask) -> None:
    @app.before_request
    def _start_timer() -> None:
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response: Response) -> Response:
        started = g.get("request_started")
        latency = time.perf_counter() - started if started is not None else 0.0
        uri = request.path
        if request.query_string:
            uri = f"{uri}?{request.query_string.decode('latin-1')}"
        request_id = request.headers.get("X-Request-Id") or response.headers.get(
            "X-Request-Id", ""
        )
        logger.info(
            "request protocol=%s remote_ip=%s method=%s uri=%s request_id=%s "
            "referer=%s user_agent=%s status=%d content_length=%s "
            "response_size=%d latency=%.6fs",
            request.environ.get("SERVER_PROTOCOL", ""),
            request.remote_addr or "",
            request.method,
            uri,
            request_id,
            request.referrer or "",
            request.user_agent.string,
            response.status_code,
            request.headers.get("Content-Length", ""),
            response.content_length or 0,
            latency,
        )
        return response


def create_app(config: Config, index_path: str | Path | None = None) -> Flask:
    """Build the Flask application with CORS, request logging and API routes."""
    app = Flask(__name__, static_folder=None)
    _install_request_logging(app)
    _install_cors(app, [config.cors_origin])

    handler = Handler(
        Calculator(config.order_size_limit), PackCache(), index_path=index_path
    )
    handler.register_routes(app)
    return app


def main(argv: list[str] | None = None) -> int:
    """Start the HTTP server on the port given by the environment."""
    parser = argparse.ArgumentParser(
        prog="packcalc", description="Serve the order packs calculator over HTTP."
    )
    parser.parse_args(argv)

    configure_logging()

    try:
        config = load_config()
    except ConfigError as exc:
        logger.critical("failed to create config: %s", exc)
        return 1

    try:
        port = int(config.port)
        if not 0 <= port <= 65535:
            raise ValueError(f"port out of range: {port}")
    except ValueError as exc:
        logger.critical("Failed to run HTTP server: %s", exc)
        return 1

    app = create_app(config)
    try:
        app.run(host="0.0.0.0", port=port)
    except OSError as exc:
        logger.critical("Failed to run HTTP server: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())