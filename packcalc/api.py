"""HTTP handlers for the packing calculator."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from flask import Flask, Response, jsonify, request, send_file

from packcalc.cache import PackCache
from packcalc.calculator import Calculator, Packing, PackingError

logger = logging.getLogger(__name__)

MAX_VALUE = 1000000


def _field(payload: Mapping[str, Any], name: str) -> Any:
    """Look up a JSON field, preferring an exact name over a case-insensitive one."""
    if name in payload:
        return payload[name]
    folded = name.casefold()
    value = None
    for key, candidate in payload.items():
        if isinstance(key, str) and key.casefold() == folded:
            value = candidate
    return value


def _as_int(name: str, value: Any) -> int:
    """Convert a decoded JSON value to an integer; null counts as zero."""
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value


def _check_range(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero")
    if value > MAX_VALUE:
        raise ValueError(f"{name} must not exceed {MAX_VALUE}")


@dataclass(frozen=True)
class CalculateRequest:
    """A validated request body for the packing calculation."""

    ordered_items: int
    box_sizes: tuple[int, ...]

    @classmethod
    def from_json(cls, payload: Any) -> CalculateRequest:
        """Validate a decoded JSON body; raise ValueError when it is unacceptable."""
        if not isinstance(payload, Mapping):
            raise ValueError("request body must be a JSON object")

        ordered_items = _as_int("orderedItems", _field(payload, "orderedItems"))
        if ordered_items == 0:
            raise ValueError("orderedItems is required")
        _check_range("orderedItems", ordered_items)

        raw_sizes = _field(payload, "boxSizes")
        if raw_sizes is None:
            raise ValueError("boxSizes is required")
        if not isinstance(raw_sizes, list):
            raise ValueError("boxSizes must be a list of integers")

        box_sizes = tuple(_as_int("boxSizes", size) for size in raw_sizes)
        if len(set(box_sizes)) != len(box_sizes):
            raise ValueError("boxSizes must be unique")
        for size in box_sizes:
            _check_range("boxSizes", size)

        return cls(ordered_items=ordered_items, box_sizes=box_sizes)


def _text(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _packing_json(result: list[Packing]) -> Response:
    return jsonify([packing.to_dict() for packing in result])


class Handler:
    """Serves the index page and the packing calculation endpoint."""

    def __init__(
        self,
        calculator: Calculator,
        cache: PackCache,
        index_path: str | Path | None = None,
    ) -> None:
        self.calculator = calculator
        self.cache = cache
        self.index_path = Path(index_path) if index_path is not None else None

    def register_routes(self, app: Flask) -> None:
        """Attach the API routes to ``app``."""
        app.add_url_rule(
            "/", endpoint="index", view_func=self._handle_index, methods=["GET"]
        )
        app.add_url_rule(
            "/calculate",
            endpoint="calculate",
            view_func=self._handle_calculation,
            methods=["POST"],
        )

    def _resolve_index(self) -> Path:
        if self.index_path is not None:
            return self.index_path
        return Path.cwd() / "public" / "index.html"

    def _handle_index(self) -> Response:
        try:
            path = self._resolve_index()
        except OSError:
            return _text("Failed to get current directory", 500)

        if not path.is_file():
            response = jsonify({"message": "Not Found"})
            response.status_code = 404
            return response
        return send_file(path.resolve())

    def _handle_calculation(self) -> Response:
        payload = request.get_json(silent=True)
        try:
            req = CalculateRequest.from_json(payload)
        except ValueError as exc:
            logger.error("validation failed: %s", exc)
            return _text("Invalid request", 400)

        cached = self.cache.get(req.ordered_items, *req.box_sizes)
        if cached is not None:
            return _packing_json(cached)

        try:
            result = self.calculator.calculate_packing(
                req.ordered_items, *req.box_sizes
            )
        except PackingError as exc:
            logger.error("failed to calculate packing: %s", exc)
            return _text("Failed to calculate packing", 500)

        self.cache.set(req.ordered_items, req.box_sizes, result)
        return _packing_json(result)