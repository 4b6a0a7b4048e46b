"""JSON envelope helpers and the error boundary shared by every controller.

Every response has the shape
``{"success": bool, "data" | "error": ..., "message"?, "details"?, "pagination"?, "summary"?}``.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Optional, Type, TypeVar

from flask import Flask, jsonify, request
from mysql.connector import IntegrityError
from mysql.connector.errorcode import ER_DUP_ENTRY
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .pagination import Page
from .serialization import to_json

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def ok(
    data: Any = None,
    *,
    message: Optional[str] = None,
    status: int = 200,
    page: Optional[Page] = None,
    summary: Optional[dict] = None,
):
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = to_json(data)
    if message:
        body["message"] = message
    if page is not None:
        body["pagination"] = page.meta()
    if summary is not None:
        body["summary"] = to_json(summary)
    return jsonify(body), status


def fail(error: str, *, status: int, details: Any = None, data: Any = None):
    body: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        body["details"] = details
    if data is not None:
        body["data"] = to_json(data)
    return jsonify(body), status


def schema_details(exc: SchemaError) -> list[dict]:
    return [
        {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]


def parse_body(schema: Type[M]) -> M:
    payload = request.get_json(silent=True)
    return schema.model_validate(payload if payload is not None else {})


def parse_query(schema: Type[M]) -> M:
    return schema.model_validate(request.args.to_dict())


def json_errors(failure_message: str) -> Callable:
    """Map domain errors to HTTP statuses; anything else is logged and becomes a 500."""

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except SchemaError as e:
                return fail("Invalid input data", status=400, details=schema_details(e))
            except ValidationError as e:
                return fail(str(e), status=400, data=e.data)
            except NotFoundError as e:
                return fail(str(e), status=404, data=e.data)
            except ConflictError as e:
                return fail(str(e), status=409)
            except IntegrityError as e:
                # Unique index hit by a concurrent insert.
                if e.errno == ER_DUP_ENTRY:
                    logger.warning("Duplicate key on %s %s: %s", request.method, request.path, e.msg)
                    return fail("Record already exists", status=409)
                logger.exception("%s (%s %s)", failure_message, request.method, request.path)
                return fail(failure_message, status=500)
            except Exception:
                logger.exception("%s (%s %s)", failure_message, request.method, request.path)
                return fail(failure_message, status=500)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(_e):
        return fail("Resource not found", status=404)

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return fail("Method not allowed", status=405)
