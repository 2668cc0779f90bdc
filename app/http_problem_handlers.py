# app/http_problem_handlers.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.services.shipping_fee.messages import FeeMessage

logger = logging.getLogger("shipfee")


def _new_trace_id() -> str:
    return f"t_{uuid.uuid4().hex[:12]}"


def envelope(success: bool, message: str, data: Any = None) -> Dict[str, Any]:
    return {"success": success, "message": message, "data": data}


def _field_from_loc(loc: Any) -> str:
    """
    ("body", "weight") -> "weight"; ("path", "province_id") -> "province_id";
    ("body",) / JSON decode position -> "body"
    """
    if not isinstance(loc, (list, tuple)) or not loc:
        return "request"
    parts = [str(p) for p in loc if not isinstance(p, int)]
    if len(parts) > 1 and parts[0] in ("body", "path", "query"):
        parts = parts[1:]
    return ".".join(parts) or "request"


def _field_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    out: List[Dict[str, str]] = []
    for e in exc.errors():
        if not isinstance(e, dict):
            continue
        out.append(
            {
                "field": _field_from_loc(e.get("loc")),
                "message": str(e.get("msg") or e.get("type") or "invalid"),
            }
        )
    return out


def register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves as a {success, message, data} envelope."""

    @app.exception_handler(Exception)
    async def _unhandled_exc(req: Request, exc: Exception):
        trace_id = _new_trace_id()
        logger.exception("UNHANDLED_EXC[%s] %s %s: %s", trace_id, req.method, req.url.path, exc)
        return JSONResponse(
            status_code=500,
            content=envelope(False, "Internal server error", {"trace_id": trace_id}),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(req: Request, exc: RequestValidationError):
        errors = _field_errors(exc)
        logger.warning("request validation failed %s %s: %s", req.method, req.url.path, errors)
        return JSONResponse(
            status_code=400,
            content=envelope(False, FeeMessage.VALIDATION_FAILED, {"errors": errors}),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc(_req: Request, exc: StarletteHTTPException):
        detail: Optional[Any] = exc.detail
        message = detail if isinstance(detail, str) else "Request rejected"
        return JSONResponse(
            status_code=int(exc.status_code),
            content=envelope(False, message),
            headers=getattr(exc, "headers", None),
        )
