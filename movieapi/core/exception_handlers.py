import logging
import traceback
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

from .exceptions import InternalServerError

logger = logging.getLogger("movieapi")


def _request_context(request: Request) -> Dict[str, Any]:
    client = request.client.host if request.client else "-"
    return {
        "method": request.method,
        "url": str(request.url),
        "client": client,
    }


async def handle_base_api_exception(request, exc):
    ctx = _request_context(request)
    if getattr(exc, "status_code", 500) >= 500:
        logger.error(
            f"[BaseAPIException] {ctx['method']} {ctx['url']} from {ctx['client']} -> {exc.status_code}: {exc.detail}"
        )
    else:
        logger.warning(
            f"[BaseAPIException] {ctx['method']} {ctx['url']} from {ctx['client']} -> {exc.status_code}: {exc.detail}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.detail,  # type: ignore[arg-type]
        headers=getattr(exc, "headers", None),
    )


async def handle_http_exception(request, exc):
    ctx = _request_context(request)

    error_msg = f"[HTTPException] {ctx['method']} {ctx['url']} from {ctx['client']} -> {exc.status_code}: {exc.detail}"

    if getattr(exc, "status_code", 500) >= 500:
        tb_str = ''.join(traceback.format_tb(exc.__traceback__))
        logger.error(f"{error_msg}\n\nStack Trace:\n{tb_str}")
    else:
        logger.warning(error_msg)
    # Already an envelope (e.g. from BaseAPIException): pass through
    if isinstance(exc.detail, dict) and "success" in exc.detail:  # type: ignore[truthy-bool]
        content = exc.detail  # type: ignore[assignment]
    else:
        content = {"success": False, "message": str(exc.detail)}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request, exc):
    ctx = _request_context(request)
    logger.warning(
        f"[ValidationError] {ctx['method']} {ctx['url']} from {ctx['client']} -> 400: {exc.errors()}"
    )
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    content = {
        "success": False,
        "message": "Invalid request",
        "error": f"{location}: {first.get('msg')}" if location else str(first.get("msg", "")),
    }
    return JSONResponse(status_code=400, content=content)


async def handle_unexpected_error(request, exc):
    ctx = _request_context(request)

    tb_str = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(
        f"[Unhandled Error] {ctx['method']} {ctx['url']} from {ctx['client']}\n"
        f"Exception Type: {type(exc).__name__}\n"
        f"Exception Message: {str(exc)}\n\n"
        f"Full Stack Trace:\n{tb_str}"
    )

    internal = InternalServerError(error=str(exc))
    return JSONResponse(status_code=internal.status_code, content=internal.detail)  # type: ignore[arg-type]
