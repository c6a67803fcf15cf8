import logging
import time
from fastapi import HTTPException, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

# Use the package logger so it goes to the configured handlers
logger = logging.getLogger("movieapi")


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        method = request.method
        url = str(request.url)
        client = request.client.host if request.client else "-"

        logger.info(f"[Request] {method} {url} from {client}")
        try:
            response = await call_next(request)
        except HTTPException as http_exc:
            # Log HTTP exceptions; escalate 5xx as errors
            if http_exc.status_code >= 500:
                logger.error(
                    f"[HTTPException] {method} {url} from {client} -> {http_exc.status_code}: {http_exc.detail}"
                )
            else:
                logger.warning(
                    f"[HTTPException] {method} {url} from {client} -> {http_exc.status_code}: {http_exc.detail}"
                )
            raise
        except Exception:
            # Log unexpected exceptions with full traceback
            logger.exception(f"[Unhandled Error] {method} {url} from {client}")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        # Set by the auth gate on authenticated routes
        user = getattr(request.state, "user", None)
        who = f"user {user.id}" if user is not None else client
        line = f"[Response] {method} {url} from {who} -> {response.status_code} in {duration_ms:.1f}ms"

        if response.status_code >= 500:
            logger.error(line)
        elif response.status_code >= 400:
            logger.warning(line)
        else:
            logger.info(line)
        return response
