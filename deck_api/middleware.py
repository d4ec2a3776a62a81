import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from uuid6 import uuid7

from deck_api.logging_utils import correlation_id

CORRELATION_HEADER = "X-Correlation-ID"


def add_request_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def correlation_and_logging(request: Request, call_next):
        """Tag the request with a correlation id and log its outcome."""
        request_id = request.headers.get(CORRELATION_HEADER) or str(uuid7())
        token = correlation_id.set(request_id)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                logging.exception(f"Unhandled error in {request.method} {request.url.path}")
                response = JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content={"title": "Internal Server Error", "status": 500},
                    media_type="application/problem+json",
                )
            elapsed_ms = (time.perf_counter() - started) * 1000
            logging.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
            )
            response.headers[CORRELATION_HEADER] = request_id
            return response
        finally:
            correlation_id.reset(token)
