"""
Request logging middleware: assigns request ids, times requests and logs
slow or failed ones.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Sets request.state.request_id, echoes it as X-Request-ID and reports
    the processing time as X-Processing-Time.
    """
    
    def __init__(self, app: ASGIApp, slow_request_threshold: float = 1.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold
    
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.time()
        
        try:
            response = await call_next(request)
        except Exception as exc:
            processing_time = time.time() - start_time
            logger.error(
                f"Request error [{request_id}]: {type(exc).__name__} - {str(exc)} "
                f"(processing_time: {processing_time:.3f}s)",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "processing_time": processing_time,
                    "error_type": type(exc).__name__
                },
                exc_info=True
            )
            raise
        
        processing_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        
        message = (
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"[{request_id}] in {processing_time:.3f}s"
        )
        if processing_time > self.slow_request_threshold:
            logger.warning(f"Slow request: {message}")
        elif response.status_code >= 500:
            logger.error(message)
        else:
            logger.info(message)
        
        return response
