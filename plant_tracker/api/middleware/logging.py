# 📄 File: plant_tracker/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Gives every request a tracking number and writes down how long it took, so a problem
# in the logs can be traced back to the request that caused it.
# 🧪 Purpose (Technical Summary):
# Request logging middleware binding request/user ids into the logging contextvars for
# the whole request and recording timing through PerformanceLogger.log_request.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, plant_tracker.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# plant_tracker.main (middleware registration)

import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from plant_tracker.shared.utils.logging import get_logger, log_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
USER_KEY_HEADER = "X-User-Key"
EXCLUDED_PATHS = {"/health/live", "/favicon.ico"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Correlates logs per request.

    An incoming X-Request-ID is reused, otherwise one is generated; it is
    echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        user_key = request.headers.get(USER_KEY_HEADER) or None

        with log_context(request_id=request_id, user_id=user_key):
            start_time = time.time()
            response = await call_next(request)
            duration_ms = (time.time() - start_time) * 1000

            if request.url.path not in EXCLUDED_PATHS:
                logger.performance.log_request(
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=duration_ms,
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
