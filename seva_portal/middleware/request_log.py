# seva_portal/middleware/request_log.py
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("seva_portal.requests")

class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.time()
        status = 500    # stays 500 when the app raises
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            logger.info(
                "%s %s -> %s (%dms) ip=%s",
                request.method,
                request.url.path,
                status,
                int((time.time() - start) * 1000),
                request.client.host if request.client else None,
            )
