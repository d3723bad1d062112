import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import structlog
from uuid import uuid4

logger = structlog.get_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid4())
        start_time = time.time()

        # Every log line emitted while handling this request carries these
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method
        )

        log_data = {
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent", "")[:100],  # Truncate long user agents
        }
        if request.query_params:
            log_data["query_params"] = dict(request.query_params)

        logger.info("API Request Started", **log_data)

        request.state.request_id = request_id
        request.state.start_time = start_time

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "API Request Failed",
                error=str(e),
                process_time=round(process_time, 4)
            )
            raise

        process_time = time.time() - start_time

        response_log_data = {
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
        }

        if response.status_code >= 400:
            logger.warning("API Request Completed with Error", **response_log_data)
        else:
            logger.info("API Request Completed Successfully", **response_log_data)

        response.headers["X-Request-ID"] = request_id
        return response
