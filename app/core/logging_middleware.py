import logging
import json
import time
import random
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Configure a specific logger for structured events
# We don't propagate to the root logger to avoid double logging if root captures everything
structured_logger = logging.getLogger("api.structured_log")
structured_logger.propagate = False

# Fallback handler for when logging.ini has not configured this logger
if not structured_logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(message)s"
    )  # Raw message only (which will be JSON)
    handler.setFormatter(formatter)
    structured_logger.addHandler(handler)
    structured_logger.setLevel(logging.INFO)


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to implement wide-event structured logging with tail sampling.

    Rules:
    1. Always log errors (Status >= 500)
    2. Always log slow requests (> 500ms)
    3. Sample 5% of everything else
    """

    SLOW_THRESHOLD_MS = 500
    SAMPLE_RATE = 0.05

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = None
        error_details = None
        status_code = 500  # Default to 500 if exception occurs

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            error_details = str(e)
            raise e  # Re-raise exception after capturing it
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            should_log = False

            # Rule 1: Always log errors
            if status_code >= 500:
                should_log = True

            # Rule 2: Always keep slow requests
            elif duration_ms > self.SLOW_THRESHOLD_MS:
                should_log = True

            # Rule 3: Randomly sample 5%
            elif random.random() < self.SAMPLE_RATE:
                should_log = True

            if should_log:
                log_payload = {
                    "timestamp": time.time(),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                    "client_ip": request.client.host if request.client else None,
                    "user_agent": request.headers.get("user-agent"),
                    "query_params": dict(request.query_params),
                    "error": error_details,
                    # Set by the create endpoint once the recipe is committed
                    "recipe_id": getattr(request.state, "recipe_id", None),
                }

                structured_logger.info(json.dumps(log_payload))

        return response
