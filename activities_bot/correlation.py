"""Request correlation and logging utilities for Functions Framework and Flask."""
import time
from functools import wraps
from typing import Callable

from flask import Response, request as flask_request

from .observability import get_correlation_id


def with_correlation(logger):
    """Decorator to handle correlation ID and request logging.

    Usage:
        @with_correlation(logger)
        def my_handler(request: Request):
            # correlation_id is available via request.correlation_id
            ...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            req = flask_request
            correlation_id = get_correlation_id(req)
            req.correlation_id = correlation_id
            start_time = time.time()

            logger.info(
                "Request started",
                correlation_id=correlation_id,
                method=req.method,
                path=req.path,
                user_agent=req.headers.get('User-Agent', ''),
                remote_addr=req.headers.get('X-Forwarded-For', '').split(',')[0] if req.headers.get('X-Forwarded-For') else ''
            )

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.time() - start_time) * 1000
                logger.error(
                    "Request failed",
                    error=e,
                    correlation_id=correlation_id,
                    method=req.method,
                    path=req.path,
                    duration_ms=round(duration_ms, 2)
                )
                raise

            duration_ms = (time.time() - start_time) * 1000

            if isinstance(result, Response):
                status_code = result.status_code
            elif isinstance(result, tuple) and len(result) > 1:
                status_code = result[1]
            else:
                status_code = 200

            logger.info(
                "Request completed",
                correlation_id=correlation_id,
                method=req.method,
                path=req.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2)
            )

            if isinstance(result, Response):
                result.headers['X-Correlation-ID'] = correlation_id
                return result

            if isinstance(result, tuple) and len(result) >= 2:
                headers = result[2] if len(result) > 2 and isinstance(result[2], dict) else {}
                headers['X-Correlation-ID'] = correlation_id
                return result[0], result[1], headers

            return result, 200, {'X-Correlation-ID': correlation_id}

        return wrapper
    return decorator
