"""
Contains custom FastAPI middleware for the pump decoder daemon.

Middleware functions in this module intercept HTTP requests for metrics
collection.
"""

import time

from fastapi import Request

from pump_daemon.metrics import HTTP_LATENCY, HTTP_REQUESTS


async def prometheus_http_middleware(request: Request, call_next):
    """
    Records request count and latency, labeled by method, request path and
    status code. The path is the full mounted path, e.g. /api/decode.

    Args:
        request: The incoming FastAPI Request object.
        call_next: A function to call to process the request and get the response.

    Returns:
        The response object from the next handler in the chain.
    """
    start = time.perf_counter()
    response = await call_next(request)
    latency = time.perf_counter() - start

    endpoint = request.url.path
    HTTP_REQUESTS.labels(
        method=request.method, endpoint=endpoint, status_code=response.status_code
    ).inc()
    HTTP_LATENCY.labels(method=request.method, endpoint=endpoint).observe(latency)
    return response
