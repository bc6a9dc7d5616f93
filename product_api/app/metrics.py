from prometheus_client import Counter, Histogram
from starlette.requests import Request

REQS = Counter("http_requests_total", "Total HTTP requests", ["service", "path", "method", "status"])
LAT  = Histogram("http_request_duration_seconds", "Request latency", ["service", "path", "method"])

UNMATCHED = "unmatched"

def route_label(request: Request) -> str:
    """
    Path label for a finished request: the matched route template
    (e.g. /api/Product/{id}), so per-id URLs share one series.
    """
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED)
