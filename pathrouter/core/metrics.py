from prometheus_client import (
    Counter,
    Gauge,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST
)

registry = CollectorRegistry()

ROUTE_MATCHES = Counter(
    "router_matches_total",
    "Requests matched to a route pattern",
    ["pattern"],
    registry=registry
)

ROUTE_MISSES = Counter(
    "router_misses_total",
    "Requests that matched no route",
    registry=registry
)

REGISTERED_ROUTES = Gauge(
    "router_registered_routes",
    "Number of routes in the served route table",
    registry=registry
)


def render_prometheus_metrics() -> tuple[bytes, str]:
    return generate_latest(registry), CONTENT_TYPE_LATEST
