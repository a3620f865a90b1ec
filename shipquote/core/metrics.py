"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry, generate_latest

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

cache_hits = Counter(
    'cache_hits_total',
    'Total cache hits',
    ['cache'],
    registry=registry
)

cache_misses = Counter(
    'cache_misses_total',
    'Total cache misses',
    ['cache'],
    registry=registry
)

quotes_calculated = Counter(
    'quotes_calculated_total',
    'Total quotes calculated',
    ['vehicle_type', 'distance_band', 'delivery_type'],
    registry=registry
)

quote_minimum_applied = Counter(
    'quote_minimum_applied_total',
    'Quotes raised to the minimum quote floor',
    ['accident_recovery'],
    registry=registry
)

quote_total_amount = Histogram(
    'quote_total_dollars',
    'Distribution of quoted totals in dollars',
    buckets=(100, 150, 250, 500, 750, 1000, 1500, 2500, 5000, 10000),
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')
