"""Prometheus metrics for monitoring quote volume, premiums, validation failures and caches"""

from decimal import Decimal

from prometheus_client import Counter, Histogram

# Quote metrics
quote_counter = Counter(
    "quote_generated_total",
    "Total quotes generated and persisted",
)

premium_estimate_counter = Counter(
    "quote_premium_estimate_total",
    "Premium estimates served without persistence",
)

final_premium_histogram = Histogram(
    "quote_final_premium_dollars",
    "Annual final premium of generated quotes",
    buckets=[250, 500, 750, 1000, 1500, 2500, 5000, 10000],
)

quote_failure_counter = Counter(
    "quote_failures_total",
    "Quote operations rejected or failed",
    ["reason"],  # invalid_request | not_found | invalid_argument | persistence
)

# Cache metrics
cache_hit_counter = Counter(
    "quote_cache_hits_total",
    "Cache lookups served from memory",
    ["cache"],
)

cache_miss_counter = Counter(
    "quote_cache_misses_total",
    "Cache lookups that fell through",
    ["cache"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_quote(final_premium: Decimal) -> None:
    """Record a generated quote and its premium for distribution analysis"""
    quote_counter.inc()
    final_premium_histogram.observe(float(final_premium))


def record_failure(reason: str) -> None:
    quote_failure_counter.labels(reason=reason).inc()
