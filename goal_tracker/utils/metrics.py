"""
Prometheus metrics for API monitoring and goal lifecycle tracking.

Copyright (C) 2025 Goal Tracker

Licensed under the Business Source License 1.1 (BUSL-1.1).
"""

from prometheus_client import REGISTRY, Counter, Histogram

# Request metrics - labeled by method and path
REQUEST_COUNTER = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path"],
    registry=REGISTRY,
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path"],
    registry=REGISTRY,
)

# Goal lifecycle - labeled by operation (create, finish, discard, delete)
GOAL_MUTATIONS = Counter(
    "goal_mutations_total",
    "Total number of successful goal mutations",
    ["operation"],
    registry=REGISTRY,
)

GOALS_AUTO_DISCARDED = Counter(
    "goals_auto_discarded_total",
    "Total number of goals discarded because their deadline expired",
    registry=REGISTRY,
)
