"""Prometheus metrics for uniquekey."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# Allocation metrics
KEYS_ALLOCATED = Counter("uniquekey_keys_allocated_total", "Keys handed out", ["definition"])
CANDIDATES_REJECTED = Counter(
    "uniquekey_candidates_rejected_total",
    "Candidates discarded because they were already in use",
    ["definition"],
)

# Batch metrics
BATCH_REFRESHES = Counter(
    "uniquekey_batch_refreshes_total",
    "Candidate batches generated and checked",
    ["definition", "reason"],
)

# Store lookup metrics
LOOKUP_FAILURES = Counter("uniquekey_lookup_failures_total", "Failed existence checks")
LOOKUP_DURATION = Histogram(
    "uniquekey_lookup_duration_seconds",
    "Existence check latency in seconds",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5),
)

__all__ = [
    "KEYS_ALLOCATED",
    "CANDIDATES_REJECTED",
    "BATCH_REFRESHES",
    "LOOKUP_FAILURES",
    "LOOKUP_DURATION",
]
