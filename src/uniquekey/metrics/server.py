"""HTTP server for Prometheus metrics endpoint."""

from __future__ import annotations

import logging

from prometheus_client import start_http_server

logger = logging.getLogger(__name__)


def start_metrics_server(port: int = 9090, addr: str = "0.0.0.0") -> None:
    """Expose allocation counters on ``http://<addr>:<port>/metrics``.

    The server runs in a daemon thread, so a one-shot ``uniquekey generate``
    only serves metrics while it is running.
    """
    start_http_server(port, addr=addr)
    logger.info("Prometheus metrics server listening on %s:%d", addr, port)
