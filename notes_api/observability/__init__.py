"""Request instrumentation for the notes service.

Correlation ids + structlog contextvars, JSON access logs, and a per-app
prometheus registry exposed at /metrics.
"""
