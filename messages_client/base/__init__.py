"""Base layer: models, DTOs, errors, logging, timeouts and HTTP pooling.

Nothing in this package performs Messages API I/O; the ``messages`` package
builds on it.
"""
