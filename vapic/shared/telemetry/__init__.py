"""Shared telemetry: logging setup and tracing helpers."""

from vapic.shared.telemetry.logging import setup_logging
from vapic.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "add_span_attributes",
    "setup_logging",
    "traced",
]
