"""
Shared OTel span event emission helper.

Consumers record their operations as events on the caller's current span,
so a datalayer call shows up inside whatever trace invoked it. Nothing is
recorded when no span is active or the active span is not recording.

Usage::

    from datalayer._otel_helpers import add_span_event

    add_span_event("datalayer.record.removed", {"record.id": 2})
"""

from __future__ import annotations

from opentelemetry import trace as otel_trace


def add_span_event(
    name: str, attributes: dict[str, str | int | float | bool]
) -> None:
    """Add an event to the current OTel span if it is recording.

    Args:
        name: Event name (e.g. ``"datalayer.record.removed"``).
        attributes: Flat dict of span event attributes.
    """
    span = otel_trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name=name, attributes=attributes)
