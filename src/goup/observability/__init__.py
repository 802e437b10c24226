"""
goup.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context middleware.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Metrics/tracing exporters would live alongside logging here.
