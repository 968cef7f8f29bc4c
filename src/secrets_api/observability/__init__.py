"""
secrets_api.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation and per-request access logs.
- Security response headers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Metrics/tracing exporters can be added here without touching the service layer.
