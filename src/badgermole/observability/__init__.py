"""
badgermole.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request/session context propagation for consistent log enrichment.
"""

# Package marker.
