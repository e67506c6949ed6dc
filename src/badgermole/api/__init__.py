"""
badgermole.api

API package for the badgermole web side.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: form parsing + session cookie + delegation to services.
