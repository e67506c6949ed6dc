"""
badgermole.services

Service layer.

Responsibilities:
- Web-side OTP redemption decision logic, independent of HTTP mechanics.
"""

# Package marker.
