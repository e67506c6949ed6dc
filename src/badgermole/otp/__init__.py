"""
badgermole.otp

One-time password package.

Responsibilities:
- Credential model and its SSH-side renderings.
- The concurrent in-memory OTP store (issue / resolve / remove / sweep).
- The background expiry sweeper.
"""

from badgermole.otp.models import Credential
from badgermole.otp.store import MemoryOtpStore, OtpStore
from badgermole.otp.sweeper import ExpirySweeper

__all__ = ["Credential", "ExpirySweeper", "MemoryOtpStore", "OtpStore"]
