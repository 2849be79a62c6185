"""
Member Discipline - penalty tracking core for a student organization

Tracks notifications, warnings (advertências) and bans for members of the
organization, escalating notifications into warnings and warnings into
bans automatically, with privileged overrides and counter resets.

Operating Rules:
- Every mutation is attributed and leaves an action log entry
- Escalation thresholds are fixed: 3 notifications -> 1 warning, 3 warnings -> ban
- Nobody disciplines themselves
- Concurrent edits are resolved by optimistic retries, never by overwrite
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
