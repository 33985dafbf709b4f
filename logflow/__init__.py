"""
LogFlow - Temporary Log Level Override Engine

Lets an operator elevate the log severity of running services for a
bounded window, expire those overrides back to a safe default, and keep
every open UI instance in agreement about which overrides are live.

Operating Rules:
- Every override is time-bounded; nothing is indefinite
- Local state is optimistic; the backend is never waited on
- Cross-tab state converges last-write-wins
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
