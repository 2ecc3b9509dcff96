"""
Error types raised at the I/O boundary.

Expected outcomes like "no goal yet" or "already logged today" are not
errors; they are Outcome kinds.
"""


class StreakAgentError(Exception):
    """Base class for Streak Agent errors."""


class StoreUnavailable(StreakAgentError):
    """User record store could not be read or written."""


class DeliveryFailed(StreakAgentError):
    """Outbound message was rejected or could not be sent."""


class PhrasingGeneratorFailed(StreakAgentError):
    """AI phrasing call failed; callers fall back to static phrases."""
