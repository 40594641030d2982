"""TicketQ configuration constants.

This module contains the defaults used by the scheduling engine.
Callers can override them by passing parameters to ``SchedulingEngine``.
"""

PRIORITY_BOOST_THRESHOLD = 2
"""Consecutive NORMAL services after which the oldest URGENT ticket is pulled ahead."""

MIN_BOOST_THRESHOLD = 1
"""Smallest accepted value for a custom boost threshold."""
