"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/priority values.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task lifecycle status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """
    Task priority.

    MUST = Has to happen this week, allocated first
    WANT = Nice to have, fills the remaining capacity
    """

    MUST = "must"
    WANT = "want"
