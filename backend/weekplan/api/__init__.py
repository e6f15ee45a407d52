"""API routers."""

from weekplan.api import schedule

__all__ = [
    "schedule",
]
