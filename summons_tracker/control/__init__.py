"""Editing control: read-validate-write service and activity diffs."""

from .activity import ActivityAction, ActivityEntry, diff_changes
from .editor import StoreWriteError, SummonsEditor

__all__ = [
    'ActivityAction',
    'ActivityEntry',
    'diff_changes',
    'StoreWriteError',
    'SummonsEditor',
]
