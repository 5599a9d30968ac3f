"""
Fetch modes and outcomes shared by the refresh and detail controllers.
"""

from enum import Enum


class FetchMode(str, Enum):
    FOREGROUND = "foreground"  # user action, shows the loading indicator
    BACKGROUND = "background"  # timer tick, never touches the indicator


class FetchOutcome(str, Enum):
    APPLIED = "applied"
    DISCARDED = "discarded"  # superseded by a newer request
    FAILED = "failed"
    SKIPPED = "skipped"      # rejected before any request was issued
