"""Public entry points for trip matching, endpoint snapping and selection."""

from .scoring import best_matches, match_score
from .selection import should_auto_select
from .snapping import snap_endpoints

__all__ = [
    "best_matches",
    "match_score",
    "should_auto_select",
    "snap_endpoints",
]
