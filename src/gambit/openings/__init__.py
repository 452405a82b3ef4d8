"""Opening-statistics lookups."""

from gambit.openings.client import OpeningExplorerClient
from gambit.openings.models import OpeningMove, OpeningStats

__all__ = ["OpeningExplorerClient", "OpeningMove", "OpeningStats"]
