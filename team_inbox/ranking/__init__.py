"""Task ranking (ICE scoring)."""
from __future__ import annotations

from .scoring import DONE_SCORE, rank, score, sort_key

__all__ = ["DONE_SCORE", "rank", "score", "sort_key"]
