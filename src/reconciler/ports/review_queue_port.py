from __future__ import annotations

from typing import Protocol

from reconciler.domain.models import ReviewEntry


class ReviewQueuePort(Protocol):
    def insert_review_entry(self, entry: ReviewEntry) -> None:
        """Queue a report for manual review."""
