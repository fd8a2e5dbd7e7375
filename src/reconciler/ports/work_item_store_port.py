from __future__ import annotations

from typing import Protocol

from reconciler.domain.models import WorkItem


class WorkItemStorePort(Protocol):
    def list_open_work_items(self) -> list[WorkItem]:
        """Return open work items in stable order."""

    def update_work_item(self, item_id: str, fields: dict) -> None:
        """Apply a partial update to one work item."""
