from __future__ import annotations

from typing import Any, Dict, List, Optional

from sitecms.domain import ordered_list
from sitecms.domain.record_kinds import RecordKind
from sitecms.domain.sections import SectionContainer, with_list


class DeleteNotConfirmed(Exception):
    """A delete was attempted without a matching, pending request."""

    def __init__(self, record_id: str, message: Optional[str] = None):
        super().__init__(message or f"Deleting '{record_id}' was not confirmed.")
        self.record_id = record_id


class ListEditor:
    """
    Headless editor for one record list inside a section.

    Owns only UI state: which record is expanded and which one is waiting
    for delete confirmation. Record data lives in the container and every
    change goes back through ``container.on_change``.
    """

    def __init__(self, container: SectionContainer, list_name: str, kind: RecordKind):
        self.container = container
        self.list_name = list_name
        self.kind = kind
        self.expanded_id: Optional[str] = None
        self.pending_delete_id: Optional[str] = None

    @property
    def records(self) -> List[Dict[str, Any]]:
        return self.container.records(self.list_name)

    def sorted_records(self) -> List[Dict[str, Any]]:
        return ordered_list.sort_by_order(self.records)

    def _has(self, record_id: str) -> bool:
        return any(record["id"] == record_id for record in self.records)

    def _commit(self, records: List[Dict[str, Any]]) -> None:
        self.container.on_change(with_list(self.container.settings, self.list_name, records))

    # ------------------------
    # Expand / collapse
    # ------------------------

    def toggle(self, record_id: str) -> None:
        self.expanded_id = None if self.expanded_id == record_id else record_id

    def collapse(self) -> None:
        self.expanded_id = None

    # ------------------------
    # Mutations
    # ------------------------

    def add(self) -> str:
        records, new_id = ordered_list.add(self.records, self.kind)
        self._commit(records)
        self.expanded_id = new_id
        return new_id

    def update_field(self, record_id: str, field: str, value: Any) -> None:
        self._commit(ordered_list.update_field(self.records, record_id, field, value))

    def move(self, index: int, direction: str) -> bool:
        """Returns False when the move was a no-op at either end."""
        before = self.records
        after = ordered_list.move(before, index, direction)
        if after == before:
            return False
        self._commit(after)
        return True

    def move_record(self, record_id: str, direction: str) -> bool:
        index = ordered_list.find_index(self.records, record_id)
        if index is None:
            return False
        return self.move(index, direction)

    def request_delete(self, record_id: str) -> bool:
        if not self._has(record_id):
            return False
        self.pending_delete_id = record_id
        return True

    def cancel_delete(self) -> None:
        self.pending_delete_id = None

    def confirm_delete(self, record_id: str) -> None:
        if self.pending_delete_id != record_id:
            raise DeleteNotConfirmed(record_id)

        self.pending_delete_id = None
        if self.expanded_id == record_id:
            self.expanded_id = None
        self._commit(ordered_list.delete(self.records, record_id))

    # ------------------------
    # Rendering
    # ------------------------

    def rows(self) -> List[Dict[str, Any]]:
        ordered = self.sorted_records()
        last = len(ordered) - 1
        return [
            {
                "index": index,
                "record": record,
                "label": self.kind.label(record),
                "expanded": record["id"] == self.expanded_id,
                "pending_delete": record["id"] == self.pending_delete_id,
                "can_move_up": index > 0,
                "can_move_down": index < last,
            }
            for index, record in enumerate(ordered)
        ]
