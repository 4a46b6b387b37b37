"""
Section settings containers.

A section's settings are a plain dict of scalar fields plus zero or more
named record lists. Settings are replaced wholesale on every change: call
sites build the next object with ``with_field`` / ``with_list`` and hand it
to ``SectionContainer.on_change``.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .record_kinds import RecordKind

Settings = Dict[str, Any]


@dataclass(frozen=True)
class SectionSchema:
    key: str
    label: str
    lists: Dict[str, RecordKind] = field(default_factory=dict)
    scalars: Dict[str, Any] = field(default_factory=dict)

    def kind_for(self, list_name: str) -> Optional[RecordKind]:
        return self.lists.get(list_name)

    def empty_settings(self) -> Settings:
        settings = {"enabled": True, **copy.deepcopy(self.scalars)}
        for list_name in self.lists:
            settings[list_name] = []
        return settings


@dataclass(frozen=True)
class DocumentSchema:
    """One persisted settings document, stored under a single key."""
    key: str
    label: str
    sections: Dict[str, SectionSchema]
    initial: Dict[str, Settings]
    autosave: bool = False

    def section(self, section_key: str) -> Optional[SectionSchema]:
        return self.sections.get(section_key)

    def initial_document(self) -> Dict[str, Settings]:
        document = {}
        for section_key, schema in self.sections.items():
            document[section_key] = {
                **schema.empty_settings(),
                **copy.deepcopy(self.initial.get(section_key, {})),
            }
        return document


def with_field(settings: Settings, field_name: str, value: Any) -> Settings:
    return {**settings, field_name: value}


def with_list(settings: Settings, list_name: str, records: List[Dict[str, Any]]) -> Settings:
    return {**settings, list_name: records}


class SectionContainer:
    """
    Holds the current settings of one section.

    ``on_change`` is the only way to change them: it takes a complete
    replacement object (never a diff) and forwards it to the parent.
    """

    def __init__(
        self,
        schema: SectionSchema,
        settings: Settings,
        on_change: Optional[Callable[[Settings], None]] = None,
    ):
        self.schema = schema
        self._settings = settings
        self._parent_on_change = on_change

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def enabled(self) -> bool:
        return bool(self._settings.get("enabled", False))

    def records(self, list_name: str) -> List[Dict[str, Any]]:
        return self._settings.get(list_name) or []

    def on_change(self, next_settings: Settings) -> None:
        self._settings = next_settings
        if self._parent_on_change is not None:
            self._parent_on_change(next_settings)

    def set_field(self, field_name: str, value: Any) -> None:
        self.on_change(with_field(self._settings, field_name, value))
