from __future__ import annotations

from typing import Any, Dict, Optional

from sitecms.domain.sections import DocumentSchema, SectionContainer
from sitecms.persistence.bridge import PersistenceBridge
from .list_editor import ListEditor

Document = Dict[str, Dict[str, Any]]


def load_document(bridge: PersistenceBridge, schema: DocumentSchema) -> Document:
    """
    Stored document, or the built-in initial one when nothing is stored.
    Sections missing from an older stored document get their defaults.
    """
    initial = schema.initial_document()
    stored = bridge.load(schema.key, None)
    if not isinstance(stored, dict):
        return initial

    document = dict(stored)
    for section_key, settings in initial.items():
        document.setdefault(section_key, settings)
    return document


class DocumentEditor:
    """
    Owns one settings document and composes section changes into it.

    With ``autosave`` every section change is written immediately;
    otherwise changes accumulate until ``save()``.
    """

    def __init__(
        self,
        schema: DocumentSchema,
        bridge: PersistenceBridge,
        document: Optional[Document] = None,
        autosave: Optional[bool] = None,
        actor_id: Optional[str] = None,
    ):
        self.schema = schema
        self.bridge = bridge
        self.autosave = schema.autosave if autosave is None else autosave
        self.actor_id = actor_id
        self.dirty = False
        self._document = document if document is not None else load_document(bridge, schema)

    @property
    def key(self) -> str:
        return self.schema.key

    @property
    def document(self) -> Document:
        return self._document

    def section(self, section_key: str) -> SectionContainer:
        section_schema = self.schema.section(section_key)
        if section_schema is None:
            raise KeyError(section_key)

        settings = self._document.get(section_key) or section_schema.empty_settings()
        return SectionContainer(
            section_schema,
            settings,
            on_change=lambda next_settings: self.handle_section_change(section_key, next_settings),
        )

    def list_editor(self, section_key: str, list_name: str) -> ListEditor:
        container = self.section(section_key)
        kind = container.schema.kind_for(list_name)
        if kind is None:
            raise KeyError(list_name)
        return ListEditor(container, list_name, kind)

    def handle_section_change(self, section_key: str, next_settings: Dict[str, Any]) -> None:
        self.replace({**self._document, section_key: next_settings})

    def replace(self, document: Document) -> None:
        self._document = document
        self.dirty = True
        if self.autosave:
            self.save()

    def save(self) -> None:
        # on failure the in-memory document is kept and stays dirty
        self.bridge.save(self.key, self._document, actor_id=self.actor_id)
        self.dirty = False

    def reload(self) -> None:
        self._document = load_document(self.bridge, self.schema)
        self.dirty = False
