from typing import Any, Dict, Optional

from werkzeug.exceptions import BadRequest

from sitecms.application.document_editor import DocumentEditor
from sitecms.domain.invariants import assert_section
from sitecms.persistence import get_bridge
from sitecms.utils.audit import log_action
from sitecms.utils.transaction import transactional
from .lookup import resolve


def replace_section(
    *,
    document_key: str,
    section_key: str,
    settings: Dict[str, Any],
    actor_id: Optional[str],
) -> Dict[str, Any]:
    schema, section_schema, _ = resolve(document_key, section_key)
    assert_section(section_schema, settings)

    editor = DocumentEditor(schema, get_bridge(), autosave=True, actor_id=actor_id)
    editor.section(section_key).on_change(settings)

    with transactional():
        log_action(
            action="settings.section.replace",
            document_key=document_key,
            entity_type="settings_section",
            entity_id=section_key,
            actor_id=actor_id,
            payload={},
        )

    return editor.document[section_key]


def patch_section(
    *,
    document_key: str,
    section_key: str,
    fields: Dict[str, Any],
    actor_id: Optional[str],
) -> Dict[str, Any]:
    """
    Set scalar fields of a section. Record lists are edited through
    the item operations, never through this call.
    """
    schema, section_schema, _ = resolve(document_key, section_key)

    list_fields = sorted(set(fields) & set(section_schema.lists))
    if list_fields:
        raise BadRequest(f"Use the item endpoints to edit lists: {list_fields}")

    editor = DocumentEditor(schema, get_bridge(), autosave=False, actor_id=actor_id)
    container = editor.section(section_key)
    next_settings = {**container.settings, **fields}
    assert_section(section_schema, next_settings)
    container.on_change(next_settings)
    editor.save()

    with transactional():
        log_action(
            action="settings.section.update",
            document_key=document_key,
            entity_type="settings_section",
            entity_id=section_key,
            actor_id=actor_id,
            payload={"fields": sorted(fields)},
        )

    return editor.document[section_key]
