"""
Record list operations behind the item endpoints.

Each call loads the document, applies one list editor operation through the
section container and saves the result. Unknown record ids on update and
delete leave the document untouched.
"""
from typing import Any, Dict, Optional, Tuple

from werkzeug.exceptions import BadRequest, NotFound

from sitecms.application.document_editor import DocumentEditor
from sitecms.application.list_editor import ListEditor
from sitecms.domain.ordered_list import DIRECTIONS
from sitecms.persistence import get_bridge
from sitecms.utils.audit import log_action
from sitecms.utils.transaction import transactional
from .delete_tokens import issue_delete_token, verify_delete_token
from .lookup import resolve

# order only changes through add and move
IMMUTABLE_FIELDS = {"id", "order"}


def _open(document_key, section_key, list_name, actor_id) -> Tuple[DocumentEditor, ListEditor]:
    schema, _, _ = resolve(document_key, section_key, list_name)
    editor = DocumentEditor(schema, get_bridge(), autosave=False, actor_id=actor_id)
    return editor, editor.list_editor(section_key, list_name)


def _audit(action, document_key, section_key, list_name, record_id, actor_id, payload=None):
    with transactional():
        log_action(
            action=action,
            document_key=document_key,
            entity_type="settings_record",
            entity_id=record_id,
            actor_id=actor_id,
            payload={
                "section": section_key,
                "list": list_name,
                **(payload or {}),
            },
        )


def add_item(
    *,
    document_key: str,
    section_key: str,
    list_name: str,
    actor_id: Optional[str],
) -> Tuple[Dict[str, Any], str]:
    editor, items = _open(document_key, section_key, list_name, actor_id)

    new_id = items.add()
    editor.save()

    _audit("settings.item.add", document_key, section_key, list_name, new_id, actor_id)
    return editor.document[section_key], new_id


def update_item(
    *,
    document_key: str,
    section_key: str,
    list_name: str,
    record_id: str,
    fields: Dict[str, Any],
    actor_id: Optional[str],
) -> Dict[str, Any]:
    if not fields:
        raise BadRequest("No fields provided for update")

    locked = sorted(set(fields) & IMMUTABLE_FIELDS)
    if locked:
        raise BadRequest(f"Fields cannot be changed: {locked}")

    editor, items = _open(document_key, section_key, list_name, actor_id)
    if not any(record["id"] == record_id for record in items.records):
        return editor.document[section_key]

    for field, value in fields.items():
        items.update_field(record_id, field, value)
    editor.save()

    _audit(
        "settings.item.update", document_key, section_key, list_name, record_id, actor_id,
        payload={"fields": sorted(fields)},
    )
    return editor.document[section_key]


def move_item(
    *,
    document_key: str,
    section_key: str,
    list_name: str,
    record_id: str,
    direction: str,
    actor_id: Optional[str],
) -> Tuple[Dict[str, Any], bool]:
    if direction not in DIRECTIONS:
        raise BadRequest("direction must be 'up' or 'down'")

    editor, items = _open(document_key, section_key, list_name, actor_id)
    moved = items.move_record(record_id, direction)
    if moved:
        editor.save()
        _audit(
            "settings.item.move", document_key, section_key, list_name, record_id, actor_id,
            payload={"direction": direction},
        )
    return editor.document[section_key], moved


def request_item_delete(
    *,
    document_key: str,
    section_key: str,
    list_name: str,
    record_id: str,
) -> str:
    _, items = _open(document_key, section_key, list_name, None)
    if not items.request_delete(record_id):
        raise NotFound(f"No record '{record_id}' in '{list_name}'")
    return issue_delete_token(document_key, section_key, list_name, record_id)


def delete_item(
    *,
    document_key: str,
    section_key: str,
    list_name: str,
    record_id: str,
    confirm_token: Optional[str],
    actor_id: Optional[str],
) -> Dict[str, Any]:
    verify_delete_token(confirm_token, document_key, section_key, list_name, record_id)

    editor, items = _open(document_key, section_key, list_name, actor_id)
    if not items.request_delete(record_id):
        return editor.document[section_key]

    items.confirm_delete(record_id)
    editor.save()

    _audit("settings.item.delete", document_key, section_key, list_name, record_id, actor_id)
    return editor.document[section_key]
