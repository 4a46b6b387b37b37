from typing import Any, Dict, Optional

from sitecms.application.document_editor import DocumentEditor
from sitecms.domain.invariants import assert_document
from sitecms.persistence import get_bridge
from sitecms.utils.audit import log_action
from sitecms.utils.transaction import transactional
from .lookup import resolve


def replace_document(
    *,
    document_key: str,
    document: Dict[str, Any],
    actor_id: Optional[str],
) -> Dict[str, Any]:
    """
    Replace a whole settings document.

    Responsibilities:
    - Structural checks at the persistence boundary
    - Fill in sections the client left out
    - Save, notify and audit
    """
    schema, _, _ = resolve(document_key)
    assert_document(schema, document)

    editor = DocumentEditor(schema, get_bridge(), autosave=False, actor_id=actor_id)
    merged = {**editor.document, **document}
    editor.replace(merged)
    editor.save()

    with transactional():
        log_action(
            action="settings.save",
            document_key=document_key,
            entity_type="settings_document",
            entity_id=document_key,
            actor_id=actor_id,
            payload={"sections": sorted(document)},
        )

    return editor.document
