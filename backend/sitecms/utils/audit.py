from typing import Optional

from sitecms.extensions import db
from sitecms.models.audit_log import AuditLog


def log_action(
    *,
    action: str,
    document_key: str,
    entity_type: str,
    entity_id: str,
    actor_id: Optional[str] = None,
    payload: dict | None = None
) -> AuditLog:
    """Stage an audit row. The caller's ``transactional()`` block commits it."""
    entry = AuditLog()

    entry.actor_id = actor_id
    entry.action = action
    entry.document_key = document_key
    entry.entity_type = entity_type
    entry.entity_id = entity_id
    entry.payload = payload or {}

    db.session.add(entry)
    return entry
