from __future__ import annotations

from typing import Any, Dict

from sitecms.models.audit_log import AuditLog


def normalize_audit_log(entry: AuditLog) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "action": entry.action,
        "actor_id": entry.actor_id,
        "document": entry.document_key,
        "entity": {
            "type": entry.entity_type,
            "id": entry.entity_id,
        },
        "changes": entry.payload or {},
        "created_at": entry.created_at.isoformat(),
    }
