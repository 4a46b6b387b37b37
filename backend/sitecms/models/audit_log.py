from sqlalchemy import event

from sitecms.extensions import db
from .base import BaseModel


class AuditLog(BaseModel):
    """One row per successful settings write. Rows are never changed."""

    __tablename__ = "audit_logs"

    __table_args__ = (
        db.Index("ix_audit_cursor", "created_at", "id"),
        db.Index("ix_audit_document_cursor", "document_key", "created_at", "id"),
    )

    actor_id = db.Column(db.String(36), nullable=True, index=True)
    action = db.Column(db.String(50), nullable=False, index=True)

    # settings document the change belongs to
    document_key = db.Column(db.String(64), nullable=False)

    entity_type = db.Column(db.String(50), nullable=False)
    entity_id = db.Column(db.String(100), nullable=False, index=True)

    payload = db.Column(db.JSON, nullable=False, default=dict)


@event.listens_for(AuditLog, "before_update")
@event.listens_for(AuditLog, "before_delete")
def prevent_audit_mutation(mapper, connection, target):
    raise RuntimeError("Audit logs are immutable")
