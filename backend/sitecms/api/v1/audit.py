from datetime import datetime
from typing import Optional, Tuple

from flask import jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy import and_, or_

from sitecms.extensions import db
from sitecms.models.audit_log import AuditLog
from sitecms.normalizers.audit import normalize_audit_log
from sitecms.utils.decorators import roles_required
from . import v1_bp

MAX_LIMIT = 100

# query arg -> column
FILTERS = {
    "document": AuditLog.document_key,
    "action": AuditLog.action,
    "actor": AuditLog.actor_id,
    "entity_id": AuditLog.entity_id,
}


def encode_cursor(entry: AuditLog) -> str:
    return f"{entry.created_at.isoformat()}|{entry.id}"


def decode_cursor(cursor: str) -> Optional[Tuple[datetime, str]]:
    ts_str, sep, last_id = cursor.partition("|")
    if not sep or not last_id:
        return None
    try:
        return datetime.fromisoformat(ts_str), last_id
    except ValueError:
        return None


@v1_bp.route("/audit", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_audit_logs():
    """Newest first. ``next_cursor`` continues after the last entry returned."""
    limit = max(1, min(request.args.get("limit", 20, type=int), MAX_LIMIT))

    stmt = db.select(AuditLog)
    for arg, column in FILTERS.items():
        if value := request.args.get(arg):
            stmt = stmt.where(column == value)

    if cursor := request.args.get("cursor"):
        position = decode_cursor(cursor)
        if position is None:
            return jsonify({"error": "Invalid cursor format"}), 400

        cursor_ts, last_id = position
        stmt = stmt.where(
            or_(
                AuditLog.created_at < cursor_ts,
                and_(AuditLog.created_at == cursor_ts, AuditLog.id < last_id),
            )
        )

    entries = db.session.execute(
        stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit + 1)
    ).scalars().all()

    has_more = len(entries) > limit
    entries = entries[:limit]

    return jsonify({
        "data": [normalize_audit_log(entry) for entry in entries],
        "meta": {
            "next_cursor": encode_cursor(entries[-1]) if has_more else None,
            "has_more": has_more,
        },
    }), 200
