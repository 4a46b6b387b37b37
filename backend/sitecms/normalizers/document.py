from __future__ import annotations

from typing import Any, Dict, Optional
from datetime import datetime

from .section import normalize_section


def normalize_document(
    schema,
    document: Dict[str, Any],
    *,
    public: bool = False,
    last_modified: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    API shape of a settings document.

    Records are always sorted by order. Public reads drop hidden records
    but keep disabled sections, flagged through their ``enabled`` field.
    """
    sections = {
        key: normalize_section(schema.sections[key], settings, public=public)
        for key, settings in document.items()
        if key in schema.sections
    }

    return {
        "key": schema.key,
        "label": schema.label,
        "sections": sections,
        "meta": {
            "last_modified": last_modified.isoformat() if last_modified else None,
        },
    }
