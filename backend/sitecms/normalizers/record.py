def normalize_records(records, public=False):
    ordered = sorted(records or [], key=lambda r: r.get("order", 0))
    if public:
        ordered = [r for r in ordered if r.get("is_visible", True) is not False]
    return [dict(r) for r in ordered]
