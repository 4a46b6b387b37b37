from .record import normalize_records


def normalize_section(schema, settings, public=False):
    data = dict(settings or {})
    data.setdefault("enabled", False)

    for list_name in schema.lists:
        data[list_name] = normalize_records(data.get(list_name), public=public)

    return data
