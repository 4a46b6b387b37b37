from werkzeug.exceptions import NotFound

from sitecms.domain.documents import get_document_schema


def resolve(document_key, section_key=None, list_name=None):
    """
    Returns (document_schema, section_schema, record_kind) for a path,
    raising 404 for any unknown part.
    """
    document_schema = get_document_schema(document_key)
    if document_schema is None:
        raise NotFound(f"Unknown settings document '{document_key}'")

    section_schema = None
    if section_key is not None:
        section_schema = document_schema.section(section_key)
        if section_schema is None:
            raise NotFound(f"Unknown section '{section_key}' in '{document_key}'")

    kind = None
    if list_name is not None:
        kind = section_schema.kind_for(list_name)
        if kind is None:
            raise NotFound(f"Section '{section_key}' has no list '{list_name}'")

    return document_schema, section_schema, kind
