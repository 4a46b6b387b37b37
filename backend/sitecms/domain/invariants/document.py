from .ordered_list import assert_unique_ids, assert_record_orders
from .exceptions import InvariantViolation


def assert_section(schema, settings):
    if not isinstance(settings, dict):
        raise InvariantViolation(f"Section '{schema.key}' must be an object.")

    if not isinstance(settings.get("enabled", False), bool):
        raise InvariantViolation(f"Section '{schema.key}' field 'enabled' must be a boolean.")

    for list_name in schema.lists:
        records = settings.get(list_name, [])
        if not isinstance(records, list):
            raise InvariantViolation(
                f"Section '{schema.key}' field '{list_name}' must be a list."
            )
        for record in records:
            if not isinstance(record, dict):
                raise InvariantViolation(
                    f"Section '{schema.key}' list '{list_name}' must contain objects."
                )
        assert_unique_ids(records, list_name)
        assert_record_orders(records, list_name)


def assert_document(document_schema, document):
    if not isinstance(document, dict):
        raise InvariantViolation(f"Document '{document_schema.key}' must be an object.")

    unknown = set(document) - set(document_schema.sections)
    if unknown:
        raise InvariantViolation(
            f"Unknown sections for '{document_schema.key}': {sorted(unknown)}"
        )

    for section_key, settings in document.items():
        assert_section(document_schema.sections[section_key], settings)
