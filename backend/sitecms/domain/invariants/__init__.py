from .exceptions import InvariantViolation
from .ordered_list import assert_unique_ids, assert_record_orders, assert_contiguous_order
from .document import assert_section, assert_document

__all__ = [
    "InvariantViolation",
    "assert_unique_ids",
    "assert_record_orders",
    "assert_contiguous_order",
    "assert_section",
    "assert_document",
]
