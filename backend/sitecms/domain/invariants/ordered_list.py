from .exceptions import InvariantViolation


def assert_unique_ids(records, list_name="items"):
    seen = set()
    for record in records:
        record_id = record.get("id") if isinstance(record, dict) else None
        if not isinstance(record_id, str) or not record_id:
            raise InvariantViolation(
                f"Every record in '{list_name}' must have a non-empty string id."
            )
        if record_id in seen:
            raise InvariantViolation(
                f"Duplicate id '{record_id}' in '{list_name}'."
            )
        seen.add(record_id)


def assert_record_orders(records, list_name="items"):
    for record in records:
        order = record.get("order")
        # bool is an int subclass, reject it explicitly
        if not isinstance(order, int) or isinstance(order, bool):
            raise InvariantViolation(
                f"Record '{record.get('id')}' in '{list_name}' has a non-integer order: {order!r}"
            )


def assert_contiguous_order(records, list_name="items"):
    orders = [record["order"] for record in records]
    if not orders:
        return

    expected = list(range(1, len(orders) + 1))
    if sorted(orders) != expected:
        raise InvariantViolation(
            f"Orders in '{list_name}' are not consecutive starting from 1: {orders}"
        )
