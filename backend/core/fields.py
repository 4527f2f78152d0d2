"""Lenient handling of request values.

Bodies are checked for presence only: any JSON scalar is accepted for a text
column, and ids that are not integers simply match no row.
"""


def scalar_to_text(value):
    # Falsy values count as absent, as the presence checks expect
    if not value:
        return None
    if isinstance(value, bool):
        return 'true'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


def parse_row_id(raw_id: str) -> int | None:
    try:
        return int(raw_id)
    except ValueError:
        return None
