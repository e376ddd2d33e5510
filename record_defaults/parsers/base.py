"""
Parser contract for record-defaults.

Every parser in the registry has the same shape::

    parser(literal: str, target: type) -> value

- *literal* is the raw default string from the field's tag.
- *target* is the field's annotation with ``Optional[...]`` already removed.
- The returned value is already converted to *target* (``numpy.int8``,
  an ``IntEnum`` member, a ``str`` subclass, ...).
- Failures raise a ``RecordDefaultsError`` subclass; parsers never log and
  never return sentinel values.
"""

from __future__ import annotations

from typing import Any, Callable

from record_defaults.exceptions import ParseError
from record_defaults.families import type_name

ParserFunc = Callable[[str, Any], Any]


def convert(value: Any, target: Any) -> Any:
    """Convert a parsed Python value into the exact *target* scalar type.

    Raises:
        ParseError: If *target* rejects the value (e.g. an IntEnum with no
            member for the parsed integer).
    """
    if type(value) is target:
        return value
    try:
        return target(value)
    except (TypeError, ValueError) as exc:
        raise ParseError(
            f"cannot convert {value!r} to {type_name(target)}: {exc}"
        ) from exc
