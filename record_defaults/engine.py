"""
Default-application engine for record-defaults.

Walks a record's fields in declaration order and, for each one, decides
whether to recurse, skip, or parse-and-assign its default literal.

Per-field algorithm (``DefaultsApplier._apply_field``):

1. **Skip** unexported (``_name``) or non-writable (frozen) fields.
2. **Recurse** into nested records: a record-typed field always, an
   ``Optional[Record]`` field only when it has no tag. A ``None`` value is
   replaced by a freshly built zero record first, unless a record of the
   same type is already on the walk path (self-referential types such as
   ``next: Optional["Node"]`` stay ``None``). A record instance already on
   the path is not walked again, so cyclic object graphs terminate.
3. **Skip** fields that already hold a non-zero value (defaults never
   overwrite).
4. **Skip** fields without a tag.
5. **Parse** the tag via the parser registry, check composite values
   structurally fit the annotation, and assign.

The first error stops the walk. Assignments made before it are kept; the
error's ``field_path`` names every field from the root down to the one
that failed.
"""

from __future__ import annotations

import logging
from typing import Any

from record_defaults.config import get_tag_key
from record_defaults.exceptions import InvalidInputError, ParseError, RecordDefaultsError
from record_defaults.families import (
    COMPOSITE_FAMILIES,
    is_record_type,
    resolve_family,
    type_name,
    unwrap_optional,
)
from record_defaults.parsers import parse_literal
from record_defaults.parsers.composite import is_convertible
from record_defaults.records import FieldSpec, is_unset, new_record, record_fields

logger = logging.getLogger(__name__)


class DefaultsApplier:
    """Applies default tags to one record tree.

    The tag key is fixed when the applier is created (the process-wide key
    unless one is passed explicitly), so changing the global key mid-walk
    has no effect on a running traversal.

    Attributes:
        tag_key: Field metadata key holding default literals.
        assigned: Number of fields assigned so far.
    """

    def __init__(self, tag_key: str | None = None) -> None:
        self.tag_key = get_tag_key() if tag_key is None else tag_key
        self.assigned = 0
        # records from the root down to the one being walked
        self._path: list[Any] = []

    def apply(self, record: Any) -> None:
        """Fill every eligible zero-valued field of *record* in place.

        Raises:
            InvalidInputError: If *record* is not a dataclass / pydantic
                model instance.
            RecordDefaultsError: The first failure met while parsing a
                default, with ``field_path`` set.
        """
        if record is None:
            raise InvalidInputError("input must be a non-None record instance")
        if not is_record_type(type(record)):
            raise InvalidInputError(
                "input must be a record instance (dataclass or pydantic model), "
                f"got {type(record).__name__}"
            )

        self._apply_record(record)
        logger.debug(
            "Applied defaults to %s (tag_key=%r, %d field(s) assigned)",
            type(record).__name__, self.tag_key, self.assigned,
        )

    def _apply_record(self, record: Any) -> None:
        if any(seen is record for seen in self._path):
            return
        self._path.append(record)
        try:
            for spec in record_fields(type(record)):
                if not spec.exported or not spec.writable:
                    continue
                try:
                    self._apply_field(record, spec)
                except RecordDefaultsError as exc:
                    exc.add_field(spec.name)
                    raise
        finally:
            self._path.pop()

    def _apply_field(self, record: Any, spec: FieldSpec) -> None:
        value = getattr(record, spec.name, None)
        tag = spec.tag(self.tag_key)
        target, optional = unwrap_optional(spec.annotation)

        # Nested records are walked regardless of their own current value
        if is_record_type(target) and (not tag or not optional):
            if value is None:
                if any(type(seen) is target for seen in self._path):
                    logger.debug(
                        "Left field %s unset: %s is already being walked",
                        spec.name, target.__name__,
                    )
                    return
                value = new_record(target)
                setattr(record, spec.name, value)
                logger.debug("Allocated %s for field %s", target.__name__, spec.name)
            self._apply_record(value)
            return

        if not is_unset(value, spec.annotation):
            return
        if not tag:
            return

        parsed = parse_literal(tag, target)
        if resolve_family(target) in COMPOSITE_FAMILIES and not is_convertible(parsed, target):
            raise ParseError(
                f"parsed value type {type(parsed).__name__} cannot be converted "
                f"to field type {type_name(target)}"
            )
        setattr(record, spec.name, parsed)
        self.assigned += 1
        logger.debug("Set default for field %s = %r", spec.name, parsed)


def apply_defaults(record: Any, *, tag_key: str | None = None) -> None:
    """Populate zero-valued fields of *record* from their default tags.

    ``None`` optional records are allocated and filled, except where the
    record type is already being walked: a recursive ``Optional["Node"]``
    field is left ``None`` rather than grown without bound.

    Args:
        record: A dataclass or pydantic model instance; mutated in place.
        tag_key: Metadata key to read instead of the process-wide one
            (see ``record_defaults.config.set_tag_key``).

    Raises:
        InvalidInputError: If *record* is ``None`` or not a record instance.
        LiteralSyntaxError: A scalar default does not parse.
        OutOfRangeError: A numeric default does not fit its field.
        CapacityError: An array default is longer than its tuple field.
        ParseError: A composite default does not decode or convert.
        UnsupportedTypeError: A tagged field has no parser for its type.

    Examples::

        @dataclass
        class ServerConfig:
            port: int = field(default=0, metadata={"default": "8080"})
            hosts: list[str] | None = field(
                default=None, metadata={"default": '["localhost"]'}
            )

        cfg = ServerConfig()
        apply_defaults(cfg)
        # cfg.port == 8080, cfg.hosts == ["localhost"]
    """
    DefaultsApplier(tag_key).apply(record)
