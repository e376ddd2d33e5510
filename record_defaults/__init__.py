"""
record-defaults: fill unset fields of dataclasses and pydantic models from
per-field default literals.

Public API surface:

- ``apply_defaults(record, tag_key=None)`` -- walk a record (recursing into
  nested records, including ``Optional`` ones) and assign each zero-valued
  field the parsed form of its default tag.

- ``get_tag_key()`` / ``set_tag_key(key)`` -- the metadata key that holds
  default literals, ``"default"`` unless overridden.

Declaring defaults::

    @dataclass
    class Limits:
        retries: int = field(default=0, metadata={"default": "3"})
        timeout: timedelta = field(default=timedelta(0), metadata={"default": "1m30s"})

    @dataclass
    class Service:
        name: str = field(default="", metadata={"default": "api"})
        limits: Limits | None = None

    svc = Service()
    apply_defaults(svc)
    # svc.name == "api"
    # svc.limits.retries == 3, svc.limits.timeout == timedelta(seconds=90)

Pydantic models carry their tags in ``Field(json_schema_extra=...)``. Keep
a pydantic model's nested records pydantic too: pydantic copies dataclass
``metadata`` entries named like ``Field()`` arguments (``default`` among
them) into the field definition, so a tagged dataclass cannot be a field
type of a model under the stock tag key.
"""

from __future__ import annotations

from record_defaults.config import (
    get_tag_key,
    override_tag_key,
    reset_tag_key,
    set_tag_key,
)
from record_defaults.engine import DefaultsApplier, apply_defaults
from record_defaults.exceptions import (
    CapacityError,
    InvalidDurationError,
    InvalidInputError,
    InvalidTagError,
    LiteralSyntaxError,
    OutOfRangeError,
    ParseError,
    RecordDefaultsError,
    UnsupportedTypeError,
)

__all__ = [
    "apply_defaults",
    "DefaultsApplier",
    "get_tag_key",
    "set_tag_key",
    "reset_tag_key",
    "override_tag_key",
    "RecordDefaultsError",
    "InvalidInputError",
    "InvalidTagError",
    "LiteralSyntaxError",
    "InvalidDurationError",
    "OutOfRangeError",
    "CapacityError",
    "ParseError",
    "UnsupportedTypeError",
]
