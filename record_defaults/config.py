"""
Process-wide configuration for record-defaults.

The only setting is the *tag key*: the field-metadata key that holds a
field's default literal (``"default"`` unless overridden). It is read once
at the start of every ``apply_defaults`` call.

Key functions:
- get_tag_key() / set_tag_key(key): Read or replace the key.
- reset_tag_key(): Restore ``"default"``.
- override_tag_key(key): Context manager for a temporary override.

Why a Pydantic model:
- Assignments are validated, so a non-string key fails loudly at the
  setter instead of silently disabling every default later on.

The setting is plain module state with no locking. Configure it once at
startup; changing it while another thread is applying defaults is the
caller's responsibility.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_TAG_KEY = "default"


class DefaultsSettings(BaseModel):
    """Settings consulted by the default-application engine."""

    model_config = ConfigDict(validate_assignment=True)

    tag_key: str = Field(
        DEFAULT_TAG_KEY,
        description="Field metadata key whose value is the default literal",
    )


_settings = DefaultsSettings()


def get_settings() -> DefaultsSettings:
    """Return the live process-wide settings object."""
    return _settings


def get_tag_key() -> str:
    return _settings.tag_key


def set_tag_key(key: str) -> None:
    """Replace the tag key used by subsequent ``apply_defaults`` calls.

    Raises:
        pydantic.ValidationError: If *key* is not a string.
    """
    _settings.tag_key = key
    logger.info("Default tag key set to %r", key)


def reset_tag_key() -> None:
    set_tag_key(DEFAULT_TAG_KEY)


@contextmanager
def override_tag_key(key: str) -> Iterator[None]:
    """Temporarily use *key* as the tag key, restoring the previous one on exit."""
    previous = get_tag_key()
    set_tag_key(key)
    try:
        yield
    finally:
        set_tag_key(previous)
