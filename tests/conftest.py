"""
Shared test fixtures for record-defaults tests.

The tag key is process-wide state; every test starts and ends with the
stock ``"default"`` key so a test that overrides it cannot leak into the
next one.
"""

import pytest

from record_defaults.config import reset_tag_key


@pytest.fixture(autouse=True)
def _restore_tag_key():
    reset_tag_key()
    yield
    reset_tag_key()


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (applies defaults to full record trees)",
    )
