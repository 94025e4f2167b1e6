"""Integration test conftest.

Inherits the root conftest.py fixtures (db_session, customer_user, etc.)
and adds integration-specific markers.

Real SQL executes against an in-memory SQLite database, so conditional
updates, check constraints and unique constraints behave as in production.
"""

import pytest


@pytest.fixture(autouse=True)
def _mark_integration(request):
    """Auto-mark all tests in this directory as integration."""
    request.node.add_marker(pytest.mark.integration)
