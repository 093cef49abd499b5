"""
Test bootstrap:
- Make tests/helpers importable as ``helpers``
- Provide clients wired to an in-memory transport
"""
import sys
import pathlib

import pytest

TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import BASE_URL, MockTransport  # noqa: E402

from pocketbase_client import AnonymousClient, AuthenticatedClient  # noqa: E402


@pytest.fixture
def transport():
    """In-memory transport recording every request."""
    return MockTransport()


@pytest.fixture
def client(transport):
    """Anonymous client on the mock transport."""
    return AnonymousClient(BASE_URL, transport)


@pytest.fixture
def admin(transport):
    """Authenticated client on the mock transport."""
    return AuthenticatedClient(BASE_URL, "admin-token", transport)
