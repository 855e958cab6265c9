import pytest

from clinic_booking.catalog import CatalogStore


@pytest.fixture(scope="session")
def store():
    """Load the packaged CatalogStore once for the entire test session."""
    s = CatalogStore()
    s.load()
    return s
