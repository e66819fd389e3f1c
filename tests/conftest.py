from datetime import datetime, timezone

import pytest

from medtimeline.catalog import Catalog, default_catalog


@pytest.fixture
def t0() -> datetime:
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def catalog() -> Catalog:
    return default_catalog()
