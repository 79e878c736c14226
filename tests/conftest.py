import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite:///./qbank-test.db")


@pytest.fixture(scope="session", autouse=True)
def _create_tables():
    import models  # noqa: F401
    from db import Base, engine

    Base.metadata.create_all(engine)
    yield


@pytest.fixture
def fixed_ids():
    """Deterministic question ids: Q1, Q2, ..."""
    counter = iter(range(1, 10_000))
    return lambda: f"Q{next(counter)}"
