"""PostgreSQL fixtures for integration tests.

Point AUTOPOPULATE_TEST_DATABASE_URL at a scratch database; tests are
skipped when no server is reachable.
"""

import os

import psycopg
import pytest
from sqlalchemy import Engine, create_engine

from autopopulate import DatabaseConfig
from sample_models import Base

DEFAULT_TEST_DATABASE_URL = "postgresql://localhost/autopopulate_test"


@pytest.fixture
def engine() -> Engine:
    """Provide an engine on the test database with a fresh sample schema."""
    url = os.environ.get("AUTOPOPULATE_TEST_DATABASE_URL", DEFAULT_TEST_DATABASE_URL)
    try:
        psycopg.connect(url, connect_timeout=2).close()
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    engine = create_engine(DatabaseConfig(url=url).sqlalchemy_url)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()
