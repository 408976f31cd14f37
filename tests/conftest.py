"""Pytest configuration and shared fixtures."""

import pytest
from sqlalchemy import Engine, create_engine, event

from autopopulate import AutoPopulateDatabase, GeneratorConfig
from sample_models import Base, ShopContext

pytest_plugins = ["autopopulate.plugin"]


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def engine(tmp_path) -> Engine:
    """
    Provide an engine on a fresh SQLite database with the sample schema.

    Foreign keys are enforced so that missing references fail on commit.
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'shop.db'}")
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def data_context(engine: Engine) -> ShopContext:
    """Provide a ShopContext with its own session."""
    context = ShopContext.from_engine(engine)

    yield context

    context.rollback()
    context.close()


@pytest.fixture
def populator() -> AutoPopulateDatabase:
    """Populator with a fixed seed so failures are reproducible."""
    return AutoPopulateDatabase(config=GeneratorConfig(seed=1234))
