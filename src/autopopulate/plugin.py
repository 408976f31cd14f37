"""Pytest fixtures for populated entities.

Enable in a conftest.py:

    pytest_plugins = ["autopopulate.plugin"]

and provide a `data_context` fixture returning the DataContext to save
into. Tests decorated with @given_entity then receive the populated
entities through the `given` fixture.
"""

import inspect

import pytest

from autopopulate.models import Entities
from autopopulate.populator import AutoPopulateDatabase


@pytest.fixture
def populator() -> AutoPopulateDatabase:
    """A populator with default generator configuration."""
    return AutoPopulateDatabase()


@pytest.fixture
def given(request, populator: AutoPopulateDatabase):
    """
    Entities populated from the test's @given_entity plans.

    Returns None when the test has no plans.
    """
    plans = getattr(request.function, "_populate_plans", None)
    if not plans:
        return None

    context = request.getfixturevalue("data_context")
    entities = Entities()
    for plan in plans:
        setup = _bind_setup(plan.setup, entities)
        entities.add(
            plan.entity_type,
            populator.given_entities(plan.entity_type, context, plan.count, setup),
        )
    return entities


def _bind_setup(setup, entities: Entities):
    """Pass the entities populated so far to two-argument setup callbacks."""
    if setup is None:
        return None
    if len(inspect.signature(setup).parameters) > 1:
        return lambda entity: setup(entity, entities)
    return setup
