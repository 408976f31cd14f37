"""Pytest decorators for populating entities."""

from collections.abc import Callable
from typing import Any

from autopopulate.models import PopulatePlan


def given_entity(
    entity_type: type,
    count: int = 1,
    setup: Callable[[Any], None] | None = None,
):
    """
    Decorator to inject populated entities into pytest test functions.

    Usage:
        @given_entity(Customer, count=2)
        def test_api(given, data_context):
            assert len(given.Customer) == 2

    Plans run in decorator order, top to bottom. A two-argument setup
    receives the entities populated by earlier plans as well:

        @given_entity(Customer)
        @given_entity(Order, setup=lambda o, given: setattr(
            o, "customer_id", given.Customer[0].id))

    The decorator works with the `given` fixture from autopopulate.plugin,
    which needs a `data_context` fixture returning the DataContext to save into.
    """

    def decorator(func: Callable) -> Callable:
        if not hasattr(func, "_populate_plans"):
            func._populate_plans = []

        # Decorators apply bottom-up; insert at the front to keep source order
        func._populate_plans.insert(
            0, PopulatePlan(entity_type=entity_type, count=count, setup=setup)
        )

        # Return original function (fixture will handle execution)
        return func

    return decorator
