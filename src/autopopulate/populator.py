"""Populate a database with random test entities.

AutoPopulateDatabase is a quick way to fill a blank database under test
without a helper method per entity type:

    populator = AutoPopulateDatabase()
    customer = populator.given_entity(Customer, context)
    order = populator.given_entity(
        Order, context, lambda o: setattr(o, "customer_id", customer.id)
    )

Each call inserts one new row and returns the saved instance with its
database-assigned key. Navigation (relationship) properties are always
returned empty, so related rows are never written by accident; wire
references through foreign-key columns in the setup callback instead.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy.orm.attributes import set_committed_value

from autopopulate.config import GeneratorConfig
from autopopulate.context import DataContext
from autopopulate.exceptions import EntitySetNotFoundError
from autopopulate.fixture import Fixture
from autopopulate.introspection import EntityIntrospector
from autopopulate.models import RecursionPolicy
from autopopulate.recursion import OmitOnRecursionBehavior

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AutoPopulateDatabase:
    """
    Creates and saves randomly populated entities through a DataContext.

    The fixture always omits recursive members: whatever behaviour and
    recursion policy a supplied fixture had are replaced once, here, for
    the populator's lifetime.

    Args:
        fixture: Object generator to use (a new one is built from config
            when omitted)
        config: Generator configuration for the default fixture
    """

    def __init__(self, fixture: Fixture | None = None, config: GeneratorConfig | None = None):
        if fixture is None:
            fixture = Fixture(config or GeneratorConfig())
        fixture.config = fixture.config.model_copy(
            update={"recursion_policy": RecursionPolicy.OMIT}
        )
        fixture.behavior = OmitOnRecursionBehavior(fixture.config.recursion_depth)

        self.fixture = fixture
        self.introspector: EntityIntrospector = fixture.introspector

    def given_entity(
        self,
        entity_type: type[T],
        context: DataContext,
        setup: Callable[[T], None] | None = None,
    ) -> T:
        """
        Return an entity that is saved to the database.

        Args:
            entity_type: Mapped class of the entity to add to the context
            context: Data context to save the entity to
            setup: Optional callback applied to the generated entity before
                it is saved; use it to set values that must not be random,
                typically foreign keys to previously created entities

        Returns:
            The saved entity, with navigation properties cleared

        Raises:
            EntitySetNotFoundError: If context has no entity set for entity_type
            ValueGenerationError: If a member value cannot be generated
            sqlalchemy.exc.SQLAlchemyError: If the commit fails (unchanged)
        """
        set_names = self.introspector.find_entity_sets(context, entity_type)
        if not set_names:
            raise EntitySetNotFoundError(entity_type, type(context))

        entity = self.fixture.create(entity_type)
        self.clear_navigation_properties(entity)

        if setup is not None:
            setup(entity)

        for name in set_names:
            getattr(context, name).add(entity)

        context.save_changes()

        # Commit expires the instance; keep relationships from lazy loading
        self.clear_navigation_properties(entity)

        logger.debug("Populated %s into %s", entity_type.__name__, ", ".join(set_names))
        return entity

    def given_entities(
        self,
        entity_type: type[T],
        context: DataContext,
        count: int,
        setup: Callable[[T], None] | None = None,
    ) -> list[T]:
        """Save count entities, one row and one commit each."""
        return [self.given_entity(entity_type, context, setup) for _ in range(count)]

    def clear_navigation_properties(self, entity: Any) -> None:
        """
        Set every navigation property of entity to its empty value.

        Scalar relationships become None and collections become empty.
        Values are set as already-committed state, so clearing records no
        change: it cascades nothing and never overwrites foreign-key
        columns assigned by the caller.
        """
        info = self.introspector.get_entity_info(type(entity))
        for nav in info.navigations:
            set_committed_value(entity, nav.name, nav.empty_value)
