"""Generic data-access context over a SQLAlchemy session.

A context class declares one EntitySet per entity type it manages:

    class ShopContext(DataContext):
        customers = EntitySet(Customer)
        orders = EntitySet(Order)

    with ShopContext.from_engine(engine) as context:
        context.customers.add(Customer(name="Ada"))
        context.save_changes()
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Generic, TypeVar

from sqlalchemy import Engine, func, inspect as sa_inspect, select
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntitySet(Generic[T]):
    """
    Declares an insertable collection of one entity type on a DataContext.

    Accessed on the class it is the declaration itself (used for lookup by
    element type); accessed on a context instance it is an EntityCollection
    bound to that context's session.
    """

    def __init__(self, entity_type: type[T]):
        self.entity_type = entity_type
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, context: "DataContext | None", owner: type):
        if context is None:
            return self
        return EntityCollection(self.entity_type, context.session)

    def __repr__(self) -> str:
        return f"EntitySet({self.entity_type.__name__})"


class EntityCollection(Generic[T]):
    """Entity set bound to a session."""

    def __init__(self, entity_type: type[T], session: Session):
        self.entity_type = entity_type
        self.session = session

    def add(self, entity: T) -> T:
        """Mark an entity as pending insertion."""
        if not isinstance(entity, self.entity_type):
            raise TypeError(
                f"Expected {self.entity_type.__name__}, got {type(entity).__name__}"
            )
        self.session.add(entity)
        return entity

    def add_all(self, entities: Iterable[T]) -> None:
        for entity in entities:
            self.add(entity)

    def remove(self, entity: T) -> None:
        """Mark an entity as pending deletion."""
        self.session.delete(entity)

    def get(self, ident: Any) -> T | None:
        """Look an entity up by primary key."""
        return self.session.get(self.entity_type, ident)

    def all(self) -> list[T]:
        return list(self.session.scalars(select(self.entity_type)))

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())

    def __len__(self) -> int:
        return self.session.scalar(select(func.count()).select_from(self.entity_type))

    def __contains__(self, entity: object) -> bool:
        if not isinstance(entity, self.entity_type):
            return False
        identity = sa_inspect(entity).identity
        if identity is None:
            return False
        return self.get(identity) is entity


class DataContext:
    """
    Database session exposing per-type entity sets and a single commit.

    The session is owned by whoever created the context; the context never
    retries, locks or compensates.
    """

    def __init__(self, session: Session):
        self.session = session

    @classmethod
    def from_engine(cls, engine: Engine, **session_kwargs: Any) -> "DataContext":
        """Create a context with a new session bound to engine."""
        return cls(Session(engine, **session_kwargs))

    @classmethod
    def entity_sets(cls) -> dict[str, EntitySet]:
        """Entity sets declared on the context class, by attribute name."""
        declared: dict[str, EntitySet] = {}
        for klass in reversed(cls.__mro__):
            for name, member in vars(klass).items():
                if isinstance(member, EntitySet):
                    declared[name] = member
        return declared

    @classmethod
    def for_models(cls, *models: type, name: str = "GeneratedContext") -> type["DataContext"]:
        """
        Build a context class with one entity set per model.

        Entity sets are named after each model's table (or class name when
        the model has no __tablename__).
        """
        attrs: dict[str, Any] = {}
        for model in models:
            attr = getattr(model, "__tablename__", None) or model.__name__.lower()
            attrs[attr] = EntitySet(model)
        return type(name, (cls,), attrs)

    def save_changes(self) -> None:
        """Commit all pending changes. Failures propagate unchanged."""
        pending = len(self.session.new) + len(self.session.dirty) + len(self.session.deleted)
        logger.debug("Committing %d pending change(s)", pending)
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "DataContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
