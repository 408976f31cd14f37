"""Data models and type definitions."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RecursionPolicy(str, Enum):
    """What the generator does when a type shows up again on its own path."""

    OMIT = "omit"
    THROW = "throw"


@dataclass
class PropertyInfo:
    """
    Value (non-navigation) member of an entity.

    Attributes:
        name: Attribute name on the class
        python_type: Python type of the member (or annotation for plain classes)
        nullable: Whether None is an acceptable value
        is_primary_key: Whether the backing column is part of the primary key
        is_foreign_key: Whether the backing column references another table
        is_unique: Whether the backing column has a UNIQUE constraint
        is_generated: Whether the database assigns the value (autoincrement,
            identity, computed, polymorphic discriminator)
        length: Maximum length for string/binary columns
        column_type: SQLAlchemy column type, None for plain classes
    """

    name: str
    python_type: Any
    nullable: bool = True
    is_primary_key: bool = False
    is_foreign_key: bool = False
    is_unique: bool = False
    is_generated: bool = False
    length: int | None = None
    column_type: Any = None


@dataclass
class NavigationInfo:
    """
    Relationship member of a mapped entity.

    Attributes:
        name: Attribute name on the class
        target: Related mapped class
        uselist: True for collection relationships
        collection_class: Collection type for uselist relationships
        viewonly: Whether the relationship is read-only
    """

    name: str
    target: type
    uselist: bool = False
    collection_class: Any = None
    viewonly: bool = False

    @property
    def empty_value(self) -> Any:
        """Empty representation: None for scalars, an empty collection otherwise."""
        if not self.uselist:
            return None
        factory = self.collection_class or list
        return factory()


@dataclass
class EntityInfo:
    """
    Metadata for a generatable type.

    Attributes:
        entity_type: The described class
        properties: Value members in declaration order
        navigations: Relationship members (empty for non-mapped classes)
        is_mapped: Whether the class is mapped by SQLAlchemy
    """

    entity_type: type
    properties: list[PropertyInfo]
    navigations: list[NavigationInfo] = field(default_factory=list)
    is_mapped: bool = False

    @property
    def name(self) -> str:
        return self.entity_type.__name__

    def get_property(self, name: str) -> PropertyInfo | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def get_navigation(self, name: str) -> NavigationInfo | None:
        for nav in self.navigations:
            if nav.name == name:
                return nav
        return None


@dataclass
class PopulatePlan:
    """
    Plan for populating one entity type.

    Attributes:
        entity_type: Mapped class to populate
        count: Number of rows to insert
        setup: Optional callback applied to each instance before saving
    """

    entity_type: type
    count: int = 1
    setup: Callable[[Any], None] | None = None


class Entities:
    """
    Container for populated entities with attribute access.

    Allows accessing entity lists by class name:
        entities.Customer  # List of Customer instances
        entities.Order     # List of Order instances
    """

    def __init__(self):
        self._entities: dict[str, list[Any]] = {}

    def add(self, entity_type: type, instances: list[Any]) -> None:
        """
        Add populated instances of a type.

        Args:
            entity_type: Mapped class
            instances: Instances returned by the populator
        """
        self._entities.setdefault(entity_type.__name__, []).extend(instances)

    def __getattr__(self, name: str) -> list[Any]:
        """
        Allow attribute access to entity lists.

        Raises:
            AttributeError: If no entities of that type were populated
        """
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        if name in self._entities:
            return self._entities[name]
        raise AttributeError(f"No entities of type '{name}' populated")

    def __len__(self) -> int:
        return sum(len(items) for items in self._entities.values())
