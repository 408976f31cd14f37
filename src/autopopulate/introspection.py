"""Entity introspection with caching.

Value members and navigation members are discovered structurally: for
SQLAlchemy mapped classes from the mapper's column and relationship
properties, for plain classes from dataclass fields or type hints.
"""

import dataclasses
import inspect as pyinspect
import logging
import typing
from typing import Any

from sqlalchemy import Column, inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Mapper

from autopopulate.context import EntitySet
from autopopulate.models import EntityInfo, NavigationInfo, PropertyInfo

logger = logging.getLogger(__name__)


def get_mapper(entity_type: Any) -> Mapper | None:
    """Return the SQLAlchemy mapper of a class, or None if it isn't mapped."""
    if not isinstance(entity_type, type):
        return None
    try:
        insp = sa_inspect(entity_type)
    except NoInspectionAvailable:
        return None
    return insp if isinstance(insp, Mapper) else None


def is_mapped(entity_type: Any) -> bool:
    return get_mapper(entity_type) is not None


def python_type_of(type_: Any) -> Any:
    """Python type of a SQLAlchemy type, or None when the type doesn't declare one."""
    try:
        return type_.python_type
    except NotImplementedError:
        return None


def _is_generated_column(column: Column, polymorphic_on: Any) -> bool:
    return (
        column is getattr(column.table, "autoincrement_column", None)
        or column.computed is not None
        or column.identity is not None
        or (polymorphic_on is not None and column is polymorphic_on)
    )


class EntityIntrospector:
    """Introspect entity classes and data contexts with caching."""

    def __init__(self):
        self._entity_cache: dict[type, EntityInfo] = {}

    def get_entity_info(self, entity_type: type) -> EntityInfo:
        """Get complete entity information (cached)."""
        if entity_type in self._entity_cache:
            return self._entity_cache[entity_type]

        mapper = get_mapper(entity_type)
        if mapper is not None:
            info = EntityInfo(
                entity_type=entity_type,
                properties=self.get_column_properties(mapper),
                navigations=self.get_navigation_properties(mapper),
                is_mapped=True,
            )
        else:
            info = EntityInfo(
                entity_type=entity_type,
                properties=self.get_annotated_properties(entity_type),
            )

        self._entity_cache[entity_type] = info
        return info

    def get_column_properties(self, mapper: Mapper) -> list[PropertyInfo]:
        """Get value members of a mapped class from its column attributes."""
        polymorphic_on = mapper.polymorphic_on
        properties = []

        for prop in mapper.column_attrs:
            column = prop.columns[0]
            # column_property() over a SQL expression has nothing to assign
            if not isinstance(column, Column):
                continue

            # Joined inheritance maps one key over every table in the
            # hierarchy; the base table's column is the one that generates
            is_generated = any(
                isinstance(col, Column) and _is_generated_column(col, polymorphic_on)
                for col in prop.columns
            )

            properties.append(
                PropertyInfo(
                    name=prop.key,
                    python_type=python_type_of(column.type),
                    nullable=bool(column.nullable),
                    is_primary_key=column.primary_key,
                    is_foreign_key=bool(column.foreign_keys),
                    is_unique=bool(column.unique),
                    is_generated=bool(is_generated),
                    length=getattr(column.type, "length", None),
                    column_type=column.type,
                )
            )

        return properties

    def get_navigation_properties(self, mapper: Mapper) -> list[NavigationInfo]:
        """Get relationship members of a mapped class."""
        return [
            NavigationInfo(
                name=rel.key,
                target=rel.mapper.class_,
                uselist=bool(rel.uselist),
                collection_class=rel.collection_class,
                viewonly=rel.viewonly,
            )
            for rel in mapper.relationships
        ]

    def get_annotated_properties(self, entity_type: type) -> list[PropertyInfo]:
        """Get public members of a plain class from dataclass fields or type hints."""
        try:
            hints = typing.get_type_hints(entity_type, include_extras=True)
        except (NameError, TypeError):
            logger.debug("Could not resolve type hints of %s", entity_type.__name__)
            hints = {}

        if dataclasses.is_dataclass(entity_type):
            return [
                PropertyInfo(name=f.name, python_type=hints.get(f.name, f.type))
                for f in dataclasses.fields(entity_type)
                if f.init
            ]

        return [
            PropertyInfo(name=name, python_type=hint)
            for name, hint in hints.items()
            if not name.startswith("_") and typing.get_origin(hint) is not typing.ClassVar
        ]

    def find_entity_sets(self, context: Any, entity_type: type) -> list[str]:
        """
        Find the entity sets of a data context whose element type is entity_type.

        Inspects the members exposed by the context's class; matching is
        on the exact element type, subclasses and base classes don't match.

        Returns:
            Attribute names of matching entity sets (possibly empty)
        """
        return [
            name
            for name, member in pyinspect.getmembers(type(context))
            if isinstance(member, EntitySet) and member.entity_type is entity_type
        ]

    def clear_cache(self) -> None:
        """Clear cached introspection data."""
        self._entity_cache.clear()
