"""
autopopulate - Random Test Entities for Integration Tests

Populates a database with randomly generated, persisted entities through a
SQLAlchemy-backed data context, with relationship properties left empty.
"""

from autopopulate.config import Config, DatabaseConfig, GeneratorConfig
from autopopulate.context import DataContext, EntityCollection, EntitySet
from autopopulate.decorators import given_entity
from autopopulate.exceptions import (
    AutoPopulateError,
    EntitySetNotFoundError,
    InvalidTargetError,
    RecursionDetectedError,
    ValueGenerationError,
)
from autopopulate.fixture import Fixture
from autopopulate.generators.base import BaseGenerator
from autopopulate.generators.registry import (
    clear_generators,
    list_generators,
    register_generator,
    unregister_generator,
)
from autopopulate.models import Entities, RecursionPolicy
from autopopulate.populator import AutoPopulateDatabase
from autopopulate.recursion import (
    OMIT,
    OmitOnRecursionBehavior,
    RecursionBehavior,
    ThrowingRecursionBehavior,
)

__version__ = "0.1.0"

__all__ = [
    "AutoPopulateDatabase",
    "Fixture",
    "DataContext",
    "EntitySet",
    "EntityCollection",
    "given_entity",
    "Entities",
    "Config",
    "DatabaseConfig",
    "GeneratorConfig",
    "RecursionPolicy",
    "RecursionBehavior",
    "OmitOnRecursionBehavior",
    "ThrowingRecursionBehavior",
    "OMIT",
    "BaseGenerator",
    "register_generator",
    "unregister_generator",
    "list_generators",
    "clear_generators",
    "AutoPopulateError",
    "EntitySetNotFoundError",
    "ValueGenerationError",
    "RecursionDetectedError",
    "InvalidTargetError",
]
