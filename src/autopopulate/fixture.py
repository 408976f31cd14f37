"""Random object generator.

Fixture synthesizes fully populated instances of arbitrary types:
SQLAlchemy mapped classes (columns and relationships), dataclasses,
plain classes with a default constructor and annotated attributes,
collections, enums and scalars.

Example:
    >>> fixture = Fixture()
    >>> customer = fixture.create(Customer)
    >>> customer.email
    'pmartin@example.org'
"""

import collections.abc
import dataclasses
import inspect
import logging
import types
import typing
from collections.abc import Callable
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from faker import Faker
from sqlalchemy import ARRAY

from autopopulate.config import GeneratorConfig
from autopopulate.exceptions import ValueGenerationError
from autopopulate.generators import FakerGenerator
from autopopulate.generators.base import BaseGenerator
from autopopulate.generators.registry import get_generator, list_generators
from autopopulate.introspection import EntityIntrospector, python_type_of
from autopopulate.models import EntityInfo, NavigationInfo, PropertyInfo
from autopopulate.recursion import OMIT, RecursionBehavior, behavior_for

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")

LIST_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
)
SET_ORIGINS = (set, collections.abc.Set, collections.abc.MutableSet)
DICT_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


class Fixture:
    """
    Synthesizes random-but-valid instances of arbitrary types.

    Args:
        config: Generator configuration (defaults from environment)
        faker: Faker instance to draw values from (built from config.locale
            and config.seed when omitted)
        introspector: Shared EntityIntrospector

    Attributes:
        behavior: Active recursion behaviour; replace it to switch between
            omitting and throwing on recursive types
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        faker: Faker | None = None,
        introspector: EntityIntrospector | None = None,
    ):
        self.config = config or GeneratorConfig()
        self.faker = faker or Faker(self.config.locale)
        if self.config.seed is not None:
            self.faker.seed_instance(self.config.seed)

        self.values = FakerGenerator(self.faker)
        self.introspector = introspector or EntityIntrospector()
        self.behavior: RecursionBehavior = behavior_for(
            self.config.recursion_policy, self.config.recursion_depth
        )
        self.custom_generator = self._load_strategy(self.config.strategy)
        self._factories: dict[Any, Callable[[], Any]] = {}
        self._instances: dict[type, int] = {}

    def _load_strategy(self, strategy: str) -> BaseGenerator | None:
        if strategy == "faker":
            return None
        generator_class = get_generator(strategy)
        if generator_class is None:
            raise ValueError(
                f"Unknown strategy '{strategy}'. "
                f"Available: 'faker', {list_generators()}. "
                f"Register custom generator with register_generator()."
            )
        return generator_class()

    def register(self, tp: Any, factory: Callable[[], Any]) -> None:
        """Use factory() for every value of type tp instead of synthesizing one."""
        self._factories[tp] = factory

    def create(self, tp: type[T]) -> T:
        """
        Create a populated value of type tp.

        Raises:
            ValueGenerationError: If some member type cannot be generated
            RecursionDetectedError: If the throwing behaviour is active and
                the type graph is recursive
        """
        value = self._resolve(tp, member=None, path=())
        return None if value is OMIT else value

    def create_many(self, tp: type[T], count: int | None = None) -> list[T]:
        """Create count values of type tp (collection_size by default)."""
        if count is None:
            count = self.config.collection_size
        return [self.create(tp) for _ in range(count)]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _resolve(self, tp: Any, member: str | None, path: tuple[type, ...]) -> Any:
        if tp in self._factories:
            return self._factories[tp]()

        origin = get_origin(tp)
        args = get_args(tp)

        if origin is Annotated:
            return self._resolve(args[0], member, path)

        if origin is Union or origin is types.UnionType:
            candidates = [arg for arg in args if arg is not type(None)]
            if not candidates:
                return None
            value = self._resolve(candidates[0], member, path)
            return None if value is OMIT else value

        if origin is Literal:
            return self.faker.random_element(list(args))

        if origin is not None and args:
            return self._create_collection(origin, args, member, path)

        if tp is Any or tp is object:
            raise ValueGenerationError(tp, member, "type is too general to synthesize")

        if isinstance(tp, type):
            if self.values.supports(tp):
                return self._generate_scalar(tp, member or tp.__name__.lower(), None, 1)
            return self._create_object(tp, path)

        raise ValueGenerationError(tp, member, "unsupported annotation")

    def _create_collection(
        self, origin: Any, args: tuple, member: str | None, path: tuple[type, ...]
    ) -> Any:
        size = self.config.collection_size

        if origin is tuple:
            if len(args) == 2 and args[1] is Ellipsis:
                items = [self._resolve(args[0], member, path) for _ in range(size)]
                return tuple(item for item in items if item is not OMIT)
            items = [self._resolve(arg, member, path) for arg in args]
            return tuple(None if item is OMIT else item for item in items)

        if origin in DICT_ORIGINS:
            key_type, value_type = args if len(args) == 2 else (str, args[0])
            result = {}
            for _ in range(size):
                value = self._resolve(value_type, member, path)
                if value is OMIT:
                    continue
                result[self._resolve(key_type, member, path)] = value
            return result

        items = [self._resolve(args[0], member, path) for _ in range(size)]
        items = [item for item in items if item is not OMIT]

        if origin is frozenset:
            return frozenset(items)
        if origin in SET_ORIGINS:
            return set(items)
        if origin in LIST_ORIGINS:
            return items

        raise ValueGenerationError(origin, member, "unsupported collection type")

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _create_object(self, cls: type, path: tuple[type, ...]) -> Any:
        if len(path) >= self.config.max_depth:
            logger.debug("Omitting %s beyond max depth %d", cls.__name__, self.config.max_depth)
            return OMIT

        if self.behavior.is_recursive(cls, path):
            return self.behavior.handle_recursion(cls, path)

        path = (*path, cls)
        info = self.introspector.get_entity_info(cls)
        instance = self._next_instance(cls)

        if info.is_mapped:
            obj = self._create_entity(info, path, instance)
        elif dataclasses.is_dataclass(cls):
            kwargs = {}
            for prop in info.properties:
                value = self._resolve_property(cls, prop, path, instance)
                kwargs[prop.name] = None if value is OMIT else value
            obj = cls(**kwargs)
        else:
            obj = self._construct(cls)
            for prop in info.properties:
                value = self._resolve_property(cls, prop, path, instance)
                if value is not OMIT:
                    setattr(obj, prop.name, value)

        logger.debug("Created %s #%d", cls.__name__, instance)
        return obj

    def _create_entity(self, info: EntityInfo, path: tuple[type, ...], instance: int) -> Any:
        entity = self._construct(info.entity_type)

        for prop in info.properties:
            if prop.is_generated:
                continue
            # Nullable references stay empty; required ones are random and
            # expected to be overridden by the caller.
            if prop.is_foreign_key and prop.nullable:
                continue
            setattr(entity, prop.name, self._generate_column(info.entity_type, prop, instance))

        for nav in info.navigations:
            if nav.viewonly:
                continue
            value = self._create_navigation(nav, path)
            if value is not OMIT:
                setattr(entity, nav.name, value)

        return entity

    def _create_navigation(self, nav: NavigationInfo, path: tuple[type, ...]) -> Any:
        if not nav.uselist:
            return self._create_object(nav.target, path)

        collection_class = nav.collection_class or list
        if collection_class not in (list, set):
            logger.debug("Skipping %s: keyed collections are not generated", nav.name)
            return OMIT

        items = [
            self._create_object(nav.target, path)
            for _ in range(self.config.collection_size)
        ]
        items = [item for item in items if item is not OMIT]
        if not items:
            return OMIT
        return collection_class(items)

    def _construct(self, cls: type) -> Any:
        if cls in self._factories:
            return self._factories[cls]()
        try:
            inspect.signature(cls).bind()
        except TypeError as e:
            raise ValueGenerationError(cls, None, f"no default constructor ({e})") from e
        except ValueError:
            # No introspectable signature (builtin or extension type)
            pass
        return cls()

    def _next_instance(self, cls: type) -> int:
        self._instances[cls] = self._instances.get(cls, 0) + 1
        return self._instances[cls]

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _resolve_property(
        self, owner: type, prop: PropertyInfo, path: tuple[type, ...], instance: int
    ) -> Any:
        tp = prop.python_type
        if isinstance(tp, type) and tp not in self._factories and self.values.supports(tp):
            return self._generate_scalar(tp, prop.name, owner, instance)
        return self._resolve(tp, prop.name, path)

    def _generate_column(self, owner: type, prop: PropertyInfo, instance: int) -> Any:
        if prop.python_type in self._factories:
            return self._factories[prop.python_type]()

        if isinstance(prop.column_type, ARRAY):
            item_type = python_type_of(prop.column_type.item_type)
            return [
                self._generate_scalar(item_type, prop.name, owner, instance)
                for _ in range(self.config.collection_size)
            ]

        if prop.python_type is None:
            raise ValueGenerationError(
                prop.column_type, prop.name, "column type declares no Python type"
            )

        return self._generate_scalar(
            prop.python_type,
            prop.name,
            owner,
            instance,
            length=prop.length,
            unique=prop.is_unique,
            column_type=prop.column_type,
        )

    def _generate_scalar(
        self,
        python_type: Any,
        member: str,
        owner: type | None,
        instance: int,
        length: int | None = None,
        unique: bool = False,
        column_type: Any = None,
    ) -> Any:
        if self.custom_generator is not None:
            value = self.custom_generator.generate(
                member,
                python_type,
                entity_type=owner,
                instance=instance,
                length=length,
                unique=unique,
                faker=self.faker,
            )
            if value is not None:
                return value

        if python_type is None:
            raise ValueGenerationError(column_type, member, "type declares no Python type")

        return self.values.generate(
            member, python_type, length=length, unique=unique, column_type=column_type
        )

