"""Recursion behaviours for the object generator.

The generator tracks the path of types currently being built. Before it
starts on a type it asks the active behaviour whether the type already
appears often enough on that path; if so the behaviour decides what
happens instead of recursing.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from autopopulate.exceptions import RecursionDetectedError
from autopopulate.models import RecursionPolicy

logger = logging.getLogger(__name__)


class _Omit:
    """Marker for a member the generator decided not to fill."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OMIT"

    def __bool__(self) -> bool:
        return False


OMIT = _Omit()


class RecursionBehavior(ABC):
    """
    Base class for recursion behaviours.

    Args:
        recursion_depth: Number of times a type may already be on the path
            before the behaviour fires (1 = fire on the first revisit)
    """

    def __init__(self, recursion_depth: int = 1):
        if recursion_depth < 1:
            raise ValueError("recursion_depth must be at least 1")
        self.recursion_depth = recursion_depth

    def is_recursive(self, entity_type: type, path: tuple[type, ...]) -> bool:
        return path.count(entity_type) >= self.recursion_depth

    @abstractmethod
    def handle_recursion(self, entity_type: type, path: tuple[type, ...]) -> Any:
        """Return the substitute for a recursive member, or raise."""
        pass


class OmitOnRecursionBehavior(RecursionBehavior):
    """Leave recursive members unset."""

    def handle_recursion(self, entity_type: type, path: tuple[type, ...]) -> Any:
        logger.debug(
            "Omitting recursive %s at depth %d", entity_type.__name__, len(path)
        )
        return OMIT


class ThrowingRecursionBehavior(RecursionBehavior):
    """Fail on recursive members."""

    def handle_recursion(self, entity_type: type, path: tuple[type, ...]) -> Any:
        raise RecursionDetectedError(entity_type, path)


def behavior_for(policy: RecursionPolicy | str, recursion_depth: int = 1) -> RecursionBehavior:
    """Build the recursion behaviour for a configured policy."""
    policy = RecursionPolicy(policy)
    if policy is RecursionPolicy.THROW:
        return ThrowingRecursionBehavior(recursion_depth)
    return OmitOnRecursionBehavior(recursion_depth)
