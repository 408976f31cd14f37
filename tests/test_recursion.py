"""Tests for recursion behaviours."""

import pytest

from autopopulate import (
    OMIT,
    OmitOnRecursionBehavior,
    RecursionDetectedError,
    RecursionPolicy,
    ThrowingRecursionBehavior,
)
from autopopulate.recursion import behavior_for
from sample_models import Category, Customer, Order


def test_omit_marker():
    assert not OMIT
    assert repr(OMIT) == "OMIT"
    assert type(OMIT)() is OMIT


def test_is_recursive():
    behavior = OmitOnRecursionBehavior()

    assert not behavior.is_recursive(Customer, ())
    assert not behavior.is_recursive(Customer, (Order,))
    assert behavior.is_recursive(Customer, (Customer, Order))


def test_recursion_depth():
    behavior = OmitOnRecursionBehavior(recursion_depth=2)

    assert not behavior.is_recursive(Category, (Category,))
    assert behavior.is_recursive(Category, (Category, Category))


def test_invalid_recursion_depth():
    with pytest.raises(ValueError):
        ThrowingRecursionBehavior(recursion_depth=0)


def test_omit_behavior():
    assert OmitOnRecursionBehavior().handle_recursion(Category, (Category,)) is OMIT


def test_throwing_behavior():
    with pytest.raises(RecursionDetectedError) as exc_info:
        ThrowingRecursionBehavior().handle_recursion(Customer, (Customer, Order))

    assert "Customer -> Order -> Customer" in str(exc_info.value)


def test_behavior_for():
    assert isinstance(behavior_for(RecursionPolicy.OMIT), OmitOnRecursionBehavior)
    assert isinstance(behavior_for("throw"), ThrowingRecursionBehavior)
    assert behavior_for("omit", 3).recursion_depth == 3

    with pytest.raises(ValueError):
        behavior_for("ignore")
