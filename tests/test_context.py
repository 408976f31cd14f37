"""Tests for DataContext and EntitySet."""

import datetime

import pytest
from sqlalchemy.orm import Session

from autopopulate import DataContext, EntityCollection, EntitySet
from sample_models import Category, Customer, CustomersOnlyContext, Order, ShopContext


def _customer(**kwargs) -> Customer:
    values = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "created_at": datetime.datetime(2024, 1, 1),
    }
    values.update(kwargs)
    return Customer(**values)


def test_entity_set_on_class_is_declaration():
    declared = ShopContext.customers

    assert isinstance(declared, EntitySet)
    assert declared.entity_type is Customer
    assert declared.name == "customers"
    assert repr(declared) == "EntitySet(Customer)"


def test_entity_set_on_instance_is_bound(data_context):
    collection = data_context.customers

    assert isinstance(collection, EntityCollection)
    assert collection.entity_type is Customer
    assert collection.session is data_context.session


def test_add_and_save_changes(data_context, engine):
    """Should insert pending entities on save_changes()."""
    customer = data_context.customers.add(_customer())
    data_context.save_changes()

    assert customer.id is not None
    assert len(data_context.customers) == 1
    assert customer in data_context.customers
    assert data_context.customers.get(customer.id) is customer

    with Session(engine) as session:
        assert session.get(Customer, customer.id).email == "ada@example.com"


def test_add_rejects_other_types(data_context):
    with pytest.raises(TypeError, match="Expected Customer, got Order"):
        data_context.customers.add(Order())


def test_contains(data_context):
    unsaved = _customer()

    assert unsaved not in data_context.customers
    assert "Ada" not in data_context.customers


def test_add_all_and_iterate(data_context):
    data_context.customers.add_all(
        [_customer(email="a@example.com"), _customer(email="b@example.com")]
    )
    data_context.save_changes()

    assert {c.email for c in data_context.customers} == {"a@example.com", "b@example.com"}
    assert len(data_context.customers.all()) == 2


def test_remove(data_context):
    customer = data_context.customers.add(_customer())
    data_context.save_changes()

    data_context.customers.remove(customer)
    data_context.save_changes()

    assert len(data_context.customers) == 0


def test_rollback_discards_pending(data_context):
    data_context.customers.add(_customer())
    data_context.rollback()

    assert len(data_context.customers) == 0


def test_entity_sets():
    """Should list declared sets, including inherited ones."""

    class ExtendedContext(CustomersOnlyContext):
        categories = EntitySet(Category)

    sets = ExtendedContext.entity_sets()

    assert set(sets) == {"customers", "categories"}
    assert sets["categories"].entity_type is Category


def test_for_models(engine):
    """Should build a context with one set per model, named by table."""
    context_class = DataContext.for_models(Customer, Order, name="AdHocContext")

    assert context_class.__name__ == "AdHocContext"
    assert issubclass(context_class, DataContext)
    assert set(context_class.entity_sets()) == {"customers", "orders"}

    with context_class.from_engine(engine) as context:
        context.customers.add(_customer())
        context.save_changes()
        assert len(context.customers) == 1


def test_context_manager_closes_session(engine):
    with ShopContext.from_engine(engine) as context:
        context.customers.add(_customer())

    # Closing discards the uncommitted insert
    with Session(engine) as session:
        assert session.query(Customer).count() == 0
