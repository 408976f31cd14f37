"""Tests for @given_entity() pytest decorator."""

from autopopulate import Entities, given_entity
from autopopulate.models import PopulatePlan
from sample_models import Customer, Order


@given_entity(Customer, count=2)
def test_decorator_basic(given, data_context):
    """Should inject populated entities into the test function."""
    assert hasattr(given, "Customer")
    assert len(given.Customer) == 2
    assert len(data_context.customers) == 2

    for customer in given.Customer:
        assert customer.id is not None
        assert customer.orders == []


@given_entity(Customer)
@given_entity(Order, count=3, setup=lambda o, given: setattr(o, "customer_id", given.Customer[0].id))
def test_decorator_multiple_types(given, data_context):
    """Later plans should see entities from earlier ones."""
    customer = given.Customer[0]

    assert len(given.Order) == 3
    for order in given.Order:
        assert order.customer_id == customer.id
        assert order.customer is None
    assert len(given) == 4


@given_entity(Customer, setup=lambda c: setattr(c, "city", "Springfield"))
def test_decorator_with_setup(given):
    """Should apply single-argument setup callbacks."""
    assert given.Customer[0].city == "Springfield"


def test_decorator_without_plans(given):
    """Tests without plans should get None."""
    assert given is None


def test_decorator_records_plans_in_source_order():
    @given_entity(Customer)
    @given_entity(Order, count=2)
    def sample():
        pass

    assert [(p.entity_type, p.count) for p in sample._populate_plans] == [
        (Customer, 1),
        (Order, 2),
    ]
    assert all(isinstance(p, PopulatePlan) for p in sample._populate_plans)


def test_entities_container():
    entities = Entities()
    entities.add(Customer, ["a", "b"])
    entities.add(Customer, ["c"])

    assert entities.Customer == ["a", "b", "c"]
    assert len(entities) == 3
    assert not hasattr(entities, "Order")
