"""Tests for custom generator plugin system."""

import pytest

from autopopulate import (
    AutoPopulateDatabase,
    BaseGenerator,
    Fixture,
    GeneratorConfig,
    clear_generators,
    list_generators,
    register_generator,
    unregister_generator,
)
from sample_models import Customer, Product


class SKUGenerator(BaseGenerator):
    def generate(self, member_name, python_type, **context):
        if member_name != "sku":
            return None
        return f"SKU-{context['instance']:06d}"


@pytest.fixture(autouse=True)
def _clean_registry():
    yield
    clear_generators()


def test_register_custom_generator():
    """Test registering and using custom generator."""
    register_generator("sku", SKUGenerator)

    assert "sku" in list_generators()

    fixture = Fixture(GeneratorConfig(strategy="sku"))
    products = fixture.create_many(Product, 3)

    for i, product in enumerate(products, start=1):
        assert product.sku == f"SKU-{i:06d}", f"Expected SKU-{i:06d}, got {product.sku}"


def test_custom_generator_falls_back_to_faker():
    """Members the generator returns None for should use Faker."""
    register_generator("sku", SKUGenerator)

    product = Fixture(GeneratorConfig(strategy="sku")).create(Product)

    assert isinstance(product.title, str)
    assert isinstance(product.price, float)


def test_custom_generator_receives_context():
    """Test custom generator receives owner, length and uniqueness."""
    seen = []

    class RecordingGenerator(BaseGenerator):
        def generate(self, member_name, python_type, **context):
            seen.append((member_name, context))
            return None

    register_generator("recording", RecordingGenerator)
    Fixture(GeneratorConfig(strategy="recording", max_depth=1)).create(Customer)

    by_member = dict(seen)
    assert by_member["email"]["entity_type"] is Customer
    assert by_member["email"]["unique"] is True
    assert by_member["email"]["length"] == 120
    assert by_member["email"]["instance"] == 1
    assert "faker" in by_member["name"]
    assert "id" not in by_member


def test_strategy_used_by_populator(data_context):
    """Populated rows should carry values from the selected strategy."""
    register_generator("sku", SKUGenerator)
    populator = AutoPopulateDatabase(config=GeneratorConfig(strategy="sku"))

    first = populator.given_entity(Product, data_context)
    second = populator.given_entity(Product, data_context)

    assert first.sku == "SKU-000001"
    assert second.sku == "SKU-000002"


def test_unregister_generator():
    register_generator("sku", SKUGenerator)

    unregister_generator("sku")

    assert "sku" not in list_generators()
    with pytest.raises(ValueError, match="Unknown strategy"):
        Fixture(GeneratorConfig(strategy="sku"))


def test_faker_name_is_reserved():
    """The built-in strategy name cannot be replaced."""
    with pytest.raises(ValueError, match="built-in"):
        register_generator("faker", SKUGenerator)


def test_generator_without_generate_method():
    class NotAGenerator:
        pass

    with pytest.raises(ValueError, match="must have 'generate' method"):
        register_generator("broken", NotAGenerator)
