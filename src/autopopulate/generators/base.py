"""Base generator interface."""

from abc import ABC, abstractmethod
from typing import Any


class BaseGenerator(ABC):
    """
    Base class for custom scalar value generators.

    Subclass this to create custom generators that can be registered by
    name and selected with the generator ``strategy`` setting.

    Example:
        >>> class SKUGenerator(BaseGenerator):
        ...     def generate(self, member_name, python_type, **context):
        ...         if member_name != "sku":
        ...             return None
        ...         return f"SKU-{context['instance']:06d}"
        >>>
        >>> register_generator("sku", SKUGenerator)
        >>> fixture = Fixture(GeneratorConfig(strategy="sku"))
    """

    @abstractmethod
    def generate(self, member_name: str, python_type: Any, **context: Any) -> Any:
        """
        Generate a value for a member.

        Args:
            member_name: Attribute being generated
            python_type: Python type of the attribute
            **context: Additional context:
                - entity_type: Class that owns the member
                - instance: Per-class instance number (1-based)
                - length: Maximum length of string columns (or None)
                - unique: Whether the column has a UNIQUE constraint
                - faker: The fixture's Faker instance

        Returns:
            The value, or None to fall back to the built-in Faker generator
        """
        pass
