"""Generator registry for custom generator plugins."""

from autopopulate.generators.base import BaseGenerator


class GeneratorRegistry:
    """Registry of custom scalar generators, keyed by strategy name."""

    def __init__(self):
        self._generators: dict[str, type[BaseGenerator]] = {}

    def register(self, name: str, generator_class: type) -> None:
        """
        Register a custom generator.

        Args:
            name: Strategy name (value of GeneratorConfig.strategy)
            generator_class: Generator class (must have generate method)

        Raises:
            ValueError: If the name is reserved or the class has no generate method
        """
        if name == "faker":
            raise ValueError("'faker' is the built-in strategy and cannot be replaced")
        if not callable(getattr(generator_class, "generate", None)):
            raise ValueError(
                f"Generator class must have 'generate' method. "
                f"Class {generator_class.__name__} is missing it."
            )
        self._generators[name] = generator_class

    def unregister(self, name: str) -> None:
        self._generators.pop(name, None)

    def get(self, name: str) -> type[BaseGenerator] | None:
        return self._generators.get(name)

    def list_generators(self) -> list[str]:
        return list(self._generators.keys())

    def clear(self) -> None:
        """Clear all registered generators (for testing)."""
        self._generators.clear()


# Global registry instance
_registry = GeneratorRegistry()


def register_generator(name: str, generator_class: type) -> None:
    """
    Register a custom generator (user-facing API).

    Example:
        >>> from autopopulate import BaseGenerator, register_generator
        >>>
        >>> class SKUGenerator(BaseGenerator):
        ...     def generate(self, member_name, python_type, **context):
        ...         if member_name == "sku":
        ...             return f"SKU-{context['instance']:06d}"
        ...         return None
        >>>
        >>> register_generator("sku", SKUGenerator)
    """
    _registry.register(name, generator_class)


def unregister_generator(name: str) -> None:
    _registry.unregister(name)


def get_generator(name: str) -> type[BaseGenerator] | None:
    return _registry.get(name)


def list_generators() -> list[str]:
    return _registry.list_generators()


def clear_generators() -> None:
    """Clear all registered generators (for testing)."""
    _registry.clear()
