"""Custom exceptions with helpful error messages."""


class AutoPopulateError(Exception):
    """Base exception for autopopulate errors."""

    pass


class EntitySetNotFoundError(AutoPopulateError, LookupError):
    """Data context exposes no entity set for the requested type."""

    def __init__(self, entity_type: type, context_type: type):
        self.entity_type = entity_type
        self.context_type = context_type
        name = entity_type.__name__
        super().__init__(
            f"Context '{context_type.__name__}' has no entity set for '{name}'.\n\n"
            f"Suggestions:\n"
            f"1. Declare one on the context class:\n"
            f"   class {context_type.__name__}(DataContext):\n"
            f"       {name.lower()}s = EntitySet({name})\n\n"
            f"2. Or build a context for the models you need:\n"
            f"   context = DataContext.for_models({name})(session)"
        )


class ValueGenerationError(AutoPopulateError):
    """Could not generate a value for a type."""

    def __init__(self, target: object, member: str | None = None, reason: str = ""):
        self.target = target
        self.member = member
        where = f" for member '{member}'" if member else ""
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Could not generate a value of type {target!r}{where}{detail}.\n\n"
            f"Suggestions:\n"
            f"1. Register a factory for the type:\n"
            f"   fixture.register({getattr(target, '__name__', 'MyType')}, lambda: ...)\n\n"
            f"2. Set the member yourself in the setup callback:\n"
            f"   populator.given_entity(Model, context, lambda e: setattr(e, ...))"
        )


class RecursionDetectedError(AutoPopulateError):
    """Type graph recursion detected while the throwing behaviour is active."""

    def __init__(self, entity_type: type, path: tuple[type, ...]):
        self.entity_type = entity_type
        self.path = path
        chain = " -> ".join(t.__name__ for t in (*path, entity_type))
        super().__init__(
            f"Recursion detected while creating '{entity_type.__name__}': {chain}\n\n"
            f"Suggestions:\n"
            f"1. Use the omitting behaviour:\n"
            f"   fixture.behavior = OmitOnRecursionBehavior()\n\n"
            f"2. Or set AUTOPOPULATE_GENERATOR_RECURSION_POLICY=omit"
        )


class InvalidTargetError(AutoPopulateError):
    """Target reference does not resolve to a mapped entity class."""

    def __init__(self, target: str, reason: str):
        super().__init__(
            f"Invalid target '{target}': {reason}\n\n"
            f"Suggestions:\n"
            f"1. Use the 'package.module:ClassName' form\n"
            f"2. Make sure the class is a SQLAlchemy mapped class"
        )
