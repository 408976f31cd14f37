"""CLI commands for autopopulate."""

import decimal
import importlib
import sys
from typing import Any

import click
from sqlalchemy import create_engine, inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError

from autopopulate.config import Config
from autopopulate.context import DataContext
from autopopulate.exceptions import AutoPopulateError, InvalidTargetError
from autopopulate.introspection import EntityIntrospector, get_mapper
from autopopulate.models import EntityInfo
from autopopulate.populator import AutoPopulateDatabase

TRUE_VALUES = {"1", "true", "yes", "on"}


def load_target(target: str) -> type:
    """
    Import a mapped class from a 'package.module:ClassName' reference.

    Raises:
        InvalidTargetError: If the reference is malformed, cannot be
            imported, or isn't a mapped class
    """
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise InvalidTargetError(target, "expected 'module:ClassName'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidTargetError(target, f"cannot import module ({e})") from e

    entity_type = getattr(module, class_name, None)
    if entity_type is None:
        raise InvalidTargetError(target, f"module has no attribute '{class_name}'")
    if get_mapper(entity_type) is None:
        raise InvalidTargetError(target, "not a SQLAlchemy mapped class")
    return entity_type


def parse_assignments(info: EntityInfo, assignments: tuple[str, ...]) -> dict[str, Any]:
    """Parse NAME=VALUE pairs, converting values to the member's Python type."""
    values: dict[str, Any] = {}
    for assignment in assignments:
        name, sep, raw = assignment.partition("=")
        if not sep:
            raise click.BadParameter(f"'{assignment}' is not NAME=VALUE", param_hint="--set")

        prop = info.get_property(name)
        if prop is None:
            raise click.BadParameter(
                f"{info.name} has no column attribute '{name}'", param_hint="--set"
            )

        try:
            values[name] = _convert(raw, prop.python_type)
        except (ValueError, decimal.InvalidOperation) as e:
            raise click.BadParameter(f"{name}: {e}", param_hint="--set") from e
    return values


def _convert(raw: str, python_type: Any) -> Any:
    if raw.lower() in ("null", "none"):
        return None
    if python_type is bool:
        return raw.lower() in TRUE_VALUES
    if python_type in (int, float, decimal.Decimal):
        return python_type(raw)
    return raw


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


@click.group()
@click.version_option(package_name="autopopulate-db")
def cli() -> None:
    """autopopulate - fill a database with random test entities."""
    pass


@cli.command()
@click.argument("target")
@click.option("--count", type=click.IntRange(min=1), default=1, show_default=True,
              help="Number of rows to insert")
@click.option("--database-url", help="Database URL (default: from configuration)")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="Path to autopopulate.toml")
@click.option("--create-tables", is_flag=True, help="Create missing tables first")
@click.option("--set", "assignments", multiple=True, metavar="NAME=VALUE",
              help="Fixed column value (repeatable)")
def populate(
    target: str,
    count: int,
    database_url: str | None,
    config_path: str | None,
    create_tables: bool,
    assignments: tuple[str, ...],
) -> None:
    """Insert random rows of TARGET (module:ClassName)."""
    try:
        entity_type = load_target(target)
    except InvalidTargetError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    config = Config.load(config_path)
    if database_url:
        config.database.url = database_url

    populator = AutoPopulateDatabase(config=config.generator)
    values = parse_assignments(populator.introspector.get_entity_info(entity_type), assignments)

    def setup(entity: Any) -> None:
        for name, value in values.items():
            setattr(entity, name, value)

    engine = create_engine(config.database.sqlalchemy_url, echo=config.database.echo)
    try:
        if create_tables:
            get_mapper(entity_type).local_table.metadata.create_all(engine)

        context_class = DataContext.for_models(entity_type)
        with context_class.from_engine(engine) as context:
            entities = populator.given_entities(entity_type, context, count, setup)
            for entity in entities:
                identity = sa_inspect(entity).identity
                key = identity[0] if identity and len(identity) == 1 else identity
                click.echo(f"{entity_type.__name__} {key}")
    except (AutoPopulateError, SQLAlchemyError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        engine.dispose()


@cli.command(name="inspect")
@click.argument("target")
def inspect_command(target: str) -> None:
    """Show the value and navigation members of TARGET (module:ClassName)."""
    try:
        entity_type = load_target(target)
    except InvalidTargetError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    info = EntityIntrospector().get_entity_info(entity_type)

    click.echo(f"{info.name}")
    click.echo("  columns:")
    for prop in info.properties:
        flags = [
            flag
            for flag, enabled in (
                ("pk", prop.is_primary_key),
                ("fk", prop.is_foreign_key),
                ("unique", prop.is_unique),
                ("generated", prop.is_generated),
                ("nullable", prop.nullable),
            )
            if enabled
        ]
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(f"    {prop.name}: {_type_name(prop.python_type)}{suffix}")

    click.echo("  navigations (cleared on populate):")
    for nav in info.navigations:
        kind = "many" if nav.uselist else "one"
        click.echo(f"    {nav.name}: {nav.target.__name__} ({kind})")


if __name__ == "__main__":
    cli()
