"""Validation CLI commands: validate and describe.

Exit codes for validate:
    0  the data is valid
    1  the data violates one or more constraints
    2  the constraint declarations (or the input) are broken
"""

import importlib
import json
from pathlib import Path
from typing import Any

import click
import yaml

from validforge.errors import ValidationEngineError
from validforge.metadata.registry import MetadataRegistry
from validforge.validation import validate as validate_instance


def _import_type(type_path: str) -> type:
    """Import a class from a "package.module:ClassName" path."""
    module_name, _, attr = type_path.partition(":")
    if not module_name or not attr:
        raise click.BadParameter(
            f"'{type_path}' must look like 'package.module:ClassName'",
            param_hint="TYPE",
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import '{module_name}': {e}", param_hint="TYPE")

    obj: Any = module
    for part in attr.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise click.BadParameter(
                f"'{attr}' not found in '{module_name}'", param_hint="TYPE"
            )
    if not isinstance(obj, type):
        raise click.BadParameter(f"'{type_path}' is not a class", param_hint="TYPE")
    return obj


@click.command()
@click.argument("type_path", metavar="TYPE")
@click.argument(
    "data_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
def validate(type_path: str, data_file: Path, as_json: bool):
    """Validate a YAML or JSON record against the constraints of TYPE."""
    entity_type = _import_type(type_path)

    try:
        with data_file.open() as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as e:
        click.echo(f"Error: cannot parse {data_file}: {e}", err=True)
        raise SystemExit(2)
    if not isinstance(data, dict):
        click.echo(f"Error: {data_file} must contain a mapping of field values", err=True)
        raise SystemExit(2)

    try:
        result = validate_instance(data, entity_type)
    except ValidationEngineError as e:
        click.echo(click.style(f"Constraint configuration error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        for violation in result.violations:
            click.echo(click.style(f"  ✗ {violation.field}: {violation.message}", fg="red"))

    if not result.is_valid:
        if not as_json:
            click.echo(
                click.style(f"\n{len(result.errors)} violation(s) found", fg="red", bold=True)
            )
        raise SystemExit(1)

    if not as_json:
        click.echo(click.style("Valid.", fg="green", bold=True))


@click.command()
@click.argument("type_path", metavar="TYPE")
def describe(type_path: str):
    """Show the constraints declared on TYPE."""
    entity_type = _import_type(type_path)

    try:
        fields = MetadataRegistry.fields(entity_type)
    except ValidationEngineError as e:
        click.echo(click.style(f"Constraint configuration error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    click.echo(f"{entity_type.__qualname__}:")
    for field in fields:
        click.echo(f"  {field.name} ({field.type.value})")
        for constraint in field.constraints:
            params = ", ".join(f"{k}={v}" for k, v in constraint.params.items())
            kind = f"{constraint.kind.value}({params})" if params else constraint.kind.value
            click.echo(f"    - {kind}: {constraint.message}")

    total = sum(len(f.constraints) for f in fields)
    click.echo(f"\n{total} constraint(s) on {len(fields)} field(s)")
