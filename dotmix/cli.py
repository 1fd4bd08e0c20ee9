"""
Main entry point for dotmix. Accessed by 'dotmix' in the command line.

Documents are read from JSON, JSONL or YAML files (by extension), or JSON on
stdin with "-". Results are printed as JSON.
"""
from functools import update_wrapper
from collections.abc import Mapping
from pathlib import Path
import json
from typing import Any

import click
import yaml

from dotmix.core.runtime import build_context, Context
from dotmix.table import to_dataframe
from dotmix.utils.collection import fetch, pluck_path
from dotmix.utils.dict_path import MISSING, PathConflictError, path
from dotmix.utils.merge import extend_deep, flatten, get_changes
from dotmix.utils.parse import load_document, parse_value, serialize


def pass_context(f):
    """
    Decorator to pass a Context to Click commands that need it.
    Ensures a Context is created and passed as the first argument.
    """
    @click.pass_context
    def new_func(ctx: click.Context, *args, **kwargs):
        ctx.ensure_object(dict)
        dm = ctx.obj.get('dm')
        if dm is None:
            opts = ctx.obj.get('global_opts', {})  # user overrides
            dm = build_context(**opts)
            ctx.obj['dm'] = dm
        # call the function with the dotmix Context
        return f(ctx.obj['dm'], *args, **kwargs)
    return update_wrapper(new_func, f)


def _load(source: str) -> Any:
    """Load a document, turning read/parse failures into clean CLI errors."""
    try:
        return load_document(source)
    except OSError as e:
        raise click.ClickException(f"Cannot read {source}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise click.ClickException(f"Cannot parse {source}: {e}") from e


def _load_mapping(source: str) -> Mapping:
    """Load a document that must be a single object, not a list or scalar."""
    data = _load(source)
    if not isinstance(data, Mapping):
        raise click.ClickException(f"{source} must be a mapping, got {type(data).__name__}")
    return data


def _echo(dm: Context, data: Any) -> None:
    click.echo(serialize(data, indent=dm.settings.indent or None))


DOCUMENT = click.argument("document", type=click.Path(allow_dash=True))


@click.group()
@click.option('--settings-dir', type=click.Path(path_type=Path), default=None,
              help="Directory holding settings.yaml.")
@click.option('-v', '--verbose', is_flag=True, default=False,
              help="Very detailed logging for debugging purposes.")
@click.version_option(package_name="dotmix")
@click.pass_context
def main(ctx, settings_dir, verbose):
    """dotmix: dot-path helpers for nested JSON and YAML documents."""
    ctx.ensure_object(dict)
    ctx.obj['global_opts'] = {
        'settings_dir': settings_dir,
        'verbose': verbose,
    }


@main.command()
@pass_context
@DOCUMENT
@click.argument("dot_path")
@click.option("--default", "default", default=None,
              help="Value (JSON or raw string) to print if the path is missing.")
def get(dm: Context, document: str, dot_path: str, default: str | None):
    """
    Print the value at DOT_PATH.

    Example: dotmix get config.yaml database.host
    """
    fallback = MISSING if default is None else parse_value(default)
    value = path(_load(document), dot_path, fallback)
    if value is MISSING:
        raise click.ClickException(f"Path not found: {dot_path}")
    _echo(dm, value)


@main.command(name="set")
@pass_context
@DOCUMENT
@click.argument("dot_path")
@click.argument("value")
def set_(dm: Context, document: str, dot_path: str, value: str):
    """
    Set DOT_PATH to VALUE (parsed as JSON when possible) and print the result.

    Example: dotmix set config.json database.port 5432
    """
    data = _load_mapping(document)
    try:
        dm.set_path(data, dot_path, parse_value(value))
    except PathConflictError as e:
        raise click.ClickException(str(e)) from e
    dm.logger.debug("Set %s in %s", dot_path, document)
    _echo(dm, data)


@main.command(name="flatten")
@pass_context
@DOCUMENT
def flatten_(dm: Context, document: str):
    """Print the document as a flat {path: value} object."""
    _echo(dm, flatten(_load_mapping(document)))


@main.command()
@pass_context
@DOCUMENT
def unflatten(dm: Context, document: str):
    """Rebuild a nested document from a flat {path: value} object."""
    try:
        data = dm.extend_paths({}, _load_mapping(document))
    except PathConflictError as e:
        raise click.ClickException(str(e)) from e
    _echo(dm, data)


@main.command()
@pass_context
@DOCUMENT
@click.argument("sources", nargs=-1, required=True, type=click.Path(allow_dash=True))
def merge(dm: Context, document: str, sources: tuple[str, ...]):
    """
    Deep-merge each SOURCE into DOCUMENT, in order. Lists are replaced.

    Example: dotmix merge defaults.yaml overrides.yaml
    """
    data = _load_mapping(document)
    for source in sources:
        extend_deep(data, _load_mapping(source))
        dm.logger.debug("Merged %s", source)
    _echo(dm, data)


@main.command()
@pass_context
@click.argument("before", type=click.Path(allow_dash=True))
@click.argument("after", type=click.Path(allow_dash=True))
def diff(dm: Context, before: str, after: str):
    """Print paths added or changed in AFTER (removals are not listed)."""
    _echo(dm, get_changes(_load_mapping(before), _load_mapping(after)))


@main.command()
@pass_context
@DOCUMENT
@click.argument("dot_path")
def pluck(dm: Context, document: str, dot_path: str):
    """Print DOT_PATH for every record; missing values are null."""
    _echo(dm, pluck_path(_load(document), dot_path))


@main.command(name="fetch")
@pass_context
@DOCUMENT
@click.argument("dot_path")
@click.argument("value")
@click.option("--strict", is_flag=True, default=False,
              help="Use exact equality instead of loose matching (10 == '10').")
def fetch_(dm: Context, document: str, dot_path: str, value: str, strict: bool):
    """
    Print the first record whose DOT_PATH matches VALUE.

    Example: dotmix fetch users.jsonl profile.slug ada-lovelace
    """
    records = _load(document)
    target = parse_value(value)
    if strict:
        item = fetch(records, dot_path, target, strict=True)
    else:
        item = dm.fetch(records, dot_path, target)
    if item is MISSING:
        raise click.ClickException(f"No record with {dot_path} == {value}")
    _echo(dm, item)


@main.command()
@pass_context
@DOCUMENT
@click.option("--csv", "as_csv", is_flag=True, default=False, help="Print CSV instead of a text table.")
def table(dm: Context, document: str, as_csv: bool):
    """Print records as a table with one column per flattened path."""
    df = to_dataframe(_load(document))
    dm.logger.debug("Built table with %s rows and %s columns", len(df), len(df.columns))
    click.echo(df.to_csv(index=False) if as_csv else df.to_string(index=False), nl=not as_csv)
