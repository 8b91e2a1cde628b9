"""Inspect command: show the attribute registry of a DomainObject subclass."""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

import typer
from rich.table import Table

from ...core.models import AttributeDefinition
from ...model import DomainObject
from ..app import app, console, get_json_mode


def _load_class(target: str, path: Path | None = None) -> type[DomainObject]:
    """Resolve "package.module:ClassName" to a DomainObject subclass.

    `path` (default: the working directory) is put at the front of sys.path
    only while the module is imported.
    """
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        console.print(f"[red]Invalid target:[/red] {target} (expected module:ClassName)")
        raise typer.Exit(1)

    search_path = str((path or Path.cwd()).resolve())
    sys.path.insert(0, search_path)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        console.print(f"[red]Cannot import[/red] {module_name}: {exc}")
        raise typer.Exit(1)
    finally:
        sys.path.remove(search_path)

    obj = module
    for part in class_name.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            console.print(f"[red]Not found:[/red] {class_name} in {module_name}")
            raise typer.Exit(1)

    if not isinstance(obj, type) or not issubclass(obj, DomainObject):
        console.print(f"[red]Not a DomainObject subclass:[/red] {target}")
        raise typer.Exit(1)
    return obj


def _row(definition: AttributeDefinition) -> dict[str, object]:
    backing = (
        f"{definition.datastream}.{definition.backing_field}"
        if definition.delegated
        else None
    )
    default = definition.default
    if isinstance(default, tuple):
        default = list(default)
    return {
        "name": definition.name,
        "backing": backing,
        "multiplicity": definition.multiplicity.value,
        "default": default,
        "editable": definition.editable,
        "displayable": definition.displayable,
        "reader": definition.reader.describe() if definition.reader else None,
        "writer": definition.writer.describe() if definition.writer else None,
        "validates": definition.validates,
        "label": definition.display_label,
    }


@app.command("inspect")
def inspect_command(
    target: str = typer.Argument(..., help="Class to inspect, as module:ClassName"),
    path: Path | None = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory to import the module from (default: current directory)",
    ),
):
    """Show every registered attribute of a class, in declaration order.

    Examples:
        registered-attributes inspect myapp.models:Work
        registered-attributes --json inspect myapp.models:Work
        registered-attributes inspect models:Work --path src/
    """
    cls = _load_class(target, path)
    rows = [_row(d) for d in cls.attribute_registry]

    if get_json_mode():
        print(json.dumps({"class": cls.__qualname__, "attributes": rows}, default=repr))
        return

    table = Table(title=f"{cls.__qualname__} attributes", show_header=True, header_style="bold")
    for column in rows[0].keys() if rows else ("name",):
        table.add_column(column)
    for row in rows:
        table.add_row(*("" if v is None else str(v) for v in row.values()))
    console.print(table)
    console.print(
        f"editable: {', '.join(cls.terms_for_editing()) or '[dim]none[/dim]'}"
    )
    console.print(
        f"displayable: {', '.join(cls.terms_for_display()) or '[dim]none[/dim]'}"
    )
