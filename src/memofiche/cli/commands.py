"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from memofiche.config import Settings, load_config
from memofiche.core.export import dump_json
from memofiche.core.pipeline import run_migrate, run_normalize
from memofiche.core.variants import (
    DEFAULT_TABLE, VariantTable, load_variant_table, mandatory_ids,
)


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, and configure logging from it."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _table(settings: Settings) -> VariantTable:
    """Variant table from settings.variants_file, else the built-in table."""
    if not settings.variants_file:
        return DEFAULT_TABLE
    try:
        return load_variant_table(settings.variants_file)
    except ValueError as e:
        _fail("Could not load variant table", e)


def normalize_cmd(
    path: Annotated[str, typer.Argument(help="Stored JSON document (object or list of objects)")],
    out: Annotated[Optional[str], typer.Option("--out", help="Write canonical JSON here instead of stdout")] = None,
    variants: Annotated[Optional[str], typer.Option("--variants-file", help="YAML variant table")] = None,
    ):
    """Normalize one stored document and print its canonical JSON."""
    settings = _settings(overrides={"variants_file": variants})
    table = _table(settings)
    try:
        canonical = run_normalize(Path(path), table)
    except RuntimeError as e:
        _fail(str(e))

    text = dump_json(canonical, settings.indent)
    if out:
        Path(out).write_text(text + "\n", encoding="utf-8")
        typer.echo(f"  {path} -> {out}")
    else:
        typer.echo(text)


def migrate_cmd(
    path: Annotated[str, typer.Argument(help="File or directory of stored JSON documents")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    diff: Annotated[bool, typer.Option("--diff", help="Write a unified diff for each updated document")] = False,
    variants: Annotated[Optional[str], typer.Option("--variants-file", help="YAML variant table")] = None,
    ):
    """Rewrite stored documents in canonical form and report what changed."""
    settings = _settings(overrides={"output_dir": out, "variants_file": variants})
    table = _table(settings)
    output_dir = Path(settings.output_dir)

    try:
        counts, changes = run_migrate(Path(path), output_dir, table, diff, settings.indent)
    except RuntimeError as e:
        _fail(str(e))
    if not changes:
        typer.echo(f"No .json documents found under {path}.")
        raise typer.Exit(1)

    for status, dest in changes:
        typer.echo(f"  {status}: {dest}")
    typer.echo(
        f"Migration complete - "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )


def variants_cmd(
    variants: Annotated[Optional[str], typer.Option("--variants-file", help="YAML variant table")] = None,
    ):
    """List known variants with their mandatory section ids."""
    settings = _settings(overrides={"variants_file": variants})
    table = _table(settings)
    typer.echo(f"Variant table v{table.version} (base: {table.base})")
    for v in table.variants:
        flags = [name for name, on in (("memo", v.uses_memo_sections), ("custom", v.uses_custom_sections)) if on]
        aliases = f" [{', '.join(v.aliases)}]" if v.aliases else ""
        typer.echo(f"  {v.name}{aliases}: {', '.join(mandatory_ids(v.name, table))} ({'+'.join(flags) or 'fixed'})")
