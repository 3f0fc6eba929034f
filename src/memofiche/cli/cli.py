"""CLI entrypoint: Typer app definition and command registration"""

import typer

from memofiche.cli.commands import migrate_cmd, normalize_cmd, variants_cmd


app = typer.Typer(name="memofiche", no_args_is_help=True, help="Memo-card document normalization tools")

app.command(name="normalize")(normalize_cmd)
app.command(name="migrate")(migrate_cmd)
app.command(name="variants")(variants_cmd)
