"""CLI entrypoint: Typer app definition and command registration"""

import typer

from litweave.cli.commands import macros_cmd, weave_cmd


app = typer.Typer(name="litweave", no_args_is_help=True, help="Literate programming: weave C# sources and markdown into documentation")

app.command(name="weave")(weave_cmd)
app.command(name="macros")(macros_cmd)
