"""CLI entrypoint: Typer app definition and command registration"""

import typer

from htmlvega.cli.commands import parse_cmd, render_cmd, tags_cmd, validate_cmd, verbose_callback


app = typer.Typer(name="htmlvega", no_args_is_help=True, help="Render formatted HTML text as Vega-Lite specs")

app.callback()(verbose_callback)
app.command(name="render")(render_cmd)
app.command(name="parse")(parse_cmd)
app.command(name="validate")(validate_cmd)
app.command(name="tags")(tags_cmd)
