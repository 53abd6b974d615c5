"""CLI entrypoint: Typer app definition and command registration"""

import typer

from promptmd.cli.commands import check_cmd, functions_cmd, parse_cmd, render_cmd, roundtrip_cmd


app = typer.Typer(name="promptmd", no_args_is_help=True, help="Prompt script markdown <-> document tree converter")

app.command(name="parse")(parse_cmd)
app.command(name="render")(render_cmd)
app.command(name="check")(check_cmd)
app.command(name="roundtrip")(roundtrip_cmd)
app.command(name="functions")(functions_cmd)
