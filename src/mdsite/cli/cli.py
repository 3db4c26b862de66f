"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsite.cli.commands import (
    build_cmd, check_cmd, history_cmd, init_cmd, layouts_cmd, main_callback,
)


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Static Markdown site renderer")

app.callback()(main_callback)
app.command(name="build")(build_cmd)
app.command(name="check")(check_cmd)
app.command(name="layouts")(layouts_cmd)
app.command(name="history")(history_cmd)
app.command(name="init")(init_cmd)
