"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsite.cli.commands import build_cmd, posts_cmd, tags_cmd


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Static site builder for posts, layouts, and pages")

app.command(name="build")(build_cmd)
app.command(name="posts")(posts_cmd)
app.command(name="tags")(tags_cmd)
