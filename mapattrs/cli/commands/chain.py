"""Chain command: show the ancestor chain of a category id."""

import typer

from ...resolving import iter_category_chain
from ..app import app, console, is_json_output
from ..utils import Output


@app.command("chain")
def chain_command(
    category_id: str = typer.Argument(
        ..., help="Colon-delimited category id (e.g. region:city:capital)"
    ),
):
    """
    Show the category chain walked during resolution, nearest first.

    EXAMPLES:
        mapattrs chain region:city:capital
    """
    out = Output(console=console, json_mode=is_json_output())
    chain = list(iter_category_chain(category_id))

    out.set_data("category_id", category_id)
    out.set_data("chain", chain)
    if not out.json_mode:
        out.table(
            "Category chain",
            ["Depth", "Category"],
            [[str(depth), repr(cid)] for depth, cid in enumerate(chain)],
        )
    raise typer.Exit(out.finish())
