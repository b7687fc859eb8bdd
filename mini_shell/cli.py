"""Command-line entry point for mini-shell."""

from typing import Optional

import typer

from .config import ShellSettings
from .logging_utils import configure_logging
from .shell import Shell

app = typer.Typer(
    name="mini-shell",
    help="An interactive command shell.",
    add_completion=False,
)


@app.command()
def main(
    prompt: Optional[str] = typer.Option(None, "--prompt", help="Prompt printed before each line"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Enable logging to stderr at this level"),
) -> None:
    """Start the interactive shell."""
    settings = ShellSettings()
    overrides = {key: value for key, value in (("prompt", prompt), ("log_level", log_level)) if value is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)
    status = Shell(settings=settings).repl()
    raise typer.Exit(status)
