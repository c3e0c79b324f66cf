"""Main entry point for the tasklens CLI."""

import typer

from tasklens import __version__
from tasklens.commands import config, recurrence, search, views
from tasklens.utils.typer_helpers import SuggestingGroup
from tasklens.utils.ui.console import get_console

app = typer.Typer(
    name="tasklens",
    cls=SuggestingGroup,
    help="View buckets, fuzzy search and recurrence for a personal task list",
    no_args_is_help=True,
)

console = get_console()


# Top-level task commands
app.command("view")(views.view_command)
app.command("list")(views.list_command)
app.command("subtasks")(views.subtasks_command)
app.command("overdue-count")(views.overdue_count_command)
app.command("search")(search.search_command)
app.command("next")(recurrence.next_command)

# Subcommand groups
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]tasklens[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
