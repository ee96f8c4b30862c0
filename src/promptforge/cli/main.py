"""Main CLI entry point."""

import click

from .commands import (
    list_templates,
    show,
    save,
    delete,
    fill,
    run,
    optimize,
)
from .commands.common import console


@click.group()
@click.version_option(version="1.0.0", prog_name="promptforge")
@click.option("--log-level", default=None, help="Override PF_LOG_LEVEL for this run")
def cli(log_level):
    """PromptForge - prompt templates with {{variables}}.

    Browse templates, fill their variables, and run them against Gemini.

    \b
    Examples:
        forge templates --category Coding
        forge fill t4 -v topic=photosynthesis
        forge run t6 -v "complex_topic=black holes" --model pro
        forge optimize -f prompt.txt

    Use --help on any command for more details.
    """
    from ..core.logging import configure_logging
    from ..core.config import get_settings

    settings = get_settings().logging
    if log_level:
        settings = settings.model_copy(update={"level": log_level.upper()})
    configure_logging(settings)


# Library commands
cli.add_command(list_templates)
cli.add_command(show)
cli.add_command(save)
cli.add_command(delete)

# Prompt commands
cli.add_command(fill)
cli.add_command(run)
cli.add_command(optimize)


@cli.command()
@click.argument("text", required=False)
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read from file")
def variables(text, input_file):
    """List the {{variables}} in a piece of text.

    Example:

        forge variables "Write a {{tone}} email to {{recipient}}"
    """
    from rich.markup import escape
    from ..variables import extract_variable_names
    from .commands.common import load_prompt_text

    if not text:
        text, _ = load_prompt_text(None, input_file, None)

    names = extract_variable_names(text)
    if not names:
        console.print("[dim]No variables found[/dim]")
        return
    for name in names:
        console.print(f"  - [cyan]{escape(name)}[/cyan]")


@cli.command()
@click.option("-h", "--host", default=None, help="Host to bind to")
@click.option("-p", "--port", default=None, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
@click.option("-w", "--workers", default=None, type=int, help="Number of workers")
def serve(host, port, reload, workers):
    """Start the REST API server.

    Example:

        forge serve --port 8080 --reload
    """
    from ..core.config import get_settings

    api = get_settings().api
    host = host or api.host
    port = port or api.port
    workers = workers or 1

    console.print("[bold]Starting PromptForge API server...[/bold]")
    console.print(f"  Host: {host}")
    console.print(f"  Port: {port}")
    console.print(f"  Workers: {workers}")
    console.print(f"  Reload: {'Yes' if reload else 'No'}")
    console.print(f"\n[dim]API docs available at http://{host}:{port}/docs[/dim]\n")

    from ..api import run_server
    run_server(host=host, port=port, reload=reload, workers=workers)


@cli.command()
def info():
    """Show information about PromptForge and its configuration."""
    from rich.panel import Panel
    from ..core.config import get_settings
    from ..providers import list_providers, provider_registry

    settings = get_settings()
    providers = ", ".join(list_providers())
    key_status = "[green]set[/green]" if settings.provider.gemini_api_key else "[red]missing[/red]"
    ready = ", ".join(provider_registry.configured({"gemini": settings.provider.gemini_api_key})) or "none"

    info_text = f"""[bold]PromptForge[/bold] - prompt templates with {{{{variables}}}}

[bold]Features:[/bold]
  • [cyan]Templates[/cyan]: Built-in library plus your saved templates
  • [cyan]Variables[/cyan]: Values follow their names across edits and templates
  • [cyan]Run[/cyan]: Send filled prompts to Gemini (flash, pro, thinking_pro)
  • [cyan]Optimize[/cyan]: Rewrite a prompt for clarity, keeping its variables

[bold]Configuration:[/bold]
  Provider: {settings.provider.default_provider} ({providers})
  Default tier: {settings.provider.default_tier}
  API key: {key_status}
  Ready providers: {ready}
  Storage: {settings.library.storage_backend} ({settings.library.storage_path})

[bold]Documentation:[/bold]
  API Docs: http://localhost:8000/docs (when server running)
  CLI Help: forge --help
  Command Help: forge <command> --help"""

    console.print(Panel(info_text, title="PromptForge v1.0.0", border_style="green"))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
