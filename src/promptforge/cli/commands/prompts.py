"""Fill, run, and optimize CLI commands."""

import asyncio
import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .common import console, load_prompt_text, parse_assignments, write_output

TIER_CHOICES = ["flash", "pro", "thinking_pro"]


def _build_session(template_id, input_file, assignments, with_provider=False, tier=None):
    """Load text into a fresh session and apply ``name=value`` assignments."""
    from ...core.exceptions import PromptForgeError
    from ...library import library_from_settings
    from ...session import EditingSession

    try:
        library = library_from_settings()
        provider = None
        if with_provider:
            from ...providers import get_provider
            provider = get_provider()

        session = EditingSession(library, provider=provider, model_tier=tier)
        text, selected = load_prompt_text(template_id, input_file, library)
        if selected:
            session.select_template(selected)
        else:
            session.set_text(text)
        session.set_values(parse_assignments(assignments))
    except PromptForgeError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise click.Abort()

    return session


def _warn_unfilled(session):
    missing = session.unfilled_variables()
    if missing:
        console.print(f"[yellow]Warning:[/yellow] unfilled variables: {escape(', '.join(missing))}")


def _variables_table(session) -> Table:
    table = Table(title="Variables")
    table.add_column("Name", style="cyan")
    table.add_column("Value", style="green")
    for slot in session.slots:
        table.add_row(escape(slot.name), escape(slot.value) if slot.value else "[dim](empty)[/dim]")
    return table


@click.command()
@click.argument("template_id", required=False)
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read template text from file")
@click.option("-v", "--var", "assignments", multiple=True, help="Variable value as name=value (repeatable)")
@click.option("-o", "--output", "output_file", type=click.Path(), help="Write filled prompt to file")
@click.option("--show-vars", is_flag=True, help="Show the variable table")
def fill(template_id, input_file, assignments, output_file, show_vars):
    """Fill a template's variables and print the result.

    Provide a template id, or use -f to read template text from a file.

    Examples:

        forge fill t4 -v topic=photosynthesis

        forge fill -f prompt.txt -v name=Ada -v "due=next Friday" -o filled.txt
    """
    session = _build_session(template_id, input_file, assignments)

    if show_vars:
        console.print(_variables_table(session))
    _warn_unfilled(session)

    write_output(session.interpolated_prompt(), output_file)


@click.command()
@click.argument("template_id", required=False)
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read template text from file")
@click.option("-v", "--var", "assignments", multiple=True, help="Variable value as name=value (repeatable)")
@click.option("-m", "--model", "tier", type=click.Choice(TIER_CHOICES), default=None, help="Model tier (default: PF_DEFAULT_TIER)")
@click.option("-o", "--output", "output_file", type=click.Path(), help="Write model output to file")
@click.option("--verbose", is_flag=True, help="Show the filled prompt and variables")
def run(template_id, input_file, assignments, tier, output_file, verbose):
    """Fill a template and send it to the model.

    Examples:

        forge run t6 -v "complex_topic=black holes"

        forge run t7 -f bug.txt --model thinking_pro

        forge run -f prompt.txt -v topic=tides -o answer.md
    """
    from ...core.types import MessageRole

    session = _build_session(template_id, input_file, assignments, with_provider=True, tier=tier)
    _warn_unfilled(session)

    if verbose:
        console.print(_variables_table(session))
        console.print(Panel(Text(session.interpolated_prompt()), title="Filled Prompt"))

    async def run_prompt():
        try:
            return await session.run()
        finally:
            await session.provider.close()

    with console.status("[bold green]Running..."):
        reply = asyncio.run(run_prompt())

    if reply is None:
        console.print("[red]Error:[/red] No prompt provided")
        raise click.Abort()
    if reply.role == MessageRole.ERROR:
        console.print(f"[red]Error:[/red] {escape(reply.text)}")
        raise click.Abort()

    write_output(reply.text, output_file)


@click.command()
@click.argument("template_id", required=False)
@click.option("-f", "--file", "input_file", type=click.Path(exists=True), help="Read prompt from file")
@click.option("-o", "--output", "output_file", type=click.Path(), help="Write optimized prompt to file")
@click.option("--verbose", is_flag=True, help="Show the original prompt as well")
def optimize(template_id, input_file, output_file, verbose):
    """Rewrite a prompt for clarity, keeping its {{variables}}.

    Examples:

        forge optimize t1

        forge optimize -f prompt.txt -o better.txt
    """
    from ...core.exceptions import OptimizationError

    session = _build_session(template_id, input_file, (), with_provider=True)

    async def run_optimize():
        try:
            return await session.optimize()
        finally:
            await session.provider.close()

    try:
        with console.status("[bold green]Optimizing..."):
            result = asyncio.run(run_optimize())
    except OptimizationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise click.Abort()

    if verbose:
        console.print(Panel(Text(result.original), title="Original Prompt"))

    write_output(result.optimized, output_file)

    if verbose and session.slots:
        names = ", ".join(slot.name for slot in session.slots)
        console.print(f"\n[bold]Variables kept:[/bold] {escape(names)}")
